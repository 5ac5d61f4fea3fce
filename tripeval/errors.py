"""
Error taxonomy for TripEval queries.

Malformed numbers and missing optional fields are not errors; they degrade
to absent values inside the engine.
"""


class TripEvalError(Exception):
    """Base class for errors surfaced to callers of the query operations."""


class NotFoundError(TripEvalError, LookupError):
    """Raised when no stored item matches the requested identifier or key."""

    def __init__(self, message: str, identifier: str = ""):
        super().__init__(message)
        self.identifier = identifier


class InvalidArgumentError(TripEvalError, ValueError):
    """Raised for a missing required parameter or an unknown discriminator."""
