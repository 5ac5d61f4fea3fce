"""
Location helpers.

Destinations are free text following a "City, Country" convention.
"""


def split_destination(destination: str) -> list:
    """Split a destination into trimmed comma-separated segments."""
    return [part.strip() for part in destination.split(",")]


def infer_country(destination: str) -> str:
    """
    Infer the country of a destination string.

    Takes the last comma-separated segment; a destination without commas is
    returned whole (trimmed).

    Examples:
        "Paris, França" -> "França"
        "Lisboa" -> "Lisboa"
    """
    parts = split_destination(destination)
    return parts[-1] if len(parts) > 1 else parts[0]


def primary_place(destination: str) -> str:
    """First comma-separated segment of a destination (usually the city)."""
    return split_destination(destination)[0]
