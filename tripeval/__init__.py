"""
TripEval - survey aggregation engine for trip evaluations.

Normalizes board rows into trip evaluations, aggregates the responses
sharing a business identifier and computes rating distributions.
"""

__version__ = "1.0.0"
