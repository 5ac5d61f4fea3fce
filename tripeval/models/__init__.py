"""
Data models for TripEval.

- Raw items as stored from the survey board
- Trip evaluations and their parts
- Rating distributions and supplier search results
- Survey and supplier discriminators
"""
