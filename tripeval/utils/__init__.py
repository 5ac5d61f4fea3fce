"""
Utility modules for TripEval.

Cross-cutting concerns:
- Accessors: Read text and numbers out of an item's column values
- Location: Country inference from destination strings
- Storage: File-backed item and access-key store
- Export: CSV/JSON report writing
"""
