"""
Engine components for TripEval.

- Entity Deduplicator
- Single-Item Normalizer
- Multi-Item Aggregator
- Comment Collector
- Distribution Calculator (trip view + supplier search)
- Webhook Ingestor
"""
