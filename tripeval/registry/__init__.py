"""
Column Registry Module.

Static mapping from logical survey fields to board column ids,
plus the named-entity kinds and simple rating fields built on it.
"""
