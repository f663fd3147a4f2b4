"""Pydantic Schemas — validation of persisted snapshot blobs.

Invariants:
    - Schemas validate at the durable-storage boundary (data read back from disk)

Design Decisions:
    - Separate from models: schemas are blob contracts, models are persistence tables
"""
