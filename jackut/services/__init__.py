"""Services Layer — operation facade, dispatch, and system lifecycle.

Invariants:
    - Services orchestrate core aggregates and infrastructure; no domain rules live here
    - Operation dispatch uses an explicit dict mapping (no auto-discovery)

Design Decisions:
    - One facade class per catalogue, one lifecycle class per process (no god objects)
"""
