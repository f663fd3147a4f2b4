"""Core Layer — pure domain logic, no IO, no logging, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, schemas/, models/ or db/
    - Aggregates are keyed stores; components exchange logins and community names, never objects

Design Decisions:
    - Functional core separated from imperative shell (services/ + infrastructure/)
"""
