"""Render — text forms of operation results.

Invariants:
    - Collections render as {a,b,c}: comma-joined, no spaces, insertion order; empty is {}
    - Booleans render lowercase ("true" / "false")
"""

from collections.abc import Iterable


def format_collection(items: Iterable[str]) -> str:
    return "{" + ",".join(items) + "}"


def format_bool(value: bool) -> str:
    return "true" if value else "false"
