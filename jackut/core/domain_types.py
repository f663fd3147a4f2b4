"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Login, CommunityName, SessionToken are plain str at runtime — never wrap objects
    - Every relation edge kind and message kind is an Enum member — no raw string matching
    - DISPLAY_NAME_ATTRIBUTE is the single source of truth for the profile "name" key

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON snapshots without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Login = NewType("Login", str)
CommunityName = NewType("CommunityName", str)
SessionToken = NewType("SessionToken", str)


# ─── Constants ───────────────────────────────────────────────────

DISPLAY_NAME_ATTRIBUTE = "name"
CRUSH_NOTICE_TEMPLATE = "{name} is your crush - Jackut notice."


# ─── Enums ───────────────────────────────────────────────────────

class RelationKind(str, Enum):
    """Per-user relation sets. Friendship is symmetric; the rest are directed."""
    FRIENDS = "friends"
    FRIEND_REQUESTS = "friend_requests"
    FANS = "fans"
    CRUSHES = "crushes"
    ENEMIES = "enemies"


class MessageKind(str, Enum):
    """Tag of the message variant — selects the delivery routine."""
    PRIVATE = "private"
    COMMUNITY = "community"


class FriendRequestOutcome(str, Enum):
    """Result of request_friend when no guard fails."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
