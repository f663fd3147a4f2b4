"""Snapshot Schemas — Pydantic models validating persisted blobs before they are re-linked.

Invariants:
    - A blob that fails validation never reaches core/snapshot.py
    - Mailboxes hold non-negative indexes into the message table
    - Community owner is non-empty

Design Decisions:
    - Shape checks here, referential checks (unknown logins) in core/snapshot.py
    - Literal for message kind over str: Pydantic rejects unknown tags natively
"""

from typing import Literal

from pydantic import BaseModel, Field, NonNegativeInt


class MessageRecord(BaseModel):
    """One message, written once and referenced by index from mailboxes."""
    kind: Literal["private", "community"]
    sender: str
    recipient: str
    body: str


class UserRecord(BaseModel):
    """One user with embedded relation edges and mailboxes."""
    secret: str = Field(min_length=1)
    attributes: dict[str, str] = Field(default_factory=dict)
    friends: list[str] = Field(default_factory=list)
    friend_requests: list[str] = Field(default_factory=list)
    fans: list[str] = Field(default_factory=list)
    crushes: list[str] = Field(default_factory=list)
    enemies: list[str] = Field(default_factory=list)
    private_mailbox: list[NonNegativeInt] = Field(default_factory=list)
    community_mailbox: list[NonNegativeInt] = Field(default_factory=list)
    communities: list[str] = Field(default_factory=list)


class UsersSnapshot(BaseModel):
    """Users blob — keyed by login."""
    version: int = Field(1, ge=1)
    messages: list[MessageRecord] = Field(default_factory=list)
    users: dict[str, UserRecord] = Field(default_factory=dict)


class CommunityRecord(BaseModel):
    """One community with ownership and ordered membership."""
    description: str
    owner: str = Field(min_length=1)
    members: list[str] = Field(default_factory=list)


class CommunitiesSnapshot(BaseModel):
    """Communities blob — keyed by community name."""
    version: int = Field(1, ge=1)
    communities: dict[str, CommunityRecord] = Field(default_factory=dict)
