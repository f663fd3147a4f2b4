"""Message — immutable tagged variant for private and community messages.

Invariants:
    - A message never changes after creation (frozen dataclass)
    - sender is a login, never a User object: the same message instance may sit in many mailboxes
    - recipient is a login for PRIVATE, a community name for COMMUNITY
"""

from dataclasses import dataclass

from jackut.core.domain_types import CommunityName, Login, MessageKind


@dataclass(frozen=True)
class Message:
    """Tagged message: kind selects the delivery routine in core/mailbox.py."""
    kind: MessageKind
    sender: Login
    recipient: str
    body: str

    @classmethod
    def private(cls, sender: Login, recipient: str, body: str) -> "Message":
        return cls(MessageKind.PRIVATE, sender, recipient, body)

    @classmethod
    def community(cls, sender: Login, community: CommunityName, body: str) -> "Message":
        return cls(MessageKind.COMMUNITY, sender, community, body)
