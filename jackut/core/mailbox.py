"""Mailbox — per-user FIFO delivery for private and community messages.

Invariants:
    - Private messages: self-target and enemy guards run before any mailbox is touched
    - Community messages: NO self-target and NO enemy guard; every current member,
      the sender included, receives the same Message instance
    - Read pops the oldest entry; an empty mailbox raises EmptyMailbox every time
    - strip_sender() removes a login's sent messages from every other user's mailboxes

Design Decisions:
    - One delivery routine per MessageKind arm, selected by an explicit dict
    - deliver_private() is guard-free so relation side effects (crush notices) can reuse it
"""

from jackut.core.community_registry import CommunityRegistry
from jackut.core.domain_types import CommunityName, Login, MessageKind
from jackut.core.errors import (
    BlockedError,
    EmptyMailboxError,
    ErrorContext,
    SelfTargetError,
)
from jackut.core.identity_store import IdentityStore
from jackut.core.message import Message


class Mailbox:
    """Message fan-out over the users held by an IdentityStore."""

    def __init__(self, identity: IdentityStore, communities: CommunityRegistry) -> None:
        self._identity = identity
        self._communities = communities
        self._routes = {
            MessageKind.PRIVATE: self._deliver_private,
            MessageKind.COMMUNITY: self._deliver_community,
        }

    # --- Sending ---------------------------------------------------------------

    def send_private(self, sender: Login, recipient: Login, body: str) -> Message:
        """Guarded point-to-point send."""
        target = self._identity.get(recipient)
        if sender == recipient:
            raise SelfTargetError(
                "send a private message to", ErrorContext(login=sender),
            )
        if sender in target.enemies:
            raise BlockedError(
                self._identity.display_name(sender), recipient,
                ErrorContext(login=sender, target=recipient),
            )
        message = Message.private(sender, recipient, body)
        self.deliver(message)
        return message

    def send_community(self, sender: Login, community: CommunityName, body: str) -> Message:
        """Fan-out to every member of community, sender included."""
        self._identity.get(sender)
        self._communities.get(community)
        message = Message.community(sender, community, body)
        self.deliver(message)
        return message

    def deliver(self, message: Message) -> None:
        """Append message to the mailbox(es) selected by its kind."""
        self._routes[message.kind](message)

    def _deliver_private(self, message: Message) -> None:
        self._identity.get(message.recipient).private_mailbox.append(message)

    def _deliver_community(self, message: Message) -> None:
        for member in self._communities.members(message.recipient):
            self._identity.get(member).community_mailbox.append(message)

    # --- Reading ---------------------------------------------------------------

    def read_private(self, login: Login) -> Message:
        mailbox = self._identity.get(login).private_mailbox
        if not mailbox:
            raise EmptyMailboxError("private", ErrorContext(login=login))
        return mailbox.popleft()

    def read_community(self, login: Login) -> Message:
        mailbox = self._identity.get(login).community_mailbox
        if not mailbox:
            raise EmptyMailboxError("community", ErrorContext(login=login))
        return mailbox.popleft()

    # --- Removal cascade -------------------------------------------------------

    def strip_sender(self, login: Login) -> int:
        """Remove every message sent by login from other users. Returns count removed."""
        removed = 0
        for user in self._identity.users():
            if user.login == login:
                continue
            for mailbox in (user.private_mailbox, user.community_mailbox):
                kept = [m for m in mailbox if m.sender != login]
                removed += len(mailbox) - len(kept)
                mailbox.clear()
                mailbox.extend(kept)
        return removed
