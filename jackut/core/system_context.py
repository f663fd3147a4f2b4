"""System Context — the one explicit value holding every aggregate of a run.

Invariants:
    - Mailbox, RelationGraph and CommunityRegistry are bound to the context's IdentityStore
    - remove_user() cascades in a fixed order: communities, sent messages, relation edges,
      identity entry, sessions; nothing is touched if the login is unknown
    - clear() empties memory only (durable state is the persistence gateway's concern)

Design Decisions:
    - Constructed once per run and threaded through every operation (no module-level singletons)
    - Built from stores so the same wiring serves a fresh start and a snapshot restore
"""

from dataclasses import dataclass

from jackut.core.community_registry import CommunityRegistry
from jackut.core.domain_types import CommunityName, Login, SessionToken
from jackut.core.identity_store import IdentityStore
from jackut.core.mailbox import Mailbox
from jackut.core.relation_graph import RelationGraph
from jackut.core.session_registry import SessionRegistry


@dataclass
class RemovalSummary:
    """What a user removal cascaded through."""
    login: Login
    dissolved_communities: list[CommunityName]
    messages_stripped: int
    sessions_closed: list[SessionToken]


class SystemContext:
    """Aggregates of one run: identity, sessions, communities, mail, relations."""

    def __init__(
        self,
        identity: IdentityStore | None = None,
        communities: CommunityRegistry | None = None,
        sessions: SessionRegistry | None = None,
    ) -> None:
        self.identity = identity if identity is not None else IdentityStore()
        self.communities = (
            communities if communities is not None else CommunityRegistry(self.identity)
        )
        self.sessions = sessions if sessions is not None else SessionRegistry()
        self.mailbox = Mailbox(self.identity, self.communities)
        self.relations = RelationGraph(self.identity, self.mailbox)

    def login_of(self, token: SessionToken) -> Login:
        """Resolve a session token to a registered login."""
        login = self.sessions.resolve(token)
        self.identity.get(login)
        return login

    def remove_user(self, login: Login) -> RemovalSummary:
        """Delete login and every trace of it from the other aggregates."""
        self.identity.get(login)
        dissolved = self.communities.remove_user_everywhere(login)
        stripped = self.mailbox.strip_sender(login)
        self.relations.purge_references(login)
        self.identity.remove(login)
        closed = self.sessions.close_all_for(login)
        return RemovalSummary(login, dissolved, stripped, closed)

    def clear(self) -> None:
        """Empty every in-memory aggregate; the session counter restarts."""
        self.communities.clear()
        self.identity.clear()
        self.sessions.reset_all()
