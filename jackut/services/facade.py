"""Jackut Facade — the operation catalogue, one method per operation.

Invariants:
    - Session-scoped operations resolve the token first (InvalidCredential if not open)
    - Typed JackutError failures propagate unchanged; nothing is caught here
    - Collection results are rendered with core/render.format_collection (logins, insertion order)
    - Constructing the facade starts the lifecycle (restores the last snapshot)

Design Decisions:
    - Thin shell: every rule lives in core/, the facade only resolves, calls, and renders
    - Returns plain str / bool / None so any caller (dispatch, scripts, tests) can render text
"""

import logging

from jackut.core.domain_types import CommunityName, Login, SessionToken
from jackut.core.render import format_collection
from jackut.core.system_context import SystemContext
from jackut.services.system_lifecycle import SystemLifecycle

logger = logging.getLogger(__name__)


class JackutFacade:
    """External entry point over one running SystemContext."""

    def __init__(self, lifecycle: SystemLifecycle | None = None):
        self._lifecycle = lifecycle or SystemLifecycle()
        self._lifecycle.start()

    @property
    def context(self) -> SystemContext:
        return self._lifecycle.context

    def _login(self, token: SessionToken) -> Login:
        return self.context.login_of(token)

    # ─── System ──────────────────────────────────────────────────

    def reset_system(self) -> None:
        self._lifecycle.reset()

    def shutdown_system(self) -> None:
        self._lifecycle.shutdown()

    # ─── Identity & sessions ─────────────────────────────────────

    def register(self, login: Login, secret: str, name: str) -> None:
        self.context.identity.create(login, secret, name)
        logger.info("User registered", extra={"login": login})

    def open_session(self, login: Login, secret: str) -> SessionToken:
        self.context.identity.check_credential(login, secret)
        return self.context.sessions.open(login)

    def get_profile_attribute(self, login: Login, attribute: str) -> str:
        return self.context.identity.get_attribute(login, attribute)

    def set_profile_attribute(self, token: SessionToken, attribute: str, value: str) -> None:
        self.context.identity.set_attribute(self._login(token), attribute, value)

    def remove_user(self, token: SessionToken) -> None:
        summary = self.context.remove_user(self._login(token))
        logger.info(
            f"User removed: {len(summary.dissolved_communities)} communities dissolved, "
            f"{summary.messages_stripped} messages stripped",
            extra={"login": summary.login},
        )

    # ─── Friendship ──────────────────────────────────────────────

    def request_friend(self, token: SessionToken, login: Login) -> None:
        self.context.relations.request_friend(self._login(token), login)

    def is_friend(self, login: Login, other: Login) -> bool:
        return self.context.relations.is_friend(login, other)

    def list_friends(self, login: Login) -> str:
        return format_collection(self.context.relations.friends_of(login))

    # ─── Private messages ────────────────────────────────────────

    def send_private_message(self, token: SessionToken, recipient: Login, body: str) -> None:
        self.context.mailbox.send_private(self._login(token), recipient, body)

    def read_private_message(self, token: SessionToken) -> str:
        return self.context.mailbox.read_private(self._login(token)).body

    # ─── Communities ─────────────────────────────────────────────

    def create_community(
        self, token: SessionToken, name: CommunityName, description: str,
    ) -> None:
        owner = self._login(token)
        self.context.communities.create(owner, name, description)
        logger.info("Community created", extra={"login": owner, "community": name})

    def get_community_description(self, name: CommunityName) -> str:
        return self.context.communities.description(name)

    def get_community_owner(self, name: CommunityName) -> str:
        return self.context.communities.owner(name)

    def get_community_members(self, name: CommunityName) -> str:
        return format_collection(self.context.communities.members(name))

    def join_community(self, token: SessionToken, name: CommunityName) -> None:
        self.context.communities.join(self._login(token), name)

    def list_user_communities(self, login: Login) -> str:
        return format_collection(self.context.communities.communities_of(login))

    def send_community_message(
        self, token: SessionToken, community: CommunityName, body: str,
    ) -> None:
        self.context.mailbox.send_community(self._login(token), community, body)

    def read_community_message(self, token: SessionToken) -> str:
        return self.context.mailbox.read_community(self._login(token)).body

    # ─── Fans, crushes, enemies ──────────────────────────────────

    def declare_fan(self, token: SessionToken, idol: Login) -> None:
        self.context.relations.declare_fan(self._login(token), idol)

    def is_fan(self, login: Login, idol: Login) -> bool:
        return self.context.relations.is_fan(login, idol)

    def list_fans(self, login: Login) -> str:
        return format_collection(self.context.relations.fans_of(login))

    def declare_crush(self, token: SessionToken, target: Login) -> None:
        self.context.relations.declare_crush(self._login(token), target)

    def is_crush(self, token: SessionToken, target: Login) -> bool:
        return self.context.relations.is_crush_of(self._login(token), target)

    def list_crushes(self, token: SessionToken) -> str:
        return format_collection(self.context.relations.crushes_of(self._login(token)))

    def declare_enemy(self, token: SessionToken, target: Login) -> None:
        self.context.relations.declare_enemy(self._login(token), target)
