"""Relation Graph — friendship handshake, fan/idol, crush, and enemy edges with guard rules.

Invariants:
    - Friendship is symmetric: A in friends(B) <=> B in friends(A)
    - At most one pending friend request per unordered pair, in one direction;
      a request from the already-requested side confirms instead of re-requesting
    - Fan, crush and enemy edges are directed and independent of each other and of friendship
    - Enemy block: a user who was declared enemy by the target cannot request friendship,
      become a fan, declare a crush, or send private messages to the target
    - declare_enemy is NOT blocked by the target's own enemy edge against the actor
    - Every guard runs before any edge is written (no partial application)

Edge storage (all sets hold logins):
    friends          on both users
    friend_requests  on the requested user, holding the requester
    fans             on the idol, holding the fan
    crushes          on the declaring user, holding the target
    enemies          on the declaring user, holding the target

Design Decisions:
    - Edges embedded per user (no separate edge table): snapshot carries them with the user
    - Mutual-crush notices are plain private messages delivered through Mailbox.deliver()
"""

from jackut.core.domain_types import (
    CRUSH_NOTICE_TEMPLATE,
    FriendRequestOutcome,
    Login,
    RelationKind,
)
from jackut.core.errors import (
    BlockedError,
    DuplicateRelationError,
    ErrorContext,
    SelfTargetError,
)
from jackut.core.identity_store import IdentityStore
from jackut.core.mailbox import Mailbox
from jackut.core.message import Message


class RelationGraph:
    """Guarded mutations and O(1) predicates over the per-user edge sets."""

    def __init__(self, identity: IdentityStore, mailbox: Mailbox) -> None:
        self._identity = identity
        self._mailbox = mailbox

    # --- Friendship handshake --------------------------------------------------

    def request_friend(self, actor: Login, target: Login) -> FriendRequestOutcome:
        """Send or confirm a friend request.

        Guard order: self-target, already friends, mirror request (confirms),
        duplicate request, enemy block; otherwise the request stays pending.
        """
        actor_user = self._identity.get(actor)
        target_user = self._identity.get(target)
        ctx = ErrorContext(login=actor, target=target, operation="request_friend")

        if actor == target:
            raise SelfTargetError("befriend", ctx)
        if target in actor_user.friends:
            raise DuplicateRelationError("friend", target, ctx)
        if target in actor_user.friend_requests:
            actor_user.friends[target] = None
            target_user.friends[actor] = None
            actor_user.friend_requests.pop(target, None)
            target_user.friend_requests.pop(actor, None)
            return FriendRequestOutcome.CONFIRMED
        if actor in target_user.friend_requests:
            raise DuplicateRelationError("friend, awaiting confirmation", target, ctx)
        if actor in target_user.enemies:
            raise BlockedError(self._identity.display_name(actor), target, ctx)

        target_user.friend_requests[actor] = None
        return FriendRequestOutcome.PENDING

    # --- Directed edges --------------------------------------------------------

    def declare_fan(self, fan: Login, idol: Login) -> None:
        self._identity.get(fan)
        idol_user = self._identity.get(idol)
        ctx = ErrorContext(login=fan, target=idol, operation="declare_fan")

        if fan == idol:
            raise SelfTargetError("be a fan of", ctx)
        if fan in idol_user.fans:
            raise DuplicateRelationError("idol", idol, ctx)
        if fan in idol_user.enemies:
            raise BlockedError(self._identity.display_name(fan), idol, ctx)

        idol_user.fans[fan] = None

    def declare_crush(self, actor: Login, target: Login) -> bool:
        """Add a crush edge. Returns True when the crush is mutual (notices delivered)."""
        actor_user = self._identity.get(actor)
        target_user = self._identity.get(target)
        ctx = ErrorContext(login=actor, target=target, operation="declare_crush")

        if actor == target:
            raise SelfTargetError("have a crush on", ctx)
        if target in actor_user.crushes:
            raise DuplicateRelationError("crush", target, ctx)
        if actor in target_user.enemies:
            raise BlockedError(self._identity.display_name(actor), target, ctx)

        mutual = actor in target_user.crushes
        if mutual:
            # names resolved up front: AttributeMissing must leave the graph untouched
            actor_name = self._identity.display_name(actor)
            target_name = self._identity.display_name(target)

        actor_user.crushes[target] = None

        if mutual:
            self._mailbox.deliver(Message.private(
                target, actor, CRUSH_NOTICE_TEMPLATE.format(name=target_name),
            ))
            self._mailbox.deliver(Message.private(
                actor, target, CRUSH_NOTICE_TEMPLATE.format(name=actor_name),
            ))
        return mutual

    def declare_enemy(self, actor: Login, target: Login) -> None:
        actor_user = self._identity.get(actor)
        self._identity.get(target)
        ctx = ErrorContext(login=actor, target=target, operation="declare_enemy")

        if actor == target:
            raise SelfTargetError("be an enemy of", ctx)
        if target in actor_user.enemies:
            raise DuplicateRelationError("enemy", target, ctx)

        actor_user.enemies[target] = None

    # --- Predicates ------------------------------------------------------------

    def is_friend(self, login: Login, other: Login) -> bool:
        self._identity.get(other)
        return other in self._identity.get(login).friends

    def has_pending_request(self, requester: Login, target: Login) -> bool:
        self._identity.get(requester)
        return requester in self._identity.get(target).friend_requests

    def is_fan(self, fan: Login, idol: Login) -> bool:
        self._identity.get(fan)
        return fan in self._identity.get(idol).fans

    def is_crush_of(self, actor: Login, target: Login) -> bool:
        self._identity.get(target)
        return target in self._identity.get(actor).crushes

    def is_enemy_of(self, actor: Login, target: Login) -> bool:
        self._identity.get(target)
        return target in self._identity.get(actor).enemies

    # --- Listings (insertion order) --------------------------------------------

    def friends_of(self, login: Login) -> list[Login]:
        return list(self._identity.get(login).friends)

    def fans_of(self, idol: Login) -> list[Login]:
        return list(self._identity.get(idol).fans)

    def crushes_of(self, login: Login) -> list[Login]:
        return list(self._identity.get(login).crushes)

    def enemies_of(self, login: Login) -> list[Login]:
        return list(self._identity.get(login).enemies)

    # --- Removal cascade -------------------------------------------------------

    def purge_references(self, login: Login) -> None:
        """Remove login from every other user's relation sets."""
        for user in self._identity.users():
            if user.login == login:
                continue
            for kind in RelationKind:
                user.relation_set(kind).pop(login, None)
