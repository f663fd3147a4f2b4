"""Community Registry — communities, membership, ownership, and cascading deletion.

Invariants:
    - Community names are unique
    - The owner is always the first member; a community never outlives its owner's membership
    - Membership is recorded both ways: community.members and user.communities stay in sync
    - Member lists and user community lists keep insertion order

Design Decisions:
    - Owner and members stored as logins, resolved through IdentityStore on access
    - Dissolution strips the name from every remaining member before the registry entry is dropped
"""

from dataclasses import dataclass, field

from jackut.core.domain_types import CommunityName, Login
from jackut.core.errors import (
    AlreadyExistsError,
    CommunityNotFoundError,
    DuplicateRelationError,
    ErrorContext,
)
from jackut.core.identity_store import IdentityStore


@dataclass
class Community:
    """A named group owned by one user."""
    name: CommunityName
    description: str
    owner: Login
    members: list[Login] = field(default_factory=list)

    def has_member(self, login: Login) -> bool:
        return login in self.members


class CommunityRegistry:
    """Keyed store of communities (name -> Community)."""

    def __init__(self, identity: IdentityStore) -> None:
        self._identity = identity
        self._communities: dict[CommunityName, Community] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._communities

    def __len__(self) -> int:
        return len(self._communities)

    def names(self) -> list[CommunityName]:
        return list(self._communities)

    def communities(self) -> list[Community]:
        return list(self._communities.values())

    def create(self, owner: Login, name: CommunityName, description: str) -> Community:
        """Create a community with owner as sole member."""
        user = self._identity.get(owner)
        if name in self._communities:
            raise AlreadyExistsError("Community", name, ErrorContext(login=owner))

        community = Community(name=name, description=description, owner=owner)
        community.members.append(owner)
        self._communities[name] = community
        user.communities.append(name)
        return community

    def add(self, community: Community) -> None:
        """Insert an already-built community (snapshot restore)."""
        if community.name in self._communities:
            raise AlreadyExistsError("Community", community.name)
        self._communities[community.name] = community

    def get(self, name: CommunityName) -> Community:
        try:
            return self._communities[name]
        except KeyError:
            raise CommunityNotFoundError(name) from None

    def join(self, login: Login, name: CommunityName) -> None:
        community = self.get(name)
        user = self._identity.get(login)
        if community.has_member(login):
            raise DuplicateRelationError(
                f"member of '{name}'", login, ErrorContext(login=login, target=name),
            )
        community.members.append(login)
        user.communities.append(name)

    # --- Read-only accessors ---------------------------------------------------

    def description(self, name: CommunityName) -> str:
        return self.get(name).description

    def owner(self, name: CommunityName) -> Login:
        return self.get(name).owner

    def members(self, name: CommunityName) -> list[Login]:
        return list(self.get(name).members)

    def communities_of(self, login: Login) -> list[CommunityName]:
        return list(self._identity.get(login).communities)

    # --- Cascading removal -----------------------------------------------------

    def remove_user_everywhere(self, login: Login) -> list[CommunityName]:
        """Drop login from every community; dissolve the ones it owns.

        Returns the names of dissolved communities.
        """
        user = self._identity.get(login)
        dissolved = []
        for name in list(user.communities):
            community = self._communities.get(name)
            if community is None:
                user.communities.remove(name)
                continue
            if community.owner == login:
                self._dissolve(community)
                dissolved.append(name)
            else:
                community.members.remove(login)
                user.communities.remove(name)
        return dissolved

    def _dissolve(self, community: Community) -> None:
        for member in community.members:
            if member in self._identity:
                joined = self._identity.get(member).communities
                if community.name in joined:
                    joined.remove(community.name)
        community.members.clear()
        del self._communities[community.name]

    def clear(self) -> None:
        self._communities.clear()
