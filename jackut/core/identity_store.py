"""Identity Store — users keyed by login, credentials, and profile attributes.

Invariants:
    - Login is unique and immutable; it is the only handle other components keep
    - Every user is created with the display-name attribute set
    - Relation sets are insertion-ordered (dict used as ordered set) with O(1) membership
    - Mailboxes are FIFO deques: append on delivery, popleft on read

Design Decisions:
    - User is a plain dataclass, no IO; the store owns all instances
    - Unknown login and wrong secret raise distinct errors (compatibility with existing callers)
"""

from collections import deque
from dataclasses import dataclass, field

from jackut.core.domain_types import (
    DISPLAY_NAME_ATTRIBUTE, CommunityName, Login, RelationKind,
)
from jackut.core.errors import (
    AlreadyExistsError,
    AttributeMissingError,
    InvalidCredentialError,
    InvalidFieldError,
    UserNotFoundError,
    ErrorContext,
)
from jackut.core.message import Message


@dataclass
class User:
    """One registered account with its embedded relation edges and mailboxes."""

    login: Login
    secret: str

    # === Profile (insertion-ordered, case-sensitive keys) ===
    attributes: dict[str, str] = field(default_factory=dict)

    # === Relation edges (logins, insertion-ordered) ===
    friends: dict[Login, None] = field(default_factory=dict)
    friend_requests: dict[Login, None] = field(default_factory=dict)  # who asked this user
    fans: dict[Login, None] = field(default_factory=dict)             # who idolizes this user
    crushes: dict[Login, None] = field(default_factory=dict)          # who this user has a crush on
    enemies: dict[Login, None] = field(default_factory=dict)          # who this user declared enemy

    # === Mailboxes ===
    private_mailbox: deque[Message] = field(default_factory=deque)
    community_mailbox: deque[Message] = field(default_factory=deque)

    # === Communities joined (names, insertion order) ===
    communities: list[CommunityName] = field(default_factory=list)

    def relation_set(self, kind: RelationKind) -> dict[Login, None]:
        """Return the live edge set for a relation kind."""
        return {
            RelationKind.FRIENDS: self.friends,
            RelationKind.FRIEND_REQUESTS: self.friend_requests,
            RelationKind.FANS: self.fans,
            RelationKind.CRUSHES: self.crushes,
            RelationKind.ENEMIES: self.enemies,
        }[kind]

    def is_correct_secret(self, secret: str) -> bool:
        return self.secret == secret


class IdentityStore:
    """Keyed store of users (login -> User)."""

    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def __contains__(self, login: object) -> bool:
        return login in self._users

    def __len__(self) -> int:
        return len(self._users)

    def logins(self) -> list[Login]:
        return list(self._users)

    def users(self) -> list[User]:
        return list(self._users.values())

    def create(self, login: Login, secret: str, display_name: str) -> User:
        """Register a new user. Raises AlreadyExists or InvalidField."""
        if login in self._users:
            raise AlreadyExistsError("Account", login)
        if not login:
            raise InvalidFieldError("login")
        if not secret:
            raise InvalidFieldError("password", ErrorContext(login=login))

        user = User(login=login, secret=secret)
        user.attributes[DISPLAY_NAME_ATTRIBUTE] = display_name
        self._users[login] = user
        return user

    def add(self, user: User) -> None:
        """Insert an already-built user (snapshot restore)."""
        if user.login in self._users:
            raise AlreadyExistsError("Account", user.login)
        self._users[user.login] = user

    def get(self, login: Login) -> User:
        try:
            return self._users[login]
        except KeyError:
            raise UserNotFoundError(login) from None

    def check_credential(self, login: Login, secret: str) -> User:
        """Return the user if secret matches. NotFound and InvalidCredential are distinct."""
        user = self.get(login)
        if not user.is_correct_secret(secret):
            raise InvalidCredentialError(context=ErrorContext(login=login))
        return user

    def get_attribute(self, login: Login, key: str) -> str:
        user = self.get(login)
        try:
            return user.attributes[key]
        except KeyError:
            raise AttributeMissingError(login, key) from None

    def set_attribute(self, login: Login, key: str, value: str) -> None:
        self.get(login).attributes[key] = value

    def display_name(self, login: Login) -> str:
        """Display-name attribute; AttributeMissing if it was never set."""
        return self.get_attribute(login, DISPLAY_NAME_ATTRIBUTE)

    def remove(self, login: Login) -> User:
        user = self.get(login)
        del self._users[login]
        return user

    def clear(self) -> None:
        self._users.clear()
