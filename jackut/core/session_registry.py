"""Session Registry — opaque session tokens mapped to logins.

Invariants:
    - Tokens are decimal strings of a monotonic counter, first token is "1"
    - A token resolves to exactly one login while open
    - reset_all() clears every token and restarts the counter (tokens reused only across resets)
    - close() is idempotent

Design Decisions:
    - Tokens map to logins, not User objects: a removed user can never be resolved through a stale reference
"""

from jackut.core.domain_types import Login, SessionToken
from jackut.core.errors import SessionNotFoundError


class SessionRegistry:
    """In-memory token -> login table with a monotonic counter."""

    def __init__(self) -> None:
        self._sessions: dict[SessionToken, Login] = {}
        self._counter = 0

    def __contains__(self, token: object) -> bool:
        return token in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    @property
    def counter(self) -> int:
        return self._counter

    def open(self, login: Login) -> SessionToken:
        """Allocate the next token for login."""
        self._counter += 1
        token = SessionToken(str(self._counter))
        self._sessions[token] = login
        return token

    def resolve(self, token: SessionToken) -> Login:
        try:
            return self._sessions[token]
        except KeyError:
            raise SessionNotFoundError(token) from None

    def close(self, token: SessionToken) -> None:
        self._sessions.pop(token, None)

    def close_all_for(self, login: Login) -> list[SessionToken]:
        """Close every token resolving to login. Returns the closed tokens."""
        closed = [t for t, owner in self._sessions.items() if owner == login]
        for token in closed:
            del self._sessions[token]
        return closed

    def reset_all(self) -> None:
        self._sessions.clear()
        self._counter = 0
