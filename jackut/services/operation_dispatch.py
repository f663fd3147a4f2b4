"""Operation Dispatch — explicit routing from operation name to facade method.

Invariants:
    - Every operation->method mapping is visible — no getattr magic, no auto-discovery
    - Unknown operations raise UnknownOperationError
    - Results are rendered as text: str unchanged, bool as "true"/"false", None as ""
    - Typed failures are logged at WARNING with their error code, then re-raised unchanged

Design Decisions:
    - Explicit dict over getattr: adding an operation requires editing this dict
    - Kebab-case names match the external operation catalogue
"""

import logging
from typing import Callable

from jackut.core.errors import JackutError, UnknownOperationError
from jackut.core.render import format_bool
from jackut.services.facade import JackutFacade

logger = logging.getLogger(__name__)


class OperationDispatch:
    """Routes operation name -> facade method. Explicit registration."""

    def __init__(self, facade: JackutFacade):
        self._facade = facade

        self._handlers: dict[str, Callable[..., object]] = {
            # Identity & sessions
            "register": facade.register,
            "open-session": facade.open_session,
            "get-profile-attribute": facade.get_profile_attribute,
            "set-profile-attribute": facade.set_profile_attribute,
            "remove-user": facade.remove_user,
            # Friendship
            "request-friend": facade.request_friend,
            "is-friend": facade.is_friend,
            "list-friends": facade.list_friends,
            # Private messages
            "send-private-message": facade.send_private_message,
            "read-private-message": facade.read_private_message,
            # Communities
            "create-community": facade.create_community,
            "get-community-description": facade.get_community_description,
            "get-community-owner": facade.get_community_owner,
            "get-community-members": facade.get_community_members,
            "join-community": facade.join_community,
            "list-user-communities": facade.list_user_communities,
            "send-community-message": facade.send_community_message,
            "read-community-message": facade.read_community_message,
            # Fans, crushes, enemies
            "declare-fan": facade.declare_fan,
            "is-fan": facade.is_fan,
            "list-fans": facade.list_fans,
            "declare-crush": facade.declare_crush,
            "is-crush": facade.is_crush,
            "list-crushes": facade.list_crushes,
            "declare-enemy": facade.declare_enemy,
            # System
            "reset-system": facade.reset_system,
            "shutdown-system": facade.shutdown_system,
        }

    @property
    def operations(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def execute(self, operation: str, *args: str, **kwargs: str) -> str:
        """Run one operation and render its result as text."""
        handler = self._handlers.get(operation)
        if handler is None:
            logger.warning(
                f"Unknown operation: {operation}",
                extra={"operation": operation, "error_code": "UNKNOWN_OPERATION"},
            )
            raise UnknownOperationError(operation)

        try:
            result = handler(*args, **kwargs)
        except JackutError as exc:
            exc.context.operation = exc.context.operation or operation
            logger.warning(
                f"{operation} failed: {exc.message}",
                extra={"operation": operation, "error_code": exc.code},
            )
            raise

        logger.debug(f"{operation} ok", extra={"operation": operation})
        return render_result(result)


def render_result(result: object) -> str:
    if result is None:
        return ""
    if isinstance(result, bool):
        return format_bool(result)
    return str(result)
