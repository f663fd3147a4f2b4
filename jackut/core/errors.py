"""Error Hierarchy — typed, categorized exceptions for all Jackut failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are recoverable and raised before any state mutation
    - Infrastructure errors (persistence) are critical
    - to_response() produces the uniform error envelope rendered by callers

Design Decisions:
    - Single hierarchy with JackutError base: callers catch one type for every typed failure
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - NotFound and InvalidCredential kept distinct on credential check (compatibility)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and caller handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    login: str | None = None
    target: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class JackutError(Exception):
    """Base exception for all Jackut errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def recoverable(self) -> bool:
        return self.severity != ErrorSeverity.CRITICAL

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "recoverable": self.recoverable,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "login": self.context.login,
                    "target": self.context.target,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Lookup Errors ───────────────────────────────────────────────

class NotFoundError(JackutError):
    """Requested user or community does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found.",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class UserNotFoundError(NotFoundError):
    """No user registered under the given login."""
    def __init__(self, login: str, context: ErrorContext | None = None):
        super().__init__("User", login, context)


class CommunityNotFoundError(NotFoundError):
    """No community registered under the given name."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__("Community", name, context)


class AttributeMissingError(JackutError):
    """Profile attribute has never been set."""
    def __init__(self, login: str, attribute: str, context: ErrorContext | None = None):
        super().__init__(
            f"Attribute '{attribute}' is not filled for user '{login}'.",
            "ATTRIBUTE_MISSING", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )
        self.login = login
        self.attribute = attribute


class EmptyMailboxError(JackutError):
    """Read attempted on an empty private or community mailbox."""
    def __init__(self, mailbox: str, context: ErrorContext | None = None):
        super().__init__(
            f"There are no {mailbox} messages.",
            "EMPTY_MAILBOX", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context,
        )
        self.mailbox = mailbox


# ─── Validation Errors ───────────────────────────────────────────

class AlreadyExistsError(JackutError):
    """Login or community name already taken."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' already exists.",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class InvalidFieldError(JackutError):
    """Registration field is empty."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"Invalid {field}.",
            "INVALID_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class InvalidCredentialError(JackutError):
    """Secret mismatch, or session token not recognized."""
    def __init__(
        self, message: str = "Invalid login or password.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_CREDENTIAL", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )


class SessionNotFoundError(InvalidCredentialError):
    """Session token is not (or no longer) open."""
    def __init__(self, token: str, context: ErrorContext | None = None):
        super().__init__(f"Session '{token}' not recognized.", context)
        self.token = token


# ─── Relation Rule Errors ────────────────────────────────────────

class DuplicateRelationError(JackutError):
    """Edge already present (friend, pending request, fan, crush, enemy, membership)."""
    def __init__(self, relation: str, target: str, context: ErrorContext | None = None):
        super().__init__(
            f"User '{target}' is already registered as {relation}.",
            "DUPLICATE_RELATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.relation = relation
        self.target = target


class SelfTargetError(JackutError):
    """Actor attempted a relation or private message towards itself."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"User cannot {action} themselves.",
            "SELF_TARGET", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.action = action


class BlockedError(JackutError):
    """Target has declared the actor an enemy."""
    def __init__(
        self, actor_name: str, target: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Invalid operation: {actor_name} was declared an enemy by '{target}'.",
            "BLOCKED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.actor_name = actor_name
        self.target = target


# ─── Infrastructure Errors ───────────────────────────────────────

class PersistenceError(JackutError):
    """Durable storage operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Persistence {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, context,
        )
        self.operation = operation


class SnapshotCorruptedError(JackutError):
    """Stored snapshot blob does not match the expected shape."""
    def __init__(self, snapshot_key: str, detail: str, context: ErrorContext | None = None):
        super().__init__(
            f"Snapshot '{snapshot_key}' is corrupted: {detail}",
            "SNAPSHOT_CORRUPTED", ErrorCategory.PERSISTENCE,
            ErrorSeverity.CRITICAL, context,
        )
        self.snapshot_key = snapshot_key


class UnknownOperationError(JackutError):
    """Operation name is not part of the catalogue."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unknown operation '{operation}'.",
            "UNKNOWN_OPERATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.operation = operation
