"""Error Hierarchy — tests for codes, categories, and the error envelope.

Tests cover:
    - Every domain error derives from JackutError with a stable code
    - NotFound subclasses for users and communities
    - Session errors are InvalidCredential errors
    - to_response() shape
    - Infrastructure errors are critical and not recoverable
"""

import pytest

from jackut.core.errors import (
    JackutError, ErrorCategory, ErrorSeverity, ErrorContext,
    NotFoundError, UserNotFoundError, CommunityNotFoundError,
    AlreadyExistsError, InvalidCredentialError, SessionNotFoundError,
    InvalidFieldError, AttributeMissingError, DuplicateRelationError,
    SelfTargetError, BlockedError, EmptyMailboxError,
    PersistenceError, SnapshotCorruptedError, UnknownOperationError,
)


@pytest.mark.parametrize("error, code", [
    (UserNotFoundError("x"), "NOT_FOUND"),
    (CommunityNotFoundError("c"), "NOT_FOUND"),
    (AlreadyExistsError("Account", "x"), "ALREADY_EXISTS"),
    (InvalidCredentialError(), "INVALID_CREDENTIAL"),
    (SessionNotFoundError("9"), "INVALID_CREDENTIAL"),
    (InvalidFieldError("login"), "INVALID_FIELD"),
    (AttributeMissingError("x", "age"), "ATTRIBUTE_MISSING"),
    (DuplicateRelationError("friend", "x"), "DUPLICATE_RELATION"),
    (SelfTargetError("befriend"), "SELF_TARGET"),
    (BlockedError("João", "maria"), "BLOCKED"),
    (EmptyMailboxError("private"), "EMPTY_MAILBOX"),
])
def test_domain_errors_have_stable_codes(error, code):
    assert isinstance(error, JackutError)
    assert error.code == code
    assert error.recoverable


def test_user_and_community_not_found_share_base():
    assert isinstance(UserNotFoundError("x"), NotFoundError)
    assert isinstance(CommunityNotFoundError("c"), NotFoundError)
    assert UserNotFoundError("x").resource_type == "User"
    assert CommunityNotFoundError("c").resource_type == "Community"


def test_session_not_found_is_invalid_credential():
    err = SessionNotFoundError("42")
    assert isinstance(err, InvalidCredentialError)
    assert err.token == "42"
    assert "42" in err.message


def test_blocked_error_carries_actor_name():
    err = BlockedError("João", "maria")
    assert err.actor_name == "João"
    assert err.target == "maria"
    assert "João" in err.message
    assert err.category == ErrorCategory.BUSINESS_RULE


def test_self_target_message_reads_naturally():
    assert SelfTargetError("be an enemy of").message == "User cannot be an enemy of themselves."


def test_to_response_envelope():
    ctx = ErrorContext(login="joao", target="maria", operation="request_friend")
    body = DuplicateRelationError("friend", "maria", ctx).to_response()
    error = body["error"]
    assert error["code"] == "DUPLICATE_RELATION"
    assert error["category"] == "business_rule"
    assert error["severity"] == "error"
    assert error["recoverable"] is True
    assert error["context"] == {
        "login": "joao", "target": "maria", "operation": "request_friend",
    }
    assert "timestamp" in error


def test_infrastructure_errors_are_critical():
    for err in (
        PersistenceError("disk full", "commit"),
        SnapshotCorruptedError("users", "bad shape"),
    ):
        assert err.severity == ErrorSeverity.CRITICAL
        assert err.category == ErrorCategory.PERSISTENCE
        assert not err.recoverable


def test_unknown_operation_error_is_validation():
    err = UnknownOperationError("fly")
    assert err.category == ErrorCategory.VALIDATION
    assert err.operation == "fly"
