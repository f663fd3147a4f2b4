"""System Context — tests for token resolution, user removal cascade, and clear().

Tests cover:
    - login_of resolves open tokens, rejects unknown ones
    - remove_user: communities dissolved, sent messages stripped, edges purged,
      identity removed, every session of the user closed
    - Removal of an unknown login touches nothing
    - clear() empties memory and restarts the session counter
"""

import pytest

from jackut.core.errors import (
    InvalidCredentialError, SessionNotFoundError, UserNotFoundError,
)


def test_login_of_open_session(context):
    token = context.sessions.open("joao")
    assert context.login_of(token) == "joao"


def test_login_of_unknown_token_is_invalid_credential(context):
    with pytest.raises(InvalidCredentialError) as exc:
        context.login_of("999")
    assert isinstance(exc.value, SessionNotFoundError)


def test_remove_user_cascades(context):
    """Communities, sent mail, edges, identity and every session of the user go."""
    r = context.relations
    r.request_friend("joao", "maria")
    r.request_friend("maria", "joao")
    r.declare_fan("joao", "ana")
    r.declare_enemy("ana", "joao")
    context.communities.create("joao", "Java", "About Java")
    context.communities.join("maria", "Java")
    context.communities.create("ana", "Py", "About Python")
    context.communities.join("joao", "Py")
    context.mailbox.send_private("joao", "maria", "bye")
    context.mailbox.send_private("ana", "maria", "hi")
    context.mailbox.send_community("joao", "Py", "leaving")
    first = context.sessions.open("joao")
    second = context.sessions.open("joao")
    other = context.sessions.open("maria")

    summary = context.remove_user("joao")

    assert summary.dissolved_communities == ["Java"]
    assert summary.messages_stripped == 2
    assert summary.sessions_closed == [first, second]
    assert "joao" not in context.identity
    assert "Java" not in context.communities
    assert context.communities.members("Py") == ["ana"]
    assert context.relations.friends_of("maria") == []
    assert context.relations.fans_of("ana") == []
    assert context.relations.enemies_of("ana") == []
    assert [m.body for m in context.identity.get("maria").private_mailbox] == ["hi"]
    assert not context.identity.get("ana").community_mailbox
    assert first not in context.sessions
    assert context.login_of(other) == "maria"


def test_remove_unknown_user_changes_nothing(context):
    """Unknown login fails before any aggregate is touched."""
    context.communities.create("joao", "Java", "About Java")
    with pytest.raises(UserNotFoundError):
        context.remove_user("ghost")
    assert len(context.identity) == 3
    assert context.communities.names() == ["Java"]


def test_token_of_removed_user_no_longer_resolves(context):
    token = context.sessions.open("maria")
    context.remove_user("maria")
    with pytest.raises(InvalidCredentialError):
        context.login_of(token)


def test_clear_empties_memory_and_restarts_tokens(context):
    context.communities.create("joao", "Java", "About Java")
    context.sessions.open("joao")
    context.sessions.open("maria")

    context.clear()

    assert len(context.identity) == 0
    assert len(context.communities) == 0
    assert len(context.sessions) == 0
    context.identity.create("joao", "123", "João")
    assert context.sessions.open("joao") == "1"
