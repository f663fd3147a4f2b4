"""Community Registry — tests for creation, membership, and cascading dissolution.

Tests cover:
    - create() installs the owner as sole member, both directions in sync
    - Duplicate names, unknown owner, unknown community
    - join() appends in insertion order; repeated join is a duplicate
    - remove_user_everywhere() dissolves owned communities, leaves others
"""

import pytest

from jackut.core.errors import (
    AlreadyExistsError, CommunityNotFoundError, DuplicateRelationError, UserNotFoundError,
)


def test_create_makes_owner_first_member(context):
    community = context.communities.create("joao", "Java", "About Java")

    assert community.owner == "joao"
    assert context.communities.members("Java") == ["joao"]
    assert context.communities.communities_of("joao") == ["Java"]
    assert context.communities.description("Java") == "About Java"
    assert context.communities.owner("Java") == "joao"


def test_create_duplicate_name_fails(context):
    context.communities.create("joao", "Java", "About Java")
    with pytest.raises(AlreadyExistsError):
        context.communities.create("maria", "Java", "Other")
    assert context.communities.owner("Java") == "joao"
    assert context.communities.communities_of("maria") == []


def test_create_by_unknown_owner_fails(context):
    with pytest.raises(UserNotFoundError):
        context.communities.create("ghost", "Java", "About Java")
    assert "Java" not in context.communities


def test_lookup_unknown_community_fails(context):
    for accessor in (
        context.communities.description,
        context.communities.owner,
        context.communities.members,
    ):
        with pytest.raises(CommunityNotFoundError):
            accessor("Nowhere")


def test_join_keeps_insertion_order(context):
    context.communities.create("joao", "Java", "About Java")
    context.communities.join("maria", "Java")
    context.communities.join("ana", "Java")

    assert context.communities.members("Java") == ["joao", "maria", "ana"]
    assert context.communities.communities_of("maria") == ["Java"]


def test_user_communities_keep_join_order(context):
    context.communities.create("joao", "Java", "About Java")
    context.communities.create("maria", "Py", "About Python")
    context.communities.join("ana", "Py")
    context.communities.join("ana", "Java")
    assert context.communities.communities_of("ana") == ["Py", "Java"]


def test_join_twice_is_duplicate(context):
    context.communities.create("joao", "Java", "About Java")
    context.communities.join("maria", "Java")
    with pytest.raises(DuplicateRelationError):
        context.communities.join("maria", "Java")


def test_owner_joining_own_community_is_duplicate(context):
    context.communities.create("joao", "Java", "About Java")
    with pytest.raises(DuplicateRelationError):
        context.communities.join("joao", "Java")


def test_join_unknown_community_fails(context):
    with pytest.raises(CommunityNotFoundError):
        context.communities.join("maria", "Nowhere")


def test_members_returns_a_copy(context):
    context.communities.create("joao", "Java", "About Java")
    context.communities.members("Java").append("intruder")
    assert context.communities.members("Java") == ["joao"]


# ─── Cascading removal ───────────────────────────────────────────

def test_remove_owner_dissolves_community(context):
    """Members of a dissolved community lose it from their own lists too."""
    context.communities.create("joao", "Java", "About Java")
    context.communities.join("maria", "Java")

    dissolved = context.communities.remove_user_everywhere("joao")

    assert dissolved == ["Java"]
    assert "Java" not in context.communities
    assert context.communities.communities_of("maria") == []


def test_remove_member_leaves_community(context):
    context.communities.create("joao", "Java", "About Java")
    context.communities.join("maria", "Java")

    dissolved = context.communities.remove_user_everywhere("maria")

    assert dissolved == []
    assert context.communities.members("Java") == ["joao"]
    assert context.communities.communities_of("maria") == []


def test_remove_mixed_ownership(context):
    context.communities.create("joao", "Java", "About Java")
    context.communities.create("maria", "Py", "About Python")
    context.communities.join("joao", "Py")
    context.communities.join("ana", "Java")

    dissolved = context.communities.remove_user_everywhere("joao")

    assert dissolved == ["Java"]
    assert context.communities.names() == ["Py"]
    assert context.communities.members("Py") == ["maria"]
    assert context.communities.communities_of("ana") == []
