"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers are plain str at runtime
    - Enums have expected members and serialize to string
    - RelationKind has exactly 5 members (one per embedded edge set)
"""

from jackut.core.domain_types import (
    Login, CommunityName, SessionToken,
    DISPLAY_NAME_ATTRIBUTE, CRUSH_NOTICE_TEMPLATE,
    RelationKind, MessageKind, FriendRequestOutcome,
)


def test_identity_types_wrap_str():
    assert Login("joao") == "joao"
    assert CommunityName("Java") == "Java"
    assert SessionToken("1") == "1"


def test_display_name_attribute_is_name():
    assert DISPLAY_NAME_ATTRIBUTE == "name"


def test_crush_notice_names_the_other_party():
    assert CRUSH_NOTICE_TEMPLATE.format(name="Maria") == "Maria is your crush - Jackut notice."


def test_relation_kind_has_five_edge_sets():
    assert len(RelationKind) == 5
    assert {k.value for k in RelationKind} == {
        "friends", "friend_requests", "fans", "crushes", "enemies",
    }


def test_message_kind_has_two_arms():
    assert set(MessageKind) == {MessageKind.PRIVATE, MessageKind.COMMUNITY}


def test_enums_serialize_to_string():
    assert MessageKind.PRIVATE.value == "private"
    assert FriendRequestOutcome.CONFIRMED.value == "confirmed"
    assert RelationKind("fans") is RelationKind.FANS
