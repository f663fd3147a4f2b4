"""Snapshot — serialization / deserialization of IdentityStore and CommunityRegistry.

Invariants:
    - to_snapshot functions produce JSON-safe dicts (no sets, no deques, no Enums, no objects)
    - Every cross-reference (relation edge, member, owner, message sender) is written as a key
    - Each Message is written once in a message table; mailboxes hold its index, so a community
      message delivered to N members restores as ONE shared instance
    - from_snapshot functions rebuild fresh stores and re-link every reference by key;
      a reference to an unknown login or message raises SnapshotCorruptedError
    - Restored membership is two-sided: every member lists the community and every
      listed community has the user as member, otherwise SnapshotCorruptedError
    - Empty / missing data restores empty aggregates (first run)

Design Decisions:
    - Re-link by key instead of preserving pointer identity: stores are the only owners
    - Two independent blobs (users, communities) so each aggregate can be rewritten alone
"""

from collections import deque

from jackut.core.community_registry import Community, CommunityRegistry
from jackut.core.domain_types import CommunityName, Login, MessageKind, RelationKind
from jackut.core.errors import SnapshotCorruptedError
from jackut.core.identity_store import IdentityStore, User
from jackut.core.message import Message

SNAPSHOT_VERSION = 1
USERS_BLOB = "users"
COMMUNITIES_BLOB = "communities"


# --- Users -------------------------------------------------------------------

def _message_index(identity: IdentityStore) -> tuple[list[dict], dict[int, int]]:
    """Assign one table slot per distinct Message instance."""
    table: list[dict] = []
    slots: dict[int, int] = {}
    for user in identity.users():
        for message in (*user.private_mailbox, *user.community_mailbox):
            if id(message) in slots:
                continue
            slots[id(message)] = len(table)
            table.append({
                "kind": message.kind.value,
                "sender": message.sender,
                "recipient": message.recipient,
                "body": message.body,
            })
    return table, slots


def identity_to_snapshot(identity: IdentityStore) -> dict:
    """Serialize all users with embedded edges and mailboxes. Pure, no IO."""
    messages, slots = _message_index(identity)
    users = {}
    for user in identity.users():
        users[user.login] = {
            "secret": user.secret,
            "attributes": dict(user.attributes),
            **{kind.value: list(user.relation_set(kind)) for kind in RelationKind},
            "private_mailbox": [slots[id(m)] for m in user.private_mailbox],
            "community_mailbox": [slots[id(m)] for m in user.community_mailbox],
            "communities": list(user.communities),
        }
    return {"version": SNAPSHOT_VERSION, "messages": messages, "users": users}


def identity_from_snapshot(data: dict | None) -> IdentityStore:
    """Rebuild an IdentityStore from a users blob. Pure, no IO."""
    identity = IdentityStore()
    if not data:
        return identity

    raw_users: dict[str, dict] = data.get("users", {})
    messages = [
        Message(MessageKind(m["kind"]), m["sender"], m["recipient"], m["body"])
        for m in data.get("messages", [])
    ]

    for login, raw in raw_users.items():
        identity.add(User(
            login=Login(login),
            secret=raw["secret"],
            attributes=dict(raw.get("attributes", {})),
            communities=[CommunityName(c) for c in raw.get("communities", [])],
        ))

    for login, raw in raw_users.items():
        user = identity.get(login)
        for kind in RelationKind:
            edges = user.relation_set(kind)
            for other in raw.get(kind.value, []):
                if other not in identity:
                    raise SnapshotCorruptedError(
                        USERS_BLOB, f"{login}.{kind.value} references unknown user '{other}'",
                    )
                edges[Login(other)] = None
        user.private_mailbox = deque(
            _resolve_message(messages, slot, login) for slot in raw.get("private_mailbox", [])
        )
        user.community_mailbox = deque(
            _resolve_message(messages, slot, login) for slot in raw.get("community_mailbox", [])
        )
    return identity


def _resolve_message(messages: list[Message], slot: int, login: str) -> Message:
    if not 0 <= slot < len(messages):
        raise SnapshotCorruptedError(
            USERS_BLOB, f"{login} mailbox references unknown message #{slot}",
        )
    return messages[slot]


# --- Communities -------------------------------------------------------------

def communities_to_snapshot(registry: CommunityRegistry) -> dict:
    """Serialize all communities, owner and members as logins. Pure, no IO."""
    return {
        "version": SNAPSHOT_VERSION,
        "communities": {
            c.name: {
                "description": c.description,
                "owner": c.owner,
                "members": list(c.members),
            }
            for c in registry.communities()
        },
    }


def communities_from_snapshot(
    data: dict | None, identity: IdentityStore,
) -> CommunityRegistry:
    """Rebuild a CommunityRegistry linked to identity. Pure, no IO."""
    registry = CommunityRegistry(identity)
    for name, raw in (data or {}).get("communities", {}).items():
        members = [Login(m) for m in raw.get("members", [])]
        for login in (raw["owner"], *members):
            if login not in identity:
                raise SnapshotCorruptedError(
                    COMMUNITIES_BLOB, f"community '{name}' references unknown user '{login}'",
                )
        if raw["owner"] not in members:
            raise SnapshotCorruptedError(
                COMMUNITIES_BLOB, f"community '{name}' does not list its owner as member",
            )
        registry.add(Community(
            name=CommunityName(name), description=raw["description"],
            owner=Login(raw["owner"]), members=members,
        ))
    _check_membership(registry, identity)
    return registry


def _check_membership(registry: CommunityRegistry, identity: IdentityStore) -> None:
    """community.members and user.communities must mirror each other."""
    for community in registry.communities():
        for login in community.members:
            if community.name not in identity.get(login).communities:
                raise SnapshotCorruptedError(
                    COMMUNITIES_BLOB,
                    f"'{login}' is a member of '{community.name}' but does not list it",
                )
    for user in identity.users():
        for name in user.communities:
            if name not in registry or not registry.get(name).has_member(user.login):
                raise SnapshotCorruptedError(
                    USERS_BLOB, f"{user.login} lists community '{name}' without membership",
                )
