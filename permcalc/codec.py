import typing

import hikari
import msgpack  # type: ignore

from .errors import SnapshotDecodeError
from .snapshot import (
    ChannelSnapshot,
    GuildSnapshot,
    MemberSnapshot,
    Overwrite,
    RoleSnapshot,
)
from .types import ChannelData, MemberData, RoleData, SnapshotData

E = typing.TypeVar("E", hikari.ChannelType, hikari.PermissionOverwriteType)


def make_snapshot_data(guild: GuildSnapshot) -> SnapshotData:
    return {
        "id": int(guild.id),
        "name": guild.name,
        "owner_id": int(guild.owner_id),
        "roles": [make_role_data(role) for role in guild.roles.values()],
        "members": [make_member_data(member) for member in guild.members.values()],
        "channels": [make_channel_data(channel) for channel in guild.channels.values()],
    }


def make_role_data(role: RoleSnapshot) -> RoleData:
    return {"id": int(role.id), "name": role.name, "permissions": int(role.permissions)}


def make_member_data(member: MemberSnapshot) -> MemberData:
    return {
        "user_id": int(member.user_id),
        "role_ids": [int(role_id) for role_id in member.role_ids],
    }


def make_channel_data(channel: ChannelSnapshot) -> ChannelData:
    return {
        "id": int(channel.id),
        "name": channel.name,
        "type": int(channel.type),
        "permission_overwrites": [
            {
                "id": int(overwrite.id),
                "type": int(overwrite.type),
                "allow": int(overwrite.allow),
                "deny": int(overwrite.deny),
            }
            for overwrite in channel.overwrites
        ],
    }


def load_snapshot_data(data: typing.Mapping[str, typing.Any]) -> GuildSnapshot:
    guild_id = hikari.Snowflake(_get_int(data, "id"))

    roles: dict[hikari.Snowflake, RoleSnapshot] = {}
    for raw_role in _get_list(data, "roles"):
        role = RoleSnapshot(
            id=hikari.Snowflake(_get_int(raw_role, "id")),
            guild_id=guild_id,
            permissions=_get_mask(raw_role, "permissions"),
            name=_get_str(raw_role, "name"),
        )
        roles[role.id] = role

    members: dict[hikari.Snowflake, MemberSnapshot] = {}
    for raw_member in _get_list(data, "members"):
        member = MemberSnapshot(
            user_id=hikari.Snowflake(_get_int(raw_member, "user_id")),
            guild_id=guild_id,
            role_ids=tuple(
                hikari.Snowflake(_check_int(role_id, "role_ids"))
                for role_id in _get_list(raw_member, "role_ids")
            ),
        )
        members[member.user_id] = member

    channels: dict[hikari.Snowflake, ChannelSnapshot] = {}
    for raw_channel in _get_list(data, "channels"):
        channel = ChannelSnapshot(
            id=hikari.Snowflake(_get_int(raw_channel, "id")),
            guild_id=guild_id,
            type=_get_enum(raw_channel, "type", hikari.ChannelType),
            overwrites=tuple(
                Overwrite(
                    id=hikari.Snowflake(_get_int(raw_overwrite, "id")),
                    type=_get_enum(
                        raw_overwrite, "type", hikari.PermissionOverwriteType
                    ),
                    allow=_get_mask(raw_overwrite, "allow"),
                    deny=_get_mask(raw_overwrite, "deny"),
                )
                for raw_overwrite in _get_list(raw_channel, "permission_overwrites")
            ),
            name=_get_str(raw_channel, "name"),
        )
        channels[channel.id] = channel

    return GuildSnapshot(
        id=guild_id,
        owner_id=hikari.Snowflake(_get_int(data, "owner_id")),
        roles=roles,
        members=members,
        channels=channels,
        name=_get_str(data, "name"),
    )


def pack_snapshot(guild: GuildSnapshot) -> dict[str, bytes]:
    data = make_snapshot_data(guild)
    return {key: msgpack.packb(value) for key, value in data.items()}


def unpack_snapshot(raw: typing.Mapping[bytes, bytes]) -> GuildSnapshot:
    try:
        data = {key.decode(): msgpack.unpackb(value) for key, value in raw.items()}
    except (UnicodeDecodeError, ValueError) as e:
        raise SnapshotDecodeError(f"malformed snapshot: {e}") from e
    return load_snapshot_data(data)


def _get(record: typing.Any, key: str) -> typing.Any:
    if not isinstance(record, typing.Mapping):
        raise SnapshotDecodeError(f"expected a mapping holding {key!r}")
    try:
        return record[key]
    except KeyError:
        raise SnapshotDecodeError(f"missing {key!r}") from None


def _check_int(value: typing.Any, key: str) -> int:
    # bool is an int subclass but never a valid id or mask
    if isinstance(value, bool) or not isinstance(value, int):
        raise SnapshotDecodeError(f"expected an integer for {key!r}, got {value!r}")
    # ids and masks are unsigned, a negative mask would read as every flag
    if value < 0:
        raise SnapshotDecodeError(f"negative value for {key!r}: {value}")
    return value


def _get_int(record: typing.Any, key: str) -> int:
    return _check_int(_get(record, key), key)


def _get_mask(record: typing.Any, key: str) -> hikari.Permissions:
    return hikari.Permissions(_get_int(record, key))


def _get_str(record: typing.Any, key: str) -> str:
    value = _get(record, key)
    if not isinstance(value, str):
        raise SnapshotDecodeError(f"expected a string for {key!r}, got {value!r}")
    return value


def _get_list(record: typing.Any, key: str) -> list[typing.Any]:
    value = _get(record, key)
    if not isinstance(value, (list, tuple)):
        raise SnapshotDecodeError(f"expected a list for {key!r}, got {value!r}")
    return list(value)


def _get_enum(record: typing.Any, key: str, enum_type: type[E]) -> E:
    value = _get_int(record, key)
    try:
        member = enum_type(value)
    except ValueError:
        member = None
    if not isinstance(member, enum_type):
        raise SnapshotDecodeError(f"unknown {enum_type.__name__} {value}")
    return member
