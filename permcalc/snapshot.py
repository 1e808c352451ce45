"""
Read-only guild state the resolver works on.

Snapshots are handed out by a directory service and never mutated.
"""

import typing

import hikari

TEXT_CHANNEL_TYPES = frozenset(
    (
        hikari.ChannelType.GUILD_TEXT,
        hikari.ChannelType.GUILD_NEWS,
        hikari.ChannelType.GUILD_FORUM,
    )
)


class RoleSnapshot(typing.NamedTuple):
    id: hikari.Snowflake
    guild_id: hikari.Snowflake
    permissions: hikari.Permissions
    name: str = ""

    @property
    def is_default(self) -> bool:
        return self.id == self.guild_id


class MemberSnapshot(typing.NamedTuple):
    user_id: hikari.Snowflake
    guild_id: hikari.Snowflake
    role_ids: tuple[hikari.Snowflake, ...] = ()


class Overwrite(typing.NamedTuple):
    id: hikari.Snowflake  # role or user
    type: hikari.PermissionOverwriteType
    allow: hikari.Permissions = hikari.Permissions.NONE
    deny: hikari.Permissions = hikari.Permissions.NONE


class ChannelSnapshot(typing.NamedTuple):
    id: hikari.Snowflake
    guild_id: hikari.Snowflake
    type: hikari.ChannelType
    overwrites: tuple[Overwrite, ...] = ()
    name: str = ""

    @property
    def is_text(self) -> bool:
        return self.type in TEXT_CHANNEL_TYPES

    @property
    def is_default(self) -> bool:
        return self.id == self.guild_id


class GuildSnapshot(typing.NamedTuple):
    id: hikari.Snowflake
    owner_id: hikari.Snowflake
    roles: typing.Mapping[hikari.Snowflake, RoleSnapshot]
    members: typing.Mapping[hikari.Snowflake, MemberSnapshot]
    channels: typing.Mapping[hikari.Snowflake, ChannelSnapshot]
    name: str = ""

    def get_default_role(self) -> RoleSnapshot | None:
        return self.roles.get(self.id)
