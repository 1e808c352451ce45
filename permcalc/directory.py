from __future__ import annotations

import logging
import typing

import hikari
from hikari.api.cache import Cache
from hikari.api.config import CacheComponents

from .snapshot import (
    ChannelSnapshot,
    GuildSnapshot,
    MemberSnapshot,
    Overwrite,
    RoleSnapshot,
)

logger = logging.getLogger(__name__)

REQUIRED_CACHE_COMPONENTS = (
    CacheComponents.GUILDS
    | CacheComponents.GUILD_CHANNELS
    | CacheComponents.ROLES
    | CacheComponents.MEMBERS
)


class Directory(typing.Protocol):
    def get_guild(self, guild_id: hikari.Snowflakeish) -> GuildSnapshot | None:
        ...


class StaticDirectory:
    _guilds: dict[hikari.Snowflake, GuildSnapshot]

    def __init__(self, *guilds: GuildSnapshot) -> None:
        self._guilds = {}
        for guild in guilds:
            self.add(guild)

    def add(self, guild: GuildSnapshot) -> None:
        self._guilds[guild.id] = guild

    def remove(self, guild_id: hikari.Snowflakeish) -> None:
        self._guilds.pop(hikari.Snowflake(guild_id), None)

    def get_guild(self, guild_id: hikari.Snowflakeish) -> GuildSnapshot | None:
        return self._guilds.get(hikari.Snowflake(guild_id))


class CacheDirectory:
    def __init__(self, cache: Cache) -> None:
        self.cache = cache

        missing = REQUIRED_CACHE_COMPONENTS & ~cache.settings.components
        if missing:
            logger.warning(f"cache is missing components for permissions: {missing}")

    def get_guild(self, guild_id: hikari.Snowflakeish) -> GuildSnapshot | None:
        return snapshot_from_cache(self.cache, guild_id)


def snapshot_from_cache(
    cache: Cache, guild_id: hikari.Snowflakeish
) -> GuildSnapshot | None:
    guild = cache.get_guild(guild_id)
    if guild is None:
        return None

    roles = {
        role.id: make_role_snapshot(role)
        for role in cache.get_roles_view_for_guild(guild_id).values()
    }
    members = {
        member.id: make_member_snapshot(member)
        for member in cache.get_members_view_for_guild(guild_id).values()
    }
    channels = {
        channel.id: make_channel_snapshot(channel)
        for channel in cache.get_guild_channels_view_for_guild(guild_id).values()
    }
    return GuildSnapshot(
        id=guild.id,
        owner_id=guild.owner_id,
        roles=roles,
        members=members,
        channels=channels,
        name=guild.name,
    )


def make_role_snapshot(role: hikari.Role) -> RoleSnapshot:
    return RoleSnapshot(
        id=role.id,
        guild_id=role.guild_id,
        permissions=role.permissions,
        name=role.name,
    )


def make_member_snapshot(member: hikari.Member) -> MemberSnapshot:
    return MemberSnapshot(
        user_id=member.id,
        guild_id=member.guild_id,
        role_ids=tuple(member.role_ids),
    )


def make_channel_snapshot(channel: hikari.GuildChannel) -> ChannelSnapshot:
    return ChannelSnapshot(
        id=channel.id,
        guild_id=channel.guild_id,
        type=channel.type,
        overwrites=tuple(
            Overwrite(
                id=overwrite.id,
                type=overwrite.type,
                allow=overwrite.allow,
                deny=overwrite.deny,
            )
            for overwrite in getattr(channel, "permission_overwrites", {}).values()
        ),
        name=channel.name or "",
    )
