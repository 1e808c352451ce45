import logging
import typing

import hikari

from . import flags
from .snapshot import (
    ChannelSnapshot,
    GuildSnapshot,
    MemberSnapshot,
    Overwrite,
    RoleSnapshot,
)

logger = logging.getLogger(__name__)


def resolve_guild_permissions(
    guild: GuildSnapshot, user_id: hikari.Snowflakeish
) -> hikari.Permissions:
    if user_id == guild.owner_id:
        return flags.all_permissions()

    everyone = _get_default_role(guild)
    if everyone is None:
        return flags.no_permissions()

    member = guild.members.get(hikari.Snowflake(user_id))
    if member is None:
        return everyone.permissions

    permissions = everyone.permissions
    if permissions & hikari.Permissions.ADMINISTRATOR:
        return flags.all_permissions()

    for role in _get_member_roles(guild, member):
        permissions |= role.permissions
        if permissions & hikari.Permissions.ADMINISTRATOR:
            return flags.all_permissions()

    return permissions


def resolve_channel_permissions(
    guild: GuildSnapshot,
    channel_id: hikari.Snowflakeish,
    user_id: hikari.Snowflakeish,
) -> hikari.Permissions:
    if user_id == guild.owner_id:
        return flags.all_permissions()

    everyone = _get_default_role(guild)
    if everyone is None:
        return flags.no_permissions()

    member = guild.members.get(hikari.Snowflake(user_id))
    if member is None:
        return everyone.permissions

    permissions = everyone.permissions
    for role in _get_member_roles(guild, member):
        permissions |= role.permissions

    # overwrites never apply to administrators
    if permissions & hikari.Permissions.ADMINISTRATOR:
        return flags.all_permissions()

    channel = _get_channel(guild, channel_id)
    if channel is not None:
        # roles first so that member overwrites always win
        role_overwrites = [
            overwrite
            for overwrite in channel.overwrites
            if overwrite.type == hikari.PermissionOverwriteType.ROLE
            and (overwrite.id == guild.id or overwrite.id in member.role_ids)
        ]
        member_overwrites = [
            overwrite
            for overwrite in channel.overwrites
            if overwrite.type == hikari.PermissionOverwriteType.MEMBER
            and overwrite.id == member.user_id
        ]
        permissions = _apply_overwrites(
            channel, permissions, role_overwrites + member_overwrites
        )

    return _finalize_channel_permissions(guild, channel_id, permissions)


def resolve_role_permissions(
    guild: GuildSnapshot,
    role_id: hikari.Snowflakeish,
    channel_id: hikari.Snowflakeish,
) -> hikari.Permissions:
    everyone = _get_default_role(guild)
    if everyone is None:
        return flags.no_permissions()

    role = guild.roles.get(hikari.Snowflake(role_id))
    if role is None:
        logger.warning(f"role {role_id} missing in guild {guild.id}")
        return flags.no_permissions()

    permissions = everyone.permissions | role.permissions
    if permissions & hikari.Permissions.ADMINISTRATOR:
        return flags.all_permissions()

    channel = _get_channel(guild, channel_id)
    if channel is not None:
        role_overwrites = [
            overwrite
            for overwrite in channel.overwrites
            if overwrite.type == hikari.PermissionOverwriteType.ROLE
            and overwrite.id in (guild.id, role.id)
        ]
        permissions = _apply_overwrites(channel, permissions, role_overwrites)

    return _finalize_channel_permissions(guild, channel_id, permissions)


def _apply_overwrites(
    channel: ChannelSnapshot,
    permissions: hikari.Permissions,
    overwrites: typing.Iterable[Overwrite],
) -> hikari.Permissions:
    # voice permissions mean nothing in a text channel, not even when allowed
    ignored = flags.VOICE_PERMISSIONS if channel.is_text else flags.no_permissions()
    permissions = flags.subtract(permissions, ignored)
    for overwrite in overwrites:
        permissions = flags.apply_overwrite(
            permissions, flags.subtract(overwrite.allow, ignored), overwrite.deny
        )
    return permissions


def _finalize_channel_permissions(
    guild: GuildSnapshot,
    channel_id: hikari.Snowflakeish,
    permissions: hikari.Permissions,
) -> hikari.Permissions:
    # the default channel is always readable
    if channel_id == guild.id:
        permissions |= hikari.Permissions.VIEW_CHANNEL

    if not flags.contains(permissions, hikari.Permissions.SEND_MESSAGES):
        permissions = flags.subtract(permissions, flags.SEND_DEPENDENT_PERMISSIONS)

    # ADMINISTRATOR in here is unreachable, administrators returned earlier
    if not flags.contains(permissions, hikari.Permissions.VIEW_CHANNEL):
        permissions = flags.intersect(permissions, flags.HIDDEN_CHANNEL_PERMISSIONS)

    return permissions


def _get_default_role(guild: GuildSnapshot) -> RoleSnapshot | None:
    everyone = guild.get_default_role()
    if everyone is None:
        logger.error(f"@everyone role ({guild.id}) missing in {guild.name!r}")
    return everyone


def _get_member_roles(
    guild: GuildSnapshot, member: MemberSnapshot
) -> list[RoleSnapshot]:
    roles = []
    for role_id in member.role_ids:
        role = guild.roles.get(role_id)
        if role is None:
            logger.warning(
                f"{member.user_id} on {guild.id} has non-existent role {role_id}"
            )
            continue
        roles.append(role)
    return roles


def _get_channel(
    guild: GuildSnapshot, channel_id: hikari.Snowflakeish
) -> ChannelSnapshot | None:
    channel = guild.channels.get(hikari.Snowflake(channel_id))
    if channel is None:
        logger.warning(f"guild {guild.id} does not contain channel {channel_id}")
    return channel
