import logging
import typing

import hikari

from . import flags
from .directory import Directory
from .errors import MissingPermissionsError
from .resolver import resolve_channel_permissions, resolve_guild_permissions
from .snapshot import GuildSnapshot

logger = logging.getLogger(__name__)

PERM_MOD = hikari.Permissions.ADMINISTRATOR | hikari.Permissions.MANAGE_GUILD


def member_permissions(
    directory: Directory,
    guild_id: hikari.Snowflakeish,
    user_id: hikari.Snowflakeish,
) -> hikari.Permissions:
    guild = _get_guild(directory, guild_id)
    if guild is None:
        return flags.no_permissions()
    return resolve_guild_permissions(guild, user_id)


def permissions_in(
    directory: Directory,
    guild_id: hikari.Snowflakeish,
    channel_id: hikari.Snowflakeish,
    user_id: hikari.Snowflakeish,
) -> hikari.Permissions:
    guild = _get_guild(directory, guild_id)
    if guild is None:
        return flags.no_permissions()
    return resolve_channel_permissions(guild, channel_id, user_id)


def has_permissions(
    directory: Directory,
    guild_id: hikari.Snowflakeish,
    user_id: hikari.Snowflakeish,
    required: hikari.Permissions,
    channel_id: hikari.Snowflakeish | None = None,
) -> bool:
    return not _missing_permissions(directory, guild_id, user_id, required, channel_id)


def ensure_permissions(
    directory: Directory,
    guild_id: hikari.Snowflakeish,
    user_id: hikari.Snowflakeish,
    required: hikari.Permissions,
    channel_id: hikari.Snowflakeish | None = None,
) -> None:
    missing = _missing_permissions(directory, guild_id, user_id, required, channel_id)
    if missing:
        raise MissingPermissionsError(missing)


def is_moderator(
    guild: GuildSnapshot,
    user_id: hikari.Snowflakeish,
    moderator_role_ids: typing.Iterable[hikari.Snowflakeish | str] = (),
) -> bool:
    if user_id == guild.owner_id:
        return True

    member = guild.members.get(hikari.Snowflake(user_id))
    moderator_roles = set(map(int, moderator_role_ids))
    if member is not None and moderator_roles & set(member.role_ids):
        return True

    return bool(resolve_guild_permissions(guild, user_id) & PERM_MOD)


def has_dangerous_permissions(
    guild: GuildSnapshot, user_id: hikari.Snowflakeish
) -> bool:
    permissions = resolve_guild_permissions(guild, user_id)
    return bool(permissions & flags.DANGEROUS_PERMISSIONS)


def _missing_permissions(
    directory: Directory,
    guild_id: hikari.Snowflakeish,
    user_id: hikari.Snowflakeish,
    required: hikari.Permissions,
    channel_id: hikari.Snowflakeish | None,
) -> hikari.Permissions:
    if channel_id is None:
        permissions = member_permissions(directory, guild_id, user_id)
    else:
        permissions = permissions_in(directory, guild_id, channel_id, user_id)
    return flags.subtract(required, permissions)


def _get_guild(
    directory: Directory, guild_id: hikari.Snowflakeish
) -> GuildSnapshot | None:
    guild = directory.get_guild(guild_id)
    if guild is None:
        logger.warning(f"guild {guild_id} not found in directory")
    return guild
