import typing

import hikari
from coredis import Redis

from .codec import pack_snapshot, unpack_snapshot
from .snapshot import GuildSnapshot


def snapshot_key(guild_id: hikari.Snowflakeish) -> str:
    return f"guild:{int(guild_id)}:snapshot"


async def get_snapshot(
    database: Redis[bytes], guild_id: hikari.Snowflakeish
) -> GuildSnapshot | None:
    raw_snapshot = await database.hgetall(snapshot_key(guild_id))
    if not raw_snapshot:
        return None
    return unpack_snapshot(raw_snapshot)


async def set_snapshot(database: Redis[bytes], guild: GuildSnapshot) -> None:
    raw_snapshot = typing.cast(
        dict[str | bytes, str | bytes | int | float], pack_snapshot(guild)
    )
    await database.hset(snapshot_key(guild.id), raw_snapshot)


async def delete_snapshot(
    database: Redis[bytes], guild_id: hikari.Snowflakeish
) -> None:
    await database.delete([snapshot_key(guild_id)])
