import asyncio
from unittest import mock

import hikari
import msgpack  # type: ignore

from permcalc.codec import pack_snapshot
from permcalc.snapshot import GuildSnapshot, RoleSnapshot
from permcalc.store import delete_snapshot, get_snapshot, set_snapshot, snapshot_key

GUILD_ID = hikari.Snowflake(42)


def make_guild() -> GuildSnapshot:
    everyone = RoleSnapshot(GUILD_ID, GUILD_ID, hikari.Permissions.VIEW_CHANNEL)
    return GuildSnapshot(
        id=GUILD_ID,
        owner_id=hikari.Snowflake(1),
        roles={everyone.id: everyone},
        members={},
        channels={},
        name="store",
    )


def make_database() -> mock.Mock:
    database = mock.Mock()
    database.hgetall = mock.AsyncMock()
    database.hset = mock.AsyncMock()
    database.delete = mock.AsyncMock()
    return database


def test_snapshot_key() -> None:
    assert snapshot_key(GUILD_ID) == "guild:42:snapshot"


def test_set_snapshot() -> None:
    database = make_database()
    asyncio.run(set_snapshot(database, make_guild()))

    database.hset.assert_awaited_once()
    key, fields = database.hset.await_args.args
    assert key == "guild:42:snapshot"
    assert msgpack.unpackb(fields["owner_id"]) == 1
    assert msgpack.unpackb(fields["name"]) == "store"


def test_get_snapshot() -> None:
    database = make_database()
    database.hgetall.return_value = {
        key.encode(): value for key, value in pack_snapshot(make_guild()).items()
    }
    snapshot = asyncio.run(get_snapshot(database, 42))

    database.hgetall.assert_awaited_once_with("guild:42:snapshot")
    assert snapshot == make_guild()


def test_get_missing_snapshot() -> None:
    database = make_database()
    database.hgetall.return_value = {}
    assert asyncio.run(get_snapshot(database, 42)) is None


def test_delete_snapshot() -> None:
    database = make_database()
    asyncio.run(delete_snapshot(database, 42))
    database.delete.assert_awaited_once_with(["guild:42:snapshot"])
