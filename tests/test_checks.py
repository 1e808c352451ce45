import logging

import hikari
import pytest

from permcalc import checks, flags
from permcalc.directory import StaticDirectory
from permcalc.errors import MissingPermissionsError
from permcalc.snapshot import (
    ChannelSnapshot,
    GuildSnapshot,
    MemberSnapshot,
    Overwrite,
    RoleSnapshot,
)

P = hikari.Permissions
GUILD_ID = hikari.Snowflake(10)
OWNER_ID = hikari.Snowflake(1)
MOD_ID = hikari.Snowflake(2)
USER_ID = hikari.Snowflake(3)
HELPER_ID = hikari.Snowflake(4)
MOD_ROLE_ID = hikari.Snowflake(20)
HELPER_ROLE_ID = hikari.Snowflake(21)
CHANNEL_ID = hikari.Snowflake(30)


def make_guild() -> GuildSnapshot:
    roles = (
        RoleSnapshot(GUILD_ID, GUILD_ID, P.VIEW_CHANNEL | P.SEND_MESSAGES),
        RoleSnapshot(MOD_ROLE_ID, GUILD_ID, P.MANAGE_GUILD | P.BAN_MEMBERS),
        RoleSnapshot(HELPER_ROLE_ID, GUILD_ID, P.ADD_REACTIONS),
    )
    members = (
        MemberSnapshot(MOD_ID, GUILD_ID, (MOD_ROLE_ID,)),
        MemberSnapshot(USER_ID, GUILD_ID, ()),
        MemberSnapshot(HELPER_ID, GUILD_ID, (HELPER_ROLE_ID,)),
    )
    locked = ChannelSnapshot(
        CHANNEL_ID,
        GUILD_ID,
        hikari.ChannelType.GUILD_TEXT,
        (
            Overwrite(
                GUILD_ID, hikari.PermissionOverwriteType.ROLE, deny=P.SEND_MESSAGES
            ),
        ),
    )
    return GuildSnapshot(
        id=GUILD_ID,
        owner_id=OWNER_ID,
        roles={role.id: role for role in roles},
        members={member.user_id: member for member in members},
        channels={locked.id: locked},
    )


@pytest.fixture
def directory() -> StaticDirectory:
    return StaticDirectory(make_guild())


def test_member_permissions(directory: StaticDirectory) -> None:
    assert checks.member_permissions(directory, GUILD_ID, USER_ID) == (
        P.VIEW_CHANNEL | P.SEND_MESSAGES
    )
    assert checks.member_permissions(directory, GUILD_ID, OWNER_ID) == (
        flags.all_permissions()
    )


def test_permissions_in(directory: StaticDirectory) -> None:
    assert checks.permissions_in(directory, GUILD_ID, CHANNEL_ID, USER_ID) == (
        P.VIEW_CHANNEL
    )


def test_unknown_guild_has_no_permissions(
    directory: StaticDirectory, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="permcalc"):
        assert checks.member_permissions(directory, 999, OWNER_ID) == P.NONE
        assert checks.permissions_in(directory, 999, CHANNEL_ID, OWNER_ID) == P.NONE
    assert "guild 999 not found" in caplog.text


def test_has_permissions(directory: StaticDirectory) -> None:
    assert checks.has_permissions(directory, GUILD_ID, USER_ID, P.SEND_MESSAGES)
    assert not checks.has_permissions(
        directory, GUILD_ID, USER_ID, P.SEND_MESSAGES, channel_id=CHANNEL_ID
    )
    assert checks.has_permissions(
        directory, GUILD_ID, MOD_ID, P.BAN_MEMBERS, channel_id=CHANNEL_ID
    )


def test_ensure_permissions(directory: StaticDirectory) -> None:
    checks.ensure_permissions(directory, GUILD_ID, MOD_ID, P.BAN_MEMBERS)

    with pytest.raises(MissingPermissionsError) as exc_info:
        checks.ensure_permissions(
            directory,
            GUILD_ID,
            USER_ID,
            P.SEND_MESSAGES | P.KICK_MEMBERS,
            channel_id=CHANNEL_ID,
        )
    assert exc_info.value.missing == P.SEND_MESSAGES | P.KICK_MEMBERS


@pytest.mark.parametrize(
    "user_id,moderator_roles,expected",
    (
        (OWNER_ID, (), True),
        (MOD_ID, (), True),
        (USER_ID, (), False),
        (HELPER_ID, (), False),
        (HELPER_ID, (str(HELPER_ROLE_ID),), True),
        (999, (), False),
    ),
)
def test_is_moderator(
    user_id: int, moderator_roles: tuple[str, ...], expected: bool
) -> None:
    assert checks.is_moderator(make_guild(), user_id, moderator_roles) is expected


def test_has_dangerous_permissions() -> None:
    guild = make_guild()
    assert checks.has_dangerous_permissions(guild, MOD_ID)
    assert checks.has_dangerous_permissions(guild, OWNER_ID)
    assert not checks.has_dangerous_permissions(guild, USER_ID)
