"""
Audit log entries.

Action tags are checked against a closed set of known actions; anything
else is rejected instead of being passed through as a raw integer.
"""

import enum
import typing

import hikari

from .errors import AuditLogDecodeError


class AuditLogTarget(enum.IntEnum):
    GUILD = 10
    CHANNEL = 20
    USER = 30
    ROLE = 40
    INVITE = 50
    WEBHOOK = 60
    EMOJI = 70


class AuditLogAction(typing.NamedTuple):
    target: AuditLogTarget
    event: hikari.AuditLogEventType


class AuditLogChange(typing.NamedTuple):
    key: str
    old: typing.Any
    new: typing.Any


class AuditLogEntry(typing.NamedTuple):
    id: hikari.Snowflake
    target_id: hikari.Snowflake | None
    user_id: hikari.Snowflake | None
    action: AuditLogAction
    reason: str | None
    changes: tuple[AuditLogChange, ...]


TARGET_EVENTS: dict[AuditLogTarget, tuple[hikari.AuditLogEventType, ...]] = {
    AuditLogTarget.GUILD: (hikari.AuditLogEventType.GUILD_UPDATE,),
    AuditLogTarget.CHANNEL: (
        hikari.AuditLogEventType.CHANNEL_CREATE,
        hikari.AuditLogEventType.CHANNEL_UPDATE,
        hikari.AuditLogEventType.CHANNEL_DELETE,
        hikari.AuditLogEventType.CHANNEL_OVERWRITE_CREATE,
        hikari.AuditLogEventType.CHANNEL_OVERWRITE_UPDATE,
        hikari.AuditLogEventType.CHANNEL_OVERWRITE_DELETE,
    ),
    AuditLogTarget.USER: (
        hikari.AuditLogEventType.MEMBER_KICK,
        hikari.AuditLogEventType.MEMBER_PRUNE,
        hikari.AuditLogEventType.MEMBER_BAN_ADD,
        hikari.AuditLogEventType.MEMBER_BAN_REMOVE,
        hikari.AuditLogEventType.MEMBER_UPDATE,
        hikari.AuditLogEventType.MEMBER_ROLE_UPDATE,
        # target is the author of the deleted message
        hikari.AuditLogEventType.MESSAGE_DELETE,
    ),
    AuditLogTarget.ROLE: (
        hikari.AuditLogEventType.ROLE_CREATE,
        hikari.AuditLogEventType.ROLE_UPDATE,
        hikari.AuditLogEventType.ROLE_DELETE,
    ),
    AuditLogTarget.INVITE: (
        hikari.AuditLogEventType.INVITE_CREATE,
        hikari.AuditLogEventType.INVITE_UPDATE,
        hikari.AuditLogEventType.INVITE_DELETE,
    ),
    AuditLogTarget.WEBHOOK: (
        hikari.AuditLogEventType.WEBHOOK_CREATE,
        hikari.AuditLogEventType.WEBHOOK_UPDATE,
        hikari.AuditLogEventType.WEBHOOK_DELETE,
    ),
    AuditLogTarget.EMOJI: (
        hikari.AuditLogEventType.EMOJI_CREATE,
        hikari.AuditLogEventType.EMOJI_UPDATE,
        hikari.AuditLogEventType.EMOJI_DELETE,
    ),
}
ACTION_TARGETS: dict[int, AuditLogTarget] = {
    int(event): target
    for target, events in TARGET_EVENTS.items()
    for event in events
}


def decode_action(value: typing.Any) -> AuditLogAction:
    if isinstance(value, bool) or not isinstance(value, int):
        raise AuditLogDecodeError(f"action type must be an integer, got {value!r}")

    target = ACTION_TARGETS.get(int(value))
    if target is None:
        raise AuditLogDecodeError(f"unknown audit log action type: {value}")

    return AuditLogAction(target, hikari.AuditLogEventType(int(value)))


def decode_entry(payload: typing.Mapping[str, typing.Any]) -> AuditLogEntry:
    try:
        raw_id = payload["id"]
        raw_action = payload["action_type"]
        changes = tuple(
            AuditLogChange(
                key=change["key"],
                old=change.get("old_value"),
                new=change.get("new_value"),
            )
            for change in payload.get("changes") or ()
        )
    except KeyError as e:
        raise AuditLogDecodeError(f"audit log entry is missing {e}") from None
    except (TypeError, AttributeError) as e:
        raise AuditLogDecodeError(f"malformed audit log changes: {e}") from e

    entry_id = _optional_snowflake(raw_id)
    if entry_id is None:
        raise AuditLogDecodeError("audit log entry has no id")

    return AuditLogEntry(
        id=entry_id,
        target_id=_optional_snowflake(payload.get("target_id")),
        user_id=_optional_snowflake(payload.get("user_id")),
        action=decode_action(raw_action),
        reason=payload.get("reason"),
        changes=changes,
    )


def _optional_snowflake(value: typing.Any) -> hikari.Snowflake | None:
    if value is None:
        return None
    # ids arrive as decimal strings, plain ints are accepted too
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return hikari.Snowflake(int(value))
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return hikari.Snowflake(value)
    raise AuditLogDecodeError(f"malformed snowflake: {value!r}")
