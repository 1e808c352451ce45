import hikari

VOICE_PERMISSIONS = (
    hikari.Permissions.CONNECT
    | hikari.Permissions.SPEAK
    | hikari.Permissions.MUTE_MEMBERS
    | hikari.Permissions.DEAFEN_MEMBERS
    | hikari.Permissions.MOVE_MEMBERS
    | hikari.Permissions.USE_VOICE_ACTIVITY
)
SEND_DEPENDENT_PERMISSIONS = (
    hikari.Permissions.SEND_TTS_MESSAGES
    | hikari.Permissions.MENTION_ROLES  # @everyone, @here and roles
    | hikari.Permissions.EMBED_LINKS
    | hikari.Permissions.ATTACH_FILES
)
# what is left once a channel can't be seen
HIDDEN_CHANNEL_PERMISSIONS = (
    hikari.Permissions.KICK_MEMBERS
    | hikari.Permissions.BAN_MEMBERS
    | hikari.Permissions.ADMINISTRATOR
    | hikari.Permissions.MANAGE_GUILD
    | hikari.Permissions.CHANGE_NICKNAME
    | hikari.Permissions.MANAGE_NICKNAMES
)
DANGEROUS_PERMISSIONS = (
    hikari.Permissions.KICK_MEMBERS
    | hikari.Permissions.BAN_MEMBERS
    | hikari.Permissions.ADMINISTRATOR
    | hikari.Permissions.MANAGE_CHANNELS
    | hikari.Permissions.MANAGE_GUILD
    | hikari.Permissions.MANAGE_MESSAGES
    | hikari.Permissions.MUTE_MEMBERS
    | hikari.Permissions.DEAFEN_MEMBERS
    | hikari.Permissions.MOVE_MEMBERS
    | hikari.Permissions.MANAGE_NICKNAMES
    | hikari.Permissions.MANAGE_ROLES
    | hikari.Permissions.MANAGE_WEBHOOKS
    | hikari.Permissions.MANAGE_GUILD_EXPRESSIONS
    | hikari.Permissions.MANAGE_THREADS
    | hikari.Permissions.MODERATE_MEMBERS
)


def all_permissions() -> hikari.Permissions:
    return hikari.Permissions.all_permissions()


def no_permissions() -> hikari.Permissions:
    return hikari.Permissions.NONE


def union(a: hikari.Permissions, b: hikari.Permissions) -> hikari.Permissions:
    return a | b


def subtract(a: hikari.Permissions, b: hikari.Permissions) -> hikari.Permissions:
    return a & ~b


def intersect(a: hikari.Permissions, b: hikari.Permissions) -> hikari.Permissions:
    return a & b


def contains(mask: hikari.Permissions, flag: hikari.Permissions) -> bool:
    return mask & flag == flag


def apply_overwrite(
    mask: hikari.Permissions, allow: hikari.Permissions, deny: hikari.Permissions
) -> hikari.Permissions:
    return (mask & ~deny) | allow
