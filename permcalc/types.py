from __future__ import annotations

import typing


class SnapshotData(typing.TypedDict):
    id: int
    name: str
    owner_id: int
    roles: list[RoleData]
    members: list[MemberData]
    channels: list[ChannelData]


class RoleData(typing.TypedDict):
    id: int
    name: str
    permissions: int


class MemberData(typing.TypedDict):
    user_id: int
    role_ids: list[int]


class ChannelData(typing.TypedDict):
    id: int
    name: str
    type: int
    permission_overwrites: list[OverwriteData]


class OverwriteData(typing.TypedDict):
    id: int
    type: int
    allow: int
    deny: int
