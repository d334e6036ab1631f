from collections.abc import Collection
from pathlib import Path
from typing import Any
from uuid import UUID

import aiofiles
import tomli
from nonebot.log import logger
from pydantic import BaseModel, Field, ValidationError

from .api import PermissionRegistry
from .models import Group, MetaData, Node, Track, User


class SnapshotError(Exception):
    """快照文件格式错误"""


class UserDocument(BaseModel):
    """
    快照文件中的用户条目

    前缀、后缀与元数据直接写在用户条目下，加载时组装为缓存元数据。
    """

    unique_id: UUID
    username: str | None = None
    primary_group: str = "default"
    nodes: list[Node] = Field(default_factory=list)
    prefix: str | None = None
    suffix: str | None = None
    meta: dict[str, str | list[str]] = Field(default_factory=dict)

    def to_user(self) -> User:
        return User(
            unique_id=self.unique_id,
            username=self.username,
            primary_group=self.primary_group,
            nodes=self.nodes,
            cached_meta=MetaData(prefix=self.prefix, suffix=self.suffix, meta=self.meta),
        )


class SnapshotDocument(BaseModel):
    users: list[UserDocument] = Field(default_factory=list)
    groups: list[Group] = Field(default_factory=list)
    tracks: list[Track] = Field(default_factory=list)


class SnapshotRegistry(PermissionRegistry):
    """
    基于内存快照的权限注册表

    从普通数据（字典或TOML文档）构建，供命令行工具与测试使用。
    """

    def __init__(
        self,
        users: Collection[User] = (),
        groups: Collection[Group] = (),
        tracks: Collection[Track] = (),
    ):
        self._users: dict[UUID, User] = {user.unique_id: user for user in users}
        self._groups: dict[str, Group] = {group.name: group for group in groups}
        self._tracks: dict[str, Track] = {track.name: track for track in tracks}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SnapshotRegistry":
        """
        从字典构建注册表

        Args:
            data (dict[str, Any]): 快照数据

        Returns:
            SnapshotRegistry: 注册表实例

        Raises:
            SnapshotError: 当数据不符合快照格式时
        """
        try:
            document = SnapshotDocument.model_validate(data)
        except ValidationError as e:
            raise SnapshotError(f"Invalid permission snapshot: {e}") from e
        logger.debug(
            f"Loaded snapshot with {len(document.users)} users, "
            f"{len(document.groups)} groups, {len(document.tracks)} tracks"
        )
        return cls(
            users=[user.to_user() for user in document.users],
            groups=document.groups,
            tracks=document.tracks,
        )

    @classmethod
    def from_toml(cls, text: str) -> "SnapshotRegistry":
        try:
            data = tomli.loads(text)
        except tomli.TOMLDecodeError as e:
            raise SnapshotError(f"Invalid TOML: {e}") from e
        return cls.from_dict(data)

    @classmethod
    async def from_file(cls, path: Path) -> "SnapshotRegistry":
        """
        从TOML快照文件构建注册表

        Args:
            path (Path): 快照文件路径

        Returns:
            SnapshotRegistry: 注册表实例
        """
        async with aiofiles.open(path, encoding="utf-8") as f:
            return cls.from_toml(await f.read())

    def get_user(self, unique_id: UUID) -> User | None:
        return self._users.get(unique_id)

    def get_group(self, name: str) -> Group | None:
        return self._groups.get(name)

    def get_tracks(self) -> Collection[Track]:
        return list(self._tracks.values())
