from abc import ABC, abstractmethod
from collections.abc import Collection
from uuid import UUID

from nonebot.log import logger
from typing_extensions import Self

from ..exceptions import NotReadyError
from .models import Group, Track, User


class PermissionRegistry(ABC):
    """
    权限注册表抽象

    由宿主管理的LuckPerms API在适配器侧的只读视图，实现方需保证并发读取安全。
    """

    @abstractmethod
    def get_user(self, unique_id: UUID) -> User | None:
        """
        按唯一ID查找用户

        Args:
            unique_id (UUID): 用户唯一ID

        Returns:
            User | None: 用户快照，不存在时为None
        """
        raise NotImplementedError

    @abstractmethod
    def get_group(self, name: str) -> Group | None:
        """
        按名称查找权限组

        Args:
            name (str): 权限组名称

        Returns:
            Group | None: 权限组快照，不存在时为None
        """
        raise NotImplementedError

    @abstractmethod
    def get_tracks(self) -> Collection[Track]:
        """获取所有已定义的晋升路线"""
        raise NotImplementedError


class LuckPermsProvider:
    """
    LuckPerms API提供者

    持有当前进程中可用的权限注册表，使用单例模式确保全局唯一实例。
    LuckPerms加载完成前调用`get()`会抛出NotReadyError。
    """

    _instance = None
    _registry: PermissionRegistry | None

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._registry = None
        return cls._instance

    def register(self, registry: PermissionRegistry) -> None:
        """
        注册权限注册表

        Args:
            registry (PermissionRegistry): 权限注册表实例
        """
        if self._registry is not None and self._registry is not registry:
            logger.warning(
                f"Replacing registered permission registry {type(self._registry).__name__}"
            )
        type(self)._registry = registry
        logger.debug(f"Permission registry {type(registry).__name__} registered")

    def unregister(self) -> None:
        type(self)._registry = None
        logger.debug("Permission registry unregistered")

    @property
    def is_ready(self) -> bool:
        return self._registry is not None

    def get_safe(self) -> PermissionRegistry | None:
        return self._registry

    def get(self) -> PermissionRegistry:
        """
        获取权限注册表

        Returns:
            PermissionRegistry: 当前注册的权限注册表

        Raises:
            NotReadyError: 当LuckPerms尚未初始化时
        """
        if (registry := self._registry) is None:
            raise NotReadyError("LuckPerms API is not loaded yet")
        return registry
