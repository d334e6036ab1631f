from typing import Any, TypeVar
from uuid import UUID

from nonebot.log import logger
from pydantic import BaseModel, ConfigDict
from typing_extensions import Self

from ..config import get_config
from ..exceptions import NotReadyError
from .annotations import ProviderData, TargetKind
from .base import DataExtension

T = TypeVar("T")


class ProviderResult(BaseModel):
    """单个数据提供者的调用结果"""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    extension: str
    provider: ProviderData
    value: Any


class ExtensionService:
    """
    数据扩展服务

    保存已注册的扩展并按目标类型调用其数据提供者，使用单例模式确保全局唯一实例。
    提供者抛出NotReadyError时该项视为缺失，不影响其余提供者。
    """

    _instance = None
    _extensions: dict[str, DataExtension]

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._extensions = {}
        return cls._instance

    def register(self, extension: DataExtension) -> bool:
        """
        注册扩展

        Args:
            extension (DataExtension): 扩展实例

        Returns:
            bool: 配置中禁用了扩展时返回False

        Raises:
            ValueError: 当同名扩展已经注册时
        """
        if not get_config().enabled:
            logger.warning(f"Extension `{extension.name}` is disabled in config")
            return False
        if extension.name in self._extensions:
            raise ValueError(f"Extension `{extension.name}` is already registered")
        self._extensions[extension.name] = extension
        logger.info(
            f"Extension `{extension.name}` registered with {len(extension.providers)} providers"
        )
        return True

    def unregister(self, name: str) -> None:
        self._extensions.pop(name, None)

    def get_extension(self, name: str, default: T = None) -> DataExtension | T:
        return self._extensions.get(name, default)

    def extensions(self) -> dict[str, DataExtension]:
        return dict(self._extensions)

    def clear(self) -> None:
        self._extensions.clear()

    def _extract(self, target: TargetKind, *args: Any) -> dict[str, ProviderResult]:
        disabled = set(get_config().disabled_providers)
        results: dict[str, ProviderResult] = {}
        for extension in self._extensions.values():
            for name, provider in extension.providers.items():
                if provider.target != target or name in disabled:
                    continue
                try:
                    value = getattr(extension, name)(*args)
                except NotReadyError as e:
                    logger.debug(f"{extension.name}.{name} is not ready: {e}")
                    continue
                results[f"{extension.name}.{name}"] = ProviderResult(
                    extension=extension.name, provider=provider, value=value
                )
        return results

    def extract_player_data(self, unique_id: UUID) -> dict[str, ProviderResult]:
        """
        调用所有玩家数据提供者

        Args:
            unique_id (UUID): 玩家唯一ID

        Returns:
            dict[str, ProviderResult]: `扩展名.访问器名`到结果的映射，未就绪的访问器不会出现
        """
        return self._extract("player", unique_id)

    def extract_group_data(self, group_name: str) -> dict[str, ProviderResult]:
        return self._extract("group", group_name)

    def extract_server_data(self) -> dict[str, ProviderResult]:
        return self._extract("server")
