import asyncio
from asyncio import Lock, Task
from collections.abc import Awaitable, Callable
from pathlib import Path

import aiofiles
import tomli
import tomli_w
import watchfiles
from nonebot.log import logger
from pydantic import BaseModel, Field
from typing_extensions import Self

CALLBACK_TYPE = Callable[["Config", Path], Awaitable]
DEFAULT_CONFIG_PATH = Path("config") / "plan_luckperms" / "config.toml"


class Config(BaseModel):
    """
    LuckPerms扩展配置
    """

    enabled: bool = Field(default=True, description="是否向Plan注册该扩展")
    disabled_providers: list[str] = Field(
        default_factory=list, description="不向Plan提供数据的访问器名称"
    )
    meta_value_separator: str = Field(
        default=", ", description="同一元数据键存在多个值时的分隔符"
    )


class ConfigManager:
    """
    配置管理器

    负责配置文件的初始化、读取、保存与热重载，使用单例模式确保全局唯一实例。
    未加载配置文件时返回默认配置。
    """

    _instance = None
    _lock: Lock
    _config: Config
    _path: Path | None
    _tasks: list[Task]

    def __new__(cls) -> Self:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._lock = Lock()
            cls._config = Config()
            cls._path = None
            cls._tasks = []
        return cls._instance

    @property
    def config(self) -> Config:
        return self._config

    @property
    def path(self) -> Path | None:
        return self._path

    async def load(self, path: Path = DEFAULT_CONFIG_PATH) -> Config:
        """
        加载配置文件，不存在时写入默认配置

        Args:
            path (Path, optional): 配置文件路径. 默认为`config/plan_luckperms/config.toml`

        Returns:
            Config: 配置实例
        """
        async with self._lock:
            type(self)._path = path
            if not path.exists():
                path.parent.mkdir(parents=True, exist_ok=True)
                async with aiofiles.open(path, mode="w", encoding="utf-8") as f:
                    await f.write(tomli_w.dumps(self._config.model_dump()))
                logger.info(f"Default config written to `{path}`")
            async with aiofiles.open(path, encoding="utf-8") as f:
                type(self)._config = Config.model_validate(tomli.loads(await f.read()))
        logger.debug(f"Config loaded from `{path}`")
        return self._config

    async def save(self):
        """
        保存当前配置

        Raises:
            RuntimeError: 当尚未加载过配置文件时
        """
        if self._path is None:
            raise RuntimeError("Config file has not been loaded yet")
        async with self._lock:
            async with aiofiles.open(self._path, mode="w", encoding="utf-8") as f:
                await f.write(tomli_w.dumps(self._config.model_dump()))

    def loads_config(self, instance: Config):
        """直接替换当前配置实例（不写入文件）"""
        type(self)._config = instance

    async def watch(self, on_reload: CALLBACK_TYPE | None = None) -> Task:
        """
        监控配置文件变更并自动重载

        Args:
            on_reload (CALLBACK_TYPE | None, optional): 重载完成后的回调. 默认为None

        Returns:
            Task: 监控任务

        Raises:
            RuntimeError: 当尚未加载过配置文件时
        """
        if (path := self._path) is None:
            raise RuntimeError("Config file has not been loaded yet")

        async def excutor():
            try:
                async for changes in watchfiles.awatch(path.parent):
                    if not any(Path(change[1]).name == path.name for change in changes):
                        continue
                    try:
                        logger.info(f"{path.name} 已修改，正在重载中......")
                        config = await self.load(path)
                        if on_reload:
                            await on_reload(config, path)
                        logger.success(f"{path.name} 已重载")
                    except Exception as e:
                        logger.opt(exception=e, colors=True).error(
                            "Error while reloading config"
                        )
            except Exception as e:
                logger.opt(exception=e, colors=True).error(
                    f"Error in watcher for {path}"
                )

        task = asyncio.create_task(excutor())
        self._tasks.append(task)
        return task

    def stop(self):
        """取消所有监控任务"""
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()

    def reset(self):
        """恢复默认配置并停止监控，锁会重新创建以便在新的事件循环中使用"""
        self.stop()
        type(self)._lock = Lock()
        type(self)._config = Config()
        type(self)._path = None


def get_config() -> Config:
    return ConfigManager().config
