import inspect
import typing
from typing import ClassVar
from uuid import UUID

from .annotations import (
    PLUGIN_INFO_ATTR,
    PROVIDER_ATTR,
    TAB_ATTR,
    ExtensionInfo,
    ProviderData,
    TargetKind,
)
from .icon import Icon


def _resolve_target(func) -> TargetKind:
    """
    根据访问器第一个参数的类型注解确定目标类型

    Args:
        func: 访问器函数

    Returns:
        TargetKind: UUID为玩家，str为权限组，无参数为服务器

    Raises:
        TypeError: 当参数个数或注解不受支持时
    """
    params = list(inspect.signature(func).parameters.values())[1:]
    if not params:
        return "server"
    if len(params) > 1:
        raise TypeError(f"Provider `{func.__name__}` takes more than one argument")
    annotation = typing.get_type_hints(func).get(params[0].name)
    if annotation is UUID:
        return "player"
    elif annotation is str:
        return "group"
    raise TypeError(
        f"Provider `{func.__name__}` has unsupported parameter type {annotation!r}"
    )


class DataExtension:
    """
    数据扩展基类

    子类使用提供者装饰器声明访问器，类创建时按定义顺序收集到`providers`。
    """

    providers: ClassVar[dict[str, ProviderData]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        providers: dict[str, ProviderData] = dict(cls.providers)
        for name, attr in vars(cls).items():
            data: ProviderData | None = getattr(attr, PROVIDER_ATTR, None)
            if data is None:
                continue
            providers[name] = data.model_copy(
                update={
                    "name": name,
                    "target": _resolve_target(attr),
                    "tab": getattr(attr, TAB_ATTR, None),
                }
            )
        cls.providers = providers

    @classmethod
    def info(cls) -> ExtensionInfo:
        return getattr(cls, PLUGIN_INFO_ATTR, None) or ExtensionInfo(
            name=cls.__name__, icon=Icon.called("cube")
        )

    @property
    def name(self) -> str:
        return self.info().name
