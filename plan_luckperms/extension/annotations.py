from collections.abc import Callable
from typing import Literal, TypeVar

from pydantic import BaseModel, ConfigDict

from .icon import Color, Family, Icon

PROVIDER_ATTR = "__provider__"
TAB_ATTR = "__provider_tab__"
PLUGIN_INFO_ATTR = "__plugin_info__"

ProviderKind = Literal["string", "group", "table"]
TargetKind = Literal["player", "group", "server"]

F = TypeVar("F", bound=Callable)
C = TypeVar("C", bound=type)


class ExtensionInfo(BaseModel):
    """扩展的注册信息（名称、图标、颜色）"""

    model_config = ConfigDict(frozen=True)

    name: str
    icon: Icon
    color: Color = Color.NONE


class ProviderData(BaseModel):
    """
    数据提供者元数据

    由装饰器写入访问器函数，扩展类创建时补全方法名、目标类型与标签页。
    """

    model_config = ConfigDict(frozen=True)

    kind: ProviderKind
    name: str = ""
    target: TargetKind = "player"
    text: str = ""
    description: str = ""
    priority: int = 0
    icon: Icon | None = None
    color: Color = Color.NONE
    tab: str | None = None


def _mark(data: ProviderData) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        setattr(func, PROVIDER_ATTR, data)
        return func

    return decorator


def plugin_info(
    name: str,
    icon_name: str = "cube",
    icon_family: Family = Family.SOLID,
    color: Color = Color.NONE,
) -> Callable[[C], C]:
    """扩展注册信息装饰器

    Args:
        name (str): 扩展名称
        icon_name (str, optional): 图标名称. Defaults to "cube".
        icon_family (Family, optional): 图标族. Defaults to Family.SOLID.
        color (Color, optional): 主题色. Defaults to Color.NONE.
    """

    def decorator(cls: C) -> C:
        setattr(
            cls,
            PLUGIN_INFO_ATTR,
            ExtensionInfo(
                name=name,
                icon=Icon(name=icon_name, family=icon_family, color=color),
                color=color,
            ),
        )
        return cls

    return decorator


def tab(name: str) -> Callable[[F], F]:
    """将数据提供者放入指定标签页"""

    def decorator(func: F) -> F:
        setattr(func, TAB_ATTR, name)
        return func

    return decorator


def string_provider(
    text: str,
    description: str = "",
    priority: int = 0,
    icon_name: str = "question",
    icon_family: Family = Family.SOLID,
    icon_color: Color = Color.NONE,
) -> Callable[[F], F]:
    return _mark(
        ProviderData(
            kind="string",
            text=text,
            description=description,
            priority=priority,
            icon=Icon(name=icon_name, family=icon_family, color=icon_color),
            color=icon_color,
        )
    )


def group_provider(
    text: str = "Group",
    icon_name: str = "circle",
    icon_family: Family = Family.SOLID,
    group_color: Color = Color.NONE,
) -> Callable[[F], F]:
    """权限组提供者装饰器，被装饰的函数返回该玩家所属的组名列表"""
    return _mark(
        ProviderData(
            kind="group",
            text=text,
            icon=Icon(name=icon_name, family=icon_family, color=group_color),
            color=group_color,
        )
    )


def table_provider(table_color: Color = Color.NONE) -> Callable[[F], F]:
    return _mark(ProviderData(kind="table", color=table_color))
