from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

GROUP_NODE_PREFIX = "group."


class _Snapshot(BaseModel):
    """
    上游数据快照基类

    适配器只读取这些对象，永远不会创建或修改它们。
    """

    model_config = ConfigDict(frozen=True)


class Node(_Snapshot):
    """
    权限节点

    用户或权限组持有的单条权限/权限组继承记录。
    """

    key: str
    value: bool = True

    @model_validator(mode="before")
    @classmethod
    def _from_key(cls, data):
        if isinstance(data, str):
            return {"key": data}
        return data

    @property
    def permission(self) -> str:
        return self.key

    @property
    def is_group_node(self) -> bool:
        """是否为权限组继承节点（`group.<name>`）"""
        return self.key.startswith(GROUP_NODE_PREFIX) and len(self.key) > len(
            GROUP_NODE_PREFIX
        )

    @property
    def group_name(self) -> str:
        """
        获取继承节点对应的权限组名称

        Returns:
            str: 权限组名称

        Raises:
            ValueError: 当节点不是权限组节点时
        """
        if not self.is_group_node:
            raise ValueError(f"Node `{self.key}` is not a group node")
        return self.key[len(GROUP_NODE_PREFIX) :]


class MetaData(_Snapshot):
    """
    用户的缓存元数据

    旧版API每个键只暴露一个值，新版暴露列表，这里统一为列表。
    """

    prefix: str | None = None
    suffix: str | None = None
    meta: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("meta", mode="before")
    @classmethod
    def _normalize_meta(cls, value):
        if not isinstance(value, dict):
            return value
        return {
            k: [v] if isinstance(v, str) else v for k, v in value.items()
        }


class User(_Snapshot):
    unique_id: UUID
    username: str | None = None
    primary_group: str = "default"
    nodes: list[Node] = Field(default_factory=list)
    cached_meta: MetaData = Field(default_factory=MetaData)

    @property
    def group_names(self) -> list[str]:
        """用户持有的所有权限组名称（按节点顺序）"""
        return [node.group_name for node in self.nodes if node.is_group_node]


class Group(_Snapshot):
    name: str
    display_name: str | None = None
    weight: int | None = None
    nodes: list[Node] = Field(default_factory=list)

    @property
    def permissions(self) -> list[str]:
        return [node.permission for node in self.nodes]


class Track(_Snapshot):
    """
    晋升路线

    按顺序排列的权限组名称，越靠后等级越高。
    """

    name: str
    groups: list[str] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.groups)
