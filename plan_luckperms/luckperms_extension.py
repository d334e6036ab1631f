"""
LuckPerms数据扩展

将LuckPerms的权限组、前后缀、元数据、权重与晋升路线以只读数据的形式提供给Plan。
"""

from uuid import UUID

from nonebot.log import logger

from .config import get_config
from .exceptions import NotReadyError
from .extension import (
    Color,
    DataExtension,
    ExtensionService,
    Family,
    Icon,
    Table,
    group_provider,
    plugin_info,
    string_provider,
    tab,
    table_provider,
)
from .luckperms import Group, LuckPermsProvider, MetaData, PermissionRegistry, User

NONE_TEXT = "None"


@plugin_info(
    name="LuckPerms",
    icon_name="exclamation-triangle",
    icon_family=Family.SOLID,
    color=Color.LIGHT_GREEN,
)
class LuckPermsExtension(DataExtension):
    """
    LuckPerms数据扩展

    不持有任何状态，每次调用都从当前注册的LuckPerms API重新读取。
    API未加载、用户/权限组不存在时抛出NotReadyError。
    """

    def get_api(self) -> PermissionRegistry:
        return LuckPermsProvider().get()

    def get_user(self, unique_id: UUID) -> User:
        if (user := self.get_api().get_user(unique_id)) is None:
            logger.debug(f"User {unique_id} not found in LuckPerms")
            raise NotReadyError(f"User {unique_id} is not loaded")
        return user

    def get_group(self, group_name: str) -> Group:
        if (group := self.get_api().get_group(group_name)) is None:
            logger.debug(f"Group {group_name} not found in LuckPerms")
            raise NotReadyError(f"Group {group_name} is not loaded")
        return group

    def _get_meta_data(self, unique_id: UUID) -> MetaData:
        return self.get_user(unique_id).cached_meta

    @group_provider(
        text="Primary Group",
        icon_name="users-cog",
        group_color=Color.LIGHT_GREEN,
    )
    @tab("Permission Groups")
    def primary_group(self, unique_id: UUID) -> list[str]:
        return [self.get_user(unique_id).primary_group]

    @group_provider(
        text="Permission Group",
        icon_name="users-cog",
        group_color=Color.LIGHT_GREEN,
    )
    @tab("Permission Groups")
    def permission_groups(self, unique_id: UUID) -> list[str]:
        return self.get_user(unique_id).group_names

    @table_provider(table_color=Color.ORANGE)
    @tab("Permission Groups")
    def tracks_for_user(self, unique_id: UUID) -> Table:
        """
        玩家在每条晋升路线上的当前权限组

        取路线中玩家所持有的最后一个权限组（越靠后等级越高），玩家在该路线上没有权限组时跳过。
        """
        tracks = self.get_api().get_tracks()
        groups = set(self.get_user(unique_id).group_names)

        table = (
            Table.builder()
            .column_one("Track", Icon.called("ellipsis-h"))
            .column_two("Group", Icon.called("users-cog"))
            .color(Color.ORANGE)
        )
        for track in tracks:
            current_group = None
            for group in track.groups:
                if group in groups:
                    current_group = group
            if current_group is not None:
                table.add_row(track.name, current_group)
        return table.build()

    @string_provider(
        text="Prefix",
        description="Current user prefix",
        priority=100,
        icon_name="file-signature",
        icon_color=Color.GREEN,
    )
    @tab("Metadata")
    def prefix(self, unique_id: UUID) -> str:
        prefix = self._get_meta_data(unique_id).prefix
        return NONE_TEXT if prefix is None else prefix

    @string_provider(
        text="Suffix",
        description="Current user suffix",
        priority=99,
        icon_name="file-signature",
        icon_color=Color.BLUE,
    )
    @tab("Metadata")
    def suffix(self, unique_id: UUID) -> str:
        suffix = self._get_meta_data(unique_id).suffix
        return NONE_TEXT if suffix is None else suffix

    @table_provider(table_color=Color.BLUE)
    @tab("Metadata")
    def meta_table(self, unique_id: UUID) -> Table:
        meta = self._get_meta_data(unique_id).meta
        # 空元数据按未就绪处理
        if not meta:
            raise NotReadyError(f"User {unique_id} has no meta")

        separator = get_config().meta_value_separator
        table = (
            Table.builder()
            .column_one("Meta", Icon.called("info-circle"))
            .column_two("Value", Icon.called("file-alt"))
            .color(Color.BLUE)
        )
        for key, values in meta.items():
            table.add_row(key, separator.join(values))
        return table.build()

    @string_provider(
        text="Weight",
        description="Weight of the permission group",
        priority=5,
        icon_name="weight-hanging",
        icon_color=Color.LIGHT_GREEN,
    )
    def weight(self, group_name: str) -> str:
        weight = self.get_group(group_name).weight
        return NONE_TEXT if weight is None else str(weight)

    @table_provider(table_color=Color.LIGHT_BLUE)
    @tab("Permission Groups")
    def permissions(self, group_name: str) -> Table:
        group = self.get_group(group_name)

        table = (
            Table.builder()
            .column_one("Permission", Icon.called("object-group"))
            .color(Color.LIGHT_BLUE)
        )
        for permission in group.permissions:
            table.add_row(permission)
        return table.build()

    @table_provider(table_color=Color.ORANGE)
    @tab("Permission Groups")
    def all_tracks(self) -> Table:
        tracks = self.get_api().get_tracks()

        table = (
            Table.builder()
            .column_one("Track", Icon.called("ellipsis-h"))
            .column_two("Size", Icon.called("list"))
            .color(Color.ORANGE)
        )
        for track in tracks:
            table.add_row(track.name, track.size)
        return table.build()


def register_extension() -> LuckPermsExtension | None:
    """
    创建并注册LuckPerms扩展

    Returns:
        LuckPermsExtension | None: 注册成功时返回扩展实例，配置禁用时返回None
    """
    extension = LuckPermsExtension()
    if not ExtensionService().register(extension):
        return None
    return extension
