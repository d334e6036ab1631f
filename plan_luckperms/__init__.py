from nonebot.plugin import PluginMetadata

from . import config, extension, luckperms
from .config import Config, ConfigManager, get_config
from .exceptions import NotReadyError
from .luckperms_extension import LuckPermsExtension, register_extension

__all__ = [
    "Config",
    "ConfigManager",
    "LuckPermsExtension",
    "NotReadyError",
    "config",
    "extension",
    "get_config",
    "luckperms",
    "register_extension",
]

__plugin_meta__ = PluginMetadata(
    name="LuckPerms Plan扩展",
    description="将LuckPerms的权限组、前后缀、元数据与晋升路线提供给Plan的只读数据扩展。",
    usage="注册LuckPerms API后调用 register_extension()，由Plan按需读取数据。",
    type="library",
    config=Config,
)
