from .api import LuckPermsProvider, PermissionRegistry
from .models import Group, MetaData, Node, Track, User
from .snapshot import SnapshotError, SnapshotRegistry

__all__ = [
    "Group",
    "LuckPermsProvider",
    "MetaData",
    "Node",
    "PermissionRegistry",
    "SnapshotError",
    "SnapshotRegistry",
    "Track",
    "User",
]
