from uuid import UUID

import pytest

from plan_luckperms.config import ConfigManager
from plan_luckperms.extension import ExtensionService
from plan_luckperms.luckperms import LuckPermsProvider, SnapshotRegistry
from plan_luckperms.luckperms_extension import LuckPermsExtension

ADMIN_ID = UUID("069a79f4-44e9-4726-a5be-fca90e38aaf5")
GUEST_ID = UUID("853c80ef-3c37-49fd-aa49-938b674adae6")
MISSING_ID = UUID("00000000-0000-0000-0000-000000000000")

SNAPSHOT = {
    "users": [
        {
            "unique_id": str(ADMIN_ID),
            "username": "Notch",
            "primary_group": "admin",
            "nodes": [
                "group.default",
                "group.moderator",
                "group.admin",
                "essentials.fly",
                {"key": "group.builder", "value": True},
            ],
            "prefix": "&c[Admin] ",
            "meta": {"color": "red", "homes": ["3", "5"]},
        },
        {
            "unique_id": str(GUEST_ID),
            "username": "jeb_",
            "nodes": [],
        },
    ],
    "groups": [
        {"name": "default", "nodes": ["essentials.spawn"]},
        {
            "name": "admin",
            "weight": 100,
            "nodes": ["group.moderator", "essentials.*", "luckperms.*"],
        },
        {"name": "moderator", "weight": 0, "nodes": []},
    ],
    "tracks": [
        {"name": "staff", "groups": ["default", "moderator", "admin"]},
        {"name": "build", "groups": ["builder", "architect"]},
        {"name": "donor", "groups": ["vip", "mvp"]},
    ],
}


@pytest.fixture(autouse=True)
def reset_singletons():
    """每个测试前后清理全局单例状态"""
    LuckPermsProvider().unregister()
    ExtensionService().clear()
    ConfigManager().reset()
    yield
    LuckPermsProvider().unregister()
    ExtensionService().clear()
    ConfigManager().reset()


@pytest.fixture
def registry() -> SnapshotRegistry:
    registry = SnapshotRegistry.from_dict(SNAPSHOT)
    LuckPermsProvider().register(registry)
    return registry


@pytest.fixture
def extension() -> LuckPermsExtension:
    return LuckPermsExtension()
