from pathlib import Path

import pytest

from conftest import ADMIN_ID, MISSING_ID
from plan_luckperms.exceptions import NotReadyError
from plan_luckperms.luckperms import (
    LuckPermsProvider,
    MetaData,
    Node,
    SnapshotError,
    SnapshotRegistry,
)

SNAPSHOT_TOML = """
[[users]]
unique_id = "069a79f4-44e9-4726-a5be-fca90e38aaf5"
username = "Notch"
primary_group = "admin"
nodes = ["group.admin", { key = "group.vip", value = false }]
suffix = " [Staff]"

[users.meta]
color = "red"

[[groups]]
name = "admin"
weight = 100
nodes = ["luckperms.*"]

[[tracks]]
name = "staff"
groups = ["default", "admin"]
"""


class TestModels:
    def test_group_node(self):
        node = Node(key="group.admin")
        assert node.is_group_node
        assert node.group_name == "admin"

    def test_plain_node(self):
        node = Node.model_validate("essentials.fly")
        assert node.value is True
        assert not node.is_group_node
        with pytest.raises(ValueError):
            node.group_name

    def test_bare_group_marker(self):
        assert not Node(key="group.").is_group_node

    def test_single_meta_value(self):
        meta = MetaData(meta={"color": "red", "homes": ["1", "2"]})
        assert meta.meta == {"color": ["red"], "homes": ["1", "2"]}


class TestSnapshotRegistry:
    def test_from_toml(self):
        registry = SnapshotRegistry.from_toml(SNAPSHOT_TOML)
        user = registry.get_user(ADMIN_ID)
        assert user is not None
        assert user.group_names == ["admin", "vip"]
        assert user.nodes[1].value is False
        assert user.cached_meta.suffix == " [Staff]"
        assert user.cached_meta.prefix is None
        assert user.cached_meta.meta == {"color": ["red"]}
        assert registry.get_group("admin").weight == 100
        assert [track.size for track in registry.get_tracks()] == [2]

    def test_missing_entities(self):
        registry = SnapshotRegistry.from_toml(SNAPSHOT_TOML)
        assert registry.get_user(MISSING_ID) is None
        assert registry.get_group("owner") is None

    def test_invalid_document(self):
        with pytest.raises(SnapshotError):
            SnapshotRegistry.from_dict({"users": [{"unique_id": "not-a-uuid"}]})

    def test_invalid_toml(self):
        with pytest.raises(SnapshotError):
            SnapshotRegistry.from_toml("[[users]")

    @pytest.mark.asyncio
    async def test_from_file(self, tmp_path: Path):
        path = tmp_path / "snapshot.toml"
        path.write_text(SNAPSHOT_TOML, encoding="utf-8")
        registry = await SnapshotRegistry.from_file(path)
        assert registry.get_user(ADMIN_ID).primary_group == "admin"


class TestLuckPermsProvider:
    def test_not_ready(self):
        assert not LuckPermsProvider().is_ready
        assert LuckPermsProvider().get_safe() is None
        with pytest.raises(NotReadyError):
            LuckPermsProvider().get()

    def test_register(self, registry):
        assert LuckPermsProvider().is_ready
        assert LuckPermsProvider().get() is registry
        LuckPermsProvider().unregister()
        assert LuckPermsProvider().get_safe() is None
