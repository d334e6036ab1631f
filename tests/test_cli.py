from pathlib import Path

import pytest
from click.testing import CliRunner

from conftest import ADMIN_ID, GUEST_ID
from plan_luckperms.cli import cli
from test_snapshot import SNAPSHOT_TOML

runner = CliRunner()


@pytest.fixture
def snapshot(tmp_path: Path) -> Path:
    path = tmp_path / "snapshot.toml"
    path.write_text(SNAPSHOT_TOML, encoding="utf-8")
    return path


class TestCli:
    def test_providers(self):
        result = runner.invoke(cli, ["providers"])
        assert result.exit_code == 0
        assert "LuckPerms" in result.output
        assert "tracks_for_user" in result.output
        assert "tab=Metadata" in result.output

    def test_player(self, snapshot: Path):
        result = runner.invoke(cli, ["player", str(snapshot), str(ADMIN_ID)])
        assert result.exit_code == 0, result.output
        assert "Primary Group: admin" in result.output
        assert "Prefix: None" in result.output
        assert "Suffix:  [Staff]" in result.output
        assert "staff | admin" in result.output
        assert "color | red" in result.output

    def test_unknown_player_is_pending(self, snapshot: Path):
        result = runner.invoke(cli, ["player", str(snapshot), str(GUEST_ID)])
        assert result.exit_code == 0
        assert "Primary Group: pending" in result.output

    def test_group(self, snapshot: Path):
        result = runner.invoke(cli, ["group", str(snapshot), "admin"])
        assert result.exit_code == 0
        assert "Weight: 100" in result.output
        assert "luckperms.*" in result.output

    def test_server(self, snapshot: Path):
        result = runner.invoke(cli, ["server", str(snapshot)])
        assert result.exit_code == 0
        assert "Track | Size" in result.output
        assert "staff | 2" in result.output

    def test_config_option(self, snapshot: Path, tmp_path: Path):
        config = tmp_path / "config.toml"
        config.write_text('disabled_providers = ["weight"]\n', encoding="utf-8")
        result = runner.invoke(cli, ["group", str(snapshot), "admin", "-c", str(config)])
        assert result.exit_code == 0
        assert "Weight" not in result.output

    def test_invalid_snapshot(self, tmp_path: Path):
        path = tmp_path / "broken.toml"
        path.write_text("[[users]]\nunique_id = \"not-a-uuid\"\n", encoding="utf-8")
        result = runner.invoke(cli, ["server", str(path)])
        assert result.exit_code != 0
        assert "Invalid permission snapshot" in result.output

    @pytest.mark.parametrize(
        "content", ['enabled = "maybe"\n', "disabled_providers = [\n"]
    )
    def test_invalid_config(self, snapshot: Path, tmp_path: Path, content: str):
        config = tmp_path / "config.toml"
        config.write_text(content, encoding="utf-8")
        result = runner.invoke(cli, ["server", str(snapshot), "-c", str(config)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid config" in result.output

    def test_disabled_extension(self, snapshot: Path, tmp_path: Path):
        """配置禁用扩展时以错误退出"""
        config = tmp_path / "config.toml"
        config.write_text("enabled = false\n", encoding="utf-8")
        result = runner.invoke(cli, ["server", str(snapshot), "-c", str(config)])
        assert result.exit_code == 1
        assert "LuckPerms extension is not registered" in result.output
        assert "Done" not in result.output
