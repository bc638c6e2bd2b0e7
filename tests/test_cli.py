"""Tests for the ``express-scaffold`` command line."""

from __future__ import annotations

import json
import os
from unittest.mock import patch

import pytest

from express_scaffold.cli import build_parser, main


@pytest.fixture
def no_install_env():
    with patch.dict(os.environ, {"EXPRESS_SCAFFOLD_INSTALL": "0"}):
        yield


class TestParser:
    @pytest.mark.unit
    def test_create(self):
        args = build_parser().parse_args(["create", "demo"])
        assert args.command == "create"
        assert args.project_name == "demo"

    @pytest.mark.unit
    def test_missing_subcommand(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2

    @pytest.mark.unit
    def test_missing_name(self):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["create"])
        assert exc_info.value.code == 2

    @pytest.mark.unit
    def test_rejects_flags(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["create", "demo", "--force"])


@pytest.mark.integration
class TestMain:
    def test_creates_project_in_cwd(self, tmp_path, monkeypatch, no_install_env, capsys):
        monkeypatch.chdir(tmp_path)

        main(["create", "demo"])

        manifest = json.loads((tmp_path / "demo" / "package.json").read_text(encoding="utf-8"))
        assert manifest["name"] == "demo"
        assert (tmp_path / "demo" / "src" / "routes" / "userRoutes.js").is_file()
        assert "Project demo created successfully!" in capsys.readouterr().out

    def test_filesystem_error_exits_1(self, tmp_path, monkeypatch, no_install_env, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "demo").write_text("taken", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main(["create", "demo"])

        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().out

    def test_install_failure_exits_0(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        env = {
            "EXPRESS_SCAFFOLD_INSTALL": "1",
            "EXPRESS_SCAFFOLD_INSTALL_COMMAND": "nonexistent-binary-12345-xyz install",
        }
        with patch.dict(os.environ, env):
            main(["create", "demo"])

        assert (tmp_path / "demo" / "server.js").is_file()
        assert "Error installing dependencies" in capsys.readouterr().out

    def test_invalid_config_exits_1(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        with patch.dict(os.environ, {"EXPRESS_SCAFFOLD_DEFAULT_PORT": "99999"}):
            with pytest.raises(SystemExit) as exc_info:
                main(["create", "demo"])

        assert exc_info.value.code == 1
        assert not (tmp_path / "demo").exists()
