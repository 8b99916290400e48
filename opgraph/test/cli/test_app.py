from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from opgraph import __version__
from opgraph.cli.app import app
from opgraph.cli.context import CONFIG_ENV, build_context, config_path_from_env
from opgraph.core.errors import ErrorCode


def test_version() -> None:
    result = CliRunner().invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_config_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "custom.toml"))
    assert config_path_from_env() == tmp_path / "custom.toml"


def test_config_path_defaults_to_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    monkeypatch.chdir(tmp_path)
    assert config_path_from_env() == tmp_path / "opgraph.toml"


def test_build_context_without_file_uses_defaults(tmp_path: Path) -> None:
    ctx = build_context(tmp_path / "opgraph.toml")
    assert ctx.config.package.name == "rhacs-operator"
    assert ctx.config.base_dir == tmp_path


def test_build_context_invalid_config_exits(tmp_path: Path) -> None:
    path = tmp_path / "opgraph.toml"
    path.write_text("[package\n", encoding="utf-8")
    with pytest.raises(typer.Exit) as exc:
        build_context(path)
    assert exc.value.exit_code == int(ErrorCode.CONFIG_ERROR)
