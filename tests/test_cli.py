"""Tests for the root presetkit CLI."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from presetkit import __version__
from presetkit.cli import cli


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PRESETKIT_CONFIG", raising=False)


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "presetkit" in result.output
    for command in ("paths", "list", "show", "rename", "delete", "meta"):
        assert command in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


def test_global_flags_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "-v", "--log-json", "--version"])
    assert result.exit_code == 0


def test_config_file_roots(cli_runner: CliRunner, tmp_path: Path) -> None:
    config = tmp_path / "conf.toml"
    config.write_text(
        f'[store]\nuser_root = "{tmp_path / "u"}"\nsystem_root = "{tmp_path / "s"}"\n'
    )
    result = cli_runner.invoke(cli, ["-c", str(config), "paths", "GstSimSyn"])
    assert result.exit_code == 0
    assert str(tmp_path / "u" / "presets" / "GstSimSyn.prs") in result.output


def test_discovered_config(cli_runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "presetkit.toml").write_text(
        f'[store]\nuser_root = "{tmp_path / "u"}"\nsystem_root = "{tmp_path / "s"}"\n'
        'extension = "ini"\n'
    )
    result = cli_runner.invoke(cli, ["paths", "GstSimSyn"])
    assert result.exit_code == 0
    assert "GstSimSyn.ini" in result.output
