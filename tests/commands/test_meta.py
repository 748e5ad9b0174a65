"""Tests for the meta command group."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from presetkit.cli import cli


@pytest.fixture
def invoke(
    cli_runner: CliRunner,
    user_root: Path,
    system_root: Path,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[..., Result]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PRESETKIT_CONFIG", raising=False)

    def _invoke(*args: str) -> Result:
        return cli_runner.invoke(
            cli,
            ["--user-root", str(user_root), "--system-root", str(system_root), *args],
        )

    return _invoke


class TestMetaCommands:
    def test_set_then_get(self, invoke: Callable[..., Result], user_file: Path) -> None:
        result = invoke("meta", "set", "GstSimSyn", "Bright", "comment", "crisp lead")
        assert result.exit_code == 0
        assert "_meta/comment=crisp lead" in user_file.read_text(encoding="utf-8")

        result = invoke("--json", "meta", "get", "GstSimSyn", "Bright", "comment")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["value"] == "crisp lead"

    def test_set_without_value_clears(
        self, invoke: Callable[..., Result], user_file: Path
    ) -> None:
        invoke("meta", "set", "GstSimSyn", "Bright", "comment", "x")
        invoke("meta", "set", "GstSimSyn", "Bright", "author", "kim")
        result = invoke("meta", "set", "GstSimSyn", "Bright", "comment")
        assert result.exit_code == 0
        text = user_file.read_text(encoding="utf-8")
        assert "_meta/comment" not in text
        assert "_meta/author=kim" in text

    def test_get_unset(self, invoke: Callable[..., Result]) -> None:
        result = invoke("--json", "meta", "get", "GstSimSyn", "Nope", "comment")
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["value"] is None

    def test_invalid_tag(self, invoke: Callable[..., Result]) -> None:
        result = invoke("meta", "set", "GstSimSyn", "Bright", "a=b", "x")
        assert result.exit_code == 1
        assert "ERROR: set_meta" in result.output

    def test_group_examples(self, invoke: Callable[..., Result]) -> None:
        result = invoke("meta", "--examples")
        assert result.exit_code == 0
        assert "presetkit meta set" in result.output
