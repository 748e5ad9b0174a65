"""Shared pytest fixtures and test helpers for presetkit tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from presetkit.domain.properties import PropertySpec
from presetkit.infrastructure.paths import PathResolver
from presetkit.infrastructure.store import StoreRegistry
from presetkit.services.presets import PresetService

IDENTITY = "GstSimSyn"
RUNNING_VERSION = "1.4.0"


class FakeSynth:
    """Minimal PropertyProvider standing in for a component instance."""

    SPECS: tuple[PropertySpec, ...] = (
        PropertySpec("wave", str),
        PropertySpec("volume", float),
        PropertySpec("voices", int),
        PropertySpec("mute", bool),
        PropertySpec("serial", str, writable=False),
        PropertySpec("device", str, construction_only=True),
    )

    def __init__(self, **values: Any) -> None:
        self.values: dict[str, Any] = {
            "wave": "sine",
            "volume": 0.8,
            "voices": 4,
            "mute": False,
            "serial": "SN-1",
            "device": "hw:0",
        }
        self.values.update(values)
        self.rejected: set[str] = set()

    def list_properties(self) -> Sequence[PropertySpec]:
        return self.SPECS

    def get_value(self, name: str) -> Any:
        return self.values[name]

    def set_value(self, name: str, value: Any) -> bool:
        if name in self.rejected:
            return False
        self.values[name] = value
        return True


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() side effects of CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pk = logging.getLogger("presetkit")
    pk_level = pk.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pk.setLevel(pk_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def user_root(tmp_path: Path) -> Path:
    return tmp_path / "user"


@pytest.fixture
def system_root(tmp_path: Path) -> Path:
    return tmp_path / "system"


@pytest.fixture
def user_file(user_root: Path) -> Path:
    return user_root / "presets" / f"{IDENTITY}.prs"


@pytest.fixture
def system_file(system_root: Path) -> Path:
    return system_root / "presets" / f"{IDENTITY}.prs"


@pytest.fixture
def make_registry(user_root: Path, system_root: Path) -> Callable[[], StoreRegistry]:
    """Factory for fresh registries over the same roots (simulates a new process)."""

    def _make() -> StoreRegistry:
        resolver = PathResolver(user_root, system_root)
        return StoreRegistry(resolver, system_version=RUNNING_VERSION)

    return _make


@pytest.fixture
def registry(make_registry: Callable[[], StoreRegistry]) -> StoreRegistry:
    return make_registry()


@pytest.fixture
def synth() -> FakeSynth:
    return FakeSynth()


@pytest.fixture
def make_synth() -> Callable[..., FakeSynth]:
    return FakeSynth


@pytest.fixture
def service(registry: StoreRegistry, synth: FakeSynth) -> PresetService:
    return PresetService(registry, IDENTITY, provider=synth)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_preset_file(path: Path, text: str) -> Path:
    """Write raw key-file *text* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def write_file() -> Callable[[Path, str], Path]:
    return write_preset_file
