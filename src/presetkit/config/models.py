"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, presetkit.toml only contains
overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from presetkit import __version__

DEFAULT_SYSTEM_ROOT = Path("/usr/share/presetkit")


def _default_user_root() -> Path:
    return Path.home() / ".presetkit"


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    user_root: Path = Field(default_factory=_default_user_root)
    system_root: Path = DEFAULT_SYSTEM_ROOT
    extension: str = "prs"
    # Stamped into the header of every file this process writes.
    system_version: str = __version__

    @field_validator("user_root", "system_root")
    @classmethod
    def _expand_home(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("extension")
    @classmethod
    def _strip_dot(cls, value: str) -> str:
        value = value.lstrip(".")
        if not value or "/" in value or "\\" in value:
            msg = f"Invalid preset file extension: {value!r}"
            raise ValueError(msg)
        return value
