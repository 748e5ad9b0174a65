"""Exception kinds raised below the service layer.

The service layer converts these into :class:`ServiceError` codes; nothing
here is allowed to escape to the CLI as a traceback.
"""

from __future__ import annotations

from pathlib import Path


class PresetError(Exception):
    """Base class for every preset storage failure."""


class PresetIOError(PresetError):
    """A preset file could not be read, written, renamed or removed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class PresetParseError(PresetError):
    """Preset file text is not a valid key file."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class NameMismatchError(PresetError):
    """The header ``element-name`` does not match the expected type identity."""

    def __init__(self, path: Path, expected: str, found: str | None) -> None:
        super().__init__(
            f"Wrong element name in preset file {path}. Expected {expected!r}, got {found!r}"
        )
        self.path = path
        self.expected = expected
        self.found = found


class PresetSerializeError(PresetError):
    """An in-memory document cannot be rendered to key-file text."""


class CodecError(PresetError):
    """A single property value could not be encoded or decoded."""
