"""Path resolution for preset files.

Each component type owns one user file and one system file::

    <user_root>/presets/<identity>.<ext>
    <system_root>/presets/<identity>.<ext>

Paths are computed once per identity and cached for the lifetime of the
resolver, even if the roots change on disk afterwards.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PRESETS_DIR = "presets"
DEFAULT_EXTENSION = "prs"
BACKUP_SUFFIX = ".bak"


@dataclass(frozen=True)
class PresetPaths:
    """User and system preset file locations for one type identity."""

    user_path: Path
    system_path: Path

    @property
    def backup_path(self) -> Path:
        return self.user_path.with_name(self.user_path.name + BACKUP_SUFFIX)


def _ensure_dir(directory: Path) -> None:
    """Create *directory*; failure is logged, never raised."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("Cannot create preset directory %s: %s", directory, exc)


def preset_file(root: Path, identity: str, extension: str = DEFAULT_EXTENSION) -> Path:
    """Resolve ``<root>/presets/<identity>.<extension>``.

    Raises:
        ValueError: if *identity* is empty or would escape the presets directory.
    """
    if not identity or identity in (".", "..") or "/" in identity or "\\" in identity:
        msg = f"Invalid type identity: {identity!r}"
        raise ValueError(msg)

    directory = root / PRESETS_DIR
    result = directory / f"{identity}.{extension}"

    # Guard against path traversal via a crafted identity. The file itself
    # may be a symlink, so only its directory is resolved.
    if result.parent.resolve() != directory.resolve():
        msg = f"Path escapes preset directory: {result}"
        raise ValueError(msg)

    return result


class PathResolver:
    """Maps type identities to :class:`PresetPaths`, caching every result."""

    def __init__(
        self,
        user_root: Path,
        system_root: Path,
        *,
        extension: str = DEFAULT_EXTENSION,
    ) -> None:
        self._user_root = user_root
        self._system_root = system_root
        self._extension = extension
        self._cache: dict[str, PresetPaths] = {}
        self._lock = threading.Lock()

    def resolve(self, identity: str) -> PresetPaths:
        """Return cached paths for *identity*, computing them on first use."""
        with self._lock:
            paths = self._cache.get(identity)
            if paths is not None:
                return paths

            paths = PresetPaths(
                user_path=preset_file(self._user_root, identity, self._extension),
                system_path=preset_file(self._system_root, identity, self._extension),
            )
            logger.debug(
                "Preset paths for %s: user=%s system=%s",
                identity,
                paths.user_path,
                paths.system_path,
            )
            _ensure_dir(paths.user_path.parent)
            _ensure_dir(paths.system_path.parent)
            self._cache[identity] = paths
            return paths
