"""Per-type preset stores and the registry that builds them.

A :class:`PresetStore` owns the resolved, mutable document for one type
identity. It is built lazily on first access (resolve paths, load both
layers, merge) and then stays authoritative for the life of the registry:
later changes to the files on disk are not picked up.

Locking policy:

- the registry map is guarded by a single lock;
- every store has its own re-entrant lock, held for the whole build and by
  the service layer around each read-modify-persist sequence.

There is no cross-process coordination. Two processes writing the same user
file overwrite each other; the last writer wins.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from presetkit import __version__
from presetkit.domain.errors import (
    NameMismatchError,
    PresetError,
    PresetIOError,
    PresetParseError,
)
from presetkit.domain.merge import Layer, merge_layers
from presetkit.infrastructure.paths import PathResolver, PresetPaths
from presetkit.infrastructure.serializer import load_layer, persist

if TYPE_CHECKING:
    from pathlib import Path

    from presetkit.config.settings import PresetSettings
    from presetkit.domain.document import Document

logger = logging.getLogger(__name__)


class PresetStore:
    """Resolved preset document of one type identity plus its file locations."""

    def __init__(
        self,
        identity: str,
        paths: PresetPaths,
        document: Document,
        *,
        system_version: str,
        lock: threading.RLock | None = None,
    ) -> None:
        self.identity = identity
        self.paths = paths
        self.document = document
        self.system_version = system_version
        self.lock = lock or threading.RLock()

    def persist(self) -> bool:
        """Write the document back to the user path.

        See :func:`presetkit.infrastructure.serializer.persist`.
        """
        with self.lock:
            return persist(self.paths, self.document, self.system_version)


def _load_or_none(path: Path, identity: str) -> Layer | None:
    """Load one layer; any failure means the layer is absent."""
    try:
        return load_layer(path, identity)
    except PresetIOError as exc:
        if path.exists():
            logger.warning("Unable to read preset file %s: %s", path, exc.reason)
        else:
            logger.debug("No preset file at %s", path)
    except (PresetParseError, NameMismatchError) as exc:
        logger.warning("Ignoring preset file: %s", exc)
    return None


class StoreRegistry:
    """Maps type identities to lazily built :class:`PresetStore` instances."""

    def __init__(self, resolver: PathResolver, *, system_version: str = __version__) -> None:
        self._resolver = resolver
        self._system_version = system_version
        self._stores: dict[str, PresetStore] = {}
        self._entry_locks: dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: PresetSettings) -> StoreRegistry:
        store = settings.store
        resolver = PathResolver(
            store.user_root,
            store.system_root,
            extension=store.extension,
        )
        return cls(resolver, system_version=store.system_version)

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    def is_built(self, identity: str) -> bool:
        with self._lock:
            return identity in self._stores

    def get_or_build(self, identity: str) -> PresetStore:
        """Return the store for *identity*, building it on first access.

        Raises:
            ValueError: if *identity* cannot be mapped to a preset path.
        """
        with self._lock:
            store = self._stores.get(identity)
            if store is not None:
                return store
            entry_lock = self._entry_locks.setdefault(identity, threading.RLock())

        with entry_lock:
            # Another thread may have finished the build while we waited.
            with self._lock:
                store = self._stores.get(identity)
            if store is not None:
                return store

            store = self._build(identity, entry_lock)
            with self._lock:
                self._stores[identity] = store
            return store

    def _build(self, identity: str, lock: threading.RLock) -> PresetStore:
        paths = self._resolver.resolve(identity)
        user = _load_or_none(paths.user_path, identity)
        system = _load_or_none(paths.system_path, identity)
        document, needs_resave = merge_layers(identity, system, user)

        store = PresetStore(
            identity,
            paths,
            document,
            system_version=self._system_version,
            lock=lock,
        )
        if needs_resave:
            logger.info(
                "Rebased user presets for %s onto system presets %s",
                identity,
                system.version if system else None,
            )
            try:
                store.persist()
            except PresetError as exc:
                logger.warning("Cannot write rebased presets for %s: %s", identity, exc)
        return store


# ---------------------------------------------------------------------------
# Process-wide default registry
# ---------------------------------------------------------------------------

_default_registry: StoreRegistry | None = None
_default_lock = threading.Lock()


def get_registry() -> StoreRegistry:
    """The process-wide registry, built from :class:`PresetSettings` on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            from presetkit.config.settings import PresetSettings

            _default_registry = StoreRegistry.from_settings(PresetSettings.from_cli())
        return _default_registry
