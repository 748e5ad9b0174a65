"""PresetService — list, load, save, rename, delete and tag presets.

Pipeline for every mutating operation: VALIDATE -> BUILD-OR-FETCH -> MUTATE
(under the store lock) -> PERSIST.

:class:`PresetBackend` is the capability a component owner talks to.
:class:`PresetService` is the stock implementation on top of the shared
key-file store; components with a native preset format of their own supply a
different backend and hand that out instead.

INVARIANT: Per-property codec failures are warnings, never errors.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from presetkit.domain.document import is_private, meta_key
from presetkit.domain.errors import CodecError, PresetIOError, PresetSerializeError
from presetkit.domain.keyfile import valid_key
from presetkit.domain.properties import (
    Codec,
    PropertyProvider,
    ScalarCodec,
    presettable_properties,
)
from presetkit.services.base import BaseService
from presetkit.services.result import ServiceResult

if TYPE_CHECKING:
    from presetkit.domain.document import Document, Group
    from presetkit.infrastructure.store import PresetStore, StoreRegistry

logger = logging.getLogger(__name__)

# Brackets and "=" would break the key-file structure.
_FORBIDDEN_NAME_CHARS = re.compile(r"[\[\]=\x00-\x1f\x7f]")


def check_preset_name(name: str) -> str | None:
    """Return why *name* cannot be used as a preset name, or None if it can."""
    if not name:
        return "Preset name must not be empty"
    if is_private(name):
        return f"Preset name {name!r} must not start with '_'"
    if _FORBIDDEN_NAME_CHARS.search(name):
        return f"Preset name {name!r} contains '[', ']', '=' or control characters"
    return None


def check_meta_tag(tag: str) -> str | None:
    """Return why *tag* cannot be used as a meta tag, or None if it can."""
    if not tag or tag != tag.strip():
        return f"Meta tag {tag!r} must be non-empty without surrounding whitespace"
    if _FORBIDDEN_NAME_CHARS.search(tag):
        return f"Meta tag {tag!r} contains '[', ']', '=' or control characters"
    return None


@runtime_checkable
class PresetBackend(Protocol):
    """Preset operations for one component type."""

    identity: str

    def paths(self) -> ServiceResult: ...

    def show_preset(self, name: str) -> ServiceResult: ...

    def list_preset_names(self) -> ServiceResult: ...

    def list_property_names(self) -> ServiceResult: ...

    def load_preset(self, name: str) -> ServiceResult: ...

    def save_preset(self, name: str) -> ServiceResult: ...

    def rename_preset(self, old_name: str, new_name: str) -> ServiceResult: ...

    def delete_preset(self, name: str) -> ServiceResult: ...

    def set_meta(self, name: str, tag: str, value: str | None) -> ServiceResult: ...

    def get_meta(self, name: str, tag: str) -> ServiceResult: ...


class PresetService(BaseService):
    """Default :class:`PresetBackend` backed by the shared preset store.

    Args:
        registry: Store registry shared by every service of the process.
        identity: Type identity of the component, e.g. ``"GstSimSyn"``.
        provider: Property access for one component instance. Only
            :meth:`list_property_names`, :meth:`load_preset` and
            :meth:`save_preset` need it.
        codec: Value codec; :class:`ScalarCodec` when omitted.
    """

    def __init__(
        self,
        registry: StoreRegistry,
        identity: str,
        *,
        provider: PropertyProvider | None = None,
        codec: Codec | None = None,
    ) -> None:
        super().__init__(registry)
        self.identity = identity
        self._provider = provider
        self._codec: Codec = codec or ScalarCodec()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _store(self) -> PresetStore:
        return self._registry.get_or_build(self.identity)

    def _invalid_identity(self, op: str, exc: ValueError) -> ServiceResult:
        return self._failure(op, "INVALID_IDENTITY", str(exc), detail={"identity": self.identity})

    def _not_found(self, op: str, name: str) -> ServiceResult:
        logger.debug("No preset named %r for %s", name, self.identity)
        return self._failure(
            op,
            "NOT_FOUND",
            f"No preset named '{name}'",
            detail={"identity": self.identity, "name": name},
        )

    def _no_properties(self, op: str) -> ServiceResult:
        return self._failure(
            op,
            "NO_PROPERTIES",
            f"No property provider available for {self.identity}",
            detail={"identity": self.identity},
        )

    @staticmethod
    def _preset_group(store: PresetStore, name: str) -> Group | None:
        if is_private(name):
            return None
        return store.document.group(name)

    def _persist(
        self,
        store: PresetStore,
        op: str,
        data: dict[str, object],
        warnings: list[str],
        *,
        snapshot: Document,
    ) -> ServiceResult:
        """Persist *store* and wrap the outcome. Caller holds ``store.lock``.

        *snapshot* is the document as it was before the mutation; it replaces
        the live document when rendering fails.
        """
        try:
            written = store.persist()
        except PresetSerializeError as exc:
            logger.warning("Cannot render presets for %s: %s", self.identity, exc)
            store.document = snapshot
            return self._failure(op, "SERIALIZE_FAILED", str(exc), warnings=warnings)
        except PresetIOError as exc:
            logger.warning("Unable to store preset file %s: %s", exc.path, exc.reason)
            return self._failure(
                op,
                "IO_FAILURE",
                f"Unable to store preset file: {exc}",
                detail={"path": str(exc.path)},
                warnings=warnings,
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={**data, "path": str(store.paths.user_path), "written": written},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def paths(self) -> ServiceResult:
        """User, system and backup file locations for this type."""
        op = "paths"
        try:
            resolved = self._registry.resolver.resolve(self.identity)
        except ValueError as exc:
            return self._invalid_identity(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "identity": self.identity,
                "user_path": str(resolved.user_path),
                "system_path": str(resolved.system_path),
                "backup_path": str(resolved.backup_path),
            },
        )

    def list_preset_names(self) -> ServiceResult:
        """Sorted names of all presets, private groups excluded."""
        op = "list_preset_names"
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)
        with store.lock:
            names = store.document.preset_names()
        return ServiceResult(ok=True, op=op, data={"names": names, "count": len(names)})

    def list_property_names(self) -> ServiceResult:
        """Names of the provider's presettable properties, in declaration order."""
        op = "list_property_names"
        if self._provider is None:
            return self._no_properties(op)
        names = [spec.name for spec in presettable_properties(self._provider)]
        return ServiceResult(ok=True, op=op, data={"names": names, "count": len(names)})

    def show_preset(self, name: str) -> ServiceResult:
        """Raw stored values (meta keys included) and comment of one preset."""
        op = "show_preset"
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)
        with store.lock:
            group = self._preset_group(store, name)
            if group is None:
                return self._not_found(op, name)
            return ServiceResult(
                ok=True,
                op=op,
                data={"name": name, "comment": group.comment, "values": dict(group.entries)},
            )

    def get_meta(self, name: str, tag: str) -> ServiceResult:
        """Value of meta *tag* on preset *name*; ``data["value"]`` is None if unset."""
        op = "get_meta"
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)
        with store.lock:
            value = store.document.get_value(name, meta_key(tag))
        return ServiceResult(ok=True, op=op, data={"name": name, "tag": tag, "value": value})

    # ------------------------------------------------------------------
    # Component operations
    # ------------------------------------------------------------------

    def load_preset(self, name: str) -> ServiceResult:
        """Apply preset *name* to the component.

        Properties without a stored value, values that fail to decode, and
        values the provider rejects are skipped with a warning; the call
        still succeeds as long as the preset exists.
        """
        op = "load_preset"
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)
        with store.lock:
            group = self._preset_group(store, name)
            if group is None:
                return self._not_found(op, name)
            stored = dict(group.entries)

        if self._provider is None:
            return self._no_properties(op)

        logger.debug("Loading preset %r for %s", name, self.identity)
        warnings: list[str] = []
        applied: list[str] = []
        skipped: list[str] = []
        for spec in presettable_properties(self._provider):
            text = stored.get(spec.name)
            if text is None:
                logger.warning("Parameter %r not in preset %r", spec.name, name)
                warnings.append(f"Property '{spec.name}' not in preset '{name}'")
                skipped.append(spec.name)
                continue
            try:
                value = self._codec.decode(text, spec.value_type)
            except CodecError as exc:
                logger.warning(
                    "Deserialization of value %r for property %r failed: %s",
                    text,
                    spec.name,
                    exc,
                )
                warnings.append(f"Cannot decode '{spec.name}': {exc}")
                skipped.append(spec.name)
                continue
            if not self._provider.set_value(spec.name, value):
                logger.warning("Property %r rejected value %r", spec.name, value)
                warnings.append(f"Property '{spec.name}' rejected value {text!r}")
                skipped.append(spec.name)
                continue
            applied.append(spec.name)

        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "applied": applied, "skipped": skipped},
            warnings=warnings,
        )

    def save_preset(self, name: str) -> ServiceResult:
        """Store the component's current values under preset *name*.

        Each encoded property overwrites its own key; other keys of an
        existing preset (meta tags included) are kept. Properties whose name
        is not a valid key, or whose value fails to encode, are skipped with
        a warning. When nothing is left to store the preset is not created.
        """
        op = "save_preset"
        problem = check_preset_name(name)
        if problem:
            return self._failure(op, "INVALID_NAME", problem, detail={"name": name})
        if self._provider is None:
            return self._no_properties(op)
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)

        logger.info("Saving preset %r for %s", name, self.identity)
        warnings: list[str] = []
        encoded: dict[str, str] = {}
        for spec in presettable_properties(self._provider):
            if not valid_key(spec.name):
                logger.warning("Property name %r cannot be stored as a key", spec.name)
                warnings.append(f"Cannot store '{spec.name}': not a valid key name")
                continue
            value = self._provider.get_value(spec.name)
            try:
                encoded[spec.name] = self._codec.encode(value)
            except CodecError as exc:
                logger.warning("Serialization for property %r failed: %s", spec.name, exc)
                warnings.append(f"Cannot encode '{spec.name}': {exc}")

        data = {"name": name, "saved": list(encoded)}
        if not encoded:
            return ServiceResult(
                ok=True,
                op=op,
                data={**data, "written": False},
                warnings=warnings,
            )

        with store.lock:
            snapshot = store.document.clone()
            group = store.document.ensure_group(name)
            for key, text in encoded.items():
                group.set(key, text)
            return self._persist(store, op, data, warnings, snapshot=snapshot)

    # ------------------------------------------------------------------
    # Document operations
    # ------------------------------------------------------------------

    def rename_preset(self, old_name: str, new_name: str) -> ServiceResult:
        """Move preset *old_name* to *new_name*.

        Values and comments of *old_name* overwrite same-named keys of an
        existing *new_name*; its other keys are kept.
        """
        op = "rename_preset"
        problem = check_preset_name(new_name)
        if problem:
            return self._failure(op, "INVALID_NAME", problem, detail={"name": new_name})
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)

        with store.lock:
            source = self._preset_group(store, old_name)
            if source is None:
                return self._not_found(op, old_name)
            data = {"old_name": old_name, "new_name": new_name}
            if old_name == new_name:
                return ServiceResult(ok=True, op=op, data=data)

            snapshot = store.document.clone()
            document = store.document
            source.copy_into(document.ensure_group(new_name))
            document.remove_group(old_name)
            return self._persist(store, op, data, [], snapshot=snapshot)

    def delete_preset(self, name: str) -> ServiceResult:
        """Remove preset *name*."""
        op = "delete_preset"
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)

        with store.lock:
            if self._preset_group(store, name) is None:
                return self._not_found(op, name)
            snapshot = store.document.clone()
            store.document.remove_group(name)
            return self._persist(store, op, {"name": name}, [], snapshot=snapshot)

    def set_meta(self, name: str, tag: str, value: str | None) -> ServiceResult:
        """Set meta *tag* on preset *name*, or clear it when *value* is empty.

        Setting a tag on a missing preset creates it.
        """
        op = "set_meta"
        problem = check_preset_name(name) or check_meta_tag(tag)
        if problem:
            return self._failure(op, "INVALID_NAME", problem, detail={"name": name, "tag": tag})
        try:
            store = self._store()
        except ValueError as exc:
            return self._invalid_identity(op, exc)

        with store.lock:
            snapshot = store.document.clone()
            key = meta_key(tag)
            if value:
                store.document.set_value(name, key, value)
            else:
                store.document.remove_key(name, key)
            return self._persist(
                store,
                op,
                {"name": name, "tag": tag, "value": value or None},
                [],
                snapshot=snapshot,
            )
