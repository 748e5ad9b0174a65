"""BaseService — abstract foundation for presetkit services.

Every service receives a :class:`StoreRegistry` at construction time and
reaches preset documents only through it, so all stores share the
registry's build-once semantics and per-type locks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from presetkit.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from presetkit.infrastructure.store import StoreRegistry


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class PresetService(BaseService):
            def delete_preset(self, name: str) -> ServiceResult:
                store = self._registry.get_or_build(self.identity)
                with store.lock:
                    ...
    """

    def __init__(self, registry: StoreRegistry) -> None:
        self._registry = registry

    @staticmethod
    def _failure(
        op: str,
        code: str,
        message: str,
        *,
        detail: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
