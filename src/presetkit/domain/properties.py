"""Boundary contracts for the component whose state is being preset.

The engine never introspects components itself. A :class:`PropertyProvider`
describes and accesses the component's properties; a :class:`Codec` turns a
single native value into preset text and back.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from presetkit.domain.errors import CodecError


@dataclass(frozen=True)
class PropertySpec:
    """Static description of one component property."""

    name: str
    value_type: type = str
    readable: bool = True
    writable: bool = True
    construction_only: bool = False

    @property
    def presettable(self) -> bool:
        """Readable, writable and settable after construction."""
        return self.readable and self.writable and not self.construction_only


@runtime_checkable
class PropertyProvider(Protocol):
    """Access to the properties of one component instance."""

    def list_properties(self) -> Sequence[PropertySpec]:
        """All properties in declaration order."""
        ...

    def get_value(self, name: str) -> Any:
        """Current runtime value of property *name*."""
        ...

    def set_value(self, name: str, value: Any) -> bool:
        """Apply *value* to property *name*. Returns False if rejected."""
        ...


@runtime_checkable
class Codec(Protocol):
    """Text codec for single property values. Failures raise :class:`CodecError`."""

    def encode(self, value: Any) -> str: ...

    def decode(self, text: str, expected_type: type) -> Any: ...


def presettable_properties(provider: PropertyProvider) -> list[PropertySpec]:
    """Properties of *provider* that take part in presets, in provider order."""
    return [spec for spec in provider.list_properties() if spec.presettable]


class ScalarCodec:
    """Default codec for ``bool``, ``int``, ``float``, ``str`` and ``Enum`` values.

    Booleans are written as ``true``/``false``, floats with :func:`repr` so
    they read back exactly, enums by member name.
    """

    _TRUE = frozenset({"true", "yes", "1", "on"})
    _FALSE = frozenset({"false", "no", "0", "off"})

    def encode(self, value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, enum.Enum):
            return value.name
        if isinstance(value, int | float):
            return repr(value)
        if isinstance(value, str):
            return value
        msg = f"Cannot encode value of type {type(value).__name__}"
        raise CodecError(msg)

    def decode(self, text: str, expected_type: type) -> Any:
        if expected_type is bool:
            lowered = text.strip().lower()
            if lowered in self._TRUE:
                return True
            if lowered in self._FALSE:
                return False
            msg = f"Invalid boolean {text!r}"
            raise CodecError(msg)
        if isinstance(expected_type, type) and issubclass(expected_type, enum.Enum):
            try:
                return expected_type[text.strip()]
            except KeyError as exc:
                msg = f"{text!r} is not a member of {expected_type.__name__}"
                raise CodecError(msg) from exc
        if expected_type in (int, float):
            try:
                return expected_type(text)
            except ValueError as exc:
                msg = f"Invalid {expected_type.__name__} {text!r}"
                raise CodecError(msg) from exc
        if expected_type is str:
            return text
        msg = f"Cannot decode into type {getattr(expected_type, '__name__', expected_type)}"
        raise CodecError(msg)
