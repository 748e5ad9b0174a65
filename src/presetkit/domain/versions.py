"""Dotted version strings packed into comparable ordinals.

Only used to decide merge precedence between the shipped and the user preset
layer. This is not semantic versioning: ``"1.2rc1"`` reads as ``1.2`` and
anything with fewer than two numeric components sorts as the oldest possible.
"""

from __future__ import annotations

import re

# Up to four "%d" components separated by literal dots, sscanf style.
_COMPONENT = re.compile(r"\s*([+-]?\d+)")

MAX_COMPONENTS = 4
_COMPONENT_BITS = 8
_COMPONENT_MASK = (1 << _COMPONENT_BITS) - 1


def _scan_components(text: str) -> list[int]:
    components: list[int] = []
    pos = 0
    while len(components) < MAX_COMPONENTS:
        if components:
            if not text.startswith(".", pos):
                break
            pos += 1
        match = _COMPONENT.match(text, pos)
        if match is None:
            break
        components.append(int(match.group(1)))
        pos = match.end()
    return components


def parse_version(text: str | None) -> int:
    """Pack *text* (``major.minor[.micro[.nano]]``) into an integer ordinal.

    Examples:
        >>> parse_version("1.2") > parse_version("1.1.9")
        True
        >>> parse_version("7")
        0
        >>> parse_version(None)
        0
    """
    if not text:
        return 0
    components = _scan_components(text)
    if len(components) < 2:
        return 0
    components.extend([0] * (MAX_COMPONENTS - len(components)))
    ordinal = 0
    for value in components:
        ordinal = (ordinal << _COMPONENT_BITS) | (value & _COMPONENT_MASK)
    return ordinal
