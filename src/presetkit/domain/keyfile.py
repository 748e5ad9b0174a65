"""Key-file text codec: parse and render preset documents.

The on-disk format is the classic desktop key file::

    # file comment

    # group comment
    [_presets_]
    element-name=GstSimSyn
    version=1.2.0

    [Bright]
    # key comment
    wave=saw
    _meta/comment=crisp lead

Comment lines directly above a header or key belong to it. Comment lines
before the first group, separated from it by a blank line, form the file
comment. Pure functions only; file I/O lives in
:mod:`presetkit.infrastructure.serializer`.
"""

from __future__ import annotations

import re

from presetkit.domain.document import Document, Group
from presetkit.domain.errors import PresetParseError, PresetSerializeError

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

_ESCAPES: dict[str, str] = {
    "s": " ",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
}


# ---------------------------------------------------------------------------
# Name rules
# ---------------------------------------------------------------------------


def valid_group_name(name: str) -> bool:
    """Non-empty, no brackets, no control characters."""
    if not name or "[" in name or "]" in name:
        return False
    return _CONTROL_CHARS.search(name) is None


def valid_key(key: str) -> bool:
    """Non-empty, no ``=``, no control characters, no surrounding whitespace.

    A leading ``#`` or ``[`` would read back as a comment or group header.
    """
    if not key or key != key.strip() or "=" in key:
        return False
    if key[0] in "#[":
        return False
    return _CONTROL_CHARS.search(key) is None


# ---------------------------------------------------------------------------
# Value escaping
# ---------------------------------------------------------------------------


def escape_value(value: str) -> str:
    out: list[str] = []
    for i, ch in enumerate(value):
        if ch == "\\":
            out.append("\\\\")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\r":
            out.append("\\r")
        elif ch == " " and i == 0:
            out.append("\\s")
        else:
            out.append(ch)
    return "".join(out)


def unescape_value(raw: str) -> str:
    """Reverse :func:`escape_value`. Unknown escapes are kept verbatim."""
    out: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "\\" and i + 1 < len(raw) and raw[i + 1] in _ESCAPES:
            out.append(_ESCAPES[raw[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


# ---------------------------------------------------------------------------
# Parse / render
# ---------------------------------------------------------------------------


def parse_keyfile(text: str) -> Document:
    """Parse key-file *text* into a :class:`Document`.

    Raises:
        PresetParseError: on a malformed header, a key outside any group,
            an invalid key, or a line that is none of the known forms.
    """
    doc = Document()
    file_comment: list[str] = []
    pending: list[str] = []
    current: Group | None = None

    for lineno, raw in enumerate(text.replace("\r\n", "\n").split("\n"), start=1):
        line = raw.lstrip(" \t")

        if not line.strip():
            # A blank line closes the file comment block before the first group.
            if current is None and pending:
                file_comment.extend(pending)
                pending = []
            continue

        if line.startswith("#"):
            pending.append(line[1:])
            continue

        if line.startswith("["):
            stripped = line.rstrip()
            if not stripped.endswith("]"):
                raise PresetParseError("unterminated group header", line=lineno)
            name = stripped[1:-1]
            if not valid_group_name(name):
                raise PresetParseError(f"invalid group name {name!r}", line=lineno)
            current = doc.ensure_group(name)
            if pending:
                current.comment = "\n".join(pending)
                pending = []
            continue

        if current is None:
            raise PresetParseError("key/value pair outside of any group", line=lineno)

        key, sep, value = line.partition("=")
        if not sep:
            raise PresetParseError(f"expected key=value, got {line!r}", line=lineno)
        key = key.rstrip()
        if not valid_key(key):
            raise PresetParseError(f"invalid key {key!r}", line=lineno)
        current.set(
            key,
            unescape_value(value.lstrip(" \t")),
            comment="\n".join(pending) if pending else None,
        )
        pending = []

    if file_comment:
        doc.comment = "\n".join(file_comment)
    return doc


def _comment_lines(comment: str) -> list[str]:
    return [f"#{part}" for part in comment.split("\n")]


def render_keyfile(doc: Document) -> str:
    """Render *doc* to key-file text.

    Raises:
        PresetSerializeError: if a group name or key cannot be represented.
    """
    lines: list[str] = []
    if doc.comment is not None:
        lines.extend(_comment_lines(doc.comment))
        lines.append("")

    for name, group in doc.groups.items():
        if not valid_group_name(name):
            msg = f"Group name {name!r} cannot be written to a key file"
            raise PresetSerializeError(msg)
        if group.comment is not None:
            lines.extend(_comment_lines(group.comment))
        lines.append(f"[{name}]")
        for key, value in group.entries.items():
            if not valid_key(key):
                msg = f"Key {key!r} in group {name!r} cannot be written to a key file"
                raise PresetSerializeError(msg)
            comment = group.key_comments.get(key)
            if comment is not None:
                lines.extend(_comment_lines(comment))
            lines.append(f"{key}={escape_value(value)}")
        lines.append("")

    return "\n".join(lines)
