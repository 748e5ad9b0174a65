"""Reconcile the shipped (system) and user preset layers of one type.

Precedence is decided purely by header version:

- strictly newer system layer: rebase, i.e. the user's presets are laid over
  the new system document and the result must be written back;
- otherwise the user layer wins verbatim and the system layer is ignored.

A user group replaces a system group of the same name as a whole. There is
no per-key three-way merge.
"""

from __future__ import annotations

from dataclasses import dataclass

from presetkit.domain.document import Document, Group, is_private
from presetkit.domain.versions import parse_version


@dataclass
class Layer:
    """A successfully loaded preset file and the raw header version it carried."""

    document: Document
    version: str | None = None


def overlay(target: Document, source: Document) -> None:
    """Lay every non-private group of *source* over *target* in place."""
    if source.comment is not None:
        target.comment = source.comment
    for name, group in source.groups.items():
        if is_private(name):
            continue
        target.remove_group(name)
        replacement = Group()
        group.copy_into(replacement)
        target.groups[name] = replacement


def merge_layers(
    identity: str,
    system: Layer | None,
    user: Layer | None,
) -> tuple[Document, bool]:
    """Resolve both layers into one document.

    Returns:
        ``(document, needs_resave)`` where *needs_resave* is True only when a
        rebase onto a newer system layer happened.
    """
    if system is None:
        if user is None:
            return Document.new(identity), False
        return user.document, False
    if user is None:
        return system.document, False

    if parse_version(system.version) > parse_version(user.version):
        overlay(system.document, user.document)
        return system.document, True
    return user.document, False
