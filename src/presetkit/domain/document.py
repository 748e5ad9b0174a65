"""In-memory preset document made of ordered groups of text key/value pairs.

A document mirrors one preset file. The reserved ``_presets_`` group carries
the header (owning type identity and the version that last wrote the file);
every other group whose name does not start with ``_`` is a preset.

Comments can be attached to the document, to a group, or to a single key,
and survive a parse/render round-trip.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Self

HEADER_GROUP = "_presets_"
HEADER_ELEMENT_NAME = "element-name"
HEADER_VERSION = "version"

META_PREFIX = "_meta/"

PRIVATE_PREFIX = "_"


def is_private(group_name: str) -> bool:
    """Private groups are never listed as presets nor overlaid during merge."""
    return group_name.startswith(PRIVATE_PREFIX)


def meta_key(tag: str) -> str:
    """Key under which meta *tag* is stored inside a preset group."""
    return f"{META_PREFIX}{tag}"


@dataclass
class Group:
    """One ``[group]`` of a preset document."""

    entries: dict[str, str] = field(default_factory=dict)
    comment: str | None = None
    key_comments: dict[str, str] = field(default_factory=dict)

    def set(self, key: str, value: str, *, comment: str | None = None) -> None:
        self.entries[key] = value
        if comment is not None:
            self.key_comments[key] = comment

    def remove(self, key: str) -> bool:
        """Drop *key* and its comment. Returns whether it was present."""
        self.key_comments.pop(key, None)
        return self.entries.pop(key, None) is not None

    def copy_into(self, target: Group) -> None:
        """Copy comment, values and key comments onto *target*.

        Keys of *target* that are absent here are left untouched.
        """
        if self.comment is not None:
            target.comment = self.comment
        for key, value in self.entries.items():
            target.set(key, value, comment=self.key_comments.get(key))


@dataclass
class Document:
    """Ordered mapping of group name to :class:`Group` plus a file comment."""

    groups: dict[str, Group] = field(default_factory=dict)
    comment: str | None = None

    @classmethod
    def new(cls, identity: str) -> Self:
        """Fresh document holding only a header for *identity*."""
        doc = cls()
        doc.set_value(HEADER_GROUP, HEADER_ELEMENT_NAME, identity)
        return doc

    # --- groups -----------------------------------------------------------

    def has_group(self, name: str) -> bool:
        return name in self.groups

    def group(self, name: str) -> Group | None:
        return self.groups.get(name)

    def ensure_group(self, name: str) -> Group:
        grp = self.groups.get(name)
        if grp is None:
            grp = self.groups[name] = Group()
        return grp

    def remove_group(self, name: str) -> bool:
        return self.groups.pop(name, None) is not None

    def preset_names(self) -> list[str]:
        """Sorted names of all non-private groups."""
        return sorted(name for name in self.groups if not is_private(name))

    # --- values -----------------------------------------------------------

    def get_value(self, group: str, key: str) -> str | None:
        grp = self.groups.get(group)
        if grp is None:
            return None
        return grp.entries.get(key)

    def set_value(self, group: str, key: str, value: str) -> None:
        self.ensure_group(group).set(key, value)

    def remove_key(self, group: str, key: str) -> bool:
        grp = self.groups.get(group)
        if grp is None:
            return False
        return grp.remove(key)

    # --- header -----------------------------------------------------------

    @property
    def element_name(self) -> str | None:
        return self.get_value(HEADER_GROUP, HEADER_ELEMENT_NAME)

    @property
    def version(self) -> str | None:
        return self.get_value(HEADER_GROUP, HEADER_VERSION)

    def stamp_version(self, version: str) -> None:
        self.set_value(HEADER_GROUP, HEADER_VERSION, version)

    def clone(self) -> Document:
        return copy.deepcopy(self)
