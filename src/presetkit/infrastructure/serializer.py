"""Preset file I/O: loading a layer and persisting the user file.

Pure parsing/rendering lives in :mod:`presetkit.domain.keyfile`; this module
handles the actual file operations, header identity checks, backup rotation
and the final write.

Persist pipeline: STAMP -> RENDER -> BACKUP -> WRITE. Rendering happens before
anything on disk is touched, so a document that cannot be rendered leaves
both the user file and its backup as they were.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from presetkit.domain.document import HEADER_GROUP, HEADER_VERSION, Document
from presetkit.domain.errors import (
    NameMismatchError,
    PresetIOError,
    PresetParseError,
    PresetSerializeError,
)
from presetkit.domain.keyfile import parse_keyfile, render_keyfile
from presetkit.domain.merge import Layer
from presetkit.infrastructure.paths import PresetPaths

logger = logging.getLogger(__name__)

_TEMP_SUFFIX = ".tmp"


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------


def read_document(path: Path) -> Document:
    """Read and parse the key file at *path*.

    Raises:
        PresetIOError: if the file cannot be read (missing included).
        PresetParseError: if it is not UTF-8 or not a valid key file.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise PresetIOError(path, exc.strerror or str(exc)) from exc
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as exc:
        msg = f"{path}: not valid UTF-8 ({exc.reason})"
        raise PresetParseError(msg) from exc
    try:
        return parse_keyfile(text)
    except PresetParseError as exc:
        raise PresetParseError(f"{path}: {exc}") from exc


def load_layer(path: Path, identity: str) -> Layer:
    """Load one preset layer, checking that it belongs to *identity*.

    Raises:
        PresetIOError, PresetParseError: see :func:`read_document`.
        NameMismatchError: if the header names another type.
    """
    document = read_document(path)
    found = document.element_name
    if found != identity:
        raise NameMismatchError(path, identity, found)
    return Layer(document=document, version=document.version)


# ---------------------------------------------------------------------------
# Persist
# ---------------------------------------------------------------------------


def remove_file(path: Path) -> None:
    """Delete *path* if present; failure is logged, never raised."""
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("Cannot remove preset file %s: %s", path, exc)


def rotate_backup(paths: PresetPaths) -> bool:
    """Move the current user file to its ``.bak`` sibling.

    One level of backup only. Every failure is logged and swallowed.

    Returns:
        True if a fresh backup now exists.
    """
    user_path = paths.user_path
    backup = paths.backup_path
    if not user_path.exists():
        return False

    if backup.exists():
        try:
            backup.unlink()
        except OSError as exc:
            logger.warning("Cannot remove old backup file %s: %s", backup, exc)
            return False

    try:
        user_path.replace(backup)
    except OSError as exc:
        logger.warning("Cannot back up %s -> %s: %s", user_path, backup, exc)
        return False
    return True


def write_text_atomic(path: Path, text: str) -> None:
    """Write *text* to a temporary sibling, then replace *path* with it.

    Raises:
        PresetIOError: if the write or the final replace fails.
    """
    tmp = path.with_name(path.name + _TEMP_SUFFIX)
    try:
        tmp.write_bytes(text.encode("utf-8"))
        os.replace(tmp, path)
    except OSError as exc:
        remove_file(tmp)
        raise PresetIOError(path, exc.strerror or str(exc)) from exc


def persist(paths: PresetPaths, document: Document, version: str) -> bool:
    """Write *document* to the user path, keeping a backup of the old file.

    A document without any preset group is not written; the user file is
    removed instead so the shipped layer shows through again.

    Returns:
        True if a file was written, False if the user file was removed.

    Raises:
        PresetSerializeError: the document cannot be rendered. Nothing on
            disk changed and the document is left as it was.
        PresetIOError: the final write failed.
    """
    user_path = paths.user_path
    if not document.preset_names():
        logger.debug("No presets left, removing %s", user_path)
        remove_file(user_path)
        return False

    previous = document.version
    document.stamp_version(version)
    try:
        text = render_keyfile(document)
    except PresetSerializeError:
        if previous is None:
            document.remove_key(HEADER_GROUP, HEADER_VERSION)
        else:
            document.stamp_version(previous)
        raise

    logger.debug("Saving preset file %s", user_path)
    rotate_backup(paths)
    write_text_atomic(user_path, text)
    return True
