"""Command group: meta tags attached to presets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from presetkit.commands._base import PresetGroup

if TYPE_CHECKING:
    from presetkit.commands._context import AppContext

_META_EXAMPLES = """\
  presetkit meta set GstSimSyn Bright comment "crisp lead"
  presetkit meta get GstSimSyn Bright comment
  presetkit meta set GstSimSyn Bright comment"""


@click.group(cls=PresetGroup, examples=_META_EXAMPLES)
def meta() -> None:
    """Read and write meta tags (comment, author, ...) of a preset."""


@meta.command(
    examples="""\
  presetkit meta get GstSimSyn Bright comment"""
)
@click.argument("identity")
@click.argument("name")
@click.argument("tag")
@click.pass_obj
def get(app: AppContext, identity: str, name: str, tag: str) -> None:
    """Print meta TAG of preset NAME."""
    app.emit(app.service(identity).get_meta(name, tag))


@meta.command(
    "set",
    examples="""\
  presetkit meta set GstSimSyn Bright comment "crisp lead"
  presetkit meta set GstSimSyn Bright comment   # clears the tag""",
)
@click.argument("identity")
@click.argument("name")
@click.argument("tag")
@click.argument("value", required=False, default=None)
@click.pass_obj
def set_cmd(app: AppContext, identity: str, name: str, tag: str, value: str | None) -> None:
    """Set meta TAG of preset NAME to VALUE; omit VALUE to clear it."""
    app.emit(app.service(identity).set_meta(name, tag, value))
