"""Standalone commands operating on one type's preset file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from presetkit.commands._base import PresetCommand

if TYPE_CHECKING:
    from presetkit.commands._context import AppContext


@click.command(
    cls=PresetCommand,
    examples="""\
  presetkit paths GstSimSyn
  presetkit --user-root ~/tmp/presets paths GstSimSyn""",
)
@click.argument("identity")
@click.pass_obj
def paths(app: AppContext, identity: str) -> None:
    """Show where presets of IDENTITY are read from and written to."""
    app.emit(app.service(identity).paths())


@click.command(
    "list",
    cls=PresetCommand,
    examples="""\
  presetkit list GstSimSyn
  presetkit --json list GstSimSyn""",
)
@click.argument("identity")
@click.pass_obj
def list_cmd(app: AppContext, identity: str) -> None:
    """List the presets stored for IDENTITY."""
    app.emit(app.service(identity).list_preset_names())


@click.command(
    cls=PresetCommand,
    examples="""\
  presetkit show GstSimSyn Bright""",
)
@click.argument("identity")
@click.argument("name")
@click.pass_obj
def show(app: AppContext, identity: str, name: str) -> None:
    """Show the stored values of preset NAME."""
    app.emit(app.service(identity).show_preset(name))


@click.command(
    cls=PresetCommand,
    examples="""\
  presetkit rename GstSimSyn Bright 'Bright Lead'""",
)
@click.argument("identity")
@click.argument("old_name")
@click.argument("new_name")
@click.pass_obj
def rename(app: AppContext, identity: str, old_name: str, new_name: str) -> None:
    """Rename preset OLD_NAME to NEW_NAME."""
    app.emit(app.service(identity).rename_preset(old_name, new_name))


@click.command(
    cls=PresetCommand,
    examples="""\
  presetkit delete GstSimSyn Bright""",
)
@click.argument("identity")
@click.argument("name")
@click.pass_obj
def delete(app: AppContext, identity: str, name: str) -> None:
    """Delete preset NAME."""
    app.emit(app.service(identity).delete_preset(name))
