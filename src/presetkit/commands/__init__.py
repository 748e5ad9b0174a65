"""Subcommand modules for presetkit.

Provides register_commands() which uses deferred imports to keep
``presetkit --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    1 group (has subcommands) + 5 standalone commands.
    """
    # --- Groups ---
    from presetkit.commands.meta import meta

    cli.add_command(meta)

    # --- Standalone commands ---
    from presetkit.commands.presets import delete, list_cmd, paths, rename, show

    cli.add_command(paths)
    cli.add_command(list_cmd)
    cli.add_command(show)
    cli.add_command(rename)
    cli.add_command(delete)
