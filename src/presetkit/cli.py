"""Root CLI group for presetkit with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from presetkit import __version__
from presetkit.commands import register_commands
from presetkit.commands._context import AppContext
from presetkit.config.settings import PresetSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="presetkit")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--user-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root of the user-writable preset layer.",
)
@click.option(
    "--system-root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Root of the shipped preset layer.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    user_root: Path | None,
    system_root: Path | None,
) -> None:
    """Manage saved property presets of components."""
    ctx.ensure_object(dict)
    settings = PresetSettings.from_cli(
        config_path=config_path,
        user_root=user_root,
        system_root=system_root,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
