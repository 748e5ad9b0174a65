"""Allow ``python -m presetkit``."""

from presetkit.cli import cli

cli()
