"""Click base classes for presetkit commands.

``presetkit <command> --examples`` prints a few ready-to-paste invocations
(``presetkit list GstSimSyn``, ``presetkit meta set ...``) and exits without
touching any preset file. ``--help`` stays short.
"""

from __future__ import annotations

from typing import Any

import click


def _attach_examples(cmd: click.Command, examples: str) -> None:
    """Give *cmd* an eager ``--examples`` flag printing *examples*."""

    def _print_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"{ctx.command_path} examples:\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=_print_examples,
            help="Print example invocations and exit.",
        )
    )


class PresetCommand(click.Command):
    """A presetkit subcommand; ``examples=`` adds an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)


class PresetGroup(click.Group):
    """A presetkit command group such as ``meta``.

    Subcommands declared with ``@group.command(...)`` are
    :class:`PresetCommand` instances and accept ``examples=`` as well.
    """

    command_class = PresetCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _attach_examples(self, examples)
