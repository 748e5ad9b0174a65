"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich text) or machines (--json).
The formatter layer adapts ServiceResult to the requested output mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.text import Text

from presetkit.domain.document import META_PREFIX
from presetkit.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from presetkit.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """How a result should be rendered."""

    json_output: bool = False
    verbose: bool = False
    no_color: bool = False


def _print_data(console: Console, data: dict[str, Any]) -> None:
    """Indented key/value listing; lists one item per line."""
    for key, value in data.items():
        if isinstance(value, list):
            console.print(Text.assemble("  ", (f"{key}:", "pk.key")))
            for item in value:
                console.print(Text.assemble("    - ", (str(item), "pk.name")))
        elif isinstance(value, dict):
            console.print(Text.assemble("  ", (f"{key}:", "pk.key")))
            for sub_key, sub_value in value.items():
                style = "pk.meta" if str(sub_key).startswith(META_PREFIX) else ""
                console.print(Text.assemble("    ", (f"{sub_key}", style), f" = {sub_value}"))
        else:
            console.print(Text.assemble("  ", (f"{key}:", "pk.key"), f" {value}"))


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; human-readable text by default.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=settings.no_color)
    if result.ok:
        console.print(Text.assemble(("OK", "pk.ok"), ": ", (result.op, "pk.op")))
        if result.data:
            _print_data(console, result.data)
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(Text.assemble(("ERROR", "pk.error"), f": {result.op} - {message}"))
        if settings.verbose and result.error and result.error.detail:
            _print_data(console, result.error.detail)
    return get_output(console).rstrip("\n")
