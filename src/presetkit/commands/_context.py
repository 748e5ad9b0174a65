"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy registry initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from presetkit.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from presetkit.config.settings import PresetSettings
    from presetkit.infrastructure.store import StoreRegistry
    from presetkit.services.presets import PresetBackend
    from presetkit.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store registry is created lazily on first use so ``--help`` and
    ``--version`` never touch the preset directories.
    """

    def __init__(self, settings: PresetSettings) -> None:
        self.settings = settings
        self._registry: StoreRegistry | None = None

        from presetkit.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def registry(self) -> StoreRegistry:
        """The store registry (created lazily on first access)."""
        if self._registry is None:
            from presetkit.infrastructure.store import StoreRegistry

            self._registry = StoreRegistry.from_settings(self.settings)
        return self._registry

    def service(self, identity: str) -> PresetBackend:
        """The provider-less default backend for *identity*."""
        from presetkit.services.presets import PresetService

        return PresetService(self.registry, identity)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
