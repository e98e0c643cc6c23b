"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The repository and the plugin manager are built
lazily so ``--help`` and ``--version`` never touch the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from repostress.config.settings import RepoStressSettings
    from repostress.infrastructure.repository import Repository
    from repostress.plugins.manager import PluginManager
    from repostress.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RepoStressSettings) -> None:
        self.settings = settings
        self._repository: Repository | None = None
        self._plugins: PluginManager | None = None

        from repostress.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from repostress.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def repository(self) -> Repository:
        """The repository (created lazily on first access)."""
        if self._repository is None:
            from repostress.infrastructure.repository import Repository

            self._repository = Repository(self.settings)
        return self._repository

    @property
    def plugins(self) -> PluginManager:
        """Plugins from entry points and ``.repostress/plugins/``."""
        if self._plugins is None:
            from repostress.infrastructure.database.engine import DB_DIRNAME
            from repostress.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load(
                local_dir=self.settings.repo_root / DB_DIRNAME / "plugins"
            )
        return self._plugins

    def close(self) -> None:
        if self._repository is not None:
            self._repository.close()
            self._repository = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, warnings to stderr (outside JSON mode).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
