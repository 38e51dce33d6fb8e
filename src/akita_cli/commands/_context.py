"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Resolves the backend domain lazily (once per process)
and centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

import click

from akita_cli.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from akita_cli.config.settings import AkitaSettings
    from akita_cli.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The domain is resolved
    on first access so ``--help`` and ``--version`` never read credentials.
    """

    def __init__(self, settings: AkitaSettings) -> None:
        self.settings = settings
        self._domain: str | None = None
        self._domain_lock = threading.Lock()

        from akita_cli.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def domain(self) -> str:
        """The backend domain (resolved once, read-only afterwards)."""
        if self._domain is None:
            with self._domain_lock:
                if self._domain is None:
                    from akita_cli.config.credentials import postman_credentials
                    from akita_cli.domain.backends import resolve_domain

                    self._domain = resolve_domain(
                        self.settings.domain, postman_credentials(self.settings)
                    )
        return self._domain

    @property
    def client_id(self) -> str:
        return self.settings.client_id

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
