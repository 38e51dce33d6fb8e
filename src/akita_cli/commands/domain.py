"""Command: show the backend this CLI talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from akita_cli.commands._examples import examples_option

if TYPE_CHECKING:
    from akita_cli.commands._context import AppContext


@click.command()
@examples_option(
    "akita domain",
    "akita --domain staging.akita.software domain",
    "POSTMAN_API_KEY=... POSTMAN_ENV=beta akita --json domain",
)
@click.pass_obj
def domain(app: AppContext) -> None:
    """Show the resolved backend domain and host."""
    from akita_cli.services.backend import BackendService

    app.emit(BackendService(app.settings, app.domain).describe())
