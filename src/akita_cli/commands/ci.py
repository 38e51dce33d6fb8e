"""Command group: CI context inspection and gated execution."""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import click

from akita_cli.commands._examples import examples_option
from akita_cli.commands._guard import guard_command
from akita_cli.errors import AkitaError
from akita_cli.services.ci import CIService

if TYPE_CHECKING:
    from akita_cli.commands._context import AppContext


@click.group()
@examples_option(
    "akita ci info",
    "akita --json ci info",
    "akita ci check",
    "akita ci exec -- make integration-test",
)
def ci() -> None:
    """Inspect the CI environment and gate work on PR authorization."""


@ci.command()
@examples_option("akita ci info", "akita --json ci info")
@click.pass_obj
def info(app: AppContext) -> None:
    """Show the detected CI system and pull request."""
    app.emit(CIService(app.settings, app.domain).info())


@ci.command()
@examples_option("akita ci check", "akita --domain staging.akita.software ci check")
@click.pass_obj
def check(app: AppContext) -> None:
    """Check whether the current pull request is Akita-enabled."""
    app.emit(CIService(app.settings, app.domain).check())


@ci.command(
    "exec",
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
)
@examples_option(
    "akita ci exec -- make integration-test",
    "akita ci exec -- ./scripts/upload-traces.sh build/traces",
)
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
@guard_command
def exec_cmd(app: AppContext, command: tuple[str, ...]) -> None:
    """Run COMMAND only when the current pull request is Akita-enabled.

    Outside a pull-request build the command always runs. The command's
    exit status becomes akita's exit status.
    """
    try:
        proc = subprocess.run(list(command), check=False)
    except FileNotFoundError as exc:
        raise AkitaError(f"command not found: {command[0]}") from exc
    except OSError as exc:
        raise AkitaError(f"cannot run {command[0]}: {exc.strerror or exc}") from exc
    if proc.returncode != 0:
        raise SystemExit(proc.returncode)
