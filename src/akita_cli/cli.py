"""Root CLI group for akita with global flags and command registration."""

from __future__ import annotations

import click

from akita_cli import __version__
from akita_cli.commands import register_commands
from akita_cli.commands._context import AppContext
from akita_cli.config.settings import AkitaSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="akita")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--domain", default=None, help="Backend domain (overrides credential-based choice).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    domain: str | None,
) -> None:
    """akita — Akita command-line client."""
    ctx.ensure_object(dict)
    settings = AkitaSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        domain=domain,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
