"""Allow ``python -m akita_cli``."""

from akita_cli.cli import cli

cli()
