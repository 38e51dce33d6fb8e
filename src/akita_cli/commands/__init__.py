"""Subcommand modules for akita.

Provides register_commands() which uses deferred imports to keep
``akita --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from akita_cli.commands.ci import ci

    cli.add_command(ci)

    # --- Standalone commands ---
    from akita_cli.commands.domain import domain

    cli.add_command(domain)
