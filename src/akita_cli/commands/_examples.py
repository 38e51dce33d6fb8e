"""``--examples`` flag shared by akita commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

_F = TypeVar("_F", bound=Callable[..., Any])


def examples_option(*examples: str) -> Callable[[_F], _F]:
    """Add an eager ``--examples`` flag that prints *examples* and exits.

    Each example is one command line; they are printed indented, in order.
    """
    text = "\n".join(f"  {line}" for line in examples)

    def show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(text)
        ctx.exit(0)

    return click.option(
        "--examples",
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=show,
        help="Show usage examples.",
    )
