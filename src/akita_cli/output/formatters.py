"""Rich/JSON rendering of ServiceResult.

Human output is Rich markup rendered into a string buffer, so the caller
decides where it goes. In non-TTY environments (tests, pipes, CI logs) Rich
drops the color codes on its own.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

if TYPE_CHECKING:
    from akita_cli.services.result import ServiceResult

AKITA_THEME = Theme(
    {
        "akita.ok": "bold green",
        "akita.error": "bold red",
        "akita.op": "bold cyan",
        "akita.key": "dim",
        "akita.enabled": "green",
        "akita.disabled": "red",
    }
)


@dataclass(frozen=True)
class OutputSettings:
    """Output-mode flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _format_value(key: str, value: Any) -> str:
    # "enabled" is the PR authorization answer; color it.
    if isinstance(value, bool) and key == "enabled":
        style = "akita.enabled" if value else "akita.disabled"
        return f"[{style}]{value}[/{style}]"
    if isinstance(value, (dict, list)):
        return escape(_json.dumps(value, separators=(",", ":"), sort_keys=True))
    return escape(str(value))


def _render(lines: list[str]) -> str:
    buffer = StringIO()
    console = Console(file=buffer, theme=AKITA_THEME, highlight=False)
    for line in lines:
        console.print(line, soft_wrap=True)
    return buffer.getvalue().rstrip("\n")


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; defaults to human-readable, non-quiet.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    op = f"[akita.op]{result.op}[/akita.op]"
    if result.error is None:
        lines = [f"[akita.ok]OK[/akita.ok]: {op}"]
        fields = {} if settings.quiet else result.data
    else:
        lines = [f"[akita.error]ERROR[/akita.error]: {op} - {escape(result.error.message)}"]
        fields = result.error.detail if settings.verbose else {}
    lines.extend(
        f"  [akita.key]{key}[/akita.key]: {_format_value(key, value)}"
        for key, value in fields.items()
    )
    return _render(lines)
