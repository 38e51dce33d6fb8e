"""structlog configuration for akita.

All records, from structlog or plain ``logging`` loggers, go to stderr:
readable console lines by default, JSON lines with ``--log-json``. Once the
CI context is known, :func:`bind_ci_context` stamps every later record with
the CI system and pull request, so a CI log shows which PR a gate decision
was about.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from akita_cli.domain.ci import CIInfo

# Third-party loggers that are chatty at INFO (httpx logs every request).
_QUIET_LOGGERS = ("httpx", "httpcore")


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route all logging to stderr; ``akita_cli`` logs at DEBUG when *verbose*."""
    shared: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("akita_cli").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_ci_context(info: CIInfo) -> None:
    """Attach the CI system (and PR, if any) to every later log record."""
    structlog.contextvars.bind_contextvars(ci=info.kind.value)
    if info.pull_request is not None:
        structlog.contextvars.bind_contextvars(pull_request=info.pull_request.slug)
