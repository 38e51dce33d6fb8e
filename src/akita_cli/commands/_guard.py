"""CI execution gate for commands.

``guard_command`` wraps a command callback so that, when the CLI runs as
part of a GitHub PR build and the PR is not Akita-enabled, the command does
nothing and exits successfully. CI pipelines running on PRs from non-members
stay green instead of failing.

Outcomes of a guarded call:

* no PR detected            -> DELEGATED (checker is never called)
* checker raises            -> FAILED    (error propagates, handler not called)
* PR not Akita-enabled      -> SKIPPED   (one warning on stderr, returns None)
* PR Akita-enabled          -> DELEGATED
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, Concatenate, ParamSpec, TypeVar

import click

from akita_cli.config.logging import bind_ci_context
from akita_cli.errors import AuthorizationCheckError
from akita_cli.infrastructure.ci_env import detect_ci_info
from akita_cli.services.authorization import AKITA_GITHUB_USERS_TEAM_SLUG, is_pr_akita_enabled

if TYPE_CHECKING:
    from akita_cli.commands._context import AppContext
    from akita_cli.domain.ci import PullRequestContext

logger = logging.getLogger(__name__)

_P = ParamSpec("_P")
_R = TypeVar("_R")


class GateState(StrEnum):
    UNCHECKED = "unchecked"
    CHECKING = "checking"
    SKIPPED = "skipped"
    DELEGATED = "delegated"
    FAILED = "failed"


def skip_message(pr: PullRequestContext) -> str:
    """Warning shown when a guarded command is skipped for *pr*."""
    return (
        f"The GitHub PR {pr.slug} is not Akita-enabled: the user that opened the PR "
        f"is not a member of the GitHub team {pr.owner}/{AKITA_GITHUB_USERS_TEAM_SLUG}. "
        "The CLI will now exit without doing anything."
    )


def guard_command(
    handler: Callable[Concatenate[AppContext, _P], _R],
) -> Callable[Concatenate[AppContext, _P], _R | None]:
    """Return a new callback that only runs *handler* for Akita-enabled PRs.

    *handler* itself is left untouched. Apply below ``@click.pass_obj``::

        @click.command()
        @click.pass_obj
        @guard_command
        def learn(app: AppContext) -> None: ...
    """

    @functools.wraps(handler)
    def guarded(app: AppContext, *args: _P.args, **kwargs: _P.kwargs) -> _R | None:
        name = handler.__name__
        logger.debug("gate %s: %s", name, GateState.UNCHECKED)

        info = detect_ci_info()
        bind_ci_context(info)
        pr = info.pull_request
        if pr is None:
            logger.debug("gate %s: %s (no pull request)", name, GateState.DELEGATED)
            return handler(app, *args, **kwargs)

        logger.debug("gate %s: %s %s", name, GateState.CHECKING, pr.slug)
        try:
            enabled = is_pr_akita_enabled(
                pr, domain=app.domain, client_id=app.client_id, settings=app.settings
            )
        except AuthorizationCheckError:
            logger.debug("gate %s: %s", name, GateState.FAILED)
            raise

        if not enabled:
            logger.debug("gate %s: %s", name, GateState.SKIPPED)
            click.echo(f"WARNING: {skip_message(pr)}", err=True)
            return None

        logger.debug("gate %s: %s", name, GateState.DELEGATED)
        return handler(app, *args, **kwargs)

    return guarded
