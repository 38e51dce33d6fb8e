"""CI system kinds and pull-request identity.

INVARIANT: A PullRequestContext only exists for a pull-request-triggered
CI event. Outside CI, or for push/cron builds, ``CIInfo.pull_request`` is None.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class CIKind(StrEnum):
    """CI systems the detector knows how to read."""

    NONE = "none"
    GITHUB_ACTIONS = "github_actions"
    CIRCLECI = "circleci"
    TRAVIS = "travis"


class PullRequestContext(BaseModel):
    """Identity of the GitHub pull request that triggered the build."""

    model_config = {"frozen": True}

    owner: str
    repo: str
    number: int
    commit: str = ""
    branch: str = ""

    @property
    def slug(self) -> str:
        """``owner/repo#number`` as GitHub renders it."""
        return f"{self.owner}/{self.repo}#{self.number}"


class CIInfo(BaseModel):
    """Result of inspecting the environment for a CI system.

    Attributes:
        kind: Which CI system was recognised (``NONE`` outside CI).
        pull_request: PR identity, or None when the build is not a PR build.
        tags: Raw metadata gathered along the way (``x-akita-*`` keys).
    """

    model_config = {"frozen": True}

    kind: CIKind = CIKind.NONE
    pull_request: PullRequestContext | None = None
    tags: dict[str, str] = Field(default_factory=dict)
