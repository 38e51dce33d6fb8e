"""ServiceResult and ServiceError: what every ``akita`` service returns.

INVARIANT: A failed operation carries an error code the CLI can show and a
JSON consumer can branch on; a successful one never carries an error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ServiceError(BaseModel):
    """Why an operation failed (``code`` is stable, ``message`` is for humans)."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation, rendered by ``AppContext.emit``."""

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None

    @model_validator(mode="after")
    def _error_matches_ok(self) -> ServiceResult:
        if self.ok == (self.error is not None):
            msg = "ok results carry no error; failed results need one"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, op: str, **data: Any) -> ServiceResult:
        return cls(ok=True, op=op, data=data)

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
