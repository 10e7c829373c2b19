"""Result envelope returned by :class:`~regform.services.registration.RegistrationService`.

The CLI renders it as text or ``--json`` and derives the exit code from
``ok``.  Field values never appear in it, only per-field status.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why a call failed: a stable ``code`` plus a readable message.

    Codes: ``UNKNOWN_FIELD``, ``VALIDATION_FAILED``.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service call.

    Attributes:
        ok: True when every field is valid.
        op: Operation name (``"validate"``).
        data: Per-field report on success.
        warnings: Plugins skipped while the form was built.
        error: Failure details; the per-field report moves to ``error.detail``.
        meta: ``{"events": [...]}`` when a notification trace was requested.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        warnings: Iterable[str] = (),
        meta: dict[str, Any] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        """Build a failed result; keyword arguments become ``error.detail``."""
        return cls(
            ok=False,
            op=op,
            warnings=list(warnings),
            error=ServiceError(code=code, message=message, detail=detail),
            meta=meta,
        )
