"""ServiceResult and ServiceError: what every CLI-facing operation returns.

INVARIANT: ``ok`` is False exactly when ``error`` is set. Locally
rejected submissions, domain rejections and transport failures all
produce ``ok=False``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for CLI-facing operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"register"``, ``"login"``, ``"theme_toggle"``).
        data: Operation-specific payload.
        notifications: Toasts that were live when the operation finished,
            as ``{"severity", "text"}`` dicts, oldest first.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    notifications: list[dict[str, str]] = Field(default_factory=list)
    error: ServiceError | None = None
