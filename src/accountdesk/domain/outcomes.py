"""Submission outcomes, the backend response body, and domain error codes.

The backend contract reserves two codes:
- ``1000``: the email or username is already registered.
- ``1``: generic rejection.

Any other code is reported as-is and handled as unknown.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DUPLICATE_IDENTITY_CODE = 1000
GENERIC_ERROR_CODE = 1


class DomainErrorReason(StrEnum):
    """Closed classification of backend domain error codes."""

    DUPLICATE_IDENTITY = "duplicate_identity"
    GENERIC = "generic"
    UNKNOWN = "unknown"


def classify_code(code: int) -> DomainErrorReason:
    if code == DUPLICATE_IDENTITY_CODE:
        return DomainErrorReason.DUPLICATE_IDENTITY
    if code == GENERIC_ERROR_CODE:
        return DomainErrorReason.GENERIC
    return DomainErrorReason.UNKNOWN


class ApiResponse(BaseModel):
    """Body returned by the user-auth endpoints."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    success: bool
    error_code: int = Field(default=0, alias="errorCode")
    message: str | None = ""
    data: Any = None

    @field_validator("error_code", mode="before")
    @classmethod
    def _null_code_is_zero(cls, value: Any) -> Any:
        return 0 if value is None else value


class Success(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["success"] = "success"
    message: str = ""
    data: Any = None


class DomainError(BaseModel):
    """The backend accepted the request and rejected it."""

    model_config = {"frozen": True}

    kind: Literal["domain_error"] = "domain_error"
    code: int
    message: str = ""

    @property
    def reason(self) -> DomainErrorReason:
        return classify_code(self.code)


class TransportError(BaseModel):
    """The request never completed successfully at the HTTP layer."""

    model_config = {"frozen": True}

    kind: Literal["transport_error"] = "transport_error"
    http_status: int | None = None
    message: str


SubmissionOutcome = Annotated[
    Success | DomainError | TransportError, Field(discriminator="kind")
]


def outcome_from_response(response: ApiResponse) -> Success | DomainError:
    """Classify a well-formed body by its own ``success`` flag."""
    message = response.message or ""
    if response.success:
        return Success(message=message, data=response.data)
    return DomainError(code=response.error_code, message=message)
