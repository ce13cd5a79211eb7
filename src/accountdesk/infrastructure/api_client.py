"""Async HTTP client for the user-auth backend.

Every call either returns a parsed :class:`ApiResponse` or raises
:class:`TransportFailure`. Non-2xx statuses, timeouts, refused
connections and unparseable bodies are all transport failures; the
``status`` attribute is set whenever a response was received.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from accountdesk.domain.outcomes import ApiResponse

logger = logging.getLogger(__name__)

REGISTER_PATH = "/v1/user-auth/register"
LOGIN_PATH = "/v1/user-auth/login"


class TransportFailure(Exception):
    """A request that did not produce a well-formed 2xx response."""

    def __init__(self, status: int | None, detail: str) -> None:
        super().__init__(detail if status is None else f"{status}: {detail}")
        self.status = status
        self.detail = detail


class AccountApi(Protocol):
    """What the submission controller needs from a backend client."""

    async def register_user(self, payload: dict[str, Any]) -> ApiResponse: ...

    async def login_user(self, payload: dict[str, Any]) -> ApiResponse: ...


class HttpAccountApi:
    """httpx implementation of :class:`AccountApi`.

    Parameters:
        base_url: Backend root, e.g. ``http://localhost:8080/api``.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def register_user(self, payload: dict[str, Any]) -> ApiResponse:
        return await self._post(REGISTER_PATH, payload)

    async def login_user(self, payload: dict[str, Any]) -> ApiResponse:
        return await self._post(LOGIN_PATH, payload)

    async def _post(self, path: str, payload: dict[str, Any]) -> ApiResponse:
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=payload)
        except httpx.TimeoutException as exc:
            logger.debug("POST %s timed out", url)
            raise TransportFailure(None, "request timed out") from exc
        except httpx.TransportError as exc:
            logger.debug("POST %s failed: %s", url, exc)
            raise TransportFailure(None, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise TransportFailure(response.status_code, f"HTTP {response.status_code}")

        try:
            return ApiResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise TransportFailure(response.status_code, "malformed response body") from exc
