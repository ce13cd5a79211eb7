"""Shared pytest fixtures and test doubles for accountdesk tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from accountdesk.domain.outcomes import ApiResponse
from accountdesk.infrastructure.api_client import TransportFailure
from accountdesk.services.navigation import Router
from accountdesk.services.notifications import NotificationQueue


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeAccountApi:
    """Records payloads and answers with a preset response or failure.

    When ``gate`` is set, every call waits on it before answering, which
    keeps a submission in flight until the test releases it.
    """

    def __init__(
        self,
        response: ApiResponse | None = None,
        *,
        failure: TransportFailure | None = None,
    ) -> None:
        self.response = response or ApiResponse(success=True, message="")
        self.failure = failure
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.gate: asyncio.Event | None = None

    async def _answer(self, op: str, payload: dict[str, Any]) -> ApiResponse:
        self.calls.append((op, payload))
        if self.gate is not None:
            await self.gate.wait()
        if self.failure is not None:
            raise self.failure
        return self.response

    async def register_user(self, payload: dict[str, Any]) -> ApiResponse:
        return await self._answer("register", payload)

    async def login_user(self, payload: dict[str, Any]) -> ApiResponse:
        return await self._answer("login", payload)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def notifications(clock: FakeClock) -> NotificationQueue:
    return NotificationQueue(clock=clock)


@pytest.fixture
def router() -> Router:
    return Router()


@pytest.fixture
def make_api() -> type[FakeAccountApi]:
    """The fake client class, for tests that need a custom answer."""
    return FakeAccountApi


@pytest.fixture
def fake_api() -> FakeAccountApi:
    return FakeAccountApi()


@pytest.fixture
def registration_values() -> dict[str, str]:
    """A registration that passes every field rule."""
    return {
        "firstName": "Ann",
        "lastName": "Lee",
        "userName": "ann_lee",
        "email": "Ann@X.com",
        "phone": "01234567890",
        "password": "secret1",
    }


@pytest.fixture
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run from an empty temp dir with no discoverable config.

    Preferences land under ``tmp_path/prefs`` and redirects are immediate.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ACCOUNTDESK_CONFIG", raising=False)
    monkeypatch.setenv("ACCOUNTDESK_THEME__PREFERENCES_DIR", str(tmp_path / "prefs"))
    monkeypatch.setenv("ACCOUNTDESK_NAVIGATION__REDIRECT_DELAY", "0")
    return tmp_path
