"""NotificationQueue: ordered transient toast messages.

Entries keep insertion order. Each one expires ``ttl_ms`` after it was
pushed: a timer on the running event loop removes it, and reads prune any
entry whose deadline has passed (so expiry also holds with no loop).

INVARIANT: Removal is idempotent. Expiry and dismissal of the same id
converge on "absent"; the second removal is a no-op.
"""

from __future__ import annotations

import asyncio
import logging
import time
import uuid
from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Severity(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


DEFAULT_TTL_MS: dict[Severity, int] = {
    Severity.SUCCESS: 5000,
    Severity.ERROR: 7000,
    Severity.WARNING: 5000,
    Severity.INFO: 4000,
}


class ToastMessage(BaseModel):
    """One queued message. ``id`` is the caller's only handle."""

    model_config = {"frozen": True}

    id: str
    text: str
    severity: Severity
    ttl_ms: int
    created_at: float

    @property
    def expires_at(self) -> float:
        return self.created_at + self.ttl_ms / 1000


class NotificationQueue:
    """Per-session queue of toast messages.

    Parameters:
        ttl_ms: Default TTL per severity; missing severities use
            :data:`DEFAULT_TTL_MS`.
        clock: Monotonic clock in seconds (tests inject a fake).
    """

    def __init__(
        self,
        *,
        ttl_ms: dict[Severity, int] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_ms = {**DEFAULT_TTL_MS, **(ttl_ms or {})}
        self._clock = clock
        self._entries: dict[str, ToastMessage] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def push(self, text: str, severity: Severity | str, ttl_ms: int | None = None) -> str:
        """Queue *text* and return its id."""
        severity = Severity(severity)
        ttl = self._ttl_ms[severity] if ttl_ms is None else ttl_ms
        toast = ToastMessage(
            id=uuid.uuid4().hex,
            text=text,
            severity=severity,
            ttl_ms=ttl,
            created_at=self._clock(),
        )
        self._entries[toast.id] = toast
        self._schedule_expiry(toast)
        logger.debug("toast %s pushed (%s, %dms)", toast.id, severity, ttl)
        return toast.id

    def success(self, text: str, ttl_ms: int | None = None) -> str:
        return self.push(text, Severity.SUCCESS, ttl_ms)

    def error(self, text: str, ttl_ms: int | None = None) -> str:
        return self.push(text, Severity.ERROR, ttl_ms)

    def warning(self, text: str, ttl_ms: int | None = None) -> str:
        return self.push(text, Severity.WARNING, ttl_ms)

    def info(self, text: str, ttl_ms: int | None = None) -> str:
        return self.push(text, Severity.INFO, ttl_ms)

    def dismiss(self, toast_id: str) -> bool:
        """Remove *toast_id*. Returns False when it was already gone."""
        timer = self._timers.pop(toast_id, None)
        if timer is not None:
            timer.cancel()
        return self._entries.pop(toast_id, None) is not None

    def clear(self) -> None:
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._entries.clear()

    def messages(self) -> list[ToastMessage]:
        """Live messages, oldest first."""
        self._prune()
        return list(self._entries.values())

    def get(self, toast_id: str) -> ToastMessage | None:
        self._prune()
        return self._entries.get(toast_id)

    def __len__(self) -> int:
        return len(self.messages())

    def __contains__(self, toast_id: object) -> bool:
        return isinstance(toast_id, str) and self.get(toast_id) is not None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _schedule_expiry(self, toast: ToastMessage) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._timers[toast.id] = loop.call_later(toast.ttl_ms / 1000, self._expire, toast.id)

    def _expire(self, toast_id: str) -> None:
        self._timers.pop(toast_id, None)
        if self._entries.pop(toast_id, None) is not None:
            logger.debug("toast %s expired", toast_id)

    def _prune(self) -> None:
        now = self._clock()
        for toast_id in [t.id for t in self._entries.values() if t.expires_at <= now]:
            self.dismiss(toast_id)
