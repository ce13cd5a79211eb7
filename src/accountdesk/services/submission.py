"""SubmissionController: single-flight form submission.

Lifecycle per attempt::

    IDLE --submit(valid)--> IN_FLIGHT --response/failure--> IDLE

A submit with an invalid snapshot never reaches the network: it marks
every field touched and pushes the invalid-form warning. A submit that
arrives while IN_FLIGHT is dropped the same way; only flows with
``warn_on_reentry`` push the warning for it.

INVARIANT: Every completed attempt produces exactly one notification.
Duplicate-identity rejections additionally mark the identity fields.
There is no automatic retry.

INVARIANT: After :meth:`SubmissionController.dispose`, a late response is
classified and returned but applies no side effect.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from enum import StrEnum
from typing import Any

import structlog
from pydantic import BaseModel

from accountdesk.domain.forms import Form, FormDefinition
from accountdesk.domain.outcomes import (
    ApiResponse,
    DomainError,
    DomainErrorReason,
    Success,
    TransportError,
    outcome_from_response,
)
from accountdesk.domain.validation import ErrorKind, FieldState
from accountdesk.infrastructure.api_client import AccountApi, TransportFailure
from accountdesk.services.navigation import Navigator
from accountdesk.services.notifications import NotificationQueue

log = structlog.get_logger(__name__)

CANNOT_CONNECT_MESSAGE = "Cannot connect to server. Please check your connection."

TRANSPORT_MESSAGES: dict[int, str] = {
    400: "Invalid request. Please check your input.",
    404: "Service not found. Please try again later.",
    500: "Server error. Please try again later.",
}

Outcome = Success | DomainError | TransportError


class SubmissionState(StrEnum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


class SubmissionRequest(BaseModel):
    """Normalized payload sent to the backend."""

    model_config = {"frozen": True}

    payload: dict[str, Any]


def build_request(
    definition: FormDefinition,
    fields: Sequence[FieldState],
    extras: dict[str, Any] | None = None,
) -> SubmissionRequest:
    """Trim every value, lowercase email-typed ones, then merge extras.

    Field states are read, never modified.
    """
    payload: dict[str, Any] = {}
    for state in fields:
        value = state.value.strip()
        if definition.spec(state.name).email:
            value = value.lower()
        payload[state.name] = value
    payload.update(definition.extras)
    if extras:
        payload.update(extras)
    return SubmissionRequest(payload=payload)


def transport_message(status: int | None, fallback: str) -> str:
    """Map an HTTP status (None when no response arrived) to user text."""
    if not status:
        return CANNOT_CONNECT_MESSAGE
    return TRANSPORT_MESSAGES.get(status, fallback)


_Operation = Callable[[dict[str, Any]], Awaitable[ApiResponse]]


def _operation(api: AccountApi, definition: FormDefinition) -> _Operation:
    if definition.name == "login":
        return api.login_user
    return api.register_user


class SubmissionController:
    """Owns the submit lifecycle for one form.

    Parameters:
        form: Snapshot holder the UI layer writes through.
        api: Backend client.
        notifications: Queue for user-facing messages.
        navigator: Receives the follow-up route after success.
        redirect_delay: Seconds between the success message and navigation.
            Zero navigates immediately.
        extras: Payload values merged over the form's own extras.
    """

    def __init__(
        self,
        form: Form,
        api: AccountApi,
        notifications: NotificationQueue,
        navigator: Navigator,
        *,
        redirect_delay: float = 2.0,
        extras: dict[str, Any] | None = None,
    ) -> None:
        self.form = form
        self._api = api
        self._notifications = notifications
        self._navigator = navigator
        self._redirect_delay = redirect_delay
        self._extras = dict(extras or {})
        self._state = SubmissionState.IDLE
        self._disposed = False
        self._navigation: asyncio.Task[None] | None = None
        self.pending_route: str | None = None

    @property
    def state(self) -> SubmissionState:
        return self._state

    @property
    def definition(self) -> FormDefinition:
        return self.form.definition

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def submit(self, fields: Sequence[FieldState] | None = None) -> Outcome | None:
        """Submit the current snapshot (or *fields*, which replace it).

        Returns the classified outcome, or None when the attempt was
        rejected locally.
        """
        if fields is not None:
            self.form.fields = tuple(fields)
        flow = self.definition.name

        if self._state is SubmissionState.IN_FLIGHT:
            self.form.touch_all()
            if self.definition.warn_on_reentry:
                self._notifications.warning(self.definition.messages.invalid_form)
            log.debug("submission.rejected", flow=flow, reason="in_flight")
            return None

        if not self.form.snapshot().valid:
            self.form.touch_all()
            self._notifications.warning(self.definition.messages.invalid_form)
            log.debug("submission.rejected", flow=flow, reason="invalid")
            return None

        request = build_request(self.definition, self.form.fields, self._extras)
        self._state = SubmissionState.IN_FLIGHT
        log.info("submission.start", flow=flow, fields=sorted(request.payload))
        try:
            outcome = await self._dispatch(request)
        finally:
            self._state = SubmissionState.IDLE

        log.info("submission.complete", flow=flow, outcome=outcome.kind)
        if self._disposed:
            log.debug("submission.stale_response", flow=flow, outcome=outcome.kind)
            return outcome
        self._apply(outcome)
        return outcome

    async def drain(self) -> None:
        """Wait for a scheduled navigation, if any."""
        if self._navigation is not None:
            await asyncio.gather(self._navigation, return_exceptions=True)

    def dispose(self) -> None:
        """Tear down: cancel pending navigation and ignore late responses."""
        self._disposed = True
        if self._navigation is not None and not self._navigation.done():
            self._navigation.cancel()
        self.pending_route = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _dispatch(self, request: SubmissionRequest) -> Outcome:
        operation = _operation(self._api, self.definition)
        try:
            response = await operation(request.payload)
        except TransportFailure as exc:
            log.info(
                "submission.transport_failure",
                flow=self.definition.name,
                status=exc.status,
                detail=exc.detail,
            )
            return TransportError(
                http_status=exc.status,
                message=transport_message(exc.status, self.definition.messages.failure),
            )
        return outcome_from_response(response)

    def _apply(self, outcome: Outcome) -> None:
        messages = self.definition.messages
        if isinstance(outcome, Success):
            self._notifications.success(outcome.message or messages.success)
            self._schedule_navigation(self.definition.success_route)
        elif isinstance(outcome, DomainError):
            reason = outcome.reason
            if reason is DomainErrorReason.DUPLICATE_IDENTITY and self.definition.identity_fields:
                self.form.add_error(self.definition.identity_fields, ErrorKind.DUPLICATE)
                self._notifications.error(outcome.message or messages.duplicate)
                return
            emit = log.warning if reason is DomainErrorReason.UNKNOWN else log.info
            emit(
                "submission.domain_error",
                flow=self.definition.name,
                reason=reason.value,
                code=outcome.code,
                message=outcome.message,
            )
            self._notifications.error(outcome.message or messages.failure)
        else:
            self._notifications.error(outcome.message)

    def _schedule_navigation(self, route: str) -> None:
        if self._redirect_delay <= 0:
            self._navigator.navigate(route)
            return
        self.pending_route = route
        self._navigation = asyncio.get_running_loop().create_task(self._navigate_later(route))

    async def _navigate_later(self, route: str) -> None:
        await asyncio.sleep(self._redirect_delay)
        if self._disposed:
            return
        self.pending_route = None
        self._navigator.navigate(route)
