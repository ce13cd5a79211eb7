"""AccountService: one registration or login attempt as a ServiceResult.

Wraps a :class:`SubmissionController` run for callers that are not a live
UI (the CLI): fill the form, submit once, wait for the follow-up
navigation, then report what the user would have seen.
"""

from __future__ import annotations

from typing import Any

from accountdesk.domain.forms import LOGIN_FORM, REGISTRATION_FORM, Form, FormDefinition
from accountdesk.domain.outcomes import DomainError, Success
from accountdesk.domain.validation import error_message
from accountdesk.infrastructure.api_client import AccountApi
from accountdesk.services.navigation import Router
from accountdesk.services.notifications import NotificationQueue
from accountdesk.services.result import ServiceError, ServiceResult
from accountdesk.services.submission import Outcome, SubmissionController


class AccountService:
    """Registration and login against one backend.

    Parameters:
        api: Backend client.
        notifications: Queue shared with whatever renders toasts.
        router: Receives the follow-up view on success.
        redirect_delay: Seconds before navigating after success.
    """

    def __init__(
        self,
        api: AccountApi,
        notifications: NotificationQueue,
        router: Router,
        *,
        redirect_delay: float = 0.0,
    ) -> None:
        self._api = api
        self._notifications = notifications
        self._router = router
        self._redirect_delay = redirect_delay

    async def register(self, values: dict[str, str]) -> ServiceResult:
        """Submit the registration form with *values* keyed by field name."""
        return await self._run(REGISTRATION_FORM, values)

    async def login(
        self, email: str, password: str, *, remember_me: bool = False
    ) -> ServiceResult:
        return await self._run(
            LOGIN_FORM,
            {"email": email, "password": password},
            extras={"rememberMe": remember_me},
        )

    async def _run(
        self,
        definition: FormDefinition,
        values: dict[str, str],
        *,
        extras: dict[str, Any] | None = None,
    ) -> ServiceResult:
        form = Form.filled(definition, {k: v for k, v in values.items() if v is not None})
        controller = SubmissionController(
            form,
            self._api,
            self._notifications,
            self._router,
            redirect_delay=self._redirect_delay,
            extras=extras,
        )
        try:
            outcome = await controller.submit()
            await controller.drain()
        finally:
            controller.dispose()
        return self._to_result(definition, form, outcome)

    def _to_result(
        self, definition: FormDefinition, form: Form, outcome: Outcome | None
    ) -> ServiceResult:
        toasts = [
            {"severity": t.severity.value, "text": t.text} for t in self._notifications.messages()
        ]
        op = definition.name
        if outcome is None:
            return ServiceResult(
                ok=False,
                op=op,
                notifications=toasts,
                error=ServiceError(
                    code="INVALID_FORM",
                    message=definition.messages.invalid_form,
                    detail=_field_errors(definition, form),
                ),
            )
        if isinstance(outcome, Success):
            data: dict[str, Any] = {"message": outcome.message, "navigate": self._router.current}
            if outcome.data is not None:
                data["data"] = outcome.data
            return ServiceResult(ok=True, op=op, data=data, notifications=toasts)
        if isinstance(outcome, DomainError):
            detail: dict[str, Any] = {"code": outcome.code}
            detail.update(_field_errors(definition, form))
            return ServiceResult(
                ok=False,
                op=op,
                notifications=toasts,
                error=ServiceError(
                    code=outcome.reason.value.upper(),
                    message=outcome.message or definition.messages.failure,
                    detail=detail,
                ),
            )
        return ServiceResult(
            ok=False,
            op=op,
            notifications=toasts,
            error=ServiceError(
                code="TRANSPORT_ERROR",
                message=outcome.message,
                detail={"http_status": outcome.http_status},
            ),
        )


def _field_errors(definition: FormDefinition, form: Form) -> dict[str, str]:
    """Displayed error message per invalid field."""
    errors: dict[str, str] = {}
    for state in form.fields:
        kind = state.displayed_error
        if kind is not None:
            errors[state.name] = error_message(definition.spec(state.name), kind)
    return errors
