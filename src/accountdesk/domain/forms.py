"""Form definitions and the snapshot holder the UI layer writes through.

A :class:`FormDefinition` declares the fields of one form, the payload
extras merged at submission, the identity fields marked on a duplicate
rejection, and where to go after success. :class:`Form` holds the
current immutable snapshot; every transition replaces it wholesale.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from accountdesk.domain.validation import (
    Email,
    ErrorKind,
    FieldSpec,
    FieldState,
    FormSnapshot,
    MinLength,
    Pattern,
    Required,
    mark_all_touched,
    validate_field,
)


class FlowMessages(BaseModel):
    """User-facing texts for one submission flow."""

    model_config = {"frozen": True}

    success: str
    failure: str
    duplicate: str = "Email or username already exists."
    invalid_form: str = "Please fill all required fields correctly."


class FormDefinition(BaseModel):
    """Static description of a submittable form.

    Attributes:
        name: Flow name, also the ServiceResult op.
        fields: Ordered field specs.
        extras: Non-text payload values merged after normalization.
        identity_fields: Fields marked ``duplicate`` on a duplicate-identity
            rejection. A flow without identity fields treats that code as a
            generic failure.
        success_route: View to navigate to after a successful submission.
        warn_on_reentry: Push the invalid-form warning when a submit
            arrives while one is already in flight.
    """

    model_config = {"frozen": True}

    name: str
    fields: tuple[FieldSpec, ...]
    extras: dict[str, Any] = Field(default_factory=dict)
    identity_fields: tuple[str, ...] = ()
    success_route: str
    warn_on_reentry: bool = False
    messages: FlowMessages

    def spec(self, name: str) -> FieldSpec:
        for field_spec in self.fields:
            if field_spec.name == name:
                return field_spec
        raise KeyError(name)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


_NAME_PATTERN = "^[a-zA-Z ]*$"
_USERNAME_PATTERN = "^[a-zA-Z0-9_]*$"
_PHONE_PATTERN = "^[0-9]{11}$"

REGISTRATION_FORM = FormDefinition(
    name="register",
    fields=(
        FieldSpec(
            name="firstName",
            label="First name",
            rules=(Required(), MinLength(n=2), Pattern(regex=_NAME_PATTERN)),
        ),
        FieldSpec(
            name="lastName",
            label="Last name",
            rules=(Required(), MinLength(n=2), Pattern(regex=_NAME_PATTERN)),
        ),
        FieldSpec(
            name="userName",
            label="Username",
            rules=(Required(), MinLength(n=4), Pattern(regex=_USERNAME_PATTERN)),
        ),
        FieldSpec(name="email", label="Email", rules=(Required(), Email()), email=True),
        FieldSpec(name="phone", label="Phone", rules=(Required(), Pattern(regex=_PHONE_PATTERN))),
        FieldSpec(name="password", label="Password", rules=(Required(), MinLength(n=6))),
    ),
    extras={"isActive": True},
    identity_fields=("email", "userName"),
    success_route="/login",
    warn_on_reentry=True,
    messages=FlowMessages(
        success="Registration successful! Redirecting to login...",
        failure="Registration failed. Please try again.",
    ),
)

LOGIN_FORM = FormDefinition(
    name="login",
    fields=(
        FieldSpec(name="email", label="Email", rules=(Required(), Email()), email=True),
        FieldSpec(name="password", label="Password", rules=(Required(), MinLength(n=6))),
    ),
    extras={"rememberMe": False},
    success_route="/dashboard",
    messages=FlowMessages(
        success="Login successful!",
        failure="Login failed. Please try again.",
    ),
)


# --- Snapshot transitions ---


def initial_fields(definition: FormDefinition) -> tuple[FieldState, ...]:
    """Empty, untouched fields with their initial errors computed."""
    return tuple(
        FieldState(name=spec.name, errors=validate_field(spec, "")) for spec in definition.fields
    )


def _replace(
    fields: Sequence[FieldState], name: str, **update: Any
) -> tuple[FieldState, ...]:
    found = False
    result: list[FieldState] = []
    for state in fields:
        if state.name == name:
            found = True
            result.append(state.model_copy(update=update))
        else:
            result.append(state)
    if not found:
        raise KeyError(name)
    return tuple(result)


def with_value(
    definition: FormDefinition, fields: Sequence[FieldState], name: str, value: str
) -> tuple[FieldState, ...]:
    """New snapshot with *name* set to *value* and its errors recomputed.

    Recomputing drops any ``duplicate`` mark, so editing an identity
    field clears the server-side rejection.
    """
    errors = validate_field(definition.spec(name), value)
    return _replace(fields, name, value=value, errors=errors)


def with_touched(fields: Sequence[FieldState], name: str) -> tuple[FieldState, ...]:
    return _replace(fields, name, touched=True)


def with_error(
    fields: Sequence[FieldState], names: Sequence[str], kind: ErrorKind
) -> tuple[FieldState, ...]:
    """Merge *kind* into the error sets of *names*; other fields untouched."""
    targets = set(names)
    return tuple(
        state.model_copy(update={"errors": state.errors | {kind}})
        if state.name in targets
        else state
        for state in fields
    )


class Form:
    """Current snapshot of one form.

    The UI layer is the only writer between submissions; the submission
    controller writes through it for touch marking and duplicate errors.
    """

    def __init__(
        self, definition: FormDefinition, fields: Sequence[FieldState] | None = None
    ) -> None:
        self.definition = definition
        self.fields: tuple[FieldState, ...] = (
            tuple(fields) if fields is not None else initial_fields(definition)
        )

    @classmethod
    def filled(cls, definition: FormDefinition, values: dict[str, str]) -> Form:
        """Build a form with *values* entered (untouched) for the named fields."""
        form = cls(definition)
        for name, value in values.items():
            form.input(name, value)
        return form

    def input(self, name: str, value: str) -> None:
        self.fields = with_value(self.definition, self.fields, name, value)

    def touch(self, name: str) -> None:
        self.fields = with_touched(self.fields, name)

    def touch_all(self) -> None:
        self.fields = mark_all_touched(self.fields)

    def add_error(self, names: Sequence[str], kind: ErrorKind) -> None:
        self.fields = with_error(self.fields, names, kind)

    def snapshot(self) -> FormSnapshot:
        return FormSnapshot(fields=self.fields)

    def value(self, name: str) -> str:
        return self.snapshot().get(name).value
