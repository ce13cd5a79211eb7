"""Field rules, error kinds, and pure validation over field snapshots.

Every rule is checked independently, so a field may carry several error
kinds at once. Only one of them is displayed, chosen by
:data:`ERROR_PRIORITY`.

``MinLength``, ``Pattern`` and ``Email`` skip blank values: an empty
field reports ``required`` alone.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class ErrorKind(StrEnum):
    """Kinds of field-level error."""

    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    PATTERN = "pattern"
    EMAIL = "email"
    DUPLICATE = "duplicate"


# Highest priority first.
ERROR_PRIORITY: tuple[ErrorKind, ...] = (
    ErrorKind.REQUIRED,
    ErrorKind.MIN_LENGTH,
    ErrorKind.PATTERN,
    ErrorKind.EMAIL,
    ErrorKind.DUPLICATE,
)

# Same acceptance as the browser forms library the account pages were built on.
EMAIL_REGEX = re.compile(
    r"^(?=.{1,254}$)(?=.{1,64}@)"
    r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


def _is_blank(value: str) -> bool:
    return not value.strip()


# --- Rules ---


class Required(BaseModel):
    """Value must be non-blank."""

    model_config = {"frozen": True}

    kind: Literal["required"] = "required"

    def check(self, value: str) -> ErrorKind | None:
        return ErrorKind.REQUIRED if _is_blank(value) else None


class MinLength(BaseModel):
    """Value must have at least ``n`` characters."""

    model_config = {"frozen": True}

    kind: Literal["min_length"] = "min_length"
    n: int = Field(ge=1)

    def check(self, value: str) -> ErrorKind | None:
        if _is_blank(value):
            return None
        return ErrorKind.MIN_LENGTH if len(value) < self.n else None


class Pattern(BaseModel):
    """Whole value must match ``regex``."""

    model_config = {"frozen": True}

    kind: Literal["pattern"] = "pattern"
    regex: str

    def check(self, value: str) -> ErrorKind | None:
        if _is_blank(value):
            return None
        return None if re.fullmatch(self.regex, value) else ErrorKind.PATTERN


class Email(BaseModel):
    """Value must look like an email address."""

    model_config = {"frozen": True}

    kind: Literal["email"] = "email"

    def check(self, value: str) -> ErrorKind | None:
        if _is_blank(value):
            return None
        return None if EMAIL_REGEX.fullmatch(value) else ErrorKind.EMAIL


Rule = Annotated[Required | MinLength | Pattern | Email, Field(discriminator="kind")]


# --- Field models ---


class FieldSpec(BaseModel):
    """Declared constraints for one named field.

    Attributes:
        name: Payload key (e.g. ``"firstName"``).
        label: Human label used in error messages.
        rules: Ordered rules, all evaluated on every check.
        email: Email-typed field, lowercased at submission.
    """

    model_config = {"frozen": True}

    name: str
    label: str
    rules: tuple[Rule, ...] = ()
    email: bool = False

    def min_length(self) -> int | None:
        for rule in self.rules:
            if isinstance(rule, MinLength):
                return rule.n
        return None


class FieldState(BaseModel):
    """Immutable snapshot of one field as the user sees it."""

    model_config = {"frozen": True}

    name: str
    value: str = ""
    touched: bool = False
    errors: frozenset[ErrorKind] = frozenset()

    @property
    def displayed_error(self) -> ErrorKind | None:
        return displayed_error(self.errors)

    @property
    def show_error(self) -> bool:
        """True when the field should render its error (touched and invalid)."""
        return self.touched and bool(self.errors)


class FormSnapshot(BaseModel):
    """Derived view over a set of field states."""

    model_config = {"frozen": True}

    fields: tuple[FieldState, ...]

    @property
    def valid(self) -> bool:
        return is_valid(self.fields)

    def get(self, name: str) -> FieldState:
        for state in self.fields:
            if state.name == name:
                return state
        raise KeyError(name)


# --- Pure operations ---


def validate_field(spec: FieldSpec, value: str) -> frozenset[ErrorKind]:
    """Evaluate every rule of *spec* against *value*."""
    errors: set[ErrorKind] = set()
    for rule in spec.rules:
        kind = rule.check(value)
        if kind is not None:
            errors.add(kind)
    return frozenset(errors)


def displayed_error(errors: Iterable[ErrorKind]) -> ErrorKind | None:
    """Return the highest-priority error kind, or None when there are none."""
    present = set(errors)
    for kind in ERROR_PRIORITY:
        if kind in present:
            return kind
    return None


def error_message(spec: FieldSpec, kind: ErrorKind) -> str:
    """User-facing text for *kind* on *spec*."""
    if kind == ErrorKind.REQUIRED:
        return f"{spec.label} is required"
    if kind == ErrorKind.MIN_LENGTH:
        return f"{spec.label} must be at least {spec.min_length()} characters"
    if kind == ErrorKind.PATTERN:
        return f"{spec.label} format is invalid"
    if kind == ErrorKind.EMAIL:
        return "Please enter a valid email address"
    return f"{spec.label} is already taken"


def is_valid(fields: Iterable[FieldState]) -> bool:
    """True iff no field carries an error. ``touched`` is ignored."""
    return all(not state.errors for state in fields)


def mark_all_touched(fields: Sequence[FieldState]) -> tuple[FieldState, ...]:
    """Return *fields* with ``touched=True``; values and errors unchanged."""
    return tuple(state.model_copy(update={"touched": True}) for state in fields)
