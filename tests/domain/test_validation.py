"""Tests for field rules and pure validation."""

import pytest
from pydantic import ValidationError

from accountdesk.domain.validation import (
    ERROR_PRIORITY,
    Email,
    ErrorKind,
    FieldSpec,
    FieldState,
    FormSnapshot,
    MinLength,
    Pattern,
    Required,
    displayed_error,
    error_message,
    is_valid,
    mark_all_touched,
    validate_field,
)

NAME = FieldSpec(
    name="firstName",
    label="First name",
    rules=(Required(), MinLength(n=2), Pattern(regex="^[a-zA-Z ]*$")),
)
EMAIL = FieldSpec(name="email", label="Email", rules=(Required(), Email()), email=True)


class TestValidateField:
    @pytest.mark.parametrize("spec", [NAME, EMAIL])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_required_reports_required_only(self, spec: FieldSpec, value: str) -> None:
        errors = validate_field(spec, value)
        assert errors == {ErrorKind.REQUIRED}
        assert displayed_error(errors) is ErrorKind.REQUIRED

    def test_min_length_and_pattern_co_occur(self) -> None:
        errors = validate_field(NAME, "7")
        assert errors == {ErrorKind.MIN_LENGTH, ErrorKind.PATTERN}
        assert displayed_error(errors) is ErrorKind.MIN_LENGTH

    def test_pattern_only(self) -> None:
        assert validate_field(NAME, "Ann3") == {ErrorKind.PATTERN}

    def test_valid_value(self) -> None:
        assert validate_field(NAME, "Ann Marie") == frozenset()

    def test_pattern_must_match_whole_value(self) -> None:
        phone = FieldSpec(name="phone", label="Phone", rules=(Pattern(regex="[0-9]{11}"),))
        assert validate_field(phone, "012345678901") == {ErrorKind.PATTERN}
        assert validate_field(phone, "01234567890") == frozenset()

    @pytest.mark.parametrize(
        "value",
        ["ann@x.com", "Ann.Lee+tag@mail.example.org", "a@b"],
    )
    def test_email_accepts(self, value: str) -> None:
        assert validate_field(EMAIL, value) == frozenset()

    @pytest.mark.parametrize(
        "value", ["ann", "ann@", "@x.com", "ann@x..com", "a b@x.com", "ann@x.com\n", "ann@x.com "]
    )
    def test_email_rejects(self, value: str) -> None:
        assert validate_field(EMAIL, value) == {ErrorKind.EMAIL}

    def test_no_rules_always_valid(self) -> None:
        assert validate_field(FieldSpec(name="note", label="Note"), "") == frozenset()


class TestDisplayedError:
    def test_priority_order(self) -> None:
        assert ERROR_PRIORITY[0] is ErrorKind.REQUIRED
        assert ERROR_PRIORITY[-1] is ErrorKind.DUPLICATE

    def test_duplicate_is_lowest(self) -> None:
        assert displayed_error({ErrorKind.DUPLICATE, ErrorKind.EMAIL}) is ErrorKind.EMAIL
        assert displayed_error({ErrorKind.DUPLICATE}) is ErrorKind.DUPLICATE

    def test_empty(self) -> None:
        assert displayed_error(frozenset()) is None


class TestErrorMessage:
    def test_min_length_mentions_length(self) -> None:
        assert error_message(NAME, ErrorKind.MIN_LENGTH) == (
            "First name must be at least 2 characters"
        )

    def test_required(self) -> None:
        assert error_message(EMAIL, ErrorKind.REQUIRED) == "Email is required"

    def test_duplicate(self) -> None:
        assert "already taken" in error_message(EMAIL, ErrorKind.DUPLICATE)


class TestIsValid:
    def test_touched_does_not_matter(self) -> None:
        clean = [FieldState(name="a", touched=False), FieldState(name="b", touched=True)]
        assert is_valid(clean)

    def test_any_error_invalidates(self) -> None:
        fields = [
            FieldState(name="a", touched=True),
            FieldState(name="b", errors=frozenset({ErrorKind.PATTERN})),
        ]
        assert not is_valid(fields)

    def test_snapshot_valid_tracks_errors(self) -> None:
        snap = FormSnapshot(fields=(FieldState(name="a", value="x"),))
        assert snap.valid
        assert snap.get("a").value == "x"
        with pytest.raises(KeyError):
            snap.get("missing")


class TestMarkAllTouched:
    def test_only_touched_changes(self) -> None:
        fields = (
            FieldState(name="a", value="v", errors=frozenset({ErrorKind.REQUIRED})),
            FieldState(name="b", value="w", touched=True),
        )
        touched = mark_all_touched(fields)
        assert all(state.touched for state in touched)
        assert [s.value for s in touched] == ["v", "w"]
        assert touched[0].errors == {ErrorKind.REQUIRED}
        assert fields[0].touched is False

    def test_show_error_needs_touch(self) -> None:
        state = FieldState(name="a", errors=frozenset({ErrorKind.REQUIRED}))
        assert not state.show_error
        assert mark_all_touched([state])[0].show_error


class TestFrozen:
    def test_field_state_is_immutable(self) -> None:
        state = FieldState(name="a")
        with pytest.raises(ValidationError):
            state.touched = True  # type: ignore[misc]
