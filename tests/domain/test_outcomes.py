"""Tests for response parsing and outcome classification."""

import pytest
from pydantic import TypeAdapter

from accountdesk.domain.outcomes import (
    ApiResponse,
    DomainError,
    DomainErrorReason,
    Success,
    SubmissionOutcome,
    TransportError,
    classify_code,
    outcome_from_response,
)


class TestClassifyCode:
    @pytest.mark.parametrize(
        "code,reason",
        [
            (1000, DomainErrorReason.DUPLICATE_IDENTITY),
            (1, DomainErrorReason.GENERIC),
            (0, DomainErrorReason.UNKNOWN),
            (42, DomainErrorReason.UNKNOWN),
        ],
    )
    def test_reasons(self, code: int, reason: DomainErrorReason) -> None:
        assert classify_code(code) is reason


class TestApiResponse:
    def test_camel_case_alias(self) -> None:
        body = ApiResponse.model_validate(
            {"success": False, "errorCode": 1000, "message": "taken", "data": None}
        )
        assert body.error_code == 1000
        assert body.message == "taken"

    def test_defaults(self) -> None:
        body = ApiResponse.model_validate({"success": True})
        assert body.error_code == 0
        assert body.data is None


class TestOutcomeFromResponse:
    def test_success_flag_wins(self) -> None:
        outcome = outcome_from_response(ApiResponse(success=True, message="hi", data={"id": 7}))
        assert outcome == Success(message="hi", data={"id": 7})

    def test_failure_on_ok_transport(self) -> None:
        outcome = outcome_from_response(
            ApiResponse.model_validate({"success": False, "errorCode": 1000, "message": "dup"})
        )
        assert isinstance(outcome, DomainError)
        assert outcome.code == 1000
        assert outcome.reason is DomainErrorReason.DUPLICATE_IDENTITY

    def test_null_message_becomes_empty(self) -> None:
        outcome = outcome_from_response(ApiResponse(success=True, message=None))
        assert outcome.message == ""


class TestDiscriminatedUnion:
    def test_round_trip_by_kind(self) -> None:
        adapter = TypeAdapter(SubmissionOutcome)
        parsed = adapter.validate_python(
            {"kind": "transport_error", "http_status": None, "message": "down"}
        )
        assert isinstance(parsed, TransportError)
        assert parsed.http_status is None
