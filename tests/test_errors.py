"""Tests for error classification."""

import pytest

from antijection_node.errors import ErrorInfo, classify_error
from antijection_node.exceptions import (
    ApiConnectionError,
    ApiResponseError,
    PromptValidationError,
)


class TestClassifyError:
    def test_401(self) -> None:
        info = classify_error(ApiResponseError(401, {"detail": "bad key"}))
        assert info.message == "Authentication failed"
        assert "Invalid API key" in info.details
        assert info.status_code == 401

    def test_403(self) -> None:
        info = classify_error(ApiResponseError(403))
        assert info.message == "Access forbidden"
        assert "permission" in info.details

    def test_429(self) -> None:
        info = classify_error(ApiResponseError(429, {"error": "slow down"}))
        assert info.message == "Rate limit exceeded"
        assert "rate limit" in info.details

    def test_400_uses_body_detail(self) -> None:
        info = classify_error(ApiResponseError(400, {"detail": "prompt is required"}))
        assert info.message == "Invalid request"
        assert info.details == "prompt is required"

    def test_400_falls_back_to_error_field(self) -> None:
        info = classify_error(ApiResponseError(400, {"error": "bad method"}))
        assert info.details == "bad method"

    def test_400_without_body(self) -> None:
        info = classify_error(ApiResponseError(400))
        assert info.details == "The request was malformed. Check your input parameters."

    def test_400_structured_detail_serialized(self) -> None:
        detail = [{"loc": ["body", "prompt"], "msg": "field required"}]
        info = classify_error(ApiResponseError(400, {"detail": detail}))
        assert "field required" in info.details

    @pytest.mark.parametrize("status", [500, 502, 503])
    def test_server_errors(self, status: int) -> None:
        info = classify_error(ApiResponseError(status, {"detail": "stack trace"}))
        assert info.message == "Antijection API error"
        assert "temporarily unavailable" in info.details
        assert info.status_code == status

    def test_other_status_uses_body(self) -> None:
        info = classify_error(ApiResponseError(404, {"detail": "Not Found"}))
        assert info.message == "HTTP 404 error"
        assert info.details == "Not Found"

    def test_other_status_falls_back_to_raw_message(self) -> None:
        info = classify_error(ApiResponseError(504))
        assert info.message == "HTTP 504 error"
        assert info.details == "Request failed with status code 504"

    def test_connection_error_keeps_message(self) -> None:
        info = classify_error(ApiConnectionError("getaddrinfo failed"))
        assert info == ErrorInfo(message="getaddrinfo failed")
        assert info.status_code is None

    def test_validation_error_keeps_message(self) -> None:
        info = classify_error(PromptValidationError("Prompt cannot be empty", item_index=0))
        assert info.message == "Prompt cannot be empty"
        assert info.details == ""


class TestErrorInfo:
    def test_full_message_with_details(self) -> None:
        info = ErrorInfo(message="Access forbidden", details="No permission.")
        assert info.full_message == "Access forbidden: No permission."

    def test_full_message_without_details(self) -> None:
        assert ErrorInfo(message="Prompt cannot be empty").full_message == "Prompt cannot be empty"

    def test_to_record_omits_missing_status(self) -> None:
        record = ErrorInfo(message="boom").to_record()
        assert record.to_json() == {"error": "boom", "details": ""}

    def test_to_record_with_status(self) -> None:
        record = ErrorInfo(message="Rate limit exceeded", details="wait", status_code=429).to_record()
        assert record.to_json() == {
            "error": "Rate limit exceeded",
            "details": "wait",
            "statusCode": 429,
        }
