"""Unit tests for upstream failure classification."""

import pytest

from cognitive_sync.errors import (
    AuthFailure,
    BadRequest,
    ConfigurationError,
    RateLimited,
    UpstreamError,
    classify_upstream_error,
    format_validation_errors,
)


class ProviderError(Exception):
    """Stands in for an SDK error that carries an HTTP status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TestClassifyUpstreamError:
    @pytest.mark.parametrize(
        "message",
        [
            "Error code: 429 - Too Many Requests",
            "You exceeded your current quota, please check your plan",
            "Rate limit reached for gpt-4o-mini",
            "RESOURCE_EXHAUSTED: Resource has been exhausted",
        ],
    )
    def test_rate_limit_messages(self, message: str) -> None:
        error = classify_upstream_error(Exception(message), expose_details=False)

        assert isinstance(error, RateLimited)
        assert error.status_code == 429

    @pytest.mark.parametrize(
        "message",
        [
            "Incorrect API key provided: sk-abc",
            "401 Unauthorized",
            "Authentication failed for model",
            "PERMISSION_DENIED: permission denied on resource",
        ],
    )
    def test_auth_messages(self, message: str) -> None:
        error = classify_upstream_error(Exception(message), expose_details=False)

        assert isinstance(error, AuthFailure)
        assert error.status_code == 401

    def test_status_code_attribute_wins(self) -> None:
        error = classify_upstream_error(ProviderError("slow down", 429), expose_details=False)

        assert isinstance(error, RateLimited)

    def test_forbidden_status_is_auth_failure(self) -> None:
        error = classify_upstream_error(ProviderError("nope", 403), expose_details=False)

        assert isinstance(error, AuthFailure)

    def test_other_errors_are_upstream_errors(self) -> None:
        error = classify_upstream_error(ProviderError("model overloaded", 503), expose_details=False)

        assert isinstance(error, UpstreamError)
        assert error.status_code == 500

    @pytest.mark.parametrize(
        "message",
        [
            "Context of 14290 tokens exceeds the model window",
            "Model ft-gpt-4290 is overloaded",
            "Prompt used 401 tokens before the connection dropped",
            "Request 403-b timed out",
        ],
    )
    def test_digits_outside_a_status_are_not_classified(self, message: str) -> None:
        error = classify_upstream_error(Exception(message), expose_details=False)

        assert isinstance(error, UpstreamError)

    def test_labelled_status_in_message(self) -> None:
        error = classify_upstream_error(Exception("HTTP 403 from provider"), expose_details=False)

        assert isinstance(error, AuthFailure)

    def test_details_only_when_exposed(self) -> None:
        exc = Exception("connection reset by peer")

        hidden = classify_upstream_error(exc, expose_details=False)
        shown = classify_upstream_error(exc, expose_details=True)

        assert hidden.details is None
        assert shown.details == "connection reset by peer"

    def test_messages_are_generic(self) -> None:
        error = classify_upstream_error(Exception("Incorrect API key provided: sk-abc"), expose_details=False)

        assert "sk-abc" not in error.message


class TestErrorDefaults:
    def test_status_codes(self) -> None:
        assert BadRequest().status_code == 400
        assert ConfigurationError().status_code == 500

    def test_custom_message_and_details(self) -> None:
        error = BadRequest("Invalid JSON body", details="line 1")

        assert str(error) == "Invalid JSON body"
        assert error.details == "line 1"


class TestFormatValidationErrors:
    def test_joins_location_and_message(self) -> None:
        errors = [
            {"loc": ("body", "file"), "msg": "Field required"},
            {"loc": (), "msg": "Input should be an object"},
        ]

        assert format_validation_errors(errors) == (
            "body.file: Field required; body: Input should be an object"
        )
