"""Error taxonomy for the chat and upload handlers.

Every failure that reaches the HTTP boundary is a CognitiveSyncError carrying
its own status code. The FastAPI exception handler in ``api.app`` converts it
into an ``ErrorResponse`` JSON body.
"""

import re
from collections.abc import Iterable
from typing import Any

from fastapi import status

_RATE_LIMIT_INDICATORS = (
    "quota",
    "rate limit",
    "rate_limit",
    "ratelimit",
    "resource exhausted",
    "resource_exhausted",
    "too many requests",
)

_AUTH_INDICATORS = (
    "api key",
    "api_key",
    "apikey",
    "unauthorized",
    "authentication",
    "permission denied",
    "invalid key",
)

# Status codes in messages only count next to a status label or at the start
_STATUS_IN_MESSAGE = re.compile(
    r"(?:^|\b(?:error code|status code|status|http)\W{0,3})(4\d\d|5\d\d)\b",
    re.IGNORECASE,
)


class CognitiveSyncError(Exception):
    """Base class for errors surfaced to HTTP clients.

    Attributes:
        status_code: HTTP status returned to the client.
        message: Short, client-safe description.
        details: Optional extra detail (omitted from the body when None).
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: str | None = None) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class BadRequest(CognitiveSyncError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class PayloadTooLarge(CognitiveSyncError):
    """Uploaded file exceeds the size limit."""

    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    default_message = "Payload too large"


class ConfigurationError(CognitiveSyncError):
    """A required server-side setting is missing.

    The message stays generic; the operator finds the cause in the logs.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server configuration error"


class RateLimited(CognitiveSyncError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "The model provider is rate limiting requests. Please retry later."


class AuthFailure(CognitiveSyncError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "The model provider rejected the configured credentials"


class UpstreamError(CognitiveSyncError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "The model provider failed to generate a response"


def classify_upstream_error(exc: Exception, *, expose_details: bool) -> CognitiveSyncError:
    """Map an exception from the model call to the error taxonomy.

    Uses the ``status_code`` attribute when the provider SDK sets one, then a
    labelled status code in the message, then indicator phrases.

    Args:
        exc: The exception raised by the model call.
        expose_details: Include the upstream message as ``details``.

    Returns:
        RateLimited, AuthFailure or UpstreamError.
    """
    text = str(exc)
    lowered = text.lower()
    status_code = getattr(exc, "status_code", None)
    if not isinstance(status_code, int):
        match = _STATUS_IN_MESSAGE.search(text)
        status_code = int(match.group(1)) if match else None
    details = text if expose_details and text else None

    if status_code == 429 or any(marker in lowered for marker in _RATE_LIMIT_INDICATORS):
        return RateLimited(details=details)
    if status_code in (401, 403) or any(marker in lowered for marker in _AUTH_INDICATORS):
        return AuthFailure(details=details)
    return UpstreamError(details=details)


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> str:
    """Flatten pydantic/FastAPI validation errors into ``loc: msg; ...``."""
    parts = []
    for err in errors:
        location = ".".join(str(part) for part in err["loc"]) or "body"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)
