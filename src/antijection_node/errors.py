"""Translate failures into user-facing error messages and records."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict

from antijection_node.models import ErrorRecord

_SERVER_ERROR_STATUSES = frozenset({500, 502, 503})


class ErrorInfo(BaseModel):
    """Classified failure for one item."""

    model_config = ConfigDict(frozen=True)

    message: str
    details: str = ""
    status_code: int | None = None

    @property
    def full_message(self) -> str:
        return f"{self.message}: {self.details}" if self.details else self.message

    def to_record(self) -> ErrorRecord:
        return ErrorRecord(error=self.message, details=self.details, status_code=self.status_code)


def _body_detail(body: Any) -> str | None:
    """Return the ``detail`` or ``error`` field of an error body, if any."""
    if not isinstance(body, dict):
        return None
    for key in ("detail", "error"):
        value = body.get(key)
        if value:
            return value if isinstance(value, str) else json.dumps(value)
    return None


def classify_error(exc: BaseException) -> ErrorInfo:
    """Map an exception raised while processing an item to an :class:`ErrorInfo`.

    Exceptions carrying an HTTP ``status_code`` are classified by status;
    anything else (validation errors, connection failures) keeps its own
    message.
    """
    status_code: int | None = getattr(exc, "status_code", None)
    raw_message = str(exc)

    if status_code is None:
        return ErrorInfo(message=raw_message)

    detail = _body_detail(getattr(exc, "body", None))

    if status_code == 401:
        return ErrorInfo(
            message="Authentication failed",
            details="Invalid API key. Please check your Antijection API credentials.",
            status_code=status_code,
        )
    if status_code == 403:
        return ErrorInfo(
            message="Access forbidden",
            details="Your API key does not have permission to access this resource.",
            status_code=status_code,
        )
    if status_code == 429:
        return ErrorInfo(
            message="Rate limit exceeded",
            details="You have exceeded your API rate limit or credit quota. "
            "Please upgrade your plan or wait before retrying.",
            status_code=status_code,
        )
    if status_code == 400:
        return ErrorInfo(
            message="Invalid request",
            details=detail or "The request was malformed. Check your input parameters.",
            status_code=status_code,
        )
    if status_code in _SERVER_ERROR_STATUSES:
        return ErrorInfo(
            message="Antijection API error",
            details="The Antijection service is temporarily unavailable. Please try again later.",
            status_code=status_code,
        )
    return ErrorInfo(
        message=f"HTTP {status_code} error",
        details=detail or raw_message,
        status_code=status_code,
    )
