"""Custom exceptions for antijection-node."""

from typing import Any


class AntijectionError(Exception):
    """Base exception for antijection-node."""


class ConfigError(AntijectionError):
    """Raised when there is a configuration error.

    Carries an optional file location so YAML problems point at the
    offending line.
    """

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        line: int | None = None,
        col: int | None = None,
    ) -> None:
        self.file_path = file_path
        self.line = line
        self.col = col
        full_message = message
        if file_path:
            location = f" in {file_path}"
            if line is not None:
                location += f" at line {line}"
                if col is not None:
                    location += f", column {col}"
            full_message = f"Configuration error{location}: {message}"
        super().__init__(full_message)


class CredentialNotFoundError(ConfigError):
    """Raised when the API key cannot be resolved."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Missing Antijection API key: {source} is not set")


class NodeOperationError(AntijectionError):
    """Raised when processing an input item fails and the run is aborted."""

    def __init__(self, message: str, item_index: int | None = None) -> None:
        self.item_index = item_index
        super().__init__(message)


class PromptValidationError(NodeOperationError):
    """Raised when the prompt parameter is empty or too long."""


class ApiRequestError(AntijectionError):
    """Base class for failures talking to the Antijection API."""

    status_code: int | None = None
    body: Any = None


class ApiResponseError(ApiRequestError):
    """Raised when the API answers with a non-success HTTP status."""

    def __init__(self, status_code: int, body: Any = None, message: str | None = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Request failed with status code {status_code}")


class ApiConnectionError(ApiRequestError):
    """Raised when no HTTP response was received (DNS, refused, timeout)."""
