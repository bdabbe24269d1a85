"""HTTP client for the Antijection detection API."""

from types import TracebackType
from typing import Any

import httpx
import structlog

from antijection_node.credentials.base import AntijectionCredentials
from antijection_node.credentials.descriptor import (
    CREDENTIAL_DESCRIPTOR,
    CredentialTestRequest,
    CredentialTestResult,
)
from antijection_node.errors import classify_error
from antijection_node.exceptions import (
    ApiConnectionError,
    ApiRequestError,
    ApiResponseError,
)
from antijection_node.models import DetectionRequest

logger = structlog.get_logger()


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class AntijectionClient:
    """Sync client issuing authenticated requests to ``/v1/detect``.

    The HTTP client (and with it the timeout policy) can be supplied by the
    host. When none is given, one is created with httpx defaults and closed
    together with this client. Requests are never retried.
    """

    def __init__(
        self,
        credentials: AntijectionCredentials,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            credentials: API key and base URL to use.
            http_client: Host-owned httpx client. Not closed by this class.
        """
        self._credentials = credentials
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client()

    def __enter__(self) -> "AntijectionClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._credentials.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }

    def _post(self, url: str, body: dict[str, Any]) -> Any:
        try:
            response = self._http.post(url, json=body, headers=self._headers)
        except httpx.RequestError as e:
            logger.warning("antijection_request_failed", url=url, error=str(e))
            raise ApiConnectionError(str(e) or type(e).__name__) from e

        if response.is_error:
            logger.info("antijection_error_response", url=url, status_code=response.status_code)
            raise ApiResponseError(
                status_code=response.status_code,
                body=_decode_body(response),
                message=f"Request failed with status code {response.status_code}",
            )

        try:
            return response.json()
        except ValueError:
            # Non-JSON success bodies are passed through as text
            return response.text

    def detect(self, request: DetectionRequest) -> Any:
        """Send one detection request.

        Args:
            request: The validated request body.

        Returns:
            The decoded JSON response, unchanged, or the raw text when the
            body is not JSON.

        Raises:
            ApiResponseError: If the API answers with a 4xx/5xx status.
            ApiConnectionError: If no response was received.
        """
        logger.debug(
            "antijection_detect",
            detection_method=request.detection_method.value,
            rule_settings=request.rule_settings is not None,
        )
        return self._post(self._credentials.detect_url, request.to_payload())

    def test_credentials(
        self, test_request: CredentialTestRequest | None = None
    ) -> CredentialTestResult:
        """Run the credential health check against the configured base URL."""
        test_request = test_request or CREDENTIAL_DESCRIPTOR.test
        url = f"{self._credentials.base_url}{test_request.url}"
        try:
            self._post(url, dict(test_request.body))
        except ApiRequestError as e:
            info = classify_error(e)
            return CredentialTestResult(status="Error", message=info.full_message)
        return CredentialTestResult(status="OK", message="Connection successful")
