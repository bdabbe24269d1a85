"""Declarative description of the ``antijectionApi`` credential type."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from antijection_node.credentials.base import DEFAULT_BASE_URL
from antijection_node.models import DetectionMethod

HEALTH_CHECK_PROMPT = "health check"


class CredentialProperty(BaseModel):
    """A field the host asks the user to fill in for the credential."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    name: str
    type: Literal["string"] = "string"
    default: str = ""
    password: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "displayName": self.display_name,
            "name": self.name,
            "type": self.type,
            "default": self.default,
        }
        if self.password:
            data["typeOptions"] = {"password": True}
        return data


class CredentialTestRequest(BaseModel):
    """Request the host issues to check that a credential works.

    ``url`` is relative to the credential's base URL.
    """

    model_config = ConfigDict(frozen=True)

    method: Literal["POST"] = "POST"
    url: str = "/v1/detect"
    body: dict[str, Any] = Field(
        default_factory=lambda: {
            "prompt": HEALTH_CHECK_PROMPT,
            "detection_method": DetectionMethod.INJECTION_GUARD.value,
        }
    )


class CredentialTestResult(BaseModel):
    """Outcome of running the credential test request."""

    status: Literal["OK", "Error"]
    message: str

    @property
    def ok(self) -> bool:
        return self.status == "OK"


class CredentialDescriptor(BaseModel):
    """Credential type metadata consumed by the host."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    documentation_url: str
    tested_by: tuple[str, ...] = ()
    properties: tuple[CredentialProperty, ...]
    test: CredentialTestRequest = Field(default_factory=CredentialTestRequest)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "documentationUrl": self.documentation_url,
            "testedBy": list(self.tested_by),
            "test": {
                "request": {
                    "baseURL": "={{$self.baseUrl}}",
                    "url": self.test.url,
                    "method": self.test.method,
                    "body": dict(self.test.body),
                },
            },
            "properties": [prop.to_dict() for prop in self.properties],
        }


CREDENTIAL_DESCRIPTOR = CredentialDescriptor(
    name="antijectionApi",
    display_name="Antijection API",
    documentation_url="https://antijection.com/docs",
    tested_by=("antijection",),
    properties=(
        CredentialProperty(display_name="API Key", name="apiKey", password=True),
        CredentialProperty(display_name="Base URL", name="baseUrl", default=DEFAULT_BASE_URL),
    ),
)
