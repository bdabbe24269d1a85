"""Credential model and abstract base class for credential backends."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_BASE_URL = "https://api.antijection.com"


class AntijectionCredentials(BaseModel):
    """Resolved ``antijectionApi`` credential.

    Attributes:
        api_key: Bearer token sent in the Authorization header.
        base_url: API root, without trailing slash.
    """

    api_key: SecretStr
    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=1)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v[:-1] if v.endswith("/") else v

    @property
    def detect_url(self) -> str:
        return f"{self.base_url}/v1/detect"


class CredentialBackend(ABC):
    """Abstract interface for credential storage.

    Backends are responsible for producing the API key and base URL the
    node authenticates with. Different implementations can read from
    environment variables, config files, keyrings, etc.
    """

    @abstractmethod
    def get_credentials(self) -> AntijectionCredentials:
        """Retrieve the Antijection API credentials.

        Returns:
            The resolved credentials.

        Raises:
            CredentialNotFoundError: If no API key is available.
        """
        ...
