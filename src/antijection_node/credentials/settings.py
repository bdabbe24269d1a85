"""Credential backend backed by the loaded settings."""

from antijection_node.config import Settings
from antijection_node.credentials.base import AntijectionCredentials, CredentialBackend
from antijection_node.credentials.env import API_KEY_ENV, EnvCredentialBackend
from antijection_node.exceptions import CredentialNotFoundError


class SettingsCredentialBackend(CredentialBackend):
    """Credential backend reading the API key from loaded settings.

    Settings already merge ANTIJECTION_* environment variables with the YAML
    config file. Falls back to the plain environment backend when no key is
    configured there.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def get_credentials(self) -> AntijectionCredentials:
        if self._settings.api_key and self._settings.api_key.get_secret_value():
            return AntijectionCredentials(
                api_key=self._settings.api_key,
                base_url=self._settings.base_url,
            )
        try:
            return EnvCredentialBackend().get_credentials()
        except CredentialNotFoundError:
            raise CredentialNotFoundError(f"{API_KEY_ENV} (or api_key in the config file)") from None
