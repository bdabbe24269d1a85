"""Shared settings and credential helpers for tools."""

from functools import lru_cache

from antijection_node.config import Settings, get_settings_eager
from antijection_node.credentials.base import AntijectionCredentials
from antijection_node.credentials.settings import SettingsCredentialBackend


@lru_cache
def get_settings() -> Settings:
    """Get or create the settings singleton.

    Raises:
        ConfigError: If the configuration is invalid.
    """
    return get_settings_eager()


def get_credentials() -> AntijectionCredentials:
    """Resolve credentials from the configured settings.

    Raises:
        CredentialNotFoundError: If no API key is configured.
    """
    return SettingsCredentialBackend(get_settings()).get_credentials()
