"""Environment variable credential backend."""

import logging
import os

from pydantic import SecretStr

from antijection_node.credentials.base import (
    DEFAULT_BASE_URL,
    AntijectionCredentials,
    CredentialBackend,
)
from antijection_node.exceptions import CredentialNotFoundError

logger = logging.getLogger(__name__)

API_KEY_ENV = "ANTIJECTION_API_KEY"
BASE_URL_ENV = "ANTIJECTION_BASE_URL"


class EnvCredentialBackend(CredentialBackend):
    """Credential backend using environment variables.

    Reads the API key from ``ANTIJECTION_API_KEY`` and, optionally, the base
    URL from ``ANTIJECTION_BASE_URL`` (defaults to the public endpoint).
    """

    def get_credentials(self) -> AntijectionCredentials:
        """Retrieve credentials from the environment.

        Raises:
            CredentialNotFoundError: If ``ANTIJECTION_API_KEY`` is not set.
        """
        logger.debug("Looking up API key (env_key=%s)", API_KEY_ENV)

        api_key = os.environ.get(API_KEY_ENV)
        if not api_key:
            raise CredentialNotFoundError(API_KEY_ENV)

        base_url = os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
        return AntijectionCredentials(api_key=SecretStr(api_key), base_url=base_url)
