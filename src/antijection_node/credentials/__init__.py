"""Credential type, backends and health check for the Antijection API."""

from antijection_node.credentials.base import (
    DEFAULT_BASE_URL,
    AntijectionCredentials,
    CredentialBackend,
)
from antijection_node.credentials.descriptor import (
    CREDENTIAL_DESCRIPTOR,
    CredentialDescriptor,
    CredentialTestRequest,
    CredentialTestResult,
)
from antijection_node.credentials.env import EnvCredentialBackend

__all__ = [
    "CREDENTIAL_DESCRIPTOR",
    "DEFAULT_BASE_URL",
    "AntijectionCredentials",
    "CredentialBackend",
    "CredentialDescriptor",
    "CredentialTestRequest",
    "CredentialTestResult",
    "EnvCredentialBackend",
]
