"""Antijection node: prompt injection and safety detection for automation workflows."""

from antijection_node.client import AntijectionClient
from antijection_node.credentials import (
    CREDENTIAL_DESCRIPTOR,
    AntijectionCredentials,
    EnvCredentialBackend,
)
from antijection_node.description import NODE_DESCRIPTION
from antijection_node.errors import ErrorInfo, classify_error
from antijection_node.exceptions import (
    AntijectionError,
    ApiConnectionError,
    ApiResponseError,
    NodeOperationError,
    PromptValidationError,
)
from antijection_node.models import (
    DetectionMethod,
    DetectionRequest,
    ErrorRecord,
    NodeExecutionData,
    NodeParameters,
    RuleCategory,
    RuleSettings,
)
from antijection_node.node import AntijectionNode
from antijection_node.payload import build_detection_request, parse_blocked_keywords

__version__ = "0.1.0"

__all__ = [
    "CREDENTIAL_DESCRIPTOR",
    "NODE_DESCRIPTION",
    "AntijectionClient",
    "AntijectionCredentials",
    "AntijectionError",
    "AntijectionNode",
    "ApiConnectionError",
    "ApiResponseError",
    "DetectionMethod",
    "DetectionRequest",
    "EnvCredentialBackend",
    "ErrorInfo",
    "ErrorRecord",
    "NodeExecutionData",
    "NodeOperationError",
    "NodeParameters",
    "PromptValidationError",
    "RuleCategory",
    "RuleSettings",
    "build_detection_request",
    "classify_error",
    "parse_blocked_keywords",
]
