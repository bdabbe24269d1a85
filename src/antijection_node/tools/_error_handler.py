"""Common error handling for MCP tools."""

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from antijection_node.exceptions import (
    ApiRequestError,
    ConfigError,
    NodeOperationError,
)

logger = logging.getLogger(__name__)


def handle_tool_errors(func: Callable[..., str]) -> Callable[..., str]:
    """Wrap an MCP tool function to turn known exceptions into messages."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        try:
            return func(*args, **kwargs)
        except NodeOperationError as e:
            return f"Detection failed: {e}"
        except ConfigError as e:
            return f"Configuration error: {e}"
        except ApiRequestError as e:
            return f"Antijection API error: {e}"
        except ValueError as e:
            return f"Invalid input: {e}"
        except Exception:
            logger.exception("Unexpected error in tool %s", func.__name__)
            return "An unexpected error occurred. Check the server logs for details."

    return wrapper
