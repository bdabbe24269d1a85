"""Shared fixtures for antijection-node tests."""

import sys
from collections.abc import Callable, Iterator

import httpx
import pytest
import structlog
from pydantic import SecretStr

from antijection_node.credentials.base import AntijectionCredentials

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def _structlog_to_stderr() -> Iterator[None]:
    """Keep structlog output off stdout when tests patch out configure_logging."""
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(file=sys.stderr))
    yield
    structlog.reset_defaults()


@pytest.fixture
def credentials() -> AntijectionCredentials:
    return AntijectionCredentials(api_key=SecretStr("test-key"), base_url="https://api.test/")


@pytest.fixture
def mock_http() -> Iterator[Callable[[Handler], httpx.Client]]:
    """Factory for httpx clients whose requests are answered by a handler."""
    clients: list[httpx.Client] = []

    def _make(handler: Handler) -> httpx.Client:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
