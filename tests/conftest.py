"""Shared fixtures."""

from typing import Callable, List

import httpx
import pytest

from algolia_search.client import SearchClient
from algolia_search.config import ENV_VARS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep configuration variables from the outer environment out of tests."""
    for name in ENV_VARS.values():
        # setenv first so monkeypatch restores the absent state at teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(requests_seen) -> Callable[..., SearchClient]:
    """Build a client whose HTTP calls are answered by a handler."""
    clients = []

    def factory(handler, application_id="myapp", api_key="secret", hosts=None):
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        clients.append(http_client)
        return SearchClient(application_id, api_key, hosts, http_client=http_client)

    yield factory

    for http_client in clients:
        http_client.close()
