"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from ntropy_cli.core.api_client import APIClient
from ntropy_cli.core.config import CLIConfig, set_config
from ntropy_cli.core.store import MemoryConfigStore, set_store

API_URL = "https://api.test/v3"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it was handed."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture(autouse=True)
def reset_globals():
    """Keep the process-wide config and store from leaking between tests."""
    set_config(None)
    set_store(None)
    yield
    set_config(None)
    set_store(None)


@pytest.fixture
def store():
    """A store holding a test API key."""
    return MemoryConfigStore({"apiKey": "test-key-123"})


@pytest.fixture
def empty_store():
    return MemoryConfigStore()


@pytest.fixture
def cli_config(tmp_path):
    return CLIConfig(base_url="https://api.test", api_prefix="/v3", config_dir=tmp_path)


@pytest.fixture
def make_transport():
    """Build a RecordingTransport from a handler function."""
    return RecordingTransport


@pytest.fixture
def make_client():
    """Build an APIClient wired to a transport."""
    clients: list[APIClient] = []

    def factory(store, transport) -> APIClient:
        client = APIClient(store, API_URL, timeout=5.0, transport=transport)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def sample_transaction():
    """A transaction as submitted for enrichment."""
    return {
        "id": "tx_1",
        "description": "Coffee",
        "amount": -4.50,
        "date": "2024-01-05",
        "entry_type": "debit",
        "currency": "USD",
        "account_holder_id": "ah_1",
    }


@pytest.fixture
def enriched_transaction(sample_transaction):
    """The same transaction as returned by the API."""
    return {
        **sample_transaction,
        "merchant": {"name": "Blue Bottle"},
        "labels": ["coffee shops", "food and drink"],
        "location": {"country": "US"},
    }
