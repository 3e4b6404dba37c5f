"""
Test configuration and fixtures for the slug store service.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from slugstore_app.config import Settings, get_settings
from slugstore_app.dependencies import get_kv_store, get_prober
from slugstore_app.services.reachability import ReachabilityProber
from slugstore_app.storage.strategies import InMemoryKVStore


class StubProber(ReachabilityProber):
    """Prober that answers from a flag instead of the network"""

    def __init__(self, reachable: bool = True):
        super().__init__(enabled=True)
        self.reachable = reachable
        self.probed = []

    def is_reachable(self, url: str) -> bool:
        self.probed.append(url)
        return self.reachable


@pytest.fixture(scope="function")
def test_settings():
    """Settings matching the cm8.me deployment, independent of .env"""
    return Settings(
        _env_file=None,
        host_url="https://cm8.me",
        api_token="secret",
        short_domain="cm8.me",
        kv_backend="memory",
    )


@pytest.fixture(scope="function")
def kv_store():
    """Fresh in-memory store for each test"""
    return InMemoryKVStore()


@pytest.fixture(scope="function")
def prober():
    return StubProber(reachable=True)


@pytest.fixture(scope="function")
def client(test_settings, kv_store, prober):
    """
    Create a test client with settings, store and prober overridden.
    This is the main fixture that tests will use.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_kv_store] = lambda: kv_store
    app.dependency_overrides[get_prober] = lambda: prober

    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()
