"""
Test configuration and fixtures for tinyapp.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from tinyapp.dependencies import get_auth_service, get_url_store, get_user_store
from tinyapp.services.auth_service import AuthService
from tinyapp.services.url_service import URLService
from tinyapp.storage.strategies import InMemoryURLStore, InMemoryUserStore

# Lowest cost bcrypt accepts; keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture(scope="function")
def user_store():
    """Fresh, empty user store for each test"""
    return InMemoryUserStore()


@pytest.fixture(scope="function")
def url_store():
    """Fresh, empty URL store for each test"""
    return InMemoryURLStore()


@pytest.fixture(scope="function")
def auth_service(user_store):
    return AuthService(user_store, rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture(scope="function")
def url_service(url_store):
    return URLService(url_store)


@pytest.fixture(scope="function")
def alice(auth_service):
    """A registered user (password: alicepw)"""
    return auth_service.register_user("alice", "alice@example.com", "alicepw")


@pytest.fixture(scope="function")
def client(user_store, url_store, auth_service):
    """
    Create a test client with the stores overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_url_store] = lambda: url_store
    app.dependency_overrides[get_auth_service] = lambda: auth_service

    # Create test client
    with TestClient(app) as test_client:
        yield test_client

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def other_client(client):
    """A second browser sharing the same app and stores (separate cookies)"""
    with TestClient(app) as test_client:
        yield test_client
