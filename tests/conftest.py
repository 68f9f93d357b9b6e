"""
Global pytest fixtures for the credstore test suite.

Responsibilities:
    - Provide isolated in-memory Storage for direct testing
    - Provide a cheap hasher so tests are not dominated by key stretching
    - Provide a CredentialStore wired to both
    - Provide a fresh FastAPI TestClient via the app factory for integration tests

Why an app factory?
    Using `create_app(store=...)` gives each test its own store, eliminating
    cross-test state.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from credstore.hashing.hashers import PBKDF2Hasher
from credstore.manager.credential_store import CredentialStore
from credstore.storage.storage import Storage

# Low cost keeps the suite fast; production defaults are exercised in tests/nfr.
FAST_ITERATIONS = 1_000


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory dual-index storage."""
    return Storage()


@pytest.fixture
def hasher() -> PBKDF2Hasher:
    """PBKDF2-SHA256 with a low iteration count."""
    return PBKDF2Hasher(iterations=FAST_ITERATIONS)


@pytest.fixture
def store(storage: Storage, hasher: PBKDF2Hasher) -> CredentialStore:
    """CredentialStore wired to the storage and hasher fixtures."""
    return CredentialStore(storage=storage, hasher=hasher)


@pytest.fixture
def client(store: CredentialStore) -> TestClient:
    """Fresh TestClient around an app serving the store fixture."""
    return TestClient(create_app(store=store))
