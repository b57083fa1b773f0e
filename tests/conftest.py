"""
Pytest configuration and shared fixtures for relayer tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

make_node = _common.make_node
make_session = _common.make_session
make_aat = _common.make_aat
FakeSigner = _common.FakeSigner
FakeProvider = _common.FakeProvider


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def aat():
    """Provide a default PocketAAT for tests."""
    return make_aat()


@pytest.fixture
def session():
    """Provide a session with three nodes at height 101."""
    return make_session(node_count=3)


@pytest.fixture
def signer():
    """Provide a recording signer."""
    return FakeSigner()


@pytest.fixture
def provider(session):
    """Provide a recording provider that dispatches `session`."""
    return FakeProvider(session=session)


@pytest.fixture(autouse=True)
def _clean_relayer_env(monkeypatch):
    """Keep RELAYER_* variables from the host out of the tests."""
    for name in (
        "RELAYER_DISPATCHERS",
        "RELAYER_RETRY_ATTEMPTS",
        "RELAYER_TIMEOUT_MS",
        "RELAYER_REJECT_SELF_SIGNED",
        "RELAYER_LOG_LEVEL",
        "RELAYER_PRIVATE_KEY",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
