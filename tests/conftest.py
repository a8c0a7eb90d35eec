"""
Pytest configuration and shared fixtures for cel-http tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_doubles = importlib.import_module("fixtures.http_doubles")
_certs = importlib.import_module("fixtures.certs")
_tls_server = importlib.import_module("fixtures.tls_server")

FakeDispatcher = _doubles.FakeDispatcher

from celhttp.tracing import DEFAULT_MAX_SPANS, get_recorder


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def fake_dispatcher():
    """Dispatcher answering 200 with an empty JSON object."""
    return FakeDispatcher(status_code=200, body={})


@pytest.fixture
def root_ca():
    """PEM text of the primary test CA."""
    return _certs.root_ca_pem()


@pytest.fixture
def second_ca():
    """PEM text of the secondary test CA."""
    return _certs.second_ca_pem()


@pytest.fixture
def span_recorder():
    """The process-wide span recorder, emptied before and after the test."""
    recorder = get_recorder()
    recorder.clear()
    yield recorder
    recorder.clear()
    recorder.resize(DEFAULT_MAX_SPANS)


@pytest.fixture
def tls_server_url(monkeypatch):
    """Base URL of a local HTTPS server whose certificate chains to the root test CA."""
    for name in ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    with _tls_server.serve_tls() as url:
        yield url


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
