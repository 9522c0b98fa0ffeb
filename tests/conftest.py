"""
Pytest configuration and shared fixtures for mmrproof tests.

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

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_mmr = importlib.import_module("fixtures.mmr_fixtures")
_indexer = importlib.import_module("fixtures.indexer_fixtures")

MMRStore = _mmr.MMRStore
FakeIndexerSession = _indexer.FakeIndexerSession
make_resolver = _indexer.make_resolver


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def store_4():
    """MMR holding leaves 0..3 (size 7, single peak at 6)."""
    return MMRStore.with_leaves(4)


@pytest.fixture
def store_32():
    """MMR holding leaves 0..31, enough for any height up to 32."""
    return MMRStore.with_leaves(32)


@pytest.fixture
def indexer_session(store_32):
    """Well-behaved indexer returning entities in opaque id order."""
    return FakeIndexerSession(store_32.hex_nodes())


@pytest.fixture
def resolver(indexer_session):
    """PositionResolver backed by the well-behaved indexer."""
    return make_resolver(indexer_session)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep MMRPROOF_* variables and config files from leaking into tests."""
    import os

    for key in list(os.environ):
        if key.startswith("MMRPROOF_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
