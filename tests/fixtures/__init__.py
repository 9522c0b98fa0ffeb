"""
Test fixtures package for mmrproof tests.

Organized into layers:
- mmr_fixtures.py: in-memory MMR holding every node hash
- indexer_fixtures.py: fake GraphQL indexer session and resolver wiring

Usage:
    from fixtures import MMRStore, FakeIndexerSession, make_resolver

    def test_something():
        store = MMRStore.with_leaves(8)
        resolver = make_resolver(FakeIndexerSession(store.hex_nodes()))
"""

from .mmr_fixtures import (
    MMRStore,
    leaf_digest,
)

from .indexer_fixtures import (
    INDEXER_URL,
    FakeIndexerSession,
    FakeResponse,
    make_resolver,
)

__all__ = [
    # MMR
    "MMRStore",
    "leaf_digest",
    # Indexer
    "INDEXER_URL",
    "FakeIndexerSession",
    "FakeResponse",
    "make_resolver",
]
