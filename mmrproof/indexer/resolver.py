"""
Batched Position Resolver

Resolves MMR node positions to hashes through one indexer request per
batch and returns them in the caller's order.

Ordering Contract (Hard Invariant):
    resolve(positions)[i].position == positions[i] for every i

The indexer returns entities sorted by its own opaque id, not by the
order positions were requested in. Every response is re-correlated
through a position -> digest map; response order is never used.
"""

from __future__ import annotations

import logging
from typing import Sequence

from mmrproof.crypto.hashing import Digest, PositionedDigest, decode_digest
from mmrproof.http.client import HttpClient, HttpError, HttpTimeoutError
from mmrproof.indexer.query import (
    NodeEntity,
    build_node_entities_request,
    parse_node_entities_response,
)
from mmrproof.schemas.errors import (
    IndexerTimeoutError,
    InvalidHeightError,
    MissingNodeError,
    TransportError,
)


logger = logging.getLogger(__name__)


class PositionResolver:
    """
    Looks up node hashes for MMR positions on a remote indexer.

    Usage:
        with HttpClient(timeout=10.0) as client:
            resolver = PositionResolver(client, "https://indexer/graphql")
            nodes = resolver.resolve([6, 9, 10])
    """

    def __init__(
        self,
        client: HttpClient,
        url: str,
        *,
        timeout: float | None = None,
    ) -> None:
        """
        Args:
            client: HTTP client used for every batched request
            url: GraphQL endpoint of the indexer
            timeout: Per-request timeout; falls back to the client default
        """
        self.client = client
        self.url = url
        self.timeout = timeout
        self.request_count = 0

    def resolve(self, positions: Sequence[int]) -> list[PositionedDigest]:
        """
        Resolve positions to (position, digest) pairs in request order.

        Duplicate positions are each answered with the same digest.

        Args:
            positions: Ordered MMR positions

        Returns:
            One PositionedDigest per requested position, same order

        Raises:
            InvalidHeightError: If a requested position is negative
            MissingNodeError: If the indexer has no node for a position
            MalformedDigestError: If a returned hash is not a 32-byte digest
            IndexerTimeoutError: If the request timed out
            TransportError: If the request failed or the response is unusable
        """
        requested = [int(p) for p in positions]
        negative = [p for p in requested if p < 0]
        if negative:
            raise InvalidHeightError(
                f"MMR positions must be non-negative, got {negative[0]}",
                details={"position": negative[0], "positions": negative},
            )
        if not requested:
            return []

        entities = self._query(requested)
        by_position = self._index_entities(entities, set(requested))

        missing = [p for p in dict.fromkeys(requested) if p not in by_position]
        if missing:
            raise MissingNodeError(missing[0], missing=missing)

        return [PositionedDigest(p, by_position[p]) for p in requested]

    def resolve_digests(self, positions: Sequence[int]) -> list[Digest]:
        """Resolve positions and return only the digests, in request order."""
        return [node.digest for node in self.resolve(positions)]

    def _index_entities(
        self,
        entities: list[NodeEntity],
        requested: set[int],
    ) -> dict[int, Digest]:
        by_position: dict[int, Digest] = {}
        unexpected: list[int] = []

        for entity in entities:
            if entity.position not in requested:
                unexpected.append(entity.position)
                continue

            digest = decode_digest(entity.hash, position=entity.position)
            existing = by_position.get(entity.position)
            if existing is not None and existing != digest:
                raise TransportError(
                    f"Indexer returned conflicting hashes for position {entity.position}",
                    details={"position": entity.position},
                )
            by_position[entity.position] = digest

        if unexpected:
            logger.warning(
                "Ignoring %d unrequested node(s) in indexer response: %s",
                len(unexpected), unexpected[:10],
            )
        return by_position

    def _query(self, positions: list[int]) -> list[NodeEntity]:
        body = build_node_entities_request(positions)
        self.request_count += 1
        logger.debug(
            "Querying %d position(s) from %s: %s",
            len(body["variables"]["positions"]), self.url, positions,
        )

        try:
            response = self.client.post(
                self.url,
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except HttpTimeoutError as e:
            raise IndexerTimeoutError(
                f"Indexer lookup timed out: {e}",
                timeout=e.timeout,
                details={"positions": positions},
            ) from e
        except HttpError as e:
            raise TransportError(
                f"Indexer request failed: {e}",
                details={"positions": positions},
            ) from e

        if not response.ok:
            raise TransportError(
                f"Indexer returned HTTP {response.status_code}",
                status_code=response.status_code,
                details={"body": response.text[:200]},
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(
                "Indexer response is not valid JSON",
                status_code=response.status_code,
                details={"body": response.text[:200]},
            ) from e

        entities = parse_node_entities_response(payload)
        logger.debug(
            "Indexer returned %d node(s) in %.0fms", len(entities), response.elapsed_ms,
        )
        return entities


__all__ = ["PositionResolver"]
