"""
Indexer Query Framing

GraphQL request body and response schema for the `nodeEntities`
collection served by the MMR indexer.

Each entity exposes:
- id: opaque indexer id (the indexer sorts by it, not by position)
- position: MMR position as decimal text
- hash: node hash as 0x-prefixed hex
"""

from __future__ import annotations

from typing import Any, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mmrproof.schemas.errors import TransportError


NODE_ENTITIES_QUERY = (
    "query NodeEntities($positions: [String!]!, $first: Int!) {\n"
    "  nodeEntities(first: $first, where: {position_in: $positions}) {\n"
    "    id\n"
    "    position\n"
    "    hash\n"
    "  }\n"
    "}\n"
)


class NodeEntity(BaseModel):
    """A single MMR node as stored by the indexer."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default="", description="Opaque indexer entity id")
    position: int = Field(..., ge=0, description="MMR position (decimal text on the wire)")
    hash: str = Field(..., description="0x-prefixed node hash")


class NodeEntitiesData(BaseModel):
    """The `data` object of a nodeEntities response."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    node_entities: list[NodeEntity] = Field(
        default_factory=list,
        alias="nodeEntities",
    )


class GraphQLErrorEntry(BaseModel):
    """One entry of a GraphQL `errors` array."""

    model_config = ConfigDict(extra="allow")

    message: str = ""


class NodeEntitiesResponse(BaseModel):
    """Top-level GraphQL response envelope."""

    model_config = ConfigDict(extra="ignore")

    data: NodeEntitiesData | None = None
    errors: list[GraphQLErrorEntry] = Field(default_factory=list)


def build_node_entities_request(positions: Sequence[int]) -> dict[str, Any]:
    """
    Build the GraphQL body for one batched lookup.

    Positions are sent once each, as decimal strings, in request order.
    `first` is set to the number of positions so the indexer's default
    page size never truncates the result.

    Args:
        positions: Requested MMR positions (duplicates allowed)

    Returns:
        JSON-serializable request body
    """
    unique = list(dict.fromkeys(int(p) for p in positions))
    return {
        "query": NODE_ENTITIES_QUERY,
        "variables": {
            "positions": [str(p) for p in unique],
            "first": len(unique),
        },
    }


def parse_node_entities_response(payload: Any) -> list[NodeEntity]:
    """
    Validate a decoded JSON response and return its entities.

    Entity order is whatever the indexer chose; callers must not rely on it.

    Raises:
        TransportError: If the payload carries GraphQL errors or does
            not match the expected shape
    """
    try:
        response = NodeEntitiesResponse.model_validate(payload)
    except ValidationError as e:
        raise TransportError(
            f"Unexpected indexer response shape: {e.error_count()} validation error(s)",
            details={"errors": [err["msg"] for err in e.errors()[:5]]},
        ) from e

    if response.errors:
        raise TransportError(
            f"Indexer returned errors: {response.errors[0].message}",
            details={"errors": [err.message for err in response.errors]},
        )

    if response.data is None:
        raise TransportError("Indexer response has no data")

    return response.data.node_entities


__all__ = [
    "NODE_ENTITIES_QUERY",
    "NodeEntity",
    "NodeEntitiesData",
    "NodeEntitiesResponse",
    "build_node_entities_request",
    "parse_node_entities_response",
]
