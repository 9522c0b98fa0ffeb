"""
Remote indexer access: GraphQL framing and the batched position resolver.
"""
from .query import (
    NODE_ENTITIES_QUERY,
    NodeEntity,
    NodeEntitiesResponse,
    build_node_entities_request,
    parse_node_entities_response,
)
from .resolver import PositionResolver

__all__ = [
    "NODE_ENTITIES_QUERY",
    "NodeEntity",
    "NodeEntitiesResponse",
    "build_node_entities_request",
    "parse_node_entities_response",
    "PositionResolver",
]
