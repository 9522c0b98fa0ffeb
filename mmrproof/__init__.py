"""
mmrproof

Checkpoints and inclusion proofs for Merkle Mountain Ranges whose node
hashes live on a remote GraphQL indexer.

Usage:
    from mmrproof import HttpClient, PositionResolver, ProofPipeline

    with HttpClient(timeout=10.0) as client:
        pipeline = ProofPipeline(PositionResolver(client, url))
        checkpoint = pipeline.checkpoint(100)
        result = pipeline.run(100, 42)
"""

__version__ = "0.1.0"

from mmrproof.checkpoint import Checkpoint, CheckpointBuilder, ProofAssembler, ProofVerifier
from mmrproof.http import HttpClient
from mmrproof.indexer import PositionResolver
from mmrproof.pipeline import PipelineResult, ProofPipeline

__all__ = [
    "Checkpoint",
    "CheckpointBuilder",
    "ProofAssembler",
    "ProofVerifier",
    "HttpClient",
    "PositionResolver",
    "PipelineResult",
    "ProofPipeline",
]
