"""
Checkpoint building and inclusion proofs against indexer-held MMRs.
"""
from .builder import Checkpoint, CheckpointBuilder
from .proofs import ProofAssembler, ProofVerifier

__all__ = [
    "Checkpoint",
    "CheckpointBuilder",
    "ProofAssembler",
    "ProofVerifier",
]
