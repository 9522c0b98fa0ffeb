"""
mmrproof CLI

Command-line interface for MMR checkpoints and inclusion proofs.

Usage:
    python -m mmrproof_cli checkpoint 100 --url http://indexer/graphql
    python -m mmrproof_cli prove 100 42 --url http://indexer/graphql --json
    python -m mmrproof_cli schema
"""

__version__ = "0.1.0"
