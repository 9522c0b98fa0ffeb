"""
CLI Prove Command

Build the checkpoint at a block height, assemble the inclusion proof for
an earlier leaf, and verify it against the checkpoint root.

Usage:
    mmrproof prove <height> <verify_height> [--url URL] [--timeout N] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from mmrproof.schemas.errors import MMRProofException
from mmrproof.schemas.report import ProofReport

from mmrproof_cli.commands.checkpoint import print_checkpoint_human
from mmrproof_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    UsageError,
    open_pipeline,
    print_error,
    runtime_config_from_args,
    wants_json,
)


logger = logging.getLogger(__name__)


def print_proof_human(report: ProofReport) -> None:
    """Print checkpoint, proof items and verdict in human-readable format."""
    print_checkpoint_human(report.checkpoint)
    proof = report.proof
    print()
    print(f"verify_height: {proof.verify_height}")
    print(f"leaf_position: {proof.leaf_position}")
    print(f"leaf_hash: {proof.leaf_hash}")
    print(f"mmr proof ({len(proof.items)} items):")
    for item in proof.items:
        print(f"  {item}")
    print(f"verified: {str(proof.verified).lower()}")


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (2 when the proof is rejected)
    """
    output_json = wants_json(args)

    try:
        runtime = runtime_config_from_args(args)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        with open_pipeline(runtime) as pipeline:
            result = pipeline.run(args.height, args.verify_height)
    except MMRProofException as e:
        logger.error(
            "Proof of leaf %d under height %d failed: %s",
            args.verify_height, args.height, e.code,
        )
        print_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    report = result.to_report()
    if output_json:
        print(report.model_dump_json(indent=2))
    else:
        print_proof_human(report)

    if result.verified:
        return EXIT_SUCCESS
    return EXIT_VERIFICATION_FAILED
