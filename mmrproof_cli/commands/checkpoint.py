"""
CLI Checkpoint Command

Compute the MMR root and peaks at a block height.

Usage:
    mmrproof checkpoint <height> [--url URL] [--timeout N] [--json]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from mmrproof.schemas.errors import MMRProofException
from mmrproof.schemas.report import CheckpointReport

from mmrproof_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    UsageError,
    open_pipeline,
    print_error,
    runtime_config_from_args,
    wants_json,
)


logger = logging.getLogger(__name__)


def print_checkpoint_human(report: CheckpointReport) -> None:
    """Print a checkpoint in human-readable format."""
    print(f"block_height: {report.block_height}")
    print(f"leaf_position: {report.leaf_position}")
    print(f"mmr_size: {report.mmr_size}")
    print(f"mmr_root: {report.root}")
    print(f"peaks ({len(report.peaks)}):")
    for peak in report.peaks:
        print(f"  {peak.position}: {peak.hash}")


def checkpoint_cmd(args: Namespace) -> int:
    """
    Execute the checkpoint command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    output_json = wants_json(args)

    try:
        runtime = runtime_config_from_args(args)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        with open_pipeline(runtime) as pipeline:
            checkpoint = pipeline.checkpoint(args.height)
    except MMRProofException as e:
        logger.error("Checkpoint at height %d failed: %s", args.height, e.code)
        print_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    report = CheckpointReport.from_checkpoint(checkpoint)
    if output_json:
        print(report.model_dump_json(indent=2))
    else:
        print_checkpoint_human(report)
    return EXIT_SUCCESS
