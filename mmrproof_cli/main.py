"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m mmrproof_cli checkpoint <height> [--url URL] [--json]
    python -m mmrproof_cli prove <height> <verify_height> [--url URL] [--json]
    python -m mmrproof_cli schema
    python -m mmrproof_cli config --init

Environment Variables:
    MMRPROOF_INDEXER_URL        GraphQL endpoint of the indexer
    MMRPROOF_TIMEOUT            Per-request timeout in seconds (default: 30)
    MMRPROOF_HTTP_PROXY         HTTP proxy URL
    MMRPROOF_LOG_LEVEL          Log level (default: INFO)
    MMRPROOF_LOG_FILE           Optional log file
    MMRPROOF_OUTPUT_FORMAT      "human" or "json"
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from mmrproof.schemas.report import report_json_schema

from mmrproof_cli import __version__
from mmrproof_cli.commands import checkpoint, prove
from mmrproof_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from mmrproof_cli.config import get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def _add_indexer_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--url", "-u",
        type=str,
        default=None,
        help="GraphQL endpoint of the indexer (default: from config)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for each indexer request (default: from config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks for unexpected errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mmrproof",
        description="Compute MMR checkpoints and verify leaf inclusion proofs against an indexer.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./mmrproof.json or ~/.config/mmrproof/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- checkpoint command ---
    checkpoint_parser = subparsers.add_parser(
        "checkpoint",
        help="Compute the MMR root and peaks at a block height",
        description="Resolve the peaks at a block height and bag them into the MMR root.",
    )
    checkpoint_parser.add_argument(
        "height",
        type=_non_negative_int,
        help="Block height (number of leaves covered)",
    )
    _add_indexer_arguments(checkpoint_parser)
    checkpoint_parser.set_defaults(func=checkpoint.checkpoint_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Prove and verify an earlier leaf under a checkpoint",
        description="Build the checkpoint at HEIGHT, assemble the proof for leaf "
                    "VERIFY_HEIGHT and verify it against the checkpoint root.",
    )
    prove_parser.add_argument(
        "height",
        type=_non_negative_int,
        help="Block height of the checkpoint",
    )
    prove_parser.add_argument(
        "verify_height",
        type=_non_negative_int,
        help="Leaf to prove; must be less than HEIGHT",
    )
    _add_indexer_arguments(prove_parser)
    prove_parser.set_defaults(func=prove.prove_cmd)

    # --- schema command ---
    schema_parser = subparsers.add_parser(
        "schema",
        help="Print the JSON Schema of the --json reports",
    )
    schema_parser.set_defaults(func=schema_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="mmrproof.json",
        help="Path for config file (default: mmrproof.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def schema_cmd(args: argparse.Namespace) -> int:
    """Handle schema command."""
    print(json.dumps(report_json_schema(), indent=2))
    return EXIT_SUCCESS


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (MMRPROOF_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    print("Usage: mmrproof config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=proof rejected)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
