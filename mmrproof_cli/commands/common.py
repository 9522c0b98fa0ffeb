"""
Shared helpers for CLI commands: exit codes, pipeline wiring, error output.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from contextlib import contextmanager
from typing import Iterator

from mmrproof.config.runtime import RuntimeConfig
from mmrproof.http.client import HttpClient
from mmrproof.pipeline import ProofPipeline
from mmrproof.schemas.errors import MMRProofException

from mmrproof_cli.config import CLIConfig


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


class UsageError(Exception):
    """Command arguments and configuration cannot be combined into a run."""


def runtime_config_from_args(args: Namespace) -> RuntimeConfig:
    """
    Build the runtime configuration for a command.

    Command-line flags override the loaded CLI configuration.
    """
    config: CLIConfig = getattr(args, "cli_config", None) or CLIConfig()
    runtime = config.to_runtime_config()

    if getattr(args, "url", None):
        runtime.indexer.url = args.url
    if getattr(args, "timeout", None) is not None:
        runtime.indexer.timeout = args.timeout

    if not runtime.indexer.url:
        raise UsageError(
            "No indexer URL: pass --url or set indexer_url / MMRPROOF_INDEXER_URL"
        )
    return runtime


def wants_json(args: Namespace) -> bool:
    """JSON output if requested by flag or by the configured default."""
    if getattr(args, "json", False):
        return True
    config = getattr(args, "cli_config", None)
    return bool(config and config.default_output_format == "json")


@contextmanager
def open_pipeline(runtime: RuntimeConfig) -> Iterator[ProofPipeline]:
    """Yield a pipeline bound to a fresh HTTP session, closed on exit."""
    with HttpClient(
        timeout=runtime.indexer.timeout,
        default_headers=runtime.indexer.headers,
        proxy=runtime.indexer.proxy,
    ) as client:
        yield ProofPipeline.from_config(runtime, client)


def print_error(error: MMRProofException, output_json: bool) -> None:
    """Report a pipeline failure on stdout (JSON) or stderr (human)."""
    if output_json:
        print(json.dumps({"error": error.to_error_model().model_dump()}, indent=2))
        return

    print(f"Error [{error.code}]: {error.message}", file=sys.stderr)
    for key, value in error.details.items():
        print(f"  {key}: {value}", file=sys.stderr)
