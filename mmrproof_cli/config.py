"""
CLI Configuration

Configuration management for the mmrproof CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mmrproof.config.runtime import (
    ENV_PREFIX,
    IndexerConfig,
    PipelineConfig,
    RuntimeConfig,
)


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Indexer
    indexer_url: str = ""
    timeout: float = 30.0
    proxy: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    # Pipeline policy
    require_nonempty_checkpoint: bool = True

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"

    def to_runtime_config(self) -> RuntimeConfig:
        """Convert to the library's runtime configuration."""
        return RuntimeConfig(
            indexer=IndexerConfig(
                url=self.indexer_url,
                timeout=self.timeout,
                headers=dict(self.headers),
                proxy=self.proxy,
            ),
            pipeline=PipelineConfig(
                require_nonempty_checkpoint=self.require_nonempty_checkpoint,
            ),
            log_level=self.log_level,
            log_file=self.log_file,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "indexer_url": self.indexer_url,
            "timeout": self.timeout,
            "proxy": self.proxy,
            "headers": dict(self.headers),
            "require_nonempty_checkpoint": self.require_nonempty_checkpoint,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "default_output_format": self.default_output_format,
        }


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    config.indexer_url = os.getenv(f"{ENV_PREFIX}INDEXER_URL", "")
    if os.getenv(f"{ENV_PREFIX}TIMEOUT"):
        config.timeout = float(os.getenv(f"{ENV_PREFIX}TIMEOUT", "30"))
    config.proxy = os.getenv(f"{ENV_PREFIX}HTTP_PROXY")

    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()

    config.indexer_url = data.get("indexer_url", config.indexer_url)
    config.timeout = float(data.get("timeout", config.timeout))
    config.proxy = data.get("proxy", config.proxy)
    config.headers = dict(data.get("headers", {}))

    config.require_nonempty_checkpoint = data.get(
        "require_nonempty_checkpoint", config.require_nonempty_checkpoint,
    )

    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)

    config.default_output_format = data.get(
        "default_output_format", config.default_output_format,
    )

    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        default_paths = [
            Path.cwd() / "mmrproof.json",
            Path.cwd() / ".mmrproof.json",
            Path.home() / ".config" / "mmrproof" / "config.json",
        ]
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    env_config = load_config_from_env()

    # env takes precedence, but only where it is actually set
    if os.getenv(f"{ENV_PREFIX}INDEXER_URL"):
        config.indexer_url = env_config.indexer_url
    if os.getenv(f"{ENV_PREFIX}TIMEOUT"):
        config.timeout = env_config.timeout
    if os.getenv(f"{ENV_PREFIX}HTTP_PROXY"):
        config.proxy = env_config.proxy
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = env_config.default_output_format

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "indexer_url": "http://localhost:8000/subgraphs/name/mmr",
  "timeout": 30,
  "proxy": null,
  "headers": {},
  "require_nonempty_checkpoint": true,
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human"
}
"""
