"""
Configuration Unit Tests
Tests for mmrproof/config/runtime.py and mmrproof_cli/config.py
"""
import json
from pathlib import Path

import pytest

from mmrproof.config.runtime import RuntimeConfig
from mmrproof_cli.config import (
    CLIConfig,
    get_default_config_template,
    load_config,
    load_config_from_file,
)


class TestRuntimeConfig:
    """Tests for RuntimeConfig."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.indexer.url == ""
        assert config.indexer.timeout == 30.0
        assert config.pipeline.require_nonempty_checkpoint is True
        assert config.log_level == "INFO"

    def test_from_dict(self):
        config = RuntimeConfig.from_dict({
            "indexer": {"url": "http://x/graphql", "timeout": "12", "headers": {"A": "b"}},
            "pipeline": {"require_nonempty_checkpoint": False},
            "log_level": "DEBUG",
            "unknown": 1,
        })

        assert config.indexer.url == "http://x/graphql"
        assert config.indexer.timeout == 12.0
        assert config.indexer.headers == {"A": "b"}
        assert config.pipeline.require_nonempty_checkpoint is False
        assert config.log_level == "DEBUG"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MMRPROOF_INDEXER_URL", "http://env/graphql")
        monkeypatch.setenv("MMRPROOF_TIMEOUT", "2.5")
        monkeypatch.setenv("MMRPROOF_HTTP_PROXY", "http://proxy:8080")
        monkeypatch.setenv("MMRPROOF_LOG_LEVEL", "WARNING")

        config = RuntimeConfig.from_env()

        assert config.indexer.url == "http://env/graphql"
        assert config.indexer.timeout == 2.5
        assert config.indexer.proxy == "http://proxy:8080"
        assert config.log_level == "WARNING"

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({"indexer": {"url": "http://x"}, "log_file": "a.log"})
        assert RuntimeConfig.from_dict(config.to_dict()) == config


class TestCLIConfig:
    """Tests for CLI config loading."""

    def test_template_is_loadable(self, tmp_path):
        path = tmp_path / "mmrproof.json"
        path.write_text(get_default_config_template())

        config = load_config_from_file(path)

        assert config.indexer_url.startswith("http://")
        assert config.default_output_format == "human"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_file(tmp_path / "nope.json")

    def test_default_path_in_cwd(self, tmp_path):
        (tmp_path / "mmrproof.json").write_text(json.dumps({"indexer_url": "http://cwd"}))

        assert load_config().indexer_url == "http://cwd"

    def test_no_file_uses_defaults(self):
        assert load_config() == CLIConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"indexer_url": "http://file", "timeout": 9}))
        monkeypatch.setenv("MMRPROOF_INDEXER_URL", "http://env")
        monkeypatch.setenv("MMRPROOF_OUTPUT_FORMAT", "json")

        config = load_config(Path(path))

        assert config.indexer_url == "http://env"
        assert config.timeout == 9.0
        assert config.default_output_format == "json"

    def test_to_runtime_config(self):
        cli = CLIConfig(
            indexer_url="http://x",
            timeout=3.0,
            headers={"A": "b"},
            require_nonempty_checkpoint=False,
        )

        runtime = cli.to_runtime_config()

        assert runtime.indexer.url == "http://x"
        assert runtime.indexer.timeout == 3.0
        assert runtime.indexer.headers == {"A": "b"}
        assert runtime.pipeline.require_nonempty_checkpoint is False
