"""
Runtime configuration.
"""
from .runtime import ENV_PREFIX, IndexerConfig, PipelineConfig, RuntimeConfig

__all__ = [
    "ENV_PREFIX",
    "IndexerConfig",
    "PipelineConfig",
    "RuntimeConfig",
]
