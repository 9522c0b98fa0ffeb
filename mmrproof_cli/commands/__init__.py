"""
CLI command modules.
"""

from mmrproof_cli.commands import checkpoint, prove

__all__ = ["checkpoint", "prove"]
