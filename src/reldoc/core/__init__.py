"""
Core infrastructure: configuration.
"""

from .config import CodecConfig, get_config, reset_config

__all__ = [
    "CodecConfig",
    "get_config",
    "reset_config",
]
