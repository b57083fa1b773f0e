"""
Runtime Configuration Module

Provides request options and configuration loading for the relayer.
"""

from .runtime import (
    RequestOptions,
    RuntimeConfig,
    get_default_config,
)

__all__ = [
    "RequestOptions",
    "RuntimeConfig",
    "get_default_config",
]
