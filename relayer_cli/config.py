"""
CLI Configuration

Resolves the runtime configuration and the signing key for CLI commands.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Sequence

from relayer.config.runtime import RuntimeConfig
from relayer.crypto.signer import KeyManager

PRIVATE_KEY_ENV = "RELAYER_PRIVATE_KEY"

DEFAULT_CONFIG_PATHS = (
    Path.cwd() / "relayer.yaml",
    Path.home() / ".config" / "relayer" / "config.yaml",
)


def load_config(
    config_path: Path | None = None,
    dispatchers: Optional[Sequence[str]] = None,
) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Precedence: command-line dispatchers, then environment variables, then
    the config file (explicit path or first default location found).
    """
    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        config = RuntimeConfig()
        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                config = RuntimeConfig.from_yaml(default_path)
                break

    config = config.with_env_overrides()

    if dispatchers:
        config.dispatchers = list(dispatchers)

    return config


def load_signer() -> Optional[KeyManager]:
    """Signer from RELAYER_PRIVATE_KEY, or None when it is unset."""
    private_key = os.getenv(PRIVATE_KEY_ENV)
    if not private_key:
        return None
    return KeyManager.from_private_key(private_key)
