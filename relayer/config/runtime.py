"""
Runtime Configuration

Request options handed to the transport and the settings the CLI and
long-lived Relayer instances start from.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from relayer.schemas.errors import ConfigurationError

load_dotenv()


@dataclass
class RequestOptions:
    """
    Options for dispatch and relay calls.

    The relayer itself never retries. `retry_attempts` is applied by the
    HTTP transport to its connection adapter; `timeout` is milliseconds.

    With the default `reject_self_signed_certificates=False` TLS
    certificates are not verified, and urllib3 emits an
    InsecureRequestWarning for every request.
    """
    retry_attempts: int = 3
    reject_self_signed_certificates: bool = False
    timeout: int = 5000

    def __post_init__(self) -> None:
        if self.retry_attempts < 0:
            raise ConfigurationError(
                f"retry_attempts must be >= 0, got {self.retry_attempts}",
                field_path="options.retry_attempts",
            )
        if self.timeout <= 0:
            raise ConfigurationError(
                f"timeout must be > 0 ms, got {self.timeout}",
                field_path="options.timeout",
            )

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer, got {value!r}", field_path=name
        ) from None


@dataclass
class RuntimeConfig:
    """
    Complete relayer configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    options: RequestOptions = field(default_factory=RequestOptions)
    dispatchers: list[str] = field(default_factory=list)
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - RELAYER_DISPATCHERS: comma separated dispatcher URLs
        - RELAYER_RETRY_ATTEMPTS: connection retries per request
        - RELAYER_TIMEOUT_MS: request timeout in milliseconds
        - RELAYER_REJECT_SELF_SIGNED: reject self-signed certificates (true/false)
        - RELAYER_LOG_LEVEL: log level name
        """
        overrides: dict[str, Any] = {}

        if os.getenv("RELAYER_DISPATCHERS"):
            overrides["dispatchers"] = [
                url.strip()
                for url in os.getenv("RELAYER_DISPATCHERS", "").split(",")
                if url.strip()
            ]

        if os.getenv("RELAYER_RETRY_ATTEMPTS"):
            overrides.setdefault("options", {})["retry_attempts"] = _parse_int(
                "RELAYER_RETRY_ATTEMPTS", os.getenv("RELAYER_RETRY_ATTEMPTS", "")
            )
        if os.getenv("RELAYER_TIMEOUT_MS"):
            overrides.setdefault("options", {})["timeout"] = _parse_int(
                "RELAYER_TIMEOUT_MS", os.getenv("RELAYER_TIMEOUT_MS", "")
            )
        if os.getenv("RELAYER_REJECT_SELF_SIGNED"):
            overrides.setdefault("options", {})["reject_self_signed_certificates"] = (
                _parse_bool(os.getenv("RELAYER_REJECT_SELF_SIGNED", "false"))
            )

        if os.getenv("RELAYER_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("RELAYER_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {path}")
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        options_data = data.get("options", {}) or {}
        try:
            options = RequestOptions(**options_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid options: {e}", field_path="options") from e

        dispatchers = data.get("dispatchers", []) or []
        if isinstance(dispatchers, str):
            dispatchers = [dispatchers]

        return cls(
            options=options,
            dispatchers=list(dispatchers),
            log_level=data.get("log_level", "INFO"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        if "options" in overrides:
            merged = {**self.to_dict()["options"], **overrides["options"]}
            new_config.options = RequestOptions(**merged)

        if "dispatchers" in overrides:
            new_config.dispatchers = overrides["dispatchers"]

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "options": {
                "retry_attempts": self.options.retry_attempts,
                "reject_self_signed_certificates": self.options.reject_self_signed_certificates,
                "timeout": self.options.timeout,
            },
            "dispatchers": list(self.dispatchers),
            "log_level": self.log_level,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Runtime configuration from the environment, loaded on first use."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config
