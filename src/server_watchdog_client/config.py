"""Configuration management for the Server Watchdog client."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .errors import ConfigurationError

DEFAULT_TIMEOUT_MS = 30000


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and len(value) > 0


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for a watchdog server.

    Validated once on construction; instances cannot be modified afterwards.
    ``timeout`` is expressed in milliseconds.
    """

    host: Optional[str] = None
    port: Optional[int] = None
    use_ssl: Any = None
    api_key: Optional[str] = field(default=None, repr=False)
    default_channel: Optional[str] = None
    timeout: Optional[int] = None

    def __post_init__(self):
        if not _is_non_empty_str(self.host):
            raise ConfigurationError("Invalid host")

        if not _is_int(self.port) or not 1 <= self.port <= 65535:
            raise ConfigurationError("Invalid port")

        # Numbers are accepted for use_ssl and coerced by truthiness
        if self.use_ssl is None:
            object.__setattr__(self, "use_ssl", False)
        elif isinstance(self.use_ssl, bool):
            pass
        elif isinstance(self.use_ssl, (int, float)):
            # NaN counts as false
            enabled = bool(self.use_ssl) and not math.isnan(self.use_ssl)
            object.__setattr__(self, "use_ssl", enabled)
        else:
            raise ConfigurationError("Invalid use ssl")

        if not _is_non_empty_str(self.api_key):
            raise ConfigurationError("Invalid API key")

        if not _is_non_empty_str(self.default_channel):
            raise ConfigurationError("Invalid default channel")

        if self.timeout is None:
            object.__setattr__(self, "timeout", DEFAULT_TIMEOUT_MS)
        elif not _is_int(self.timeout) or self.timeout < 1:
            raise ConfigurationError("Invalid timeout")

    @property
    def base_url(self) -> str:
        """Root URL every endpoint path is appended to."""
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.host}:{self.port}/"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ClientConfig":
        """Load configuration from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientConfig":
        """Create configuration from dictionary."""
        if not isinstance(data, Mapping):
            raise ConfigurationError("Invalid options")

        return cls(
            host=data.get("host"),
            port=data.get("port"),
            use_ssl=data.get("use_ssl"),
            api_key=data.get("api_key"),
            default_channel=data.get("default_channel"),
            timeout=data.get("timeout"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Export configuration to dictionary, with the API key masked."""
        return {
            "host": self.host,
            "port": self.port,
            "use_ssl": self.use_ssl,
            "api_key": "***",
            "default_channel": self.default_channel,
            "timeout": self.timeout,
        }
