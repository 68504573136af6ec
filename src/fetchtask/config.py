"""
Transport configuration.

Every request carries its own `TransportConfig`; the executor builds a fresh
transport from it per call, so there is no process-wide client to tune.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class TransportConfig:
    """
    Options handed to the transport.

    Attributes:
        timeout: read/write/pool timeout in seconds (None disables it)
        connect_timeout: connect timeout in seconds; defaults to `timeout`
        max_connections: connection pool size
        max_keepalive_connections: idle connections kept per pool
        follow_redirects: follow 3xx responses
        max_redirects: redirect hops allowed when following
        headers: headers sent with every request using this config
        chunk_size: streaming chunk size in bytes; None lets the transport pick
    """
    timeout: float | None = 60.0
    connect_timeout: float | None = None
    max_connections: int = 10
    max_keepalive_connections: int = 5
    follow_redirects: bool = True
    max_redirects: int = 20
    headers: Mapping[str, str] = field(default_factory=dict)
    chunk_size: int | None = None

    def __post_init__(self):
        """Validate the config."""
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive or None")
        if self.connect_timeout is not None and self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive or None")
        if self.max_connections < 1:
            raise ValueError("max_connections must be at least 1")
        if not 0 <= self.max_keepalive_connections <= self.max_connections:
            raise ValueError("max_keepalive_connections must be between 0 and max_connections")
        if self.max_redirects < 0:
            raise ValueError("max_redirects cannot be negative")
        if self.chunk_size is not None and self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TransportConfig":
        """Build a config from plain data, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown transport config keys: {sorted(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_env(
        cls,
        prefix: str = "FETCHTASK_",
        environ: Mapping[str, str] | None = None,
    ) -> "TransportConfig":
        """
        Build a config from environment variables.

        `FETCHTASK_TIMEOUT=5` sets `timeout`, `FETCHTASK_FOLLOW_REDIRECTS=false`
        sets `follow_redirects`, and so on. `headers` is not read from the
        environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name == "headers":
                continue
            raw = env.get(f"{prefix}{f.name.upper()}")
            if raw is not None:
                values[f.name] = _convert_env_value(raw)
        return cls(**values)


def _convert_env_value(value: str) -> Any:
    """Convert an environment variable string to the closest Python type."""
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if lowered in ("none", ""):
        return None

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value
