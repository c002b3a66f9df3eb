"""Server configuration: per-kind deadlines and the request body limit."""

import os
from dataclasses import dataclass, fields, replace
from datetime import timedelta
from typing import Callable, Mapping, Optional, Union

from .errors import CapabilityKind

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_BODY_SIZE = 10 * 1024 * 1024
ENV_PREFIX = "MCPSERVE_"

Duration = Union[int, float, timedelta]


def get(key: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Get a configuration value by key.

    Args:
        key: Configuration key
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Configuration value or None if not set
    """
    source = os.environ if environ is None else environ
    return source.get(key)


def _seconds(value: Duration) -> float:
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def _parse(key: str, raw: str, convert: Callable):
    try:
        return convert(raw)
    except ValueError:
        raise ValueError(f"Invalid value for {key}: {raw!r}") from None


@dataclass
class ServerConfig:
    """Configuration read by the dispatcher on every request.

    Timeouts are in seconds (a ``timedelta`` is accepted too) and the body
    limit is in bytes. Set everything up before the server starts serving;
    changing it while requests are in flight is not synchronized.
    """

    tool_timeout: float = DEFAULT_TIMEOUT
    resource_timeout: float = DEFAULT_TIMEOUT
    prompt_timeout: float = DEFAULT_TIMEOUT
    max_body_size: int = DEFAULT_MAX_BODY_SIZE

    def __post_init__(self):
        for name in ("tool_timeout", "resource_timeout", "prompt_timeout"):
            seconds = _seconds(getattr(self, name))
            if not seconds > 0:
                raise ValueError(f"{name} must be positive, got {seconds}")
            setattr(self, name, seconds)
        if self.max_body_size <= 0:
            raise ValueError(f"max_body_size must be positive, got {self.max_body_size}")

    def with_tool_timeout(self, timeout: Duration) -> "ServerConfig":
        return replace(self, tool_timeout=timeout)

    def with_resource_timeout(self, timeout: Duration) -> "ServerConfig":
        return replace(self, resource_timeout=timeout)

    def with_prompt_timeout(self, timeout: Duration) -> "ServerConfig":
        return replace(self, prompt_timeout=timeout)

    def with_max_body_size(self, size: int) -> "ServerConfig":
        return replace(self, max_body_size=size)

    def timeout_for(self, kind: CapabilityKind) -> float:
        """Deadline in seconds for one invocation of the given kind."""
        return getattr(self, f"{kind.label}_timeout")

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX
    ) -> "ServerConfig":
        """Build a configuration from environment variables.

        Reads ``<prefix>TOOL_TIMEOUT``, ``<prefix>RESOURCE_TIMEOUT``,
        ``<prefix>PROMPT_TIMEOUT`` (seconds) and ``<prefix>MAX_BODY_SIZE``
        (bytes). Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set to something unparsable
        """
        values = {}
        for field in fields(cls):
            key = prefix + field.name.upper()
            raw = get(key, environ)
            if raw is None:
                continue
            convert = int if field.name == "max_body_size" else float
            values[field.name] = _parse(key, raw.strip(), convert)
        return cls(**values)
