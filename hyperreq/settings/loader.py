"""Helpers for loading client configuration."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

CONFIG_ENV_VAR = "HYPERREQ_CONFIG"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "hyperreq/0.1.0"


@dataclass(slots=True, frozen=True)
class ClientSettings:
    """Transport options applied by :class:`~hyperreq.core.client.SessionClient`."""

    timeout: float | None = DEFAULT_TIMEOUT
    verify: bool = True
    user_agent: str | None = DEFAULT_USER_AGENT

    def effective_timeout(self, remaining: float | None) -> float | None:
        """Combine the configured timeout with the time left on a context."""
        candidates = [t for t in (self.timeout, remaining) if t is not None]
        return min(candidates) if candidates else None


def _config_path(explicit: str | os.PathLike[str] | None = None) -> Path | None:
    if explicit:
        return Path(explicit)
    env_value = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_value) if env_value else None


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with path.open("rb") as fp:
        return tomllib.load(fp)


def _as_timeout(value: Any) -> float | None:
    if value is None:
        return DEFAULT_TIMEOUT
    if isinstance(value, str) and value.strip().lower() in {"", "none", "off"}:
        return None
    timeout = float(value)
    return timeout if timeout > 0 else None


def load_settings(config_path: str | os.PathLike[str] | None = None) -> ClientSettings:
    """Read ``[http]`` from a TOML file, falling back to defaults when none is configured."""

    path = _config_path(config_path)
    if path is None:
        return ClientSettings()

    data = _load_toml(path)
    http_section = data.get("http", {})

    user_agent = http_section.get("user_agent", DEFAULT_USER_AGENT)
    return ClientSettings(
        timeout=_as_timeout(http_section.get("timeout")),
        verify=bool(http_section.get("verify", True)),
        user_agent=str(user_agent) if user_agent else None,
    )


__all__ = [
    "CONFIG_ENV_VAR",
    "ClientSettings",
    "load_settings",
]
