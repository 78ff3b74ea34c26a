"""Settings package exports."""

from .loader import CONFIG_ENV_VAR, ClientSettings, load_settings

__all__ = [
    "CONFIG_ENV_VAR",
    "ClientSettings",
    "load_settings",
]
