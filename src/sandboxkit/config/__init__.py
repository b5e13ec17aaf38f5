"""Configuration loading for sandboxkit."""

from sandboxkit.config.loader import ConfigError, load_config
from sandboxkit.config.models import SandboxKitConfig

__all__ = [
    "ConfigError",
    "load_config",
    "SandboxKitConfig",
]
