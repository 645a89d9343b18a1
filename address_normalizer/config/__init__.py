"""Configuration loading for the address normalizer."""

from .loader import ConfigError, load_config, load_config_or_default

__all__ = [
    "ConfigError",
    "load_config",
    "load_config_or_default",
]
