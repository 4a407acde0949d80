"""Configuration loading, schema, and defaults."""

from pyfc.config.loader import ConfigError, build_options, load_config
from pyfc.config.schema import CompareOptions, PyfcConfig

__all__ = [
    "CompareOptions",
    "ConfigError",
    "PyfcConfig",
    "build_options",
    "load_config",
]
