"""
Configuration management for the resource converters.

Provides type-safe configuration loading and validation with support
for multiple configuration sources and priority-based merging.
"""

from .loader import ConfigError, ConfigLoader, create_default_config, load_config
from .models import ConverterConfig, LoggingConfig, LogLevel

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "ConverterConfig",
    "LogLevel",
    "LoggingConfig",
    "create_default_config",
    "load_config",
]
