"""
Configuration loader for the resource converters.

Handles loading from multiple sources with proper priority:
Overrides > Environment Variables > Config File > Defaults
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigError
from .models import ConverterConfig


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources.

    Priority order (highest to lowest):
    1. Overrides (passed directly to methods)
    2. Environment variables (AZCONV_*)
    3. Configuration file
    4. Default values
    """

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "azure-converters"
    DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
    ENV_PREFIX = "AZCONV_"
    CONFIG_PATH_ENV = "AZCONV_CONFIG_PATH"

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration loader.

        Args:
            config_path: Path to configuration file. If None, uses default location.
        """
        self.config_path = config_path or self._get_config_path_from_env()

    @classmethod
    def _get_config_path_from_env(cls) -> Path:
        """Get configuration path from environment variable or default."""
        env_path = os.environ.get(cls.CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return cls.DEFAULT_CONFIG_FILE

    def load(self) -> ConverterConfig:
        """
        Load configuration from all sources and merge.

        Returns:
            Validated ConverterConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        try:
            config_dict: dict[str, Any] = {}

            if self.config_path.exists():
                file_config = self._load_file(self.config_path)
                config_dict = self._deep_merge(config_dict, file_config)

            env_config = self._load_from_env()
            config_dict = self._deep_merge(config_dict, env_config)

            return ConverterConfig.model_validate(config_dict)

        except ValidationError as e:
            raise ConfigError(
                f"Configuration validation failed: {e}",
                config_path=str(self.config_path),
                cause=e,
            ) from e

    def _load_file(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}", cause=e) from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}", cause=e) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping",
                config_path=str(path),
            )
        return data

    def _load_from_env(self) -> dict[str, Any]:
        """
        Load configuration from environment variables.

        Environment variable format:
        - AZCONV_STRICT_IMAGE_RESOLUTION
        - AZCONV_DEFAULT_INSTANCE_STATE
        - AZCONV_LOGGING__LEVEL

        Double underscore (__) separates nested keys.
        """
        config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX) or key == self.CONFIG_PATH_ENV:
                continue

            config_key = key[len(self.ENV_PREFIX) :].lower()
            parts = config_key.split("__")

            current = config
            for part in parts[:-1]:
                if part not in current:
                    current[part] = {}
                current = current[part]

            current[parts[-1]] = self._convert_env_value(value)

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to bool where it reads as one."""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False
        return value

    def _deep_merge(
        self, base: dict[str, Any], update: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Deep merge two dictionaries.

        Returns:
            Merged dictionary (base is not modified)
        """
        result = base.copy()

        for key, value in update.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def merge_overrides(
        self,
        config: ConverterConfig,
        overrides: dict[str, Any],
    ) -> ConverterConfig:
        """
        Merge explicit overrides into configuration.

        Overrides have highest priority. None values are ignored.

        Returns:
            New ConverterConfig with overrides applied
        """
        filtered = self._filter_none_values(overrides)

        if not filtered:
            return config

        config_dict = config.model_dump()
        config_dict = self._deep_merge(config_dict, filtered)

        try:
            return ConverterConfig.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigError(f"Configuration validation failed: {e}", cause=e) from e

    def _filter_none_values(self, data: dict[str, Any]) -> dict[str, Any]:
        """Recursively filter out None values from a dictionary."""
        result = {}
        for key, value in data.items():
            if value is None:
                continue
            elif isinstance(value, dict):
                filtered = self._filter_none_values(value)
                if filtered:
                    result[key] = filtered
            else:
                result[key] = value
        return result

    def create_default_config(self, force: bool = False) -> Path:
        """
        Create default configuration file with comments.

        Args:
            force: Overwrite existing file if True

        Returns:
            Path to created configuration file

        Raises:
            ConfigError: If file exists and force=False
        """
        if self.config_path.exists() and not force:
            raise ConfigError(
                f"Configuration file already exists at {self.config_path}. "
                "Use force=True to overwrite.",
                config_path=str(self.config_path),
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(self.config_path, "w") as f:
                f.write(DEFAULT_CONFIG_YAML)
        except OSError as e:
            raise ConfigError(
                f"Cannot write config file {self.config_path}: {e}", cause=e
            ) from e

        return self.config_path


DEFAULT_CONFIG_YAML = """\
# azure-converters configuration
# ==============================

# Raise an error when an image reference ID cannot be parsed.
# When false, the image is returned with an empty gallery variant
# and a warning is recorded on the converter.
strict_image_resolution: false

# State assigned to scale set instances that report no provisioning state
default_instance_state: Creating

logging:
  # DEBUG, INFO, WARNING or ERROR
  level: INFO

  # Render log events as JSON (false for human-readable console output)
  json_format: true
"""


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> ConverterConfig:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file
        overrides: Values to merge on top (highest priority)

    Raises:
        ConfigError: If configuration is invalid
    """
    loader = ConfigLoader(config_path)
    config = loader.load()

    if overrides:
        config = loader.merge_overrides(config, overrides)

    return config


def create_default_config(
    config_path: Optional[Path] = None,
    force: bool = False,
) -> Path:
    """Create default configuration file."""
    loader = ConfigLoader(config_path)
    return loader.create_default_config(force=force)
