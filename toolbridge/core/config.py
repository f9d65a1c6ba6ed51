"""Configuration management and loading"""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from toolbridge.models.config import ToolBridgeSettings


class ConfigError(Exception):
    """Configuration-related errors"""

    pass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigManager:
    """Manages configuration loading and validation"""

    DEFAULT_CONFIG_PATHS = [
        Path("toolbridge.yaml"),
        Path("~/.toolbridge/config.yaml"),
        Path("~/.config/toolbridge/config.yaml"),
    ]

    # Environment variable -> (section, key, type)
    ENV_OVERRIDES = {
        "TOOLBRIDGE_ENABLE_LOGGING": ("bridge", "enable_logging", bool),
        "TOOLBRIDGE_MAX_LOGS": ("bridge", "max_logs", int),
        "TOOLBRIDGE_DEFAULT_TIMEOUT": ("bridge", "default_timeout", int),
        "TOOLBRIDGE_ENABLE_DISCOVERY": ("bridge", "enable_tool_discovery", bool),
        "TOOLBRIDGE_LOG_LEVEL": ("logging", "level", str),
    }

    def load_config(self, config_path: Path | None = None) -> ToolBridgeSettings:
        """Load configuration from file or defaults"""

        # If specific path provided, use it
        if config_path:
            if not config_path.exists():
                raise ConfigError(f"Configuration file not found: {config_path}")
            return self._load_from_file(config_path)

        # Try default paths
        for path in self.DEFAULT_CONFIG_PATHS:
            expanded_path = Path(path).expanduser()
            if expanded_path.exists():
                return self._load_from_file(expanded_path)

        return self._load_default_config()

    def _load_from_file(self, config_path: Path) -> ToolBridgeSettings:
        """Load configuration from YAML file"""
        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}

            if not isinstance(config_data, dict):
                raise ConfigError(
                    f"Invalid configuration in {config_path}: expected a mapping"
                )

            config_data = self._apply_env_overrides(config_data)
            return ToolBridgeSettings(**config_data)

        except ConfigError:
            raise
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}")
        except Exception as e:
            raise ConfigError(f"Error loading configuration from {config_path}: {e}")

    def _load_default_config(self) -> ToolBridgeSettings:
        """Load default configuration with environment overrides"""
        try:
            return ToolBridgeSettings(**self._apply_env_overrides({}))
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration from environment: {e}")

    def _apply_env_overrides(self, config_data: dict) -> dict:
        """Apply environment variable overrides"""

        for env_var, (section, key, value_type) in self.ENV_OVERRIDES.items():
            raw = os.getenv(env_var)
            if raw is None or raw == "":
                continue

            section_data = config_data.get(section) or {}
            section_data[key] = self._convert_env_value(env_var, raw, value_type)
            config_data[section] = section_data

        return config_data

    def _convert_env_value(self, env_var: str, raw: str, value_type: type):
        if value_type is bool:
            value = raw.strip().lower()
            if value in _TRUE_VALUES:
                return True
            if value in _FALSE_VALUES:
                return False
            raise ConfigError(f"{env_var} must be a boolean, got '{raw}'")

        if value_type is int:
            try:
                return int(raw)
            except ValueError:
                raise ConfigError(f"{env_var} must be an integer, got '{raw}'")

        return raw

    def save_config(self, config: ToolBridgeSettings, config_path: Path) -> None:
        """Save configuration to file"""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = config.model_dump(mode="json")

        try:
            with open(config_path, "w") as f:
                yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
        except Exception as e:
            raise ConfigError(f"Error saving configuration to {config_path}: {e}")


# Global config manager instance
config_manager = ConfigManager()
