"""Unit tests for configuration management"""

from pathlib import Path

import pytest
import yaml

from toolbridge.core.config import ConfigError, ConfigManager
from toolbridge.models.config import ToolBridgeSettings


class TestConfigManager:
    """Test the ConfigManager class"""

    def test_load_default_config(self, temp_dir, monkeypatch):
        """Test loading default configuration"""
        monkeypatch.chdir(temp_dir)
        monkeypatch.setenv("HOME", str(temp_dir))

        config = ConfigManager().load_config()

        assert isinstance(config, ToolBridgeSettings)
        assert config.bridge.max_logs == 1000
        assert config.bridge.default_timeout == 5000
        assert config.logging.level == "WARNING"

    def test_load_config_from_file(self, sample_config_yaml):
        """Test loading configuration from YAML file"""
        config = ConfigManager().load_config(sample_config_yaml)

        assert config.bridge.max_logs == 50
        assert config.bridge.default_timeout == 2000
        assert config.logging.level == "INFO"
        assert config.discovery.modules == ["toolbridge.tools.built_in"]

    def test_load_config_from_default_path(self, temp_dir, sample_config_dict, monkeypatch):
        """Test toolbridge.yaml in the working directory is picked up"""
        monkeypatch.chdir(temp_dir)
        with open(temp_dir / "toolbridge.yaml", "w") as f:
            yaml.dump(sample_config_dict, f)

        config = ConfigManager().load_config()

        assert config.bridge.max_logs == 50

    def test_load_config_file_not_found(self, temp_dir):
        """Test loading configuration when file doesn't exist"""
        with pytest.raises(ConfigError, match="Configuration file not found"):
            ConfigManager().load_config(temp_dir / "nonexistent.yaml")

    def test_load_config_invalid_yaml(self, temp_dir, invalid_yaml_content):
        """Test loading configuration with invalid YAML"""
        config_file = temp_dir / "invalid.yaml"
        config_file.write_text(invalid_yaml_content)

        with pytest.raises(ConfigError, match="Invalid YAML"):
            ConfigManager().load_config(config_file)

    def test_load_config_invalid_values(self, temp_dir):
        """Test validation failures are reported as ConfigError"""
        config_file = temp_dir / "bad.yaml"
        config_file.write_text("bridge:\n  max_logs: 0\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            ConfigManager().load_config(config_file)

    def test_load_config_unknown_section(self, temp_dir):
        """Test unknown top-level sections are rejected"""
        config_file = temp_dir / "bad.yaml"
        config_file.write_text("transport:\n  port: 80\n")

        with pytest.raises(ConfigError, match="Invalid configuration"):
            ConfigManager().load_config(config_file)

    def test_load_config_not_a_mapping(self, temp_dir):
        """Test YAML that is not a mapping is rejected"""
        config_file = temp_dir / "list.yaml"
        config_file.write_text("- one\n- two\n")

        with pytest.raises(ConfigError, match="expected a mapping"):
            ConfigManager().load_config(config_file)

    def test_empty_file_uses_defaults(self, temp_dir):
        """Test an empty file yields default settings"""
        config_file = temp_dir / "empty.yaml"
        config_file.write_text("")

        config = ConfigManager().load_config(config_file)

        assert config == ToolBridgeSettings()

    def test_apply_env_overrides(self, sample_config_dict, mock_env_vars):
        """Test environment variable overrides"""
        mock_env_vars(
            TOOLBRIDGE_MAX_LOGS="10",
            TOOLBRIDGE_DEFAULT_TIMEOUT="250",
            TOOLBRIDGE_ENABLE_LOGGING="false",
            TOOLBRIDGE_LOG_LEVEL="debug",
        )

        config_data = ConfigManager()._apply_env_overrides(sample_config_dict)

        assert config_data["bridge"]["max_logs"] == 10
        assert config_data["bridge"]["default_timeout"] == 250
        assert config_data["bridge"]["enable_logging"] is False
        assert config_data["logging"]["level"] == "debug"

    def test_env_overrides_on_empty_config(self, mock_env_vars):
        """Test overrides create missing sections"""
        mock_env_vars(TOOLBRIDGE_ENABLE_DISCOVERY="no")

        config_data = ConfigManager()._apply_env_overrides({})

        assert config_data == {"bridge": {"enable_tool_discovery": False}}

    def test_env_override_file_values(self, sample_config_yaml, mock_env_vars):
        """Test environment values win over file values"""
        mock_env_vars(TOOLBRIDGE_MAX_LOGS="7")

        config = ConfigManager().load_config(sample_config_yaml)

        assert config.bridge.max_logs == 7

    @pytest.mark.parametrize(
        "env_var,value",
        [("TOOLBRIDGE_MAX_LOGS", "many"), ("TOOLBRIDGE_ENABLE_LOGGING", "maybe")],
    )
    def test_invalid_env_values(self, env_var, value, mock_env_vars):
        """Test malformed environment values raise ConfigError"""
        mock_env_vars(**{env_var: value})

        with pytest.raises(ConfigError, match=env_var):
            ConfigManager()._apply_env_overrides({})

    def test_save_and_reload(self, temp_dir):
        """Test saved configuration loads back unchanged"""
        manager = ConfigManager()
        config = ToolBridgeSettings(
            bridge={"max_logs": 25, "default_timeout": 900},
            logging={"level": "ERROR", "file": "~/toolbridge.log"},
        )
        config_path = temp_dir / "nested" / "toolbridge.yaml"

        manager.save_config(config, config_path)

        assert config_path.exists()
        assert manager.load_config(config_path) == config

    def test_default_paths(self):
        """Test the default search paths"""
        assert ConfigManager.DEFAULT_CONFIG_PATHS[0] == Path("toolbridge.yaml")
