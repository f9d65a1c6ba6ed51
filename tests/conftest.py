"""Shared test fixtures and configuration"""

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Generator

import pytest
import yaml

from toolbridge.core.bridge import ToolBridge
from toolbridge.core.context import reset_global_bridge
from toolbridge.models.config import BridgeConfig
from toolbridge.models.tools import Tool, ToolCategory, ToolResult


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files"""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def bridge_config() -> BridgeConfig:
    """Create a bridge configuration for testing"""
    return BridgeConfig(max_logs=100, default_timeout=1000)


@pytest.fixture
def bridge(bridge_config) -> ToolBridge:
    """Create an empty bridge for testing"""
    return ToolBridge(bridge_config)


@pytest.fixture
def echo_tool() -> Tool:
    """Tool returning its params as data"""

    async def handler(params):
        return ToolResult.ok(params)

    return Tool(
        name="echo",
        description="Echo params back",
        category=ToolCategory.CUSTOM,
        handler=handler,
    )


@pytest.fixture
def hanging_tool() -> Tool:
    """Tool whose handler never finishes"""

    async def handler(params):
        await asyncio.Event().wait()

    return Tool(name="hang", description="Never returns", timeout=50, handler=handler)


@pytest.fixture
def sample_config_dict() -> dict:
    """Create a sample configuration dictionary for YAML testing"""
    return {
        "bridge": {
            "enable_logging": True,
            "max_logs": 50,
            "default_timeout": 2000,
            "enable_tool_discovery": True,
        },
        "logging": {"level": "info"},
        "discovery": {"modules": ["toolbridge.tools.built_in"]},
    }


@pytest.fixture
def sample_config_yaml(temp_dir: Path, sample_config_dict: dict) -> Path:
    """Create a sample YAML config file"""
    config_path = temp_dir / "test-config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config_dict, f)
    return config_path


@pytest.fixture
def invalid_yaml_content() -> str:
    """Invalid YAML content for testing error handling"""
    return """
bridge:
  max_logs: "100
  # Missing closing quote above
  default_timeout: not_a_number
"""


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing"""

    def _mock_env(**kwargs):
        for key, value in kwargs.items():
            monkeypatch.setenv(key, value)

    return _mock_env


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep TOOLBRIDGE_* variables from the host out of tests"""
    for name in (
        "TOOLBRIDGE_ENABLE_LOGGING",
        "TOOLBRIDGE_MAX_LOGS",
        "TOOLBRIDGE_DEFAULT_TIMEOUT",
        "TOOLBRIDGE_ENABLE_DISCOVERY",
        "TOOLBRIDGE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_toolbridge_logger():
    """Undo handlers installed by configure_logging"""
    yield
    logger = logging.getLogger("toolbridge")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def reset_shared_bridge():
    """Reset the process-wide bridge between tests"""
    reset_global_bridge()
    yield
    reset_global_bridge()
