"""Tests for shared CLI helpers"""

import logging

import click
import typer

from toolbridge.cli.common import CLIOptions, create_bridge, get_options, load_settings
from toolbridge.models.config import BridgeConfig, ToolBridgeSettings


def make_context(options: CLIOptions | None = None) -> typer.Context:
    return typer.Context(click.Command("test"), obj=options)


class TestCLIHelpers:
    """Test option lookup, settings loading and bridge construction"""

    def test_options_default_without_global_callback(self):
        """Test commands run without the root callback get default options"""
        options = get_options(make_context())

        assert options == CLIOptions()

    def test_options_found_on_context(self, temp_dir):
        options = CLIOptions(config_file=temp_dir / "c.yaml", verbose=True)

        assert get_options(make_context(options)) is options

    def test_load_settings_uses_global_config(self, sample_config_yaml):
        """Test the global --config path is used when the command gives none"""
        ctx = make_context(CLIOptions(config_file=sample_config_yaml))

        settings = load_settings(ctx, setup_logging=False)

        assert settings.bridge.max_logs == 50

    def test_load_settings_without_logging(self, sample_config_yaml):
        """Test setup_logging=False leaves the logger alone"""
        load_settings(make_context(), sample_config_yaml, setup_logging=False)

        assert logging.getLogger("toolbridge").handlers == []

    def test_load_settings_verbose(self, sample_config_yaml):
        ctx = make_context(CLIOptions(verbose=True))

        load_settings(ctx, sample_config_yaml)

        assert logging.getLogger("toolbridge").level == logging.DEBUG

    def test_create_bridge_registers_built_ins(self):
        bridge = create_bridge(ToolBridgeSettings())

        assert bridge.has_tool("echo")

    def test_create_bridge_respects_discovery_flag(self):
        settings = ToolBridgeSettings(bridge=BridgeConfig(enable_tool_discovery=False))

        assert create_bridge(settings).list_tools() == []
