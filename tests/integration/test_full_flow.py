"""End-to-end flows across several tool providers sharing one bridge"""

import asyncio

import pytest

from toolbridge import (
    BridgeConfig,
    ErrorCode,
    Tool,
    ToolBridge,
    ToolCaller,
    ToolCategory,
    ToolResult,
    use_bridge,
)
from toolbridge.tools import get_tool_definition, register_discovered_tools, tool


def install_storage_provider(bridge: ToolBridge) -> dict:
    """A provider exposing a key/value store"""
    store: dict = {}

    def put(params):
        store[params["key"]] = params["value"]
        return ToolResult.ok({"stored": params["key"]})

    def get(params):
        if params["key"] not in store:
            return ToolResult.fail(f"No value for {params['key']}")
        return store[params["key"]]

    bridge.register_function("storage.put", put, "Store a value", ToolCategory.STORAGE)
    bridge.register_function("storage.get", get, "Read a value", ToolCategory.STORAGE)
    return store


def install_profile_provider(bridge: ToolBridge) -> None:
    """A provider that depends on storage only through the bridge"""

    @tool(name="profile.rename", category=ToolCategory.AUTH, description="Rename the user")
    async def rename(name: str) -> dict:
        stored = await bridge.call_tool("storage.put", {"key": "name", "value": name})
        stored.raise_for_error()
        greeting = await bridge.call_tool("transform_case", {"text": name, "case_type": "title"})
        return {"display_name": greeting.data}

    bridge.register_tool(get_tool_definition(rename))


class TestFullFlow:
    """Test providers cooperating through a bridge"""

    @pytest.mark.asyncio
    async def test_providers_call_each_other(self, bridge):
        """Test a tool calling other tools through the same bridge"""
        register_discovered_tools(bridge)
        store = install_storage_provider(bridge)
        install_profile_provider(bridge)

        result = await bridge.call_tool("profile.rename", {"name": "ada lovelace"}, "settings")

        assert result.success is True
        assert result.data == {"display_name": "Ada Lovelace"}
        assert store == {"name": "ada lovelace"}

        logs = bridge.get_call_logs()
        assert [entry.tool_name for entry in logs] == [
            "storage.put",
            "transform_case",
            "profile.rename",
        ]
        assert logs[-1].caller == "settings"

    @pytest.mark.asyncio
    async def test_failures_stay_values(self, bridge):
        """Test every failure kind reaches the caller as a result"""
        install_storage_provider(bridge)

        async def slow(params):
            await asyncio.sleep(1)

        bridge.register_tool(Tool(name="slow", timeout=20, handler=slow))

        missing = await bridge.call_tool("storage.get", {"key": "absent"})
        bad_params = await bridge.call_tool("storage.get", {})
        timed_out = await bridge.call_tool("slow")
        unknown = await bridge.call_tool("storage.delete", {"key": "x"})

        assert missing.success is False
        assert missing.error == "No value for absent"
        assert bad_params.code == ErrorCode.HANDLER_ERROR
        assert timed_out.code == ErrorCode.TOOL_TIMEOUT
        assert unknown.code == ErrorCode.TOOL_NOT_FOUND

        stats = bridge.get_stats()
        assert stats.total_calls == 4
        assert stats.tools_by_category == {"storage": 2, "uncategorized": 1}

    @pytest.mark.asyncio
    async def test_concurrent_callers(self, bridge):
        """Test concurrent calls through ToolCaller instances"""
        install_storage_provider(bridge)
        await bridge.call_tool("storage.put", {"key": "k", "value": 42})

        callers = [ToolCaller(bridge, "storage.get", caller=f"c{i}") for i in range(5)]
        results = await asyncio.gather(*(c.call({"key": "k"}) for c in callers))

        assert all(r.success for r in results)
        assert [c.data for c in callers] == [42] * 5
        assert bridge.list_tools(ToolCategory.STORAGE)[1].call_count == 5

    @pytest.mark.asyncio
    async def test_shared_bridge(self):
        """Test code without a bridge reference reaches the shared one"""
        shared = use_bridge(BridgeConfig(max_logs=10))
        install_storage_provider(shared)

        result = await use_bridge().call_tool("storage.put", {"key": "a", "value": 1})

        assert result.success is True
        assert len(shared.get_call_logs()) == 1

    @pytest.mark.asyncio
    async def test_log_retention(self):
        """Test the call log keeps only the newest entries"""
        bridge = ToolBridge(BridgeConfig(max_logs=3))
        install_storage_provider(bridge)

        for i in range(5):
            await bridge.call_tool("storage.put", {"key": str(i), "value": i})

        assert [e.params["key"] for e in bridge.get_call_logs()] == ["2", "3", "4"]
