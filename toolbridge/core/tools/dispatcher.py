"""Tool call pipeline: lookup, timed invocation, statistics and logging"""

import asyncio
import inspect
import logging
import time
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from toolbridge.core.call_log import CallLog
from toolbridge.models.config import BridgeConfig
from toolbridge.models.tools import (
    CallLogEntry,
    ErrorCode,
    ToolError,
    ToolResult,
)

from .handler import CallContext, ToolHandler
from .registry import ToolEntry, ToolRegistry

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Runs tool calls against a registry, racing each handler against its timeout.

    Every call resolves to a ToolResult; handler errors, timeouts and unknown
    tool names are reported in the result rather than raised. Each call is
    appended to the call log and, when the tool exists, counted on its
    registry entry.
    """

    def __init__(self, registry: ToolRegistry, call_log: CallLog, config: BridgeConfig):
        self.registry = registry
        self.call_log = call_log
        self.config = config

    async def call_tool(
        self,
        tool_name: str,
        params: dict[str, Any] | None = None,
        caller: str | None = None,
    ) -> ToolResult:
        """Call a tool by name and return its result"""
        if params is None:
            params = {}

        entry = self.registry.get_entry(tool_name)
        if entry is None:
            error_msg = f"Tool not found: {tool_name}"
            logger.error(error_msg)
            result = ToolResult.fail(
                f"{ErrorCode.TOOL_NOT_FOUND.value}: {error_msg}",
                ErrorCode.TOOL_NOT_FOUND,
            )
            self._log_call(tool_name, params, result, 0, caller)
            return result

        start_time = time.perf_counter()
        result = await self._run_with_timeout(entry, params, caller)
        duration = (time.perf_counter() - start_time) * 1000

        self._log_call(tool_name, params, result, duration, caller)
        self.registry.record_call(entry, datetime.now())

        return result

    async def _run_with_timeout(
        self, entry: ToolEntry, params: dict[str, Any], caller: str | None
    ) -> ToolResult:
        tool = entry.tool
        timeout_ms = entry.timeout or self.config.default_timeout
        context = CallContext(tool_name=tool.name, caller=caller)

        task = asyncio.ensure_future(_invoke(tool.handler, params, context))
        try:
            await asyncio.wait({task}, timeout=timeout_ms / 1000)
        except asyncio.CancelledError:
            # The caller gave up; take the handler down with it
            context.cancellation.cancel()
            task.cancel()
            task.add_done_callback(_discard_outcome)
            raise

        # A handler that finished by the time the timer fired still wins
        if not task.done():
            logger.warning(f"Tool '{tool.name}' timed out after {timeout_ms}ms")
            context.cancellation.cancel()
            if self.config.cancel_on_timeout:
                task.cancel()
            task.add_done_callback(_discard_outcome)
            return ToolResult.fail(
                f"Tool timeout: '{tool.name}' did not finish within {timeout_ms}ms",
                ErrorCode.TOOL_TIMEOUT,
            )

        if task.cancelled():
            logger.error(f"Tool '{tool.name}' was cancelled")
            return ToolResult.fail("Tool call was cancelled", ErrorCode.HANDLER_ERROR)

        exc = task.exception()
        if exc is not None:
            return self._error_result(tool.name, exc)

        return _coerce_result(task.result())

    def _error_result(self, tool_name: str, exc: BaseException) -> ToolResult:
        error_msg = str(exc) or type(exc).__name__
        code = exc.code if isinstance(exc, ToolError) else ErrorCode.HANDLER_ERROR
        logger.error(f"Tool '{tool_name}' failed: {error_msg}")
        return ToolResult.fail(error_msg, code)

    def _log_call(
        self,
        tool_name: str,
        params: Any,
        result: ToolResult,
        duration: float,
        caller: str | None,
    ) -> None:
        self.call_log.append(
            CallLogEntry(
                tool_name=tool_name,
                params=params,
                result=result,
                duration=duration,
                timestamp=datetime.now(),
                caller=caller,
            )
        )


async def _invoke(handler: ToolHandler, params: Any, context: CallContext) -> Any:
    result = handler.invoke(params, context)
    if inspect.isawaitable(result):
        result = await result
    return result


def _coerce_result(value: Any) -> ToolResult:
    """Forward a handler's ToolResult unchanged; wrap anything else"""
    if isinstance(value, ToolResult):
        return value
    if isinstance(value, dict) and isinstance(value.get("success"), bool):
        try:
            return ToolResult.model_validate(value)
        except ValidationError:
            # A reported failure stays a failure even when malformed
            if value["success"] is False:
                return _failure_from_dict(value)
    return ToolResult.ok(value)


def _failure_from_dict(value: dict[str, Any]) -> ToolResult:
    error = value.get("error")
    try:
        code = ErrorCode(value.get("code"))
    except ValueError:
        code = ErrorCode.HANDLER_ERROR
    return ToolResult.fail(str(error) if error is not None else "Unknown error", code)


def _discard_outcome(task: asyncio.Future) -> None:
    """Consume the outcome of an abandoned handler so it is never reported"""
    if not task.cancelled():
        exc = task.exception()
        if exc is not None:
            logger.debug(f"Discarded error from abandoned tool call: {exc!r}")
