"""Base tool handler interface"""

import asyncio
import functools
import inspect
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from toolbridge.models.tools import ToolCancelledError


class CancellationToken:
    """Flag set by the dispatcher when a call is abandoned.

    Backed by a threading.Event so handlers running in worker threads can
    poll it as well as coroutines.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise ToolCancelledError once the call has been cancelled"""
        if self._event.is_set():
            raise ToolCancelledError("Tool call was cancelled")

    def wait(self, timeout: float | None = None) -> bool:
        """Block the current thread until cancelled or timeout (seconds)"""
        return self._event.wait(timeout)


class CallContext(BaseModel):
    """Context handed to a handler for one call"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    tool_name: str
    caller: str | None = None
    cancellation: CancellationToken = Field(default_factory=CancellationToken)


class ToolHandler(ABC):
    """Abstract base class for tool handlers"""

    @abstractmethod
    async def invoke(self, params: dict[str, Any], context: CallContext) -> Any:
        """Run the tool with given params"""
        pass


class SyncToolHandler(ToolHandler):
    """Base class for synchronous tool handlers that need async wrapper"""

    @abstractmethod
    def invoke_sync(self, params: dict[str, Any], context: CallContext) -> Any:
        """Run the tool synchronously"""
        pass

    async def invoke(self, params: dict[str, Any], context: CallContext) -> Any:
        """Async wrapper for sync execution"""
        # Run sync code in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.invoke_sync, params, context)


class FunctionToolHandler(ToolHandler):
    """Handler wrapping a plain callable taking (params) or (params, context)"""

    def __init__(self, func: Callable):
        self.func = func
        self.context_mode = _context_mode(func)
        self.is_async = inspect.iscoroutinefunction(func) or (
            inspect.iscoroutinefunction(getattr(func, "__call__", None))
        )

    def _bind(self, params: dict[str, Any], context: CallContext) -> Callable:
        if self.context_mode == "keyword":
            return functools.partial(self.func, params, context=context)
        if self.context_mode == "positional":
            return functools.partial(self.func, params, context)
        return functools.partial(self.func, params)

    async def invoke(self, params: dict[str, Any], context: CallContext) -> Any:
        call = self._bind(params, context)

        if self.is_async:
            return await call()

        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, call)

        # Sync callables may hand back a coroutine
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"FunctionToolHandler({name})"


def _context_mode(func: Callable) -> str | None:
    """How a callable expects the CallContext: positional, keyword or not at all"""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        return None

    params = list(sig.parameters.values())
    context_param = sig.parameters.get("context")
    if context_param is not None and context_param.kind == context_param.KEYWORD_ONLY:
        return "keyword"

    positional = [
        p for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD)
    ]
    if len(positional) >= 2:
        # An optional second argument belongs to the handler unless named context
        second = positional[1]
        if second.name == "context" or second.default is second.empty:
            return "positional"
        return None
    if any(p.kind == p.VAR_POSITIONAL for p in params):
        return "positional"
    return None


def as_handler(handler: Any) -> ToolHandler:
    """Adapt a callable into a ToolHandler"""
    if isinstance(handler, ToolHandler):
        return handler
    if callable(handler):
        return FunctionToolHandler(handler)
    raise ValueError(
        f"Tool handler must be a ToolHandler or callable, got {type(handler).__name__}"
    )
