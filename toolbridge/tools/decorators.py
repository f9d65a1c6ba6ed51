"""Tool decorator system for easy tool creation and registration"""

import asyncio
import functools
import inspect
from collections.abc import Callable
from typing import Any

from toolbridge.core.tools.handler import CallContext, ToolHandler
from toolbridge.models.tools import InvalidParamsError, Tool, ToolCategory


class DecoratedToolHandler(ToolHandler):
    """Handler for decorator-defined tools.

    Params are matched to the function's keyword arguments; keys the function
    does not declare are ignored. A parameter named ``context`` receives the
    CallContext.
    """

    def __init__(self, func: Callable):
        self.func = func
        self.signature = inspect.signature(func)
        self.is_async = inspect.iscoroutinefunction(func)

    def bind_arguments(self, params: dict[str, Any], context: CallContext) -> dict:
        """Filter params to match the function signature"""
        if not isinstance(params, dict):
            raise InvalidParamsError(
                f"Params for '{context.tool_name}' must be a mapping"
            )

        arguments = {}
        for param_name, param in self.signature.parameters.items():
            if param_name == "context":
                arguments[param_name] = context
            elif param_name in params:
                arguments[param_name] = params[param_name]
            elif param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            elif param.default is param.empty:
                raise InvalidParamsError(f"Missing required argument: {param_name}")

        return arguments

    async def invoke(self, params: dict[str, Any], context: CallContext) -> Any:
        arguments = self.bind_arguments(params, context)

        if self.is_async:
            return await self.func(**arguments)

        # Run sync code in thread pool to avoid blocking
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(self.func, **arguments)
        )

    def __repr__(self) -> str:
        return f"DecoratedToolHandler({self.func.__qualname__})"


def tool(
    name: str | None = None,
    description: str | None = None,
    category: ToolCategory | str | None = None,
    timeout: int | None = None,
) -> Callable:
    """
    Decorator to mark a function as a tool.

    Args:
        name: Tool name (defaults to function name)
        description: Tool description (defaults to first docstring line)
        category: Tool category
        timeout: Call timeout in milliseconds (defaults to the bridge's)

    Returns:
        The decorated function, unchanged but carrying its Tool definition

    Example:
        @tool(description="Add two numbers", category=ToolCategory.CUSTOM)
        def add_numbers(a: int, b: int) -> int:
            return a + b

        bridge.register_tool(get_tool_definition(add_numbers))
    """

    def decorator(func: Callable) -> Callable:
        tool_name = name or func.__name__
        tool_description = description or (
            func.__doc__.strip().split("\n")[0] if func.__doc__ else f"Execute {func.__name__}"
        )

        func._tool_definition = Tool(
            name=tool_name,
            description=tool_description,
            category=category,
            timeout=timeout,
            handler=DecoratedToolHandler(func),
        )
        func._is_tool = True

        return func

    return decorator


def get_tool_definition(func: Callable) -> Tool:
    """Get the Tool built for a decorated function"""
    if not is_tool_function(func):
        raise ValueError(f"Function {func.__name__} is not decorated with @tool")

    return func._tool_definition


def is_tool_function(func: Callable) -> bool:
    """Check if a function is decorated with @tool"""
    return getattr(func, "_is_tool", False) is True
