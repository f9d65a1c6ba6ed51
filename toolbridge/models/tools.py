"""Tool, result and call log models"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ToolCategory(str, Enum):
    """Categories for organizing tools"""

    STORAGE = "storage"
    AUTH = "auth"
    NETWORK = "network"
    UI = "ui"
    MEDIA = "media"
    LOCATION = "location"
    NOTIFICATION = "notification"
    ANALYTICS = "analytics"
    CUSTOM = "custom"


UNCATEGORIZED = "uncategorized"


class ErrorCode(str, Enum):
    """Failure kinds reported in a ToolResult"""

    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    TOOL_TIMEOUT = "TOOL_TIMEOUT"
    INVALID_PARAMS = "INVALID_PARAMS"
    HANDLER_ERROR = "HANDLER_ERROR"


class ToolResult(BaseModel):
    """Uniform outcome of a tool call"""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: Any | None = None
    error: str | None = None
    code: ErrorCode | None = Field(
        default=None, description="Failure kind, set by the dispatcher"
    )

    @classmethod
    def ok(cls, data: Any = None) -> "ToolResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: ErrorCode | None = None) -> "ToolResult":
        return cls(success=False, error=error, code=code)

    def is_error(self, code: ErrorCode) -> bool:
        """Check whether this is a failure of the given kind"""
        return not self.success and self.code == code

    def raise_for_error(self) -> "ToolResult":
        """Raise the matching ToolError if this result is a failure"""
        if self.success:
            return self

        message = self.error or "Unknown error"
        exc_class = _ERROR_CLASSES.get(self.code, ToolExecutionError)
        raise exc_class(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization"""
        payload: dict[str, Any] = {"success": self.success}
        if self.success:
            payload["data"] = self.data
        else:
            payload["error"] = self.error
            if self.code is not None:
                payload["code"] = self.code.value
        return payload


class Tool(BaseModel):
    """A named, callable operation registered on a bridge"""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str = Field(min_length=1, description="Unique tool name")
    description: str = Field(default="", description="Tool description")
    category: ToolCategory | None = Field(default=None)
    timeout: int | None = Field(
        default=None, gt=0, description="Call timeout (milliseconds)"
    )
    handler: Any = Field(description="ToolHandler or callable backing the tool")

    @field_validator("handler")
    @classmethod
    def validate_handler(cls, v: Any) -> Any:
        # Imported here, the handler module depends on these models
        from toolbridge.core.tools.handler import as_handler

        return as_handler(v)


class ToolMetadata(BaseModel):
    """Read-only snapshot of a registered tool and its call statistics"""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    category: ToolCategory | None = None
    timeout: int
    call_count: int = 0
    last_called_at: datetime | None = None


class CallLogEntry(BaseModel):
    """Record of a single dispatch"""

    model_config = ConfigDict(frozen=True)

    tool_name: str
    params: Any = Field(default_factory=dict, description="Params as passed")
    result: ToolResult
    duration: float = Field(description="Elapsed time (milliseconds)")
    timestamp: datetime = Field(default_factory=datetime.now)
    caller: str | None = None


class ToolCallCount(BaseModel):
    """Number of logged calls for one tool"""

    tool_name: str
    calls: int


class BridgeStats(BaseModel):
    """Aggregate counters derived from the registry and the call log"""

    total_tools: int = 0
    total_calls: int = 0
    average_call_duration: float = 0.0
    tools_by_category: dict[str, int] = Field(default_factory=dict)
    most_called_tools: list[ToolCallCount] = Field(default_factory=list)


# Exceptions
class ToolError(Exception):
    """Base exception for tool-related errors"""

    code: ErrorCode = ErrorCode.HANDLER_ERROR


class ToolNotFoundError(ToolError):
    """Raised when a tool is not found"""

    code = ErrorCode.TOOL_NOT_FOUND


class ToolTimeoutError(ToolError):
    """Raised when a tool call exceeds its timeout"""

    code = ErrorCode.TOOL_TIMEOUT


class InvalidParamsError(ToolError):
    """Raised by handlers that reject their parameters"""

    code = ErrorCode.INVALID_PARAMS


class ToolExecutionError(ToolError):
    """Raised when a tool handler fails"""

    code = ErrorCode.HANDLER_ERROR


class ToolCancelledError(ToolError):
    """Raised by handlers that stop after their call was cancelled"""

    code = ErrorCode.HANDLER_ERROR


_ERROR_CLASSES: dict[ErrorCode | None, type[ToolError]] = {
    ErrorCode.TOOL_NOT_FOUND: ToolNotFoundError,
    ErrorCode.TOOL_TIMEOUT: ToolTimeoutError,
    ErrorCode.INVALID_PARAMS: InvalidParamsError,
    ErrorCode.HANDLER_ERROR: ToolExecutionError,
}
