"""Text processing tools and a diagnostic delay tool"""

import asyncio

from toolbridge.core.tools.handler import CallContext
from toolbridge.models.tools import InvalidParamsError, ToolCategory
from toolbridge.tools import tool

CASE_TYPES = ("upper", "lower", "title", "capitalize")

# Seconds between cancellation checks in sleep
SLEEP_SLICE = 0.05


@tool(description="Return the given text unchanged", category=ToolCategory.CUSTOM)
def echo(text: str = "") -> str:
    """Echo text back to the caller."""
    return text


@tool(
    description="Convert text to different cases (upper, lower, title, capitalize)",
    category=ToolCategory.CUSTOM,
)
def transform_case(text: str, case_type: str = "lower") -> str:
    """
    Transform text to different cases.

    Args:
        text: The text to transform
        case_type: Type of case transformation (upper, lower, title, capitalize)

    Returns:
        The transformed text
    """
    case_type = case_type.lower()

    if case_type == "upper":
        return text.upper()
    elif case_type == "lower":
        return text.lower()
    elif case_type == "title":
        return text.title()
    elif case_type == "capitalize":
        return text.capitalize()

    raise InvalidParamsError(
        f"Unknown case type: {case_type}. Use: {', '.join(CASE_TYPES)}"
    )


@tool(description="Count words, characters, and lines in text", category=ToolCategory.ANALYTICS)
def word_count(text: str) -> dict:
    """Count words, characters, and lines in text."""
    return {
        "words": len(text.split()),
        "characters": len(text),
        "lines": len(text.splitlines()) if text else 0,
    }


@tool(description="Wait for a number of milliseconds, then report the delay")
async def sleep(milliseconds: int = 100, context: CallContext = None) -> dict:
    """Sleep without blocking the event loop.

    The cancellation token is checked between short slices, so an abandoned
    call stops within one slice even when its task is not cancelled.
    """
    try:
        milliseconds = int(milliseconds)
    except (TypeError, ValueError):
        raise InvalidParamsError(f"milliseconds must be an integer, got {milliseconds!r}")

    if milliseconds < 0:
        raise InvalidParamsError("milliseconds must not be negative")

    remaining = milliseconds / 1000
    while remaining > 0:
        if context is not None:
            context.cancellation.raise_if_cancelled()
        step = min(remaining, SLEEP_SLICE)
        await asyncio.sleep(step)
        remaining -= step

    if context is not None:
        context.cancellation.raise_if_cancelled()
    return {"slept_ms": milliseconds}
