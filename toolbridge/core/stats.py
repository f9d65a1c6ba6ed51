"""Aggregate statistics over a registry and its call log"""

from collections import Counter

from toolbridge.core.call_log import CallLog
from toolbridge.core.constants import MOST_CALLED_LIMIT
from toolbridge.core.tools.registry import ToolRegistry
from toolbridge.models.tools import UNCATEGORIZED, BridgeStats, ToolCallCount


def compute_stats(
    registry: ToolRegistry, call_log: CallLog, limit: int = MOST_CALLED_LIMIT
) -> BridgeStats:
    """Compute bridge statistics from the current registry and call log.

    Nothing is cached; every call rescans both. Most-called tools are ranked
    by logged calls, so history survives re-registration (which resets the
    registry's own call counts) but is bounded by the log capacity.
    """
    logs = call_log.get_logs()
    total_calls = len(logs)

    total_duration = sum(entry.duration for entry in logs)
    average_call_duration = total_duration / total_calls if total_calls > 0 else 0.0

    tools_by_category: dict[str, int] = {}
    for metadata in registry.list():
        category = metadata.category.value if metadata.category else UNCATEGORIZED
        tools_by_category[category] = tools_by_category.get(category, 0) + 1

    # most_common keeps first-encountered order between equal counts
    call_counts = Counter(entry.tool_name for entry in logs)
    most_called_tools = [
        ToolCallCount(tool_name=name, calls=calls)
        for name, calls in call_counts.most_common(limit)
    ]

    return BridgeStats(
        total_tools=len(registry),
        total_calls=total_calls,
        average_call_duration=average_call_duration,
        tools_by_category=tools_by_category,
        most_called_tools=most_called_tools,
    )
