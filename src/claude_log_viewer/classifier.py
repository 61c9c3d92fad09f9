"""Classify log records into categories.

The declared ``type`` of a record is not enough on its own: tool results are
delivered inside ``user`` records, so those are told apart by their content.
"""

from typing import Any

from .core import Category, LogRecord, ToolResult, to_compact_json, to_pretty_json


def categorize(record: LogRecord) -> Category:
    """Return the category of a record. Total: unknown kinds are ``system``."""
    kind = record.kind

    if kind == "system":
        return Category.SYSTEM
    if kind == "assistant":
        return Category.ASSISTANT
    if kind == "tool":
        return Category.TOOL

    if kind == "user":
        results = record.tool_results()
        if results:
            if any(is_failed_result(r) for r in results):
                return Category.FAILED_TOOL
            return Category.TOOL
        return Category.USER

    return Category.SYSTEM


def is_failed_result(result: ToolResult) -> bool:
    """True when a tool result reports an error.

    Either flag is enough, and so is output starting with ``error:``
    in any case.
    """
    if result.is_error is True:
        return True
    if result.error is not None:
        return True
    return stringify_output(result.content).lower().startswith("error:")


def stringify_output(content: Any) -> str:
    """Flatten a tool result's ``content`` field into display text."""
    if isinstance(content, list):
        return "\n".join(_fragment_text(fragment) for fragment in content)
    if isinstance(content, str):
        return content
    if content is None:
        return ""
    return to_pretty_json(content)


def _fragment_text(fragment: Any) -> str:
    if isinstance(fragment, dict):
        text = fragment.get("text")
        if text:
            return str(text)
    return to_compact_json(fragment)
