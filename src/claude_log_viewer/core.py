"""Core data models for claude-log-viewer.

Raw log entries are loosely structured JSON. ``LogRecord.from_raw`` reads one
entry once, defaulting every missing or mistyped field, so the classifier,
correlator and extractor never have to re-check presence themselves.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class Category(str, Enum):
    """Derived semantic category of a record."""

    SYSTEM = "system"
    ASSISTANT = "assistant"
    TOOL = "tool"
    FAILED_TOOL = "failed-tool"
    USER = "user"


@dataclass(frozen=True)
class Text:
    body: str


@dataclass(frozen=True)
class ToolUse:
    id: str
    name: str
    input: Any = None


@dataclass(frozen=True)
class ToolResult:
    tool_use_id: str
    content: Any = None  # str | list of fragments | any JSON value
    is_error: Optional[bool] = None
    error: Any = None


@dataclass(frozen=True)
class Thinking:
    body: str


@dataclass(frozen=True)
class UnknownItem:
    """A content block of a type we do not render (images, etc.)."""

    type: str
    raw: Any = None


ContentItem = Union[Text, ToolUse, ToolResult, Thinking, UnknownItem]


@dataclass(frozen=True)
class MessageBody:
    content: Optional[tuple] = None  # tuple of ContentItem; None when absent
    output_tokens: Optional[int] = None


@dataclass(frozen=True)
class McpServerStatus:
    name: str
    status: str


@dataclass(frozen=True)
class SessionMetadata:
    """Session-level fields carried on system init and result records."""

    cwd: Optional[str] = None
    model: Optional[str] = None
    permission_mode: Optional[str] = None
    tools: tuple = ()
    mcp_servers: tuple = ()  # tuple of McpServerStatus
    # result records only
    result: Optional[str] = None
    duration_ms: Optional[float] = None
    total_cost_usd: Optional[float] = None
    num_turns: Optional[int] = None
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


@dataclass(frozen=True)
class Stats:
    """Aggregate counts by declared record kind."""

    total: int = 0
    assistant: int = 0
    system: int = 0
    tool: int = 0
    user: int = 0


@dataclass(frozen=True)
class LogRecord:
    """One log entry: the untouched raw value plus its defaulted typed view."""

    raw: Any
    kind: str = ""  # declared "type": "system" | "assistant" | "user" | "tool" | other
    subtype: str = ""
    message: Optional[MessageBody] = None
    tool_name: str = ""
    legacy_tool_result: Optional[dict] = None
    metadata: Optional[SessionMetadata] = None
    search_text: str = field(default="", repr=False, compare=False)

    @property
    def content(self) -> tuple:
        """Content items of the nested message, empty when absent."""
        if self.message is None or self.message.content is None:
            return ()
        return self.message.content

    @property
    def has_content(self) -> bool:
        return self.message is not None and self.message.content is not None

    def tool_results(self) -> list[ToolResult]:
        return [item for item in self.content if isinstance(item, ToolResult)]

    def tool_uses(self) -> list[ToolUse]:
        return [item for item in self.content if isinstance(item, ToolUse)]

    @classmethod
    def from_raw(cls, raw: Any) -> "LogRecord":
        """Build a record from any decoded JSON value. Never raises."""
        search_text = to_compact_json(raw).lower()
        if not isinstance(raw, dict):
            return cls(raw=raw, search_text=search_text)

        legacy = raw.get("tool_result")
        return cls(
            raw=raw,
            kind=_str(raw.get("type")),
            subtype=_str(raw.get("subtype")),
            message=_parse_message(raw.get("message")),
            tool_name=_str(raw.get("tool_name")),
            legacy_tool_result=legacy if isinstance(legacy, dict) else None,
            metadata=_parse_metadata(raw),
            search_text=search_text,
        )


def to_compact_json(value: Any) -> str:
    """Serialize like ``JSON.stringify(value)``: no whitespace, unicode kept."""
    try:
        return json.dumps(_whole_floats_as_ints(value), separators=(",", ":"), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)


def to_pretty_json(value: Any) -> str:
    """Serialize with a two-space indent."""
    try:
        return json.dumps(_whole_floats_as_ints(value), indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)


def _whole_floats_as_ints(value: Any) -> Any:
    """Write 12345.0 as 12345, the way JSON numbers print in a browser."""
    if isinstance(value, float):
        return int(value) if value.is_integer() else value
    if isinstance(value, dict):
        return {k: _whole_floats_as_ints(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_whole_floats_as_ints(v) for v in value]
    return value


# ── Private helpers ──────────────────────────────────────────────


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _parse_message(value: Any) -> Optional[MessageBody]:
    if not isinstance(value, dict):
        return None

    usage = value.get("usage")
    output_tokens = _number(usage.get("output_tokens")) if isinstance(usage, dict) else None

    raw_content = value.get("content")
    if isinstance(raw_content, str):
        content = (Text(body=raw_content),)
    elif isinstance(raw_content, list):
        content = tuple(_parse_item(block) for block in raw_content)
    else:
        content = None

    return MessageBody(content=content, output_tokens=output_tokens)


def _parse_item(block: Any) -> ContentItem:
    if not isinstance(block, dict):
        return UnknownItem(type="", raw=block)

    block_type = _str(block.get("type"))

    if block_type == "text":
        return Text(body=_str(block.get("text")))

    if block_type == "tool_use":
        return ToolUse(
            id=_str(block.get("id")),
            name=_str(block.get("name")),
            input=block.get("input"),
        )

    if block_type == "tool_result":
        is_error = block.get("is_error")
        return ToolResult(
            tool_use_id=_str(block.get("tool_use_id")),
            content=block.get("content"),
            is_error=is_error if isinstance(is_error, bool) else None,
            error=block.get("error"),
        )

    if block_type == "thinking":
        return Thinking(body=_str(block.get("thinking")))

    return UnknownItem(type=block_type, raw=block)


def _parse_metadata(raw: dict) -> Optional[SessionMetadata]:
    """Collect session metadata from init and result records."""
    subtype = raw.get("subtype")
    if subtype == "init":
        tools = raw.get("tools")
        servers = raw.get("mcp_servers")
        return SessionMetadata(
            cwd=_str(raw.get("cwd")) or None,
            model=_str(raw.get("model")) or None,
            permission_mode=_str(raw.get("permissionMode")) or None,
            tools=tuple(str(t) for t in tools) if isinstance(tools, list) else (),
            mcp_servers=tuple(
                McpServerStatus(name=_str(s.get("name")), status=_str(s.get("status")))
                for s in servers
                if isinstance(s, dict)
            ) if isinstance(servers, list) else (),
        )

    if "result" in raw or "duration_ms" in raw or "total_cost_usd" in raw:
        usage = raw.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        return SessionMetadata(
            result=_str(raw.get("result")) or None,
            duration_ms=_number(raw.get("duration_ms")),
            total_cost_usd=_number(raw.get("total_cost_usd")),
            num_turns=_number(raw.get("num_turns")),
            input_tokens=_number(usage.get("input_tokens")),
            output_tokens=_number(usage.get("output_tokens")),
        )

    return None
