"""Build renderer-agnostic content descriptions for log records.

``extract_content`` returns plain dataclasses; a presentation layer decides
how to draw them. Free text is pre-formatted into a small, safe HTML subset
by ``format_text`` and raw JSON is token-classified by
``syntax_highlight_json``.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .classifier import categorize, is_failed_result, stringify_output
from .core import (
    Category,
    LogRecord,
    McpServerStatus,
    Text,
    Thinking,
    ToolResult,
    ToolUse,
    to_pretty_json,
)
from .correlator import ToolUseIndex, find_originating_tool_use

logger = logging.getLogger(__name__)

PREVIEW_LINES = 2
COLLAPSE_LABEL = "▲ collapse"


# ── Content descriptions ─────────────────────────────────────────


@dataclass
class TextBlock:
    html: str
    kind: str = field(default="text", init=False)


@dataclass
class ToolCallBlock:
    name: str
    input_json: str
    kind: str = field(default="tool_call", init=False)


@dataclass
class ThinkingBlock:
    html: str
    label: str = "thinking"
    collapsible: bool = True
    kind: str = field(default="thinking", init=False)


@dataclass
class ToolResultView:
    """One tool output, split into an always-visible preview and the rest."""

    output: str
    is_error: bool
    preview: str
    hidden_line_count: int
    toggle_label: Optional[str]  # None when nothing is hidden
    tool_use_id: str = ""
    original_call: Optional[ToolCallBlock] = None
    kind: str = field(default="tool_result", init=False)

    @property
    def has_more(self) -> bool:
        return self.hidden_line_count > 0


@dataclass
class SystemInitContent:
    cwd: Optional[str]
    model: Optional[str]
    permission_mode: Optional[str]
    tools: list[str]
    mcp_servers: list[McpServerStatus]
    kind: str = field(default="system_init", init=False)


@dataclass
class SystemResultContent:
    result_html: str
    duration: Optional[str]  # "12.3s"
    cost: Optional[str]  # "0.1234"
    turns: Optional[int]
    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    kind: str = field(default="system_result", init=False)


@dataclass
class AssistantContent:
    blocks: list[Union[TextBlock, ToolCallBlock, ThinkingBlock]]
    kind: str = field(default="assistant", init=False)


@dataclass
class ToolOutputContent:
    results: list[ToolResultView]
    kind: str = field(default="tool_output", init=False)


@dataclass
class UserContent:
    blocks: list[TextBlock]
    kind: str = field(default="user", init=False)


@dataclass
class JsonContent:
    pretty: str
    highlighted: str
    kind: str = field(default="json", init=False)


RenderableContent = Union[
    SystemInitContent,
    SystemResultContent,
    AssistantContent,
    ToolOutputContent,
    UserContent,
    JsonContent,
]

ToolUseLookup = Union[ToolUseIndex, Sequence[LogRecord], None]


# ── Extraction ───────────────────────────────────────────────────


def extract_content(record: LogRecord, tool_uses: ToolUseLookup = None) -> RenderableContent:
    """Describe what to show for a record.

    ``tool_uses`` is used to attach the original call to failed tool
    results: either a prebuilt ToolUseIndex or the full record sequence.
    A record that cannot be described falls back to its raw JSON.
    """
    try:
        return _extract(record, tool_uses)
    except Exception as e:
        logger.warning("Falling back to raw JSON for malformed record: %s", e)
        return json_content(record)


def _extract(record: LogRecord, tool_uses: ToolUseLookup) -> RenderableContent:
    category = categorize(record)

    if category == Category.SYSTEM:
        return _system_content(record)
    if category == Category.ASSISTANT:
        return _assistant_content(record)
    if category in (Category.TOOL, Category.FAILED_TOOL):
        return _tool_content(record, tool_uses)
    if record.kind == "user":
        return _user_content(record)
    return json_content(record)


def json_content(record: LogRecord) -> JsonContent:
    pretty = to_pretty_json(record.raw)
    return JsonContent(pretty=pretty, highlighted=syntax_highlight_json(pretty))


def _system_content(record: LogRecord) -> RenderableContent:
    meta = record.metadata
    if meta is None:
        return json_content(record)

    if record.subtype == "init":
        return SystemInitContent(
            cwd=meta.cwd,
            model=meta.model,
            permission_mode=meta.permission_mode,
            tools=list(meta.tools),
            mcp_servers=list(meta.mcp_servers),
        )

    if record.subtype == "success" and meta.result:
        return SystemResultContent(
            result_html=format_text(meta.result),
            duration=f"{meta.duration_ms / 1000:.1f}s" if meta.duration_ms is not None else None,
            cost=f"{meta.total_cost_usd:.4f}" if meta.total_cost_usd is not None else None,
            turns=meta.num_turns,
            input_tokens=meta.input_tokens or None,
            output_tokens=meta.output_tokens or None,
        )

    return json_content(record)


def _assistant_content(record: LogRecord) -> RenderableContent:
    if not record.has_content:
        return json_content(record)

    blocks = []
    for item in record.content:
        if isinstance(item, Text):
            blocks.append(TextBlock(html=format_text(item.body)))
        elif isinstance(item, ToolUse):
            blocks.append(_tool_call_block(item))
        elif isinstance(item, Thinking):
            blocks.append(ThinkingBlock(html=format_text(item.body)))
    return AssistantContent(blocks=blocks)


def _tool_content(record: LogRecord, tool_uses: ToolUseLookup) -> ToolOutputContent:
    results = record.tool_results() if record.kind == "user" else []
    if results:
        return ToolOutputContent(results=[_tool_result_view(r, tool_uses) for r in results])

    # Older logs carry a single tool_result dict on "tool" records
    legacy = record.legacy_tool_result
    if legacy is None:
        return ToolOutputContent(results=[])

    is_error = bool(legacy.get("is_error") or legacy.get("error"))
    if is_error:
        output = f"Error: {legacy.get('error') or legacy.get('content')}"
    elif isinstance(legacy.get("content"), str):
        output = legacy["content"]
    else:
        output = to_pretty_json(legacy)
    return ToolOutputContent(results=[_split_output(output, is_error)])


def _tool_result_view(result: ToolResult, tool_uses: ToolUseLookup) -> ToolResultView:
    is_error = is_failed_result(result)
    view = _split_output(stringify_output(result.content), is_error, result.tool_use_id)

    if is_error and result.tool_use_id:
        original = _lookup_tool_use(result.tool_use_id, tool_uses)
        if original is not None:
            view.original_call = _tool_call_block(original)

    return view


def _split_output(output: str, is_error: bool, tool_use_id: str = "") -> ToolResultView:
    lines = output.split("\n")
    hidden = max(0, len(lines) - PREVIEW_LINES)
    return ToolResultView(
        output=output,
        is_error=is_error,
        preview="\n".join(lines[:PREVIEW_LINES]),
        hidden_line_count=hidden,
        toggle_label=f"▼ {hidden} more lines" if hidden else None,
        tool_use_id=tool_use_id,
    )


def _lookup_tool_use(tool_use_id: str, tool_uses: ToolUseLookup) -> Optional[ToolUse]:
    if tool_uses is None:
        return None
    if isinstance(tool_uses, ToolUseIndex):
        return tool_uses.lookup(tool_use_id)
    return find_originating_tool_use(tool_use_id, tool_uses)


def _tool_call_block(tool_use: ToolUse) -> ToolCallBlock:
    return ToolCallBlock(name=tool_use.name, input_json=to_pretty_json(tool_use.input))


def _user_content(record: LogRecord) -> RenderableContent:
    if not record.has_content:
        return json_content(record)
    return UserContent(
        blocks=[TextBlock(html=format_text(item.body)) for item in record.content if isinstance(item, Text)]
    )


# ── Header summary ───────────────────────────────────────────────


def describe_record(record: LogRecord) -> str:
    """Short one-line summary shown next to a record's category label."""
    parts = []
    category = categorize(record)

    if category == Category.ASSISTANT:
        names = [t.name for t in record.tool_uses()]
        if names:
            parts.append(f"→ {', '.join(names)}")

    if category in (Category.TOOL, Category.FAILED_TOOL) and record.kind == "user":
        results = record.tool_results()
        if results and results[0].tool_use_id:
            parts.append("← result")

    if record.tool_name:
        parts.append(record.tool_name)

    if record.message is not None and record.message.output_tokens:
        parts.append(f"{record.message.output_tokens} tokens")

    return " • ".join(parts)


# ── Text and JSON markup ─────────────────────────────────────────

_BOLD = re.compile(r"\*\*(.*?)\*\*")
_ITALIC = re.compile(r"\*([^*<]*?)\*")  # never spans a produced tag
_CODE = re.compile(r"`([^`<]*?)`")

_JSON_TOKEN = re.compile(
    r'("(\\u[a-zA-Z0-9]{4}|\\[^u]|[^\\"])*"(\s*:)?'
    r"|\b(true|false|null)\b"
    r"|-?\d+(?:\.\d*)?(?:[eE][+\-]?\d+)?)"
)


def escape_html(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def format_text(text: Optional[str]) -> str:
    """Render free text as escaped HTML with light markdown emphasis."""
    if not text:
        return ""

    html = escape_html(text).replace("\n", "<br>")
    html = _BOLD.sub(r"<strong>\1</strong>", html)
    html = _ITALIC.sub(r"<em>\1</em>", html)
    return _CODE.sub(r"<code>\1</code>", html)


def syntax_highlight_json(json_text: str) -> str:
    """Wrap JSON tokens in spans classed by kind (key, string, number, ...)."""
    return _JSON_TOKEN.sub(_highlight_token, escape_html(json_text))


def _highlight_token(match: re.Match) -> str:
    token = match.group(0)
    if token.startswith('"'):
        cls = "json-key" if token.endswith(":") else "json-string"
    elif token in ("true", "false"):
        cls = "json-boolean"
    elif token == "null":
        cls = "json-null"
    else:
        cls = "json-number"
    return f'<span class="{cls}">{token}</span>'
