"""Match tool results back to the tool calls that produced them."""

import logging
from typing import Iterable, Optional, Sequence

from .core import LogRecord, ToolUse

logger = logging.getLogger(__name__)


def find_originating_tool_use(tool_use_id: str, records: Sequence[LogRecord]) -> Optional[ToolUse]:
    """Scan assistant records newest-first for the call with ``tool_use_id``.

    Returns None when no call matches.
    """
    for record in reversed(records):
        if record.kind != "assistant":
            continue
        for tool_use in record.tool_uses():
            if tool_use.id == tool_use_id:
                return tool_use
    return None


class ToolUseIndex:
    """Tool calls keyed by id, built once per load.

    When an id is reused the newest record wins, and within that record the
    first call, matching ``find_originating_tool_use``.
    """

    def __init__(self, tool_uses: Optional[dict[str, ToolUse]] = None):
        self._by_id = dict(tool_uses or {})

    @classmethod
    def from_records(cls, records: Iterable[LogRecord]) -> "ToolUseIndex":
        by_id = {}
        for record in reversed(list(records)):
            if record.kind != "assistant":
                continue
            for tool_use in record.tool_uses():
                by_id.setdefault(tool_use.id, tool_use)
        return cls(by_id)

    def lookup(self, tool_use_id: str) -> Optional[ToolUse]:
        tool_use = self._by_id.get(tool_use_id)
        if tool_use is None:
            logger.debug("No tool call found for id %s", tool_use_id)
        return tool_use

    def __contains__(self, tool_use_id: object) -> bool:
        return tool_use_id in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)
