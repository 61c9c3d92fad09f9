"""Input boundary: turn pasted text or decoded arrays into LogRecords."""

import json
import logging
from typing import Any

from .core import LogRecord
from .errors import InputParseError, InputShapeError

logger = logging.getLogger(__name__)


def parse_records(text: str) -> list[LogRecord]:
    """Parse JSON text holding an array of log entries.

    Raises InputParseError for empty or malformed text and InputShapeError
    when the top-level value is not an array.
    """
    text = (text or "").strip()
    if not text:
        raise InputParseError("Please paste JSON data first")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputParseError(f"Invalid JSON: {e}") from e

    return load_records(data)


def load_records(data: Any) -> list[LogRecord]:
    """Wrap an already-decoded array of log entries.

    Elements are kept as-is; malformed entries still become records.
    """
    if not isinstance(data, list):
        raise InputShapeError("JSON must be an array of log entries")

    records = [LogRecord.from_raw(entry) for entry in data]
    logger.info("Loaded %d log entries", len(records))
    return records
