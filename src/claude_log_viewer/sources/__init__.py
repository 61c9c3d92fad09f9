"""Bulk-load sources and the fallback chain that tries them in order."""

import logging
from typing import Any, Iterable

from ..errors import LoadSourceError
from ..source import RecordSource
from .file import FileRecordSource
from .inline import InlineRecordSource

logger = logging.getLogger(__name__)

__all__ = ["FileRecordSource", "InlineRecordSource", "get_default_sources", "load_first_available"]


def get_default_sources(inline_data: Any = None) -> list[RecordSource]:
    """Return the report file source, then inline data if a host embedded any."""
    return [FileRecordSource(), InlineRecordSource(inline_data)]


def load_first_available(sources: Iterable[RecordSource]) -> Any:
    """Fetch from the first source that can supply data.

    Raises LoadSourceError when every source is unavailable or fails.
    """
    tried = []
    for source in sources:
        tried.append(source.name)
        if not source.is_available():
            logger.debug("Source %s is not available", source.name)
            continue
        try:
            data = source.fetch()
        except LoadSourceError as e:
            logger.warning("Source %s failed: %s", source.name, e)
            continue
        logger.info("Loaded report data from %s source", source.name)
        return data

    raise LoadSourceError(
        "Could not load report data (tried: %s). Paste the log JSON instead."
        % (", ".join(tried) or "no sources")
    )
