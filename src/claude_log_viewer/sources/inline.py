"""In-memory source for data a host embeds directly."""

from typing import Any

from ..errors import LoadSourceError
from ..source import RecordSource


class InlineRecordSource(RecordSource):
    """Source wrapping an already-decoded log array."""

    name = "inline"

    def __init__(self, data: Any = None):
        self._data = data

    def is_available(self) -> bool:
        return self._data is not None

    def fetch(self) -> Any:
        if self._data is None:
            raise LoadSourceError("No inline report data")
        return self._data
