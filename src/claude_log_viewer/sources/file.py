"""Report file source.

Reads a JSON file (``report.json`` by default) holding the whole log array.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ..config import get_report_path
from ..errors import LoadSourceError
from ..source import RecordSource

logger = logging.getLogger(__name__)


class FileRecordSource(RecordSource):
    """Source backed by a report file on disk."""

    name = "file"

    def __init__(self, path: Path | None = None):
        self._path = path

    def get_path(self) -> Path:
        return self._path if self._path is not None else get_report_path()

    def is_available(self) -> bool:
        return self.get_path().is_file()

    def fetch(self) -> Any:
        path = self.get_path()
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to read report %s: %s", path, e)
            raise LoadSourceError(f"Could not load report data from {path}: {e}") from e
