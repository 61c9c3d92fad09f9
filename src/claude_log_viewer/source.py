"""Abstract base class for bulk log-data sources."""

from abc import ABC, abstractmethod
from typing import Any


class RecordSource(ABC):
    """Base class for collaborators that supply a whole log at once.

    Each source (a report file, data embedded by a host) implements this
    interface so a session can try them in order.
    """

    name: str  # "file", "inline"

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if this source can currently supply data."""
        ...

    @abstractmethod
    def fetch(self) -> Any:
        """Return the decoded log array.

        Raises LoadSourceError when the data cannot be read.
        """
        ...
