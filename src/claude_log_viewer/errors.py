"""Exceptions raised by claude-log-viewer."""


class LogViewerError(Exception):
    """Base class for all claude-log-viewer errors."""


class InvalidInputError(LogViewerError):
    """Supplied log data cannot be used. The loaded record set is left unchanged."""


class InputParseError(InvalidInputError):
    """Supplied text is not valid JSON."""


class InputShapeError(InvalidInputError):
    """Parsed JSON is not an array of log entries."""


class LoadSourceError(LogViewerError):
    """No bulk-load source could supply log data."""


class UnknownCategoryError(LogViewerError, ValueError):
    """A category filter names no known category."""
