"""Environment-driven configuration."""

import os
from pathlib import Path

REPORT_ENV = "CLAUDE_LOG_VIEWER_REPORT"


def get_report_path() -> Path:
    """Return the path of the report file to bulk-load."""
    env = os.environ.get(REPORT_ENV)
    if env:
        return Path(env).expanduser()

    return Path.cwd() / "report.json"


def get_static_dir() -> Path:
    """Return the directory holding the bundled web page."""
    return Path(__file__).parent / "static"
