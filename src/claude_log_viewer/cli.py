"""CLI entry point for claude-log-viewer."""

import os
from pathlib import Path

import click
import uvicorn

from .config import REPORT_ENV
from .errors import LogViewerError
from .session import LogSession


@click.group()
def main():
    """Inspect AI coding assistant session logs."""
    pass


@main.command()
@click.option("--port", default=8080, help="Port to serve on.")
@click.option("--host", default="127.0.0.1", help="Host to bind to.")
@click.option("--report", type=click.Path(dir_okay=False, path_type=Path), help="Report JSON to preload.")
def serve(port: int, host: str, report: Path | None):
    """Start the web interface."""
    if report is not None:
        os.environ[REPORT_ENV] = str(report.resolve())
    click.echo(f"Starting claude-log-viewer on http://{host}:{port}")
    uvicorn.run("claude_log_viewer.server:app", host=host, port=port, reload=False)


@main.command()
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--filter", "category", default="all", help="Category to keep (default: all).")
@click.option("--search", default="", help="Case-insensitive search term.")
def stats(report: Path, category: str, search: str):
    """Print entry counts for a report file."""
    session = LogSession()
    try:
        session.load_text(report.read_text(encoding="utf-8"))
        session.set_category_filter(category)
    except LogViewerError as e:
        raise click.ClickException(str(e))
    session.set_search_term(search)

    totals = session.get_stats()
    click.echo(f"Total entries: {totals.total}")
    click.echo(f"Assistant messages: {totals.assistant}")
    click.echo(f"Tool calls: {totals.tool}")
    click.echo(f"System messages: {totals.system}")
    click.echo(f"User messages: {totals.user}")
    for name, count in session.get_category_counts().items():
        click.echo(f"  {name.value}: {count}")
    click.echo(f"Matching entries: {len(session.get_filtered_records())}")
