"""
CLI utility helpers: consoles, logging setup and output formatting.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from doc_epub.config import get_settings
from doc_epub.logging import configure_logging
from doc_epub.packager import ArchiveMember

console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure structlog from ``DOC_EPUB_*`` settings."""
    settings = get_settings()
    configure_logging(
        level="DEBUG" if verbose else settings.log_level,
        json_format=settings.log_format == "json",
    )


def members_table(members: list[ArchiveMember], title: str | None = None) -> Table:
    """Render archive members as a rich table."""
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Entry", style="cyan")
    table.add_column("Method")
    table.add_column("Size", justify="right")

    for index, member in enumerate(members, start=1):
        method = "deflated" if member.compressed else "[yellow]stored[/yellow]"
        table.add_row(str(index), member.name, method, f"{member.size_bytes:,}")

    return table
