"""
CLI: ``doc-epub inspect``: list the entries of an EPUB.
"""

from __future__ import annotations

import zipfile
from pathlib import Path

import typer

from doc_epub.cli.utils import console, err_console, members_table
from doc_epub.models import MIMETYPE_FILE
from doc_epub.packager import EpubPackager


def inspect(
    archive: Path = typer.Argument(..., exists=True, dir_okay=False, help="EPUB file."),
) -> None:
    """Show archive entries and how each is stored."""
    try:
        members = EpubPackager().inspect(archive)
    except zipfile.BadZipFile as e:
        err_console.print(f"[red]Not a zip archive:[/red] {archive}")
        raise typer.Exit(1) from e

    console.print(members_table(members, title=archive.name))

    first = members[0] if members else None
    if first is None or first.name != MIMETYPE_FILE or first.compressed:
        err_console.print("[yellow]mimetype is not the first, stored entry[/yellow]")
        raise typer.Exit(1)
