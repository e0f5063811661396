"""
Archive entry collection.

Walks a staging tree and pairs every regular file that belongs in the EPUB
with its bytes. Enumeration is best-effort: a file that disappears or can't
be read between listing and reading is left out and logged, never raised.
The ``mimetype`` entry, when readable, is always first.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from doc_epub.logging import get_logger
from doc_epub.models import ArchiveEntry, StagingLayout

logger = get_logger(__name__)


def iter_staged_files(layout: StagingLayout) -> Iterator[Path]:
    """Yield candidate files: ``mimetype``, then ``META-INF/**``, then ``OEBPS/**``."""
    yield layout.mimetype_path
    for directory in (layout.meta_inf_dir, layout.oebps_dir):
        if directory.is_dir():
            yield from sorted(p for p in directory.rglob("*") if p.is_file())


def collect_entries(staging_root: Path | str) -> list[ArchiveEntry]:
    """Collect archive entries from a staging tree.

    Args:
        staging_root: Root of the staging tree

    Returns:
        Entries with posix paths relative to ``staging_root``
    """
    layout = StagingLayout(Path(staging_root))
    entries: list[ArchiveEntry] = []

    for path in iter_staged_files(layout):
        relpath = path.relative_to(layout.root).as_posix()
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.debug("epub.entry_skipped", path=relpath, error=str(e))
            continue
        entries.append(ArchiveEntry(path=relpath, data=data))

    return entries
