"""EpubPackager: write a staging tree into a single ``.epub`` archive.

The archive is a plain zip with one format rule on top: the ``mimetype``
entry must be stored without compression. This packager also always writes
it as the first entry, which stricter reading systems require.

Every other entry is deflated when its extension is one of
:data:`COMPRESSED_SUFFIXES` and stored otherwise.
"""

from __future__ import annotations

import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from doc_epub.config import EpubConfig
from doc_epub.errors import PackagingError
from doc_epub.logging import get_logger
from doc_epub.manifest import collect_entries
from doc_epub.models import ArchiveEntry, StagingLayout

logger = get_logger(__name__)

COMPRESSED_SUFFIXES = frozenset({".css", ".xhtml", ".html", ".ncx", ".opf", ".jpg", ".png", ".xml"})

# Fixed entry timestamp; readers ignore it.
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


@dataclass(frozen=True)
class ArchiveMember:
    """Summary of one entry of an existing archive."""

    name: str
    compressed: bool
    size_bytes: int


def compression_for(entry: ArchiveEntry) -> int:
    """Zip compression method for an entry."""
    if entry.is_mimetype:
        return zipfile.ZIP_STORED
    if PurePosixPath(entry.path).suffix.lower() in COMPRESSED_SUFFIXES:
        return zipfile.ZIP_DEFLATED
    return zipfile.ZIP_STORED


def order_entries(entries: list[ArchiveEntry]) -> list[ArchiveEntry]:
    """``mimetype`` first, everything else in the given order."""
    return [e for e in entries if e.is_mimetype] + [e for e in entries if not e.is_mimetype]


class EpubPackager:
    """Package a staging tree into ``<output>/<project>-v<version>.epub``.

    Example::

        packager = EpubPackager()
        path = packager.package(Path("doc"), config)
    """

    # -- public API ----------------------------------------------------------

    def package(self, staging_root: Path | str, config: EpubConfig) -> Path:
        """Write the archive.

        Parameters
        ----------
        staging_root:
            Root of a complete staging tree.
        config:
            Run configuration; provides the archive file name.

        Returns
        -------
        Absolute path of the written archive.

        Raises
        ------
        PackagingError
            If the archive can't be written. No partial archive is left.
        """
        layout = StagingLayout(Path(staging_root).resolve())
        target = layout.archive_path(config)
        entries = order_entries(collect_entries(layout.root))

        try:
            self.write(target, entries)
        except OSError as e:
            target.unlink(missing_ok=True)
            raise PackagingError(f"Failed to write archive {target.name}", path=target, cause=e) from e

        log = logger.bind(
            archive=str(target),
            entries=len(entries),
            size_bytes=target.stat().st_size,
        )
        log.info("epub.packaged")
        return target

    def write(self, target: Path, entries: list[ArchiveEntry]) -> None:
        """Write ``entries`` to ``target`` in the given order."""
        with zipfile.ZipFile(target, mode="w") as zf:
            for entry in entries:
                info = zipfile.ZipInfo(entry.path, date_time=ZIP_EPOCH)
                info.compress_type = compression_for(entry)
                info.external_attr = 0o644 << 16
                zf.writestr(info, entry.data)

    def inspect(self, archive: Path | str) -> list[ArchiveMember]:
        """List the entries of an existing archive, in archive order.

        Raises
        ------
        FileNotFoundError
            If the archive doesn't exist.
        """
        archive_path = Path(archive)
        if not archive_path.exists():
            raise FileNotFoundError(f"Archive not found: {archive_path}")

        with zipfile.ZipFile(archive_path, "r") as zf:
            return [
                ArchiveMember(
                    name=info.filename,
                    compressed=info.compress_type != zipfile.ZIP_STORED,
                    size_bytes=info.file_size,
                )
                for info in zf.infolist()
            ]
