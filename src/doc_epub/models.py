"""
Data model for EPUB assembly.

Entities arrive already extracted and rendered; this package only places
them into the container. Everything here is immutable.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Iterable

import yaml

from doc_epub.config import EpubConfig

MIMETYPE = "application/epub+zip"

META_INF = "META-INF"
OEBPS = "OEBPS"
MIMETYPE_FILE = "mimetype"


class EntityKind(str, Enum):
    """Kind of a documented entity. Order of members is reading order."""

    MODULE = "module"
    EXCEPTION = "exception"
    PROTOCOL = "protocol"

    @property
    def label(self) -> str:
        return {
            EntityKind.MODULE: "Modules",
            EntityKind.EXCEPTION: "Exceptions",
            EntityKind.PROTOCOL: "Protocols",
        }[self]


@dataclass(frozen=True)
class DocumentedEntity:
    """One documented module, exception or protocol.

    ``id`` must be filesystem safe and unique within a build: it is the
    page file name (``<id>.xhtml``).
    """

    id: str
    title: str
    kind: EntityKind
    body: str = ""
    summary: str | None = None
    related: tuple[str, ...] = ()

    @property
    def output_name(self) -> str:
        return f"{self.id}.xhtml"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocumentedEntity:
        """Build an entity from loaded JSON/YAML data.

        ``title`` defaults to ``id`` and ``kind`` to ``module``.
        """
        return cls(
            id=data["id"],
            title=data.get("title") or data["id"],
            kind=EntityKind(data.get("kind", EntityKind.MODULE.value)),
            body=data.get("body", ""),
            summary=data.get("summary"),
            related=tuple(data.get("related", ())),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "kind": self.kind.value,
            "body": self.body,
            "summary": self.summary,
            "related": list(self.related),
        }


@dataclass(frozen=True)
class SupplementaryDocument:
    """A Markdown extra converted to an XHTML fragment."""

    source: Path
    title: str
    body: str

    @property
    def output_name(self) -> str:
        return f"{self.title}.xhtml"

    @staticmethod
    def title_for(source: Path | str) -> str:
        """Derived title: file stem, upper-cased (``guides/intro.md`` -> ``INTRO``)."""
        return Path(source).stem.upper()


@dataclass(frozen=True)
class PackageIdentity:
    """Run-scoped package identifier and modification timestamp."""

    uuid: str
    timestamp: str


@dataclass(frozen=True)
class ArchiveEntry:
    """A file to be written to the archive, relative to the staging root."""

    path: str
    data: bytes = field(repr=False)

    @property
    def is_mimetype(self) -> bool:
        return self.path == MIMETYPE_FILE


@dataclass(frozen=True)
class StagingLayout:
    """Filesystem layout of the staging tree.

    Mirrors the archive layout::

        <root>/mimetype
        <root>/META-INF/container.xml
        <root>/OEBPS/content.opf, toc.ncx, nav.xhtml, title.xhtml, *.xhtml
        <root>/OEBPS/dist/*.css
        <root>/OEBPS/assets/logo.png
    """

    root: Path

    @property
    def mimetype_path(self) -> Path:
        return self.root / MIMETYPE_FILE

    @property
    def meta_inf_dir(self) -> Path:
        return self.root / META_INF

    @property
    def oebps_dir(self) -> Path:
        return self.root / OEBPS

    @property
    def dist_dir(self) -> Path:
        return self.oebps_dir / "dist"

    @property
    def assets_dir(self) -> Path:
        return self.oebps_dir / "assets"

    @property
    def staged_paths(self) -> tuple[Path, ...]:
        """Top-level entries that belong to the staging tree (not the archive)."""
        return (self.meta_inf_dir, self.mimetype_path, self.oebps_dir)

    def archive_path(self, config: EpubConfig) -> Path:
        return self.root / config.epub_name


def partition(entities: Iterable[DocumentedEntity]) -> dict[EntityKind, list[DocumentedEntity]]:
    """Group entities by kind, keeping input order within each group."""
    groups: dict[EntityKind, list[DocumentedEntity]] = {kind: [] for kind in EntityKind}
    for entity in entities:
        groups[entity.kind].append(entity)
    return groups


def load_entities(path: Path | str) -> list[DocumentedEntity]:
    """Load entities from a JSON or YAML file.

    The file holds either a list of entity mappings or a mapping with an
    ``entities`` key.
    """
    p = Path(path)
    text = p.read_text(encoding="utf-8")
    if p.suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    if isinstance(data, dict):
        data = data.get("entities", [])

    return [DocumentedEntity.from_dict(item) for item in data or []]
