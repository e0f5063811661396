"""
Base renderer for EPUB documents.

Every file the build writes into ``OEBPS/`` goes through a renderer: load a
Jinja2 template, render it with the run's data, write the result to a fixed
path derived from the item. Renderers hold no mutable state after
construction, so one instance can be shared by all workers of a phase.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from doc_epub.config import EpubConfig
from doc_epub.errors import RenderError, StagingError
from doc_epub.models import DocumentedEntity, EntityKind, StagingLayout, SupplementaryDocument, partition

MEDIA_TYPES = {
    ".xhtml": "application/xhtml+xml",
    ".html": "application/xhtml+xml",
    ".ncx": "application/x-dtbncx+xml",
    ".opf": "application/oebps-package+xml",
    ".css": "text/css",
    ".js": "application/javascript",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".xml": "application/xml",
}

_XML_ID_ESCAPE = re.compile(r"[^A-Za-z0-9.-]")


def media_type(href: str | Path) -> str:
    """Media type for a file in the package, by extension."""
    return MEDIA_TYPES.get(Path(href).suffix.lower(), "application/octet-stream")


def xml_id(value: str, prefix: str = "") -> str:
    """Make ``value`` usable as an XML ``id`` attribute.

    Characters outside ``[A-Za-z0-9.-]``, including ``_`` itself, become
    ``_XX`` hex escapes (``__XXXXXX`` above U+00FF), so distinct values
    never share an id.
    """
    return prefix + _XML_ID_ESCAPE.sub(_escape_id_char, value)


def _escape_id_char(match: re.Match[str]) -> str:
    code = ord(match.group())
    return f"_{code:02X}" if code <= 0xFF else f"__{code:06X}"


def href(path: str | PurePosixPath) -> str:
    """Percent-encode a package-relative path for use as a URI reference."""
    return quote(str(path), safe="/")


class BaseRenderer(ABC):
    """Base class for document renderers.

    Manifesto:
        Renderers turn run data into one file each. Templates handle the
        markup; renderers handle choosing the data and the output path.

    Architecture:
        ```
        render(item) ──► Jinja2 template ──► str
                                             │
        write(item)  ──► OEBPS/<output_name(item)>
        ```

    Subclasses set ``template_name`` and either ``default_output`` (the
    structural documents) or override ``output_name`` (per-item pages).
    """

    template_name: str = ""
    default_output: str = ""

    def __init__(self, config: EpubConfig, layout: StagingLayout):
        """Initialize the renderer.

        Args:
            config: Derived run configuration (logo already processed)
            layout: Staging tree the output is written into
        """
        self.config = config
        self.layout = layout

        self.env = Environment(
            loader=FileSystemLoader(str(config.template_dir)),
            autoescape=select_autoescape(
                enabled_extensions=("html", "xml", "xhtml", "opf", "ncx"),
                default_for_string=True,
            ),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["media_type"] = media_type
        self.env.filters["xml_id"] = xml_id
        self.env.filters["href"] = href

    @abstractmethod
    def render(self, *args: Any, **kwargs: Any) -> str:
        """Render the document.

        Returns:
            Rendered document content as string
        """

    def output_name(self, *args: Any, **kwargs: Any) -> str:
        """File name under ``OEBPS/`` for the rendered item."""
        return self.default_output

    def write(self, *args: Any, **kwargs: Any) -> Path:
        """Render and write one file. Returns the written path."""
        content = self.render(*args, **kwargs)
        return self._write(self.output_name(*args, **kwargs), content)

    def _render_template(self, template_name: str | None = None, **context: Any) -> str:
        """Render a template with the common metadata merged into ``context``."""
        name = template_name or self.template_name
        try:
            template = self.env.get_template(name)
            return template.render(**self._get_metadata(), **context)
        except TemplateError as e:
            raise RenderError(f"Failed to render template {name}", cause=e).with_context(
                project=self.config.project
            ) from e

    def _write(self, name: str, content: str) -> Path:
        path = self.layout.oebps_dir / name
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StagingError(f"Failed to write {name}", path=path, cause=e) from e
        return path

    def _stylesheets(self) -> list[str]:
        """Stylesheets copied into ``OEBPS/dist``, relative to ``OEBPS/``."""
        return self._static_files(".css")

    def _static_files(self, *suffixes: str) -> list[str]:
        dist = self.layout.dist_dir
        if not dist.is_dir():
            return []
        return [
            p.relative_to(self.layout.oebps_dir).as_posix()
            for p in sorted(dist.iterdir())
            if p.is_file() and (not suffixes or p.suffix in suffixes)
        ]

    def _get_metadata(self) -> dict[str, Any]:
        """Common metadata available to every template."""
        return {
            "project": self.config.project,
            "version": self.config.version,
            "language": self.config.language,
            "logo": self.config.logo.as_posix() if self.config.logo else None,
            "stylesheets": self._stylesheets(),
            "extras": [SupplementaryDocument.title_for(p) for p in self.config.extras],
        }

    @staticmethod
    def _groups(nodes: list[DocumentedEntity]) -> list[tuple[EntityKind, list[DocumentedEntity]]]:
        """Non-empty kind groups in reading order."""
        return [(kind, items) for kind, items in partition(nodes).items() if items]
