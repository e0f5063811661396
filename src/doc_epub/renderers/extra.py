"""Extra page renderer: Markdown documents converted to ``OEBPS/<STEM>.xhtml``."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from doc_epub import autolink
from doc_epub import markdown as md
from doc_epub.config import EpubConfig
from doc_epub.errors import ExtraFormatError, StagingError
from doc_epub.models import DocumentedEntity, StagingLayout, SupplementaryDocument
from doc_epub.renderers.base import BaseRenderer

MARKDOWN_SUFFIX = ".md"


class ExtraRenderer(BaseRenderer):
    """Render a Markdown extra into a chapter page.

    Pipeline per file: check the extension, read, autolink entity
    references, convert to XHTML, wrap in the extra template with the
    upper-cased file stem as title.

    Args:
        config: Derived run configuration
        layout: Staging tree
        entities: Every entity in the build, for autolinking
        converter: Markdown -> XHTML function, ``doc_epub.markdown.to_xhtml``
            by default
    """

    template_name = "extra.xhtml"

    def __init__(
        self,
        config: EpubConfig,
        layout: StagingLayout,
        entities: Iterable[DocumentedEntity] = (),
        converter: Callable[..., str] | None = None,
    ):
        super().__init__(config, layout)
        self.entities = list(entities)
        self.converter = converter or md.to_xhtml

    @staticmethod
    def validate(path: Path | str) -> Path:
        """Reject anything that is not a ``.md`` file."""
        p = Path(path)
        if p.suffix != MARKDOWN_SUFFIX:
            raise ExtraFormatError(p, allowed=MARKDOWN_SUFFIX)
        return p

    def convert(self, path: Path | str) -> SupplementaryDocument:
        """Read and convert one extra without rendering the page."""
        p = self.validate(path)
        try:
            text = p.read_text(encoding="utf-8")
        except OSError as e:
            raise StagingError(f"Failed to read extra {p}", path=p, cause=e) from e

        linked = autolink.project_doc(text, self.entities, self.config.deps)
        body = self.converter(linked, source=p)
        return SupplementaryDocument(source=p, title=SupplementaryDocument.title_for(p), body=body)

    def render(self, path: Path | str) -> str:
        document = self.convert(path)
        return self._render_template(title=document.title, document=document)

    def output_name(self, path: Path | str) -> str:
        return f"{SupplementaryDocument.title_for(path)}.xhtml"
