"""EPUB 3 navigation document renderer (``nav.xhtml``)."""

from __future__ import annotations

from doc_epub.models import DocumentedEntity
from doc_epub.renderers.base import BaseRenderer


class NavRenderer(BaseRenderer):
    """Render the navigation document: extras, then one nested list per kind."""

    template_name = "nav.xhtml"
    default_output = "nav.xhtml"

    def render(self, nodes: list[DocumentedEntity]) -> str:
        return self._render_template(title="Table of contents", groups=self._groups(nodes))
