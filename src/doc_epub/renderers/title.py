"""Title page renderer."""

from __future__ import annotations

from doc_epub.renderers.base import BaseRenderer


class TitleRenderer(BaseRenderer):
    """Render ``title.xhtml`` from project name, version and logo."""

    template_name = "title.xhtml"
    default_output = "title.xhtml"

    def render(self) -> str:
        return self._render_template(title=self.config.project)
