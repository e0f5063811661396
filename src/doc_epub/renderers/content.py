"""Package document renderer (``content.opf``)."""

from __future__ import annotations

from doc_epub.models import DocumentedEntity, PackageIdentity
from doc_epub.renderers.base import BaseRenderer


class ContentRenderer(BaseRenderer):
    """Render the EPUB 3 package document.

    The manifest lists the navigation document, the NCX, the title page,
    every extra, every entity page, every file under ``OEBPS/dist`` and the
    logo. The spine follows ``nodes`` as given, so callers pass modules,
    then exceptions, then protocols.
    """

    template_name = "content.opf"
    default_output = "content.opf"

    def render(self, nodes: list[DocumentedEntity], identity: PackageIdentity) -> str:
        return self._render_template(
            nodes=nodes,
            uuid=identity.uuid,
            timestamp=identity.timestamp,
            static_files=self._static_files(),
        )
