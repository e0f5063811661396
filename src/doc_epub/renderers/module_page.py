"""Entity page renderer: one ``OEBPS/<id>.xhtml`` per documented entity."""

from __future__ import annotations

from typing import Iterable

from doc_epub.config import EpubConfig
from doc_epub.models import DocumentedEntity, StagingLayout
from doc_epub.renderers.base import BaseRenderer


class ModulePageRenderer(BaseRenderer):
    """Render the page of a module, exception or protocol.

    The page wraps the entity's pre-rendered body with its title, kind and
    summary, and lists ``related`` entities as links to their sibling
    pages. Related ids that are not part of the build are dropped.

    Examples:
        >>> renderer = ModulePageRenderer(config, layout, entities)
        >>> renderer.write(entities[0])
        PosixPath('.../OEBPS/foo.xhtml')
    """

    template_name = "module_page.xhtml"

    def __init__(
        self,
        config: EpubConfig,
        layout: StagingLayout,
        entities: Iterable[DocumentedEntity] = (),
    ):
        super().__init__(config, layout)
        self._by_id = {entity.id: entity for entity in entities}

    def render(self, entity: DocumentedEntity) -> str:
        related = [self._by_id[rid] for rid in entity.related if rid in self._by_id and rid != entity.id]
        return self._render_template(
            title=entity.title,
            entity=entity,
            related=related,
        )

    def output_name(self, entity: DocumentedEntity) -> str:
        return entity.output_name
