"""Legacy NCX table of contents renderer (``toc.ncx``)."""

from __future__ import annotations

from dataclasses import dataclass, field

from doc_epub.models import DocumentedEntity, PackageIdentity
from doc_epub.renderers.base import BaseRenderer, href, xml_id


@dataclass
class NavPoint:
    """One ``navPoint`` of the NCX nav map."""

    id: str
    label: str
    href: str
    play_order: int
    children: list[NavPoint] = field(default_factory=list)


class TocRenderer(BaseRenderer):
    """Render ``toc.ncx`` for EPUB 2 reading systems.

    Layout of the nav map, with ``playOrder`` numbered in document order::

        Title page
        <EXTRA>...
        Modules
            <module>...
        Exceptions
            <exception>...
        Protocols
            <protocol>...

    Empty groups are omitted. A group navPoint points at its first entry
    and shares its ``playOrder``; every target has exactly one number.
    """

    template_name = "toc.ncx"
    default_output = "toc.ncx"

    def render(self, nodes: list[DocumentedEntity], identity: PackageIdentity) -> str:
        return self._render_template(
            uuid=identity.uuid,
            nav_points=self.nav_points(nodes),
        )

    def nav_points(self, nodes: list[DocumentedEntity]) -> list[NavPoint]:
        order = 0

        def next_order() -> int:
            nonlocal order
            order += 1
            return order

        points = [NavPoint("title", self.config.project, "title.xhtml", next_order())]

        for extra in self._get_metadata()["extras"]:
            points.append(NavPoint(xml_id(extra, "extra-"), extra, href(f"{extra}.xhtml"), next_order()))

        for kind, items in self._groups(nodes):
            children = [
                NavPoint(xml_id(entity.id, "entity-"), entity.title, href(entity.output_name), next_order())
                for entity in items
            ]
            # Same target as the first child, so the same playOrder.
            points.append(NavPoint(kind.value, kind.label, children[0].href, children[0].play_order, children))

        return points
