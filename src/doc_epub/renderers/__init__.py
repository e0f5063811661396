"""
Renderers for EPUB documents.

Structural documents (``content.opf``, ``toc.ncx``, ``nav.xhtml``,
``title.xhtml``) and per-item pages (entities and Markdown extras), all
sharing the render-and-write contract of ``BaseRenderer``.
"""

from doc_epub.renderers.base import BaseRenderer, href, media_type, xml_id
from doc_epub.renderers.content import ContentRenderer
from doc_epub.renderers.extra import ExtraRenderer
from doc_epub.renderers.module_page import ModulePageRenderer
from doc_epub.renderers.nav import NavRenderer
from doc_epub.renderers.title import TitleRenderer
from doc_epub.renderers.toc import NavPoint, TocRenderer

__all__ = [
    "BaseRenderer",
    "href",
    "media_type",
    "xml_id",
    "ContentRenderer",
    "ExtraRenderer",
    "ModulePageRenderer",
    "NavRenderer",
    "NavPoint",
    "TitleRenderer",
    "TocRenderer",
]
