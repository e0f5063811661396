"""
doc-epub

Assemble already-extracted API documentation (modules, exceptions,
protocols and Markdown extras) into a single EPUB 3 file.

Example:
    >>> from doc_epub import DocumentedEntity, EntityKind, EpubConfig, run
    >>> entities = [DocumentedEntity(id="foo", title="Foo", kind=EntityKind.MODULE)]
    >>> run(entities, EpubConfig(project="demo", version="1.0.0", output="doc"))
    PosixPath('/abs/doc/demo-v1.0.0.epub')
"""

from doc_epub.config import EpubConfig, EpubSettings, get_settings
from doc_epub.errors import EpubError, ExtraFormatError, LogoFormatError, PackagingError, StagingError
from doc_epub.identity import generate_identity
from doc_epub.models import DocumentedEntity, EntityKind, PackageIdentity, load_entities
from doc_epub.orchestrator import EpubOrchestrator, run
from doc_epub.packager import EpubPackager

__version__ = "0.1.0"

__all__ = [
    "DocumentedEntity",
    "EntityKind",
    "EpubConfig",
    "EpubError",
    "EpubOrchestrator",
    "EpubPackager",
    "EpubSettings",
    "ExtraFormatError",
    "LogoFormatError",
    "PackageIdentity",
    "PackagingError",
    "StagingError",
    "generate_identity",
    "get_settings",
    "load_entities",
    "run",
    "__version__",
]
