"""
EPUB Orchestrator.

Coordinates one build: staging tree, assets, extras, structural documents,
entity pages, archive, cleanup.

Example:
    >>> from doc_epub import EpubConfig, run
    >>> run(entities, EpubConfig(project="demo", version="1.0.0"))
    PosixPath('/abs/doc/demo-v1.0.0.epub')
"""

from __future__ import annotations

import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Iterable

from doc_epub.assets import copy_assets, process_logo
from doc_epub.config import EpubConfig, EpubSettings, get_settings
from doc_epub.errors import StagingError
from doc_epub.identity import generate_identity
from doc_epub.logging import LogContext, get_logger
from doc_epub.models import MIMETYPE, DocumentedEntity, EntityKind, StagingLayout, partition
from doc_epub.packager import EpubPackager
from doc_epub.renderers import (
    ContentRenderer,
    ExtraRenderer,
    ModulePageRenderer,
    NavRenderer,
    TitleRenderer,
    TocRenderer,
)

logger = get_logger(__name__)


class EpubOrchestrator:
    """Orchestrate the assembly of one EPUB file.

    Manifesto:
        One call turns extracted entities and a config into one archive.
        The staging tree is working storage only: it is created at the
        start and removed at the end, whether or not the build succeeded.

    Architecture:
        ```
        EpubOrchestrator.run(entities)
              │
              ├──► recreate <output>/ with OEBPS/
              ├──► copy assets, derive logo config
              ├──► write mimetype
              ├──► ExtraRenderer.write()        (pool, one task per extra)
              ├──► generate_identity()
              ├──► Content/Toc/Nav/TitleRenderer.write()
              ├──► ModulePageRenderer.write()   (pool, one task per entity)
              ├──► EpubPackager.package()
              └──► remove META-INF/, mimetype, OEBPS/   (always)
        ```

    Guardrails:
        - ``config.output`` is wiped first. Do not point it at a directory
          holding anything else.
        - Entity ids and extra stems must be unique; collisions overwrite
          each other silently.
        - A failed render aborts the build; nothing is retried.

    Examples:
        >>> orch = EpubOrchestrator(EpubConfig(project="demo", version="1.0.0"))
        >>> orch.run(entities)
        PosixPath('/abs/doc/demo-v1.0.0.epub')
    """

    def __init__(
        self,
        config: EpubConfig,
        settings: EpubSettings | None = None,
        packager: EpubPackager | None = None,
        converter: Callable[..., str] | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Run configuration
            settings: Process settings (worker count); ``get_settings()`` if omitted
            packager: Archive packager, replaceable for testing
            converter: Markdown -> XHTML function for extras
        """
        self.config = config
        self.settings = settings or get_settings()
        self.packager = packager or EpubPackager()
        self.converter = converter
        self.layout = StagingLayout(Path(config.output).resolve())

    def run(self, entities: Iterable[DocumentedEntity]) -> Path:
        """Build the EPUB.

        Args:
            entities: Every documented entity of the project

        Returns:
            Absolute path of the archive
        """
        entities = list(entities)

        with LogContext(project=self.config.project, version=self.config.version):
            logger.info("epub.build_started", output=str(self.layout.root), entities=len(entities))
            try:
                path = self._build(entities)
            finally:
                self.cleanup()
            logger.info("epub.build_completed", archive=str(path))
        return path

    def _build(self, entities: list[DocumentedEntity]) -> Path:
        self.prepare_staging()
        copy_assets(self.layout)

        groups = partition(entities)
        config = process_logo(self.config, self.layout)

        self.write_mimetype()

        extras = ExtraRenderer(config, self.layout, entities, converter=self.converter)
        self._fan_out("extras", extras.write, config.extras)

        identity = generate_identity()
        nodes = groups[EntityKind.MODULE] + groups[EntityKind.EXCEPTION] + groups[EntityKind.PROTOCOL]

        ContentRenderer(config, self.layout).write(nodes, identity)
        TocRenderer(config, self.layout).write(nodes, identity)
        NavRenderer(config, self.layout).write(nodes)
        TitleRenderer(config, self.layout).write()
        logger.debug("epub.phase_completed", phase="structure", uuid=identity.uuid)

        pages = ModulePageRenderer(config, self.layout, nodes)
        self._fan_out("pages", pages.write, nodes)

        return self.packager.package(self.layout.root, config)

    # -- staging tree --------------------------------------------------------

    def prepare_staging(self) -> None:
        """Remove whatever exists at the output path and create a fresh tree."""
        root = self.layout.root
        try:
            if root.is_dir() and not root.is_symlink():
                shutil.rmtree(root)
            elif root.exists() or root.is_symlink():
                root.unlink()
            self.layout.oebps_dir.mkdir(parents=True)
        except OSError as e:
            raise StagingError(f"Failed to prepare output directory {root}", path=root, cause=e) from e

    def write_mimetype(self) -> None:
        try:
            self.layout.mimetype_path.write_bytes(MIMETYPE.encode("ascii"))
        except OSError as e:
            raise StagingError("Failed to write mimetype", path=self.layout.mimetype_path, cause=e) from e

    def cleanup(self) -> None:
        """Delete the staging tree, leaving only the archive in ``output``.

        Best effort: failures are logged and never raised, so an earlier
        build error is not replaced by a cleanup error.
        """
        for target in self.layout.staged_paths:
            try:
                if target.is_dir() and not target.is_symlink():
                    shutil.rmtree(target)
                else:
                    target.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("epub.cleanup_failed", path=str(target), error=str(e))

    # -- concurrency ---------------------------------------------------------

    def _fan_out(self, phase: str, fn: Callable[[Any], Any], items: Iterable[Any]) -> None:
        """Run ``fn`` over ``items`` on a bounded pool and wait for all of them.

        Every task runs to completion; the first failure, in submission
        order, is then re-raised.
        """
        items = list(items)
        if not items:
            return

        with ThreadPoolExecutor(max_workers=self.settings.max_workers, thread_name_prefix=f"epub-{phase}") as pool:
            futures = [pool.submit(fn, item) for item in items]

        for future in futures:
            future.result()

        logger.debug("epub.phase_completed", phase=phase, count=len(items))


def run(
    entities: Iterable[DocumentedEntity],
    config: EpubConfig,
    settings: EpubSettings | None = None,
) -> Path:
    """Build an EPUB for ``entities`` and return the archive path."""
    return EpubOrchestrator(config, settings=settings).run(entities)
