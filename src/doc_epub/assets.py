"""
Static asset handling.

Copies the bundled stylesheets, container registration file and
``mimetype`` into their fixed staging locations, and places the optional
project logo under ``OEBPS/assets``.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from doc_epub.config import EpubConfig
from doc_epub.errors import LogoFormatError, StagingError
from doc_epub.logging import get_logger
from doc_epub.models import StagingLayout

logger = get_logger(__name__)

ASSETS_DIR = Path(__file__).parent / "static"

LOGO_SUFFIXES = (".png", ".jpg", ".jpeg")

# (glob relative to the assets dir, destination relative to the staging root)
ASSET_RULES: tuple[tuple[str, str], ...] = (
    ("dist/*.css", "OEBPS/dist"),
    ("dist/*.js", "OEBPS/dist"),
    ("*.xml", "META-INF"),
    ("mimetype", "."),
)


def copy_assets(layout: StagingLayout, source_dir: Path = ASSETS_DIR) -> list[Path]:
    """Copy static assets into the staging tree.

    Returns:
        Paths of the copied files inside the staging tree
    """
    copied: list[Path] = []
    for pattern, destination in ASSET_RULES:
        target_dir = layout.root / destination
        for source in sorted(source_dir.glob(pattern)):
            if not source.is_file():
                continue
            try:
                target_dir.mkdir(parents=True, exist_ok=True)
                target = target_dir / source.name
                shutil.copyfile(source, target)
            except OSError as e:
                raise StagingError(f"Failed to copy asset {source.name}", path=target_dir, cause=e) from e
            copied.append(target)

    logger.debug("epub.assets_copied", count=len(copied))
    return copied


def process_logo(config: EpubConfig, layout: StagingLayout) -> EpubConfig:
    """Copy the configured logo into ``OEBPS/assets`` and return the derived config.

    The returned config's ``logo`` is relative to ``OEBPS/`` (for example
    ``assets/logo.png``) so templates can reference it directly. The input
    config is returned untouched when no logo is configured.

    Raises:
        LogoFormatError: logo is not png/jpg
        StagingError: logo could not be copied
    """
    if config.logo is None:
        return config

    source = Path(config.logo)
    suffix = source.suffix.lower()
    if suffix not in LOGO_SUFFIXES:
        raise LogoFormatError(source)

    target = layout.assets_dir / f"logo{suffix}"
    try:
        layout.assets_dir.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, target)
    except OSError as e:
        raise StagingError(f"Failed to copy logo {source}", path=source, cause=e) from e

    return config.with_logo(target.relative_to(layout.oebps_dir).as_posix())
