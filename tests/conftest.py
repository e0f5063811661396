"""
Shared pytest fixtures for doc-epub tests.

This module provides:
- Sample entities covering every kind, deliberately out of reading order
- Run configs pointing at a temporary output directory
- A staged layout with assets copied, for renderer tests
- Settings/logging reset between tests
"""

from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from doc_epub.assets import copy_assets
from doc_epub.config import EpubConfig, EpubSettings, reset_settings
from doc_epub.models import DocumentedEntity, EntityKind, StagingLayout


# =============================================================================
# Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_state() -> Generator[None, None, None]:
    """Reset cached settings and structlog config around each test."""
    reset_settings()
    yield
    reset_settings()
    structlog.reset_defaults()


# =============================================================================
# Entities
# =============================================================================


@pytest.fixture
def foo_module() -> DocumentedEntity:
    return DocumentedEntity(
        id="foo",
        title="Foo",
        kind=EntityKind.MODULE,
        body="<p>Foo does things.</p>",
        summary="The foo module.",
        related=("Demo.Error",),
    )


@pytest.fixture
def entities(foo_module) -> list[DocumentedEntity]:
    """One of each kind plus a second module, listed out of reading order."""
    return [
        DocumentedEntity(id="Demo.Proto", title="Demo.Proto", kind=EntityKind.PROTOCOL, body="<p>A protocol.</p>"),
        foo_module,
        DocumentedEntity(id="Demo.Error", title="Demo.Error", kind=EntityKind.EXCEPTION, body="<p>Raised.</p>"),
        DocumentedEntity(id="bar", title="Bar", kind=EntityKind.MODULE, body="<p>Bar &amp; co.</p>"),
    ]


@pytest.fixture
def reading_order() -> list[str]:
    """Ids of ``entities`` in modules -> exceptions -> protocols order."""
    return ["foo", "bar", "Demo.Error", "Demo.Proto"]


# =============================================================================
# Config / settings
# =============================================================================


@pytest.fixture
def output_dir(tmp_path) -> Path:
    return tmp_path / "doc"


@pytest.fixture
def config(output_dir) -> EpubConfig:
    return EpubConfig(project="demo", version="1.0.0", output=output_dir)


@pytest.fixture
def settings() -> EpubSettings:
    return EpubSettings(max_workers=4)


@pytest.fixture
def extra_file(tmp_path) -> Path:
    """A Markdown extra referencing an entity."""
    path = tmp_path / "intro.md"
    path.write_text("# Introduction\n\nStart with `foo`, then read `Missing.Thing`.\n", encoding="utf-8")
    return path


@pytest.fixture
def logo_file(tmp_path) -> Path:
    path = tmp_path / "brand.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\nfake")
    return path


# =============================================================================
# Staging
# =============================================================================


@pytest.fixture
def layout(output_dir) -> StagingLayout:
    """Staging tree with ``OEBPS/`` created and static assets copied."""
    staged = StagingLayout(output_dir)
    staged.oebps_dir.mkdir(parents=True)
    copy_assets(staged)
    return staged
