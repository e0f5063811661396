"""Markdown to XHTML conversion for extras."""

from __future__ import annotations

from pathlib import Path

import markdown as _markdown

from doc_epub.errors import RenderError

EXTENSIONS = ["fenced_code", "tables", "toc", "sane_lists"]


def to_xhtml(text: str, *, source: Path | str | None = None) -> str:
    """Convert Markdown text to an XHTML fragment.

    Args:
        text: Markdown source
        source: File the text came from, reported if conversion fails

    Raises:
        RenderError: the converter failed
    """
    md = _markdown.Markdown(extensions=EXTENSIONS, output_format="xhtml")
    try:
        return md.convert(text)
    except Exception as e:
        raise RenderError(f"Failed to convert Markdown from {source or '<string>'}", cause=e).with_context(
            path=str(source) if source else None
        ) from e
