"""Tests for doc_epub.errors."""

from __future__ import annotations

from doc_epub.errors import (
    ConfigError,
    EpubError,
    ErrorCategory,
    ExtraFormatError,
    PackagingError,
    RenderError,
    StorageError,
)


class TestEpubError:
    def test_default_category(self):
        assert EpubError("boom").category == ErrorCategory.INTERNAL
        assert RenderError("boom").category == ErrorCategory.RENDER

    def test_cause_is_chained(self):
        cause = OSError("disk full")
        error = PackagingError("write failed", path="/tmp/x.epub", cause=cause)
        assert error.__cause__ is cause
        assert isinstance(error, StorageError)
        assert error.context.path == "/tmp/x.epub"

    def test_with_context(self):
        error = EpubError("boom").with_context(phase="pages", entity="foo")
        assert error.context.phase == "pages"
        assert error.context.metadata == {"entity": "foo"}

    def test_to_dict(self):
        error = PackagingError("write failed", path="out.epub", cause=OSError("nope"))
        assert error.to_dict() == {
            "error_type": "PackagingError",
            "message": "write failed",
            "category": "STORAGE",
            "context": {"path": "out.epub"},
            "cause": "nope",
        }


class TestExtraFormatError:
    def test_message_names_path(self):
        error = ExtraFormatError("docs/guide.txt")
        assert isinstance(error, ConfigError)
        assert error.path == "docs/guide.txt"
        assert str(error) == "file format not recognized, allowed format is: .md (got docs/guide.txt)"
