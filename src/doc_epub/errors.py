"""
Structured error types for EPUB assembly.

Every failure the build pipeline raises on purpose is an ``EpubError``.
Errors carry a category, the offending path (when there is one), and the
chained underlying exception, so the CLI and logs can report them without
string parsing.

Taxonomy:
    ::

        EpubError
        ├── ConfigError        (CONFIG)   bad run inputs, names the input
        │   ├── ExtraFormatError          extra is not Markdown
        │   └── LogoFormatError           logo is not png/jpg
        ├── StorageError       (STORAGE)  filesystem failures, fatal
        │   ├── StagingError              staging tree create/write
        │   └── PackagingError            final archive write
        └── RenderError        (RENDER)   template rendering failed

Nothing in the pipeline retries. A caller that wants a retry re-invokes the
whole build.

Usage:
    from doc_epub.errors import ExtraFormatError

    try:
        build(entities, config)
    except ExtraFormatError as e:
        print(e.context.path)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories used for classification in logs and CLI output."""

    CONFIG = "CONFIG"
    STORAGE = "STORAGE"
    RENDER = "RENDER"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error."""

    path: str | None = None
    project: str | None = None
    phase: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, omitting unset fields."""
        result: dict[str, Any] = {}
        if self.path:
            result["path"] = self.path
        if self.project:
            result["project"] = self.project
        if self.phase:
            result["phase"] = self.phase
        if self.metadata:
            result["metadata"] = self.metadata
        return result


class EpubError(Exception):
    """
    Base exception for all doc-epub errors.

    Subclasses set ``default_category``. The ``cause`` is chained onto
    ``__cause__`` so tracebacks show the original I/O or template failure.

    Examples:
        >>> error = EpubError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(phase="package").context.phase
        'package'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> EpubError:
        """Add context to this error (fluent API)."""
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION / INPUT ERRORS
# =============================================================================


class ConfigError(EpubError):
    """Invalid run configuration or input file."""

    default_category = ErrorCategory.CONFIG


class ExtraFormatError(ConfigError):
    """A supplementary document does not have the Markdown extension."""

    def __init__(self, path: str | Path, allowed: str = ".md"):
        super().__init__(
            f"file format not recognized, allowed format is: {allowed} (got {path})",
            context=ErrorContext(path=str(path)),
        )
        self.path = str(path)


class LogoFormatError(ConfigError):
    """The configured logo is not an image format the reader supports."""

    def __init__(self, path: str | Path, allowed: tuple[str, ...] = (".png", ".jpg")):
        super().__init__(
            f"image format not recognized, allowed formats are: {', '.join(allowed)} (got {path})",
            context=ErrorContext(path=str(path)),
        )
        self.path = str(path)


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(EpubError):
    """Filesystem failure. Always fatal for the run."""

    default_category = ErrorCategory.STORAGE

    def __init__(self, message: str, *, path: str | Path | None = None, cause: Exception | None = None):
        super().__init__(
            message,
            context=ErrorContext(path=str(path) if path is not None else None),
            cause=cause,
        )


class StagingError(StorageError):
    """Could not create, clear, or write into the staging tree."""


class PackagingError(StorageError):
    """Could not write the final archive."""


# =============================================================================
# RENDER ERRORS
# =============================================================================


class RenderError(EpubError):
    """A template failed to render."""

    default_category = ErrorCategory.RENDER


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "EpubError",
    "ConfigError",
    "ExtraFormatError",
    "LogoFormatError",
    "StorageError",
    "StagingError",
    "PackagingError",
    "RenderError",
]
