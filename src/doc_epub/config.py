"""
Configuration for EPUB generation.

Two layers:

- ``EpubConfig``: the per-run package configuration (project, version,
  output directory, logo, extras, dependency links). Frozen; derived values
  such as the in-book logo path are produced with ``with_logo`` rather than
  by mutating the instance.
- ``EpubSettings``: process-wide knobs read from the environment
  (``DOC_EPUB_*``) or a ``.env`` file: log level/format and worker count.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class EpubConfig:
    """Configuration for one EPUB build.

    Attributes:
        project: Project name, used in titles and the archive file name
        version: Version string, used in titles and the archive file name
        output: Directory the staging tree and archive are written to.
            It is wiped at the start of every build.
        logo: Optional path to a png/jpg logo. After asset processing this
            holds the path relative to ``OEBPS/``.
        extras: Markdown documents to include as extra chapters
        deps: Dependency name -> documentation base URL, for autolinking
        language: ``dc:language`` of the package
        template_dir: Directory containing Jinja2 templates
    """

    project: str
    version: str
    output: Path = field(default_factory=lambda: Path("doc"))
    logo: Path | None = None
    extras: tuple[Path, ...] = ()
    deps: dict[str, str] = field(default_factory=dict)
    language: str = "en"
    template_dir: Path | None = None

    def __post_init__(self):
        """Normalize path-like fields, since YAML and the CLI hand over strings."""
        object.__setattr__(self, "output", Path(self.output))
        if self.logo is not None:
            object.__setattr__(self, "logo", Path(self.logo))
        object.__setattr__(self, "extras", tuple(Path(p) for p in self.extras or ()))
        object.__setattr__(self, "deps", dict(self.deps or {}))
        if self.template_dir is None:
            object.__setattr__(self, "template_dir", Path(__file__).parent / "templates")
        else:
            object.__setattr__(self, "template_dir", Path(self.template_dir))

    @property
    def epub_name(self) -> str:
        """File name of the archive: ``<project>-v<version>.epub``."""
        return f"{self.project}-v{self.version}.epub"

    def with_logo(self, logo: Path | str | None) -> EpubConfig:
        """Return a copy with ``logo`` replaced."""
        return dataclasses.replace(self, logo=Path(logo) if logo is not None else None)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> EpubConfig:
        """Load configuration from YAML file.

        Relative ``extras``/``logo``/``output`` paths are kept as written,
        i.e. relative to the working directory of the build.
        """
        return cls.from_dict(cls.read_yaml(yaml_path))

    @staticmethod
    def read_yaml(yaml_path: Path) -> dict[str, Any]:
        """Read a YAML config file into a plain dict (no validation)."""
        with open(yaml_path, encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EpubConfig:
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "project": self.project,
            "version": self.version,
            "output": str(self.output),
            "logo": str(self.logo) if self.logo else None,
            "extras": [str(p) for p in self.extras],
            "deps": dict(self.deps),
            "language": self.language,
            "template_dir": str(self.template_dir) if self.template_dir else None,
        }


class EpubSettings(BaseSettings):
    """Process settings loaded from ``DOC_EPUB_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_EPUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Render pool
    max_workers: int = Field(default=8, ge=1, description="Concurrent page renders per phase")


# Global settings instance
_settings: EpubSettings | None = None


def get_settings() -> EpubSettings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = EpubSettings()
    return _settings


def reset_settings() -> None:
    """Reset settings (for testing)."""
    global _settings
    _settings = None
