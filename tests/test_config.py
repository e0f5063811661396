"""Tests for doc_epub.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from doc_epub.config import EpubConfig, EpubSettings, get_settings, reset_settings


class TestEpubConfig:
    """Tests for EpubConfig."""

    def test_defaults(self):
        config = EpubConfig(project="demo", version="1.0.0")
        assert config.output == Path("doc")
        assert config.logo is None
        assert config.extras == ()
        assert config.deps == {}
        assert config.language == "en"
        assert (config.template_dir / "content.opf").is_file()

    def test_paths_are_normalized(self):
        config = EpubConfig(project="demo", version="1", output="out", logo="logo.png", extras=["a.md", "b.md"])
        assert config.output == Path("out")
        assert config.logo == Path("logo.png")
        assert config.extras == (Path("a.md"), Path("b.md"))

    def test_null_extras(self):
        assert EpubConfig.from_dict({"project": "demo", "version": "1", "extras": None}).extras == ()

    def test_epub_name(self):
        assert EpubConfig(project="demo", version="1.0.0").epub_name == "demo-v1.0.0.epub"

    def test_with_logo_returns_new_instance(self):
        config = EpubConfig(project="demo", version="1.0.0", logo="brand.png")
        derived = config.with_logo("assets/logo.png")
        assert derived.logo == Path("assets/logo.png")
        assert config.logo == Path("brand.png")

    def test_is_frozen(self):
        config = EpubConfig(project="demo", version="1.0.0")
        with pytest.raises(AttributeError):
            config.project = "other"

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "epub.yaml"
        path.write_text(
            "project: demo\n"
            "version: 2.0.0\n"
            "output: build/epub\n"
            "extras:\n"
            "  - README.md\n"
            "deps:\n"
            "  jinja2: https://jinja.palletsprojects.com/api\n"
            "unknown_key: ignored\n",
            encoding="utf-8",
        )
        config = EpubConfig.from_yaml(path)
        assert config.project == "demo"
        assert config.version == "2.0.0"
        assert config.output == Path("build/epub")
        assert config.extras == (Path("README.md"),)
        assert config.deps == {"jinja2": "https://jinja.palletsprojects.com/api"}

    def test_to_dict_round_trip(self):
        config = EpubConfig(project="demo", version="1.0.0", extras=["a.md"], deps={"x": "https://x"})
        assert EpubConfig.from_dict(config.to_dict()) == config


class TestEpubSettings:
    """Tests for EpubSettings and the cached accessor."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DOC_EPUB_MAX_WORKERS", raising=False)
        settings = EpubSettings(_env_file=None)
        assert settings.max_workers == 8
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DOC_EPUB_MAX_WORKERS", "3")
        monkeypatch.setenv("DOC_EPUB_LOG_FORMAT", "json")
        settings = EpubSettings(_env_file=None)
        assert settings.max_workers == 3
        assert settings.log_format == "json"

    def test_max_workers_must_be_positive(self):
        with pytest.raises(ValueError):
            EpubSettings(max_workers=0)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
        first = get_settings()
        reset_settings()
        assert get_settings() is not first
