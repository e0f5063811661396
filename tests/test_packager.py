"""Tests for doc_epub.packager."""

from __future__ import annotations

import zipfile

import pytest

from doc_epub.errors import PackagingError
from doc_epub.models import MIMETYPE, ArchiveEntry
from doc_epub.packager import EpubPackager, compression_for, order_entries


@pytest.fixture
def staged(tmp_path):
    """Minimal staging tree with one file of each interesting suffix."""
    root = tmp_path / "doc"
    files = {
        "mimetype": MIMETYPE,
        "META-INF/container.xml": "<container/>",
        "OEBPS/content.opf": "<package/>",
        "OEBPS/toc.ncx": "<ncx/>",
        "OEBPS/foo.xhtml": "<html/>",
        "OEBPS/dist/epub.css": "body {}",
        "OEBPS/dist/app.js": "// js",
    }
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


class TestCompression:
    @pytest.mark.parametrize(
        "path",
        ["OEBPS/a.css", "OEBPS/a.xhtml", "OEBPS/a.html", "OEBPS/toc.ncx", "OEBPS/content.opf",
         "OEBPS/assets/logo.jpg", "OEBPS/assets/logo.png", "META-INF/container.xml"],
    )
    def test_deflated(self, path):
        assert compression_for(ArchiveEntry(path, b"")) == zipfile.ZIP_DEFLATED

    @pytest.mark.parametrize("path", ["mimetype", "OEBPS/dist/app.js", "OEBPS/fonts/a.woff", "OEBPS/README"])
    def test_stored(self, path):
        assert compression_for(ArchiveEntry(path, b"")) == zipfile.ZIP_STORED

    def test_order_entries(self):
        entries = [ArchiveEntry("OEBPS/a.xhtml", b""), ArchiveEntry("mimetype", b""), ArchiveEntry("META-INF/c.xml", b"")]
        assert [e.path for e in order_entries(entries)] == ["mimetype", "OEBPS/a.xhtml", "META-INF/c.xml"]


class TestEpubPackager:
    """Tests for EpubPackager."""

    def test_archive_name_and_location(self, staged, config):
        path = EpubPackager().package(staged, config)
        assert path == (staged / "demo-v1.0.0.epub").resolve()
        assert path.is_absolute()

    def test_mimetype_first_and_stored(self, staged, config):
        path = EpubPackager().package(staged, config)
        with zipfile.ZipFile(path) as zf:
            first = zf.infolist()[0]
            assert first.filename == "mimetype"
            assert first.compress_type == zipfile.ZIP_STORED
            assert zf.read("mimetype") == b"application/epub+zip"

    def test_per_entry_compression(self, staged, config):
        path = EpubPackager().package(staged, config)
        with zipfile.ZipFile(path) as zf:
            methods = {i.filename: i.compress_type for i in zf.infolist()}
        assert methods["OEBPS/foo.xhtml"] == zipfile.ZIP_DEFLATED
        assert methods["META-INF/container.xml"] == zipfile.ZIP_DEFLATED
        assert methods["OEBPS/dist/app.js"] == zipfile.ZIP_STORED

    def test_contents_preserved(self, staged, config):
        path = EpubPackager().package(staged, config)
        with zipfile.ZipFile(path) as zf:
            assert zf.read("OEBPS/dist/epub.css") == b"body {}"
            assert zf.testzip() is None

    def test_does_not_include_itself(self, staged, config):
        packager = EpubPackager()
        packager.package(staged, config)
        path = packager.package(staged, config)
        with zipfile.ZipFile(path) as zf:
            assert not any(n.endswith(".epub") for n in zf.namelist())

    def test_write_failure(self, staged, config, monkeypatch):
        def fail(self, target, entries):
            target.write_bytes(b"partial")
            raise OSError("disk full")

        monkeypatch.setattr(EpubPackager, "write", fail)
        with pytest.raises(PackagingError) as exc_info:
            EpubPackager().package(staged, config)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert not (staged / "demo-v1.0.0.epub").exists()

    def test_inspect(self, staged, config):
        packager = EpubPackager()
        members = packager.inspect(packager.package(staged, config))
        assert members[0].name == "mimetype"
        assert members[0].compressed is False
        assert members[0].size_bytes == len(MIMETYPE)

    def test_inspect_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            EpubPackager().inspect(tmp_path / "nope.epub")
