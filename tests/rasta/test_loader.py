"""Тесты для загрузки документов и шаблонов с диска."""

import logging
from pathlib import Path

import pytest

from sitix.rasta import DocumentLoadError, MalformedTagError, load_document, load_templates
from sitix.rasta.nodes import Assignment
from tests.infrastructure import write, write_bytes


class TestLoadDocument:

    def test_load_document(self, tmp_path: Path):
        p = write(tmp_path / "page.html", "[=title T][=-]body[/]")

        root = load_document(p)

        assert [c.operation for c in root.children] == [Assignment("title", "T"), Assignment("", "")]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(DocumentLoadError) as exc:
            load_document(tmp_path / "nope.html")

        assert exc.value.path == tmp_path / "nope.html"
        assert isinstance(exc.value.cause, OSError)

    def test_not_utf8(self, tmp_path: Path):
        """Файл, который не декодируется как текст, - ошибка загрузки."""
        p = write_bytes(tmp_path / "image.html", b"\x89PNG\r\n\x1a\n\xff\xd8")

        with pytest.raises(DocumentLoadError):
            load_document(p)

    def test_malformed_tag_propagates(self, tmp_path: Path):
        p = write(tmp_path / "bad.html", "[! nope]")

        with pytest.raises(MalformedTagError):
            load_document(p)


class TestLoadTemplates:

    def test_templates_by_stem(self, tmp_path: Path):
        write(tmp_path / "default.html", "[^content]")
        write(tmp_path / "fancy.html", "<b>[^content]</b>")
        write(tmp_path / "notes.txt", "ignored")

        templates = load_templates(tmp_path, [".html"])

        assert sorted(templates) == ["default", "fancy"]

    def test_broken_template_skipped(self, tmp_path: Path, caplog):
        """Шаблон, который не загрузился, пропускается с предупреждением."""
        write(tmp_path / "default.html", "[^content]")
        write(tmp_path / "broken.html", "[! nope]")

        with caplog.at_level(logging.WARNING, logger="sitix.rasta.loader"):
            templates = load_templates(tmp_path)

        assert list(templates) == ["default"]
        assert "broken.html" in caplog.text

    def test_duplicate_stem_warns(self, tmp_path: Path, caplog):
        """Два файла с одним именем шаблона: побеждает последний, с предупреждением."""
        write(tmp_path / "default.htm", "old")
        write(tmp_path / "default.html", "new")

        with caplog.at_level(logging.WARNING, logger="sitix.rasta.loader"):
            templates = load_templates(tmp_path, [".html", ".htm"])

        assert list(templates) == ["default"]
        assert templates["default"].children[0].plaintext == "new"
        assert "defined more than once" in caplog.text
        assert "default.html" in caplog.text

    def test_subdirectories_not_scanned(self, tmp_path: Path):
        write(tmp_path / "partials" / "nav.html", "nav")

        assert load_templates(tmp_path) == {}
