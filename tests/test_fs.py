"""Tests for source discovery."""

from pathlib import Path

from sitix.fs import build_exclude_spec, build_gitignore_spec, iter_source_files
from tests.infrastructure import write


def _rel(root: Path, paths):
    return [p.relative_to(root.resolve()).as_posix() for p in paths]


class TestIterSourceFiles:

    def test_sorted_listing(self, tmp_path: Path):
        write(tmp_path / "b.html", "")
        write(tmp_path / "a" / "z.css", "")
        write(tmp_path / "a.html", "")

        assert _rel(tmp_path, iter_source_files(tmp_path)) == ["a.html", "a/z.css", "b.html"]

    def test_skips_git_and_skip_dirs(self, tmp_path: Path):
        write(tmp_path / ".git" / "HEAD", "ref")
        write(tmp_path / "_templates" / "default.html", "")
        write(tmp_path / "output" / "old.html", "")
        write(tmp_path / "index.html", "")
        write(tmp_path / "sitix.yaml", "")

        files = iter_source_files(
            tmp_path,
            skip_dirs=(tmp_path / "_templates", tmp_path / "output"),
            skip_files=(tmp_path / "sitix.yaml",),
        )

        assert _rel(tmp_path, files) == ["index.html"]

    def test_specs(self, tmp_path: Path):
        write(tmp_path / ".gitignore", "# comment\nbuild/\n*.log\n")
        write(tmp_path / "build" / "x.html", "")
        write(tmp_path / "debug.log", "")
        write(tmp_path / "draft.bak", "")
        write(tmp_path / "index.html", "")

        files = iter_source_files(
            tmp_path,
            specs=(build_gitignore_spec(tmp_path), build_exclude_spec(["*.bak"])),
        )

        assert _rel(tmp_path, files) == [".gitignore", "index.html"]

    def test_missing_gitignore(self, tmp_path: Path):
        assert build_gitignore_spec(tmp_path) is None
        assert build_exclude_spec([]) is None
