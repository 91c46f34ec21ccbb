"""Тесты для командной строки sitix."""

from pathlib import Path

import pytest

from sitix.cli import main
from tests.infrastructure import jload, run_cli, write


class TestBuildCommand:

    def test_build_json_report(self, site: Path, capsys):
        rc = main(["build", str(site), "--json"])

        assert rc == 0
        data = jload(capsys.readouterr().out)
        assert data["root"] == str(site.resolve())
        assert data["outputDir"] == str((site / "output").resolve())
        assert data["templates"] == ["default", "fancy"]
        pages = {p["source"]: p for p in data["pages"]}
        assert pages["index.html"]["action"] == "rendered"
        assert pages["index.html"]["template"] == "default"
        assert pages["css/style.css"]["action"] == "copied"

    def test_build_output_directory_argument(self, site: Path, tmp_path_factory):
        out = tmp_path_factory.mktemp("dist")

        assert main(["build", str(site), str(out)]) == 0
        assert (out / "about.html").read_text(encoding="utf-8") == "<b>About us</b>"

    def test_build_with_page_errors(self, site: Path):
        write(site / "broken.html", "[! nope]")

        assert main(["build", str(site)]) == 1

    def test_build_invalid_project(self, tmp_path: Path, capsys):
        rc = main(["build", str(tmp_path)])

        assert rc == 2
        assert "Templates directory does not exist" in capsys.readouterr().err


class TestRenderCommand:

    def test_render_first_pass_only(self, tmp_path: Path, capsys):
        p = write(tmp_path / "page.html", "[=name World]Hello, [^name]!")

        assert main(["render", str(p)]) == 0
        assert capsys.readouterr().out == "Hello, World!"

    def test_render_with_templates(self, site: Path, capsys):
        rc = main(["render", str(site / "about.html"), "--template-dir", str(site / "_templates")])

        assert rc == 0
        assert capsys.readouterr().out == "<b>About us</b>"

    def test_render_explicit_template(self, site: Path, capsys):
        rc = main([
            "render", str(site / "about.html"),
            "--template-dir", str(site / "_templates"),
            "--template", "default",
        ])

        assert rc == 0
        assert capsys.readouterr().out == "<html>About us</html>"

    def test_render_unknown_template(self, site: Path, capsys):
        rc = main([
            "render", str(site / "index.html"),
            "--template-dir", str(site / "_templates"),
            "--template", "nope",
        ])

        assert rc == 2
        assert "Template not found: nope" in capsys.readouterr().err

    def test_render_malformed(self, tmp_path: Path, capsys):
        p = write(tmp_path / "bad.html", "ok\n[! nope]")

        assert main(["render", str(p)]) == 2
        assert "2:1" in capsys.readouterr().err


class TestDebugCommands:

    def test_tokens(self, tmp_path: Path, capsys):
        p = write(tmp_path / "page.html", "a[^b]")

        assert main(["tokens", str(p)]) == 0
        out = capsys.readouterr().out
        assert "PLAIN_TEXT" in out
        assert "SIMPLE_TAG" in out

    def test_tree(self, tmp_path: Path, capsys):
        p = write(tmp_path / "page.html", "[=a-][^b c][/]")

        assert main(["tree", str(p)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[1] == "  =a ()"
        assert lines[2] == "    Label b, inline default c"

    def test_scope(self, tmp_path: Path, capsys):
        p = write(tmp_path / "page.html", "[=-][=hello-]world[/][/]")

        assert main(["scope", str(p)]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "- page"
        assert "  - content" in lines
        assert "    - hello" in lines
        assert "      'world'" in lines

    def test_missing_file(self, tmp_path: Path, capsys):
        assert main(["tree", str(tmp_path / "nope.html")]) == 2


class TestCliSubprocess:

    def test_version(self, tmp_path: Path):
        cp = run_cli(tmp_path, "--version")

        assert cp.returncode == 0
        assert cp.stdout.startswith("sitix ")

    @pytest.mark.parametrize("verbose", [False, True])
    def test_build_logs_to_stderr(self, site: Path, verbose):
        args = ["-V", "build"] if verbose else ["build"]
        cp = run_cli(site, *args)

        assert cp.returncode == 0, cp.stderr
        assert "Checking project validity." in cp.stderr
        assert cp.stdout == ""
        assert (site / "output" / "index.html").is_file()
