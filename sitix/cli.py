from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .errors import SitixUserError
from .jsonic import dumps as jdumps
from .version import tool_version

logger = logging.getLogger("sitix")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="sitix",
        description="Sitix: static site templating with Rasta markup",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "-V", "--verbose",
        action="store_true",
        help="подробный (debug) вывод логов; то же, что SITIX_DEBUG=1",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_build = sub.add_parser("build", help="Собрать сайт в каталог вывода")
    sp_build.add_argument("directory", nargs="?", default=".", help="корень проекта (по умолчанию .)")
    sp_build.add_argument(
        "output_directory",
        nargs="?",
        help="каталог вывода (по умолчанию <directory>/output или output_dir из sitix.yaml)",
    )
    sp_build.add_argument("--json", action="store_true", help="вывести JSON-отчёт о сборке в stdout")

    sp_render = sub.add_parser("render", help="Отрендерить один файл в stdout")
    sp_render.add_argument("file", help="файл с разметкой Rasta")
    sp_render.add_argument(
        "--template-dir",
        help="каталог шаблонов; без него выводится результат первого прохода",
    )
    sp_render.add_argument("--template", help="имя шаблона вместо выбранного страницей")

    # Отладочные дампы
    for name, help_text in (
        ("tokens", "Поток токенов файла"),
        ("tree", "Дерево документа"),
        ("scope", "Дерево скоупов после рендеринга"),
    ):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("file", help="файл с разметкой Rasta")

    return p


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or os.environ.get("SITIX_DEBUG") else logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _cmd_build(ns: argparse.Namespace) -> int:
    from .engine import run_build

    logger.info("** Sitix v%s **", tool_version())
    root = Path(ns.directory).resolve()
    output_dir: Optional[Path] = Path(ns.output_directory).resolve() if ns.output_directory else None

    report = run_build(root, output_dir)
    if ns.json:
        sys.stdout.write(jdumps(report.model_dump(mode="json", by_alias=True)))
    return 1 if report.has_errors else 0


def _cmd_render(ns: argparse.Namespace) -> int:
    from .config import DEFAULT_TEMPLATE
    from .engine import TemplateNotFoundError, render_page
    from .rasta import Scope, load_document, load_templates, render

    document = load_document(Path(ns.file))
    if not ns.template_dir:
        sys.stdout.write(render(document, Scope.top()))
        return 0

    templates = load_templates(Path(ns.template_dir))
    if not ns.template:
        text, _ = render_page(document, templates, DEFAULT_TEMPLATE)
        sys.stdout.write(text)
        return 0

    # Явно указанный шаблон важнее выбора страницы
    template = templates.get(ns.template)
    if template is None:
        raise TemplateNotFoundError(ns.template)
    scope = Scope.top()
    render(document, scope)
    sys.stdout.write(render(template, scope))
    return 0


def _cmd_dump(ns: argparse.Namespace) -> int:
    from .rasta import Scope, load_document, render, tokenize_bytes
    from .rasta.debug import format_scope, format_tokens, format_tree

    path = Path(ns.file)
    if ns.cmd == "tokens":
        sys.stdout.write(format_tokens(tokenize_bytes(path.read_bytes())) + "\n")
        return 0

    document = load_document(path)
    if ns.cmd == "tree":
        sys.stdout.write(format_tree(document) + "\n")
        return 0

    scope = Scope.top()
    render(document, scope)
    sys.stdout.write(format_scope(scope) + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.verbose)

    try:
        if ns.cmd == "build":
            return _cmd_build(ns)
        if ns.cmd == "render":
            return _cmd_render(ns)
        if ns.cmd in ("tokens", "tree", "scope"):
            return _cmd_dump(ns)
    except SitixUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except (ValueError, OSError) as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
