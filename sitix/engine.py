"""
Main build pipeline.

Renders every content page of a project through its template and mirrors
all other files into the output directory.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Dict, Optional, Tuple

from .config import SiteConfig, cfg_path, load_config
from .errors import SitixUserError
from .fs import build_exclude_spec, build_gitignore_spec, iter_source_files
from .rasta import (
    DocumentLoadError,
    MalformedTagError,
    Renderer,
    Scope,
    TreeNode,
    load_document,
    load_templates,
)
from .report import BuildReport, PageAction, PageResult
from .version import tool_version

logger = logging.getLogger(__name__)

# Paths checked, in order, to pick the template of a page
TEMPLATE_VARIABLES = ("content.template", "template")


class ProjectError(SitixUserError):
    """The project directory layout is not usable."""
    pass


class TemplateNotFoundError(SitixUserError):
    """A page selects a template that does not exist."""

    def __init__(self, name: str):
        super().__init__(f"Template not found: {name}")
        self.name = name


def is_rasta_page(document: TreeNode) -> bool:
    """A document is a page when it assigns something at the top level."""
    return next(document.iter_assignments(), None) is not None


def select_template_name(scope: Scope, default: str) -> str:
    """Template name bound in a populated page scope, or the default."""
    for path in TEMPLATE_VARIABLES:
        value = scope.resolve(path)
        if value and value.strip():
            return value.strip()
    return default


def render_page(
    document: TreeNode,
    templates: Dict[str, TreeNode],
    default_template: str,
    renderer: Optional[Renderer] = None,
) -> Tuple[str, str]:
    """
    Two-pass render of one page.

    The first pass only populates a fresh page scope; its output is dropped.
    The selected template is then rendered against that same scope.

    Returns:
        Tuple of (final text, template name)

    Raises:
        TemplateNotFoundError: If the selected template is not loaded
    """
    renderer = renderer or Renderer()
    scope = Scope.top()
    renderer.render(document, scope)

    name = select_template_name(scope, default_template)
    template = templates.get(name)
    if template is None:
        raise TemplateNotFoundError(name)

    return renderer.render(template, scope), name


def _is_under(path: Path, parent: Path) -> bool:
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


class SiteBuilder:
    """
    Build coordinating class.

    Validates the project, cleans the output directory, pre-parses templates
    and processes every discovered source file.
    """

    def __init__(self, root: Path, cfg: SiteConfig):
        self.root = root.resolve()
        self.cfg = cfg
        self.templates_dir = cfg.templates_path(self.root)
        self.output_dir = cfg.output_path(self.root)
        self.renderer = Renderer()
        self.templates: Dict[str, TreeNode] = {}

    def build(self) -> BuildReport:
        """
        Run the whole build.

        Page level problems (broken markup, unknown template) are recorded
        in the report and do not stop the build.

        Raises:
            ProjectError: If the templates directory is missing or the
                output directory would swallow the sources
        """
        self._check_project()
        self._clean_output()

        logger.info("Loading templates from %s", self.templates_dir)
        self.templates = load_templates(self.templates_dir, self.cfg.template_suffixes)
        logger.info(" Loaded %d template(s): %s", len(self.templates), ", ".join(sorted(self.templates)) or "-")

        report = BuildReport(
            tool_version=tool_version(),
            root=str(self.root),
            output_dir=str(self.output_dir),
            templates=sorted(self.templates),
        )

        for path in self._discover():
            report.pages.append(self._process_file(path))

        logger.info(
            "Build finished: %d rendered, %d copied, %d failed.",
            report.count(PageAction.RENDERED),
            report.count(PageAction.COPIED),
            report.count(PageAction.ERROR),
        )
        return report

    # ======= Internal methods =======

    def _check_project(self) -> None:
        logger.info("Checking project validity.")
        if not self.templates_dir.is_dir():
            raise ProjectError(f"Templates directory does not exist: {self.templates_dir}")
        logger.info(" Templates directory exists; project is valid.")

    def _clean_output(self) -> None:
        if _is_under(self.root, self.output_dir) or _is_under(self.templates_dir, self.output_dir):
            raise ProjectError(f"Refusing to use {self.output_dir} as output directory: it contains the sources")

        logger.info("Cleaning output directory.")
        if self.output_dir.exists():
            shutil.rmtree(self.output_dir)
            logger.info(" Removed old output directory.")
        else:
            logger.info(" Nothing to do! Selected output dir does not exist.")
        self.output_dir.mkdir(parents=True)

    def _discover(self):
        specs = [build_exclude_spec(self.cfg.exclude)]
        if self.cfg.respect_gitignore:
            specs.append(build_gitignore_spec(self.root))
        return iter_source_files(
            self.root,
            skip_dirs=(self.templates_dir, self.output_dir),
            skip_files=(cfg_path(self.root),),
            specs=specs,
        )

    def _process_file(self, path: Path) -> PageResult:
        rel = path.relative_to(self.root).as_posix()
        target = self.output_dir / rel

        if path.suffix.lower() not in self.cfg.page_extensions:
            return self._copy(path, target, rel)

        try:
            document = load_document(path)
        except DocumentLoadError as e:
            logger.warning("Passing %s through unchanged: %s", rel, e)
            return self._copy(path, target, rel)
        except MalformedTagError as e:
            logger.error("Failed to parse %s: %s", rel, e)
            return PageResult(source=rel, action=PageAction.ERROR, error=str(e))

        if not is_rasta_page(document):
            return self._copy(path, target, rel)

        try:
            text, template_name = render_page(document, self.templates, self.cfg.default_template, self.renderer)
        except TemplateNotFoundError as e:
            logger.error("Failed to render %s: %s", rel, e)
            return PageResult(source=rel, action=PageAction.ERROR, template=e.name, error=str(e))

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        logger.debug("Rendered %s with template '%s'", rel, template_name)
        return PageResult(source=rel, output=str(target), action=PageAction.RENDERED, template=template_name)

    def _copy(self, path: Path, target: Path, rel: str) -> PageResult:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, target)
        logger.debug("Copied %s", rel)
        return PageResult(source=rel, output=str(target), action=PageAction.COPIED)


def run_build(root: Path, output_dir: Optional[Path] = None) -> BuildReport:
    """Load the project configuration and build the site."""
    cfg = load_config(root, output_dir=output_dir)
    return SiteBuilder(root, cfg).build()


__all__ = [
    "SiteBuilder",
    "ProjectError",
    "TemplateNotFoundError",
    "render_page",
    "select_template_name",
    "is_rasta_page",
    "run_build",
]
