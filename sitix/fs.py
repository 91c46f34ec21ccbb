from __future__ import annotations

import os
from pathlib import Path
from typing import Collection, Iterable, List, Optional

import pathspec


def build_gitignore_spec(root: Path) -> Optional[pathspec.PathSpec]:
    """
    Build PathSpec from .gitignore. Return None if .gitignore is missing.
    """
    gitignore = root / ".gitignore"
    if not gitignore.is_file():
        return None
    lines = []
    for ln in gitignore.read_text(encoding="utf-8", errors="ignore").splitlines():
        ln = ln.strip()
        if ln and not ln.startswith("#"):
            lines.append(ln)
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, lines)


def build_exclude_spec(patterns: Iterable[str]) -> Optional[pathspec.PathSpec]:
    """PathSpec for user exclude patterns (None when there are none)."""
    lines = [p for p in patterns if p]
    if not lines:
        return None
    return pathspec.PathSpec.from_lines(pathspec.patterns.GitWildMatchPattern, lines)


def _is_under(path: Path, parent: Path) -> bool:
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def iter_source_files(
    root: Path,
    *,
    skip_dirs: Collection[Path] = (),
    skip_files: Collection[Path] = (),
    specs: Iterable[Optional[pathspec.PathSpec]] = (),
) -> List[Path]:
    """
    Recursive file listing with .gitignore/exclude support and early directory pruning.

    Never enters .git or any of skip_dirs (templates and output directories).
    Returns absolute paths sorted by their root-relative POSIX form.
    """
    root = root.resolve()
    skip_dirs = [d.resolve() for d in skip_dirs]
    skip_files = {f.resolve() for f in skip_files}
    active = [s for s in specs if s is not None]

    def ignored(rel_posix: str) -> bool:
        return any(s.match_file(rel_posix) for s in active)

    out: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        keep: List[str] = []
        for d in dirnames:
            if d == ".git":
                continue
            abs_dir = Path(dirpath, d).resolve()
            if any(_is_under(abs_dir, s) for s in skip_dirs):
                continue
            rel_dir = abs_dir.relative_to(root).as_posix()
            # .gitignore can hide a branch completely
            if ignored(rel_dir + "/"):
                continue
            keep.append(d)
        dirnames[:] = keep

        for fn in filenames:
            p = Path(dirpath, fn).resolve()
            if p in skip_files:
                continue
            rel_posix = p.relative_to(root).as_posix()
            if ignored(rel_posix):
                continue
            out.append(p)

    out.sort(key=lambda p: p.relative_to(root).as_posix())
    return out


__all__ = ["build_gitignore_spec", "build_exclude_spec", "iter_source_files"]
