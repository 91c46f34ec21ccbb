"""
Sitix - генератор статических сайтов на языке разметки Rasta.

Публичный API: ядро шаблонизатора (sitix.rasta) и сборщик сайта.
"""

from __future__ import annotations

from .engine import SiteBuilder, render_page, run_build
from .errors import SitixUserError
from .rasta import Renderer, Scope, TreeNode, load_document, parse_text, render

__all__ = [
    "SiteBuilder",
    "render_page",
    "run_build",
    "SitixUserError",
    "Renderer",
    "Scope",
    "TreeNode",
    "load_document",
    "parse_text",
    "render",
]
