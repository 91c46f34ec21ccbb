"""Текстовые дампы токенов, дерева документа и дерева скоупов для отладки."""

from __future__ import annotations

from typing import List, Sequence

from .nodes import TreeNode
from .scope import Scope
from .tokens import Token

INDENT = "  "


def format_tokens(tokens: Sequence[Token]) -> str:
    """По одному токену на строку."""
    return "\n".join(repr(token) for token in tokens)


def format_tree(node: TreeNode) -> str:
    """Дерево документа с отступом по уровню вложенности."""
    return "\n".join(f"{INDENT * depth}{n.operation}" for depth, n in node.walk())


def format_scope(scope: Scope) -> str:
    """
    Дерево скоупов: имя скоупа, под ним его содержимое,
    затем вложенные скоупы на следующем уровне.
    """
    lines: List[str] = []
    for depth, item in scope.walk():
        lines.append(f"{INDENT * depth}- {item.name}")
        lines.append(f"{INDENT * (depth + 1)}{item.content!r}")
    return "\n".join(lines)


__all__ = ["format_tokens", "format_tree", "format_scope"]
