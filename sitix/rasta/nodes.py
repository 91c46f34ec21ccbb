"""
Узлы дерева документа.

Определяет неизменяемые операции (смысл узла) и сам узел дерева.
Каждый узел владеет своими детьми; после построения дерево не меняется.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

# Имя неявной переменной для [=-] ... [/]
CONTENT_VARIABLE = "content"


@dataclass(frozen=True)
class Operation:
    """Базовый класс для всех операций узла."""
    pass


@dataclass(frozen=True)
class Assignment(Operation):
    """
    Присваивание переменной [= name value] или [= name -] ... [/].

    Пустое value означает, что значение получается рендерингом детей узла.
    Пустое name означает неявную переменную content.
    """
    name: str
    value: str = ""

    @property
    def target(self) -> str:
        """Имя, под которым значение попадает в скоуп."""
        return self.name or CONTENT_VARIABLE

    def __str__(self) -> str:
        return f"={self.target} ({self.value})"


@dataclass(frozen=True)
class Label(Operation):
    """
    Чтение переменной [^ path default] по точечному пути.

    default=None означает, что запасным значением служит рендеринг детей.
    """
    path: str
    default: Optional[str] = None

    def __str__(self) -> str:
        if self.default is None:
            return f"Label {self.path}, no inline default"
        return f"Label {self.path}, inline default {self.default}"


@dataclass(frozen=True)
class Text(Operation):
    """Обычный текст, выводится в результат как есть."""
    text: str

    def __str__(self) -> str:
        return repr(self.text)


@dataclass(frozen=True)
class TreeNode:
    """Операция плюс упорядоченные дочерние узлы."""
    operation: Operation
    children: Tuple[TreeNode, ...] = ()

    @classmethod
    def empty(cls) -> TreeNode:
        """Пустой текстовый узел - сигнал "больше ничего нет"."""
        return cls(Text(""))

    @property
    def plaintext(self) -> str:
        if not isinstance(self.operation, Text):
            raise TypeError(f"Not a text node: {self.operation}")
        return self.operation.text

    def iter_assignments(self) -> Iterator[Assignment]:
        """Присваивания среди непосредственных детей."""
        for child in self.children:
            if isinstance(child.operation, Assignment):
                yield child.operation

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, TreeNode]]:
        """Обход в глубину: пары (уровень вложенности, узел)."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)


__all__ = [
    "CONTENT_VARIABLE",
    "Operation",
    "Assignment",
    "Label",
    "Text",
    "TreeNode",
]
