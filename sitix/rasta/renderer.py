"""
Рендерер документов Rasta.

Рекурсивно обходит дерево документа на фоне скоупа: присваивания наполняют
скоуп, метки читают из него, текст уходит в результат как есть. Итоговая
строка одновременно возвращается и сохраняется как содержимое скоупа,
чтобы внешний проход (шаблон) мог переиспользовать её.
"""

from __future__ import annotations

import logging
from typing import List

from .nodes import Assignment, Label, Text, TreeNode
from .scope import Scope

logger = logging.getLogger(__name__)


class Renderer:
    """
    Рендерер дерева документа.

    Рендеринг не может завершиться ошибкой: отсутствующая переменная
    заменяется значением по умолчанию или рендерингом детей метки.
    """

    def render(self, node: TreeNode, scope: Scope) -> str:
        """
        Рендерит детей узла на фоне скоупа.

        Args:
            node: Узел, чьи дети обрабатываются по порядку
            scope: Текущий скоуп (читается и изменяется на месте)

        Returns:
            Отрендеренный текст; он же записывается в scope.content
        """
        parts: List[str] = []

        for child in node.children:
            operation = child.operation

            if isinstance(operation, Assignment):
                self._assign(child, operation, scope)
            elif isinstance(operation, Text):
                parts.append(operation.text)
            elif isinstance(operation, Label):
                parts.append(self._read_label(child, operation, scope))
            else:
                logger.warning("No renderer for operation type: %s", type(operation).__name__)

        result = "".join(parts)
        scope.content = result
        return result

    # ======= Внутренние методы =======

    def _assign(self, node: TreeNode, operation: Assignment, scope: Scope) -> None:
        # Всегда новый скоуп: при повторе имени поиск найдёт первое связывание
        target = scope.create_child(operation.target)

        if operation.value:
            # Литеральное значение побеждает, дети игнорируются
            target.content = operation.value.strip()
        else:
            self.render(node, target)

    def _read_label(self, node: TreeNode, operation: Label, scope: Scope) -> str:
        value = scope.resolve(operation.path)
        if value is not None:
            return value.strip()

        if operation.default is not None:
            return operation.default.strip()

        return self.render(node, scope).strip()


def render(node: TreeNode, scope: Scope) -> str:
    """Удобная функция для рендеринга узла на фоне скоупа."""
    return Renderer().render(node, scope)


__all__ = ["Renderer", "render"]
