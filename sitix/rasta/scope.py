"""
Иерархическая модель переменных (скоупов).

Дерево скоупов повторяет вложенность присваиваний в документе, поэтому
переменная из [=hello-][=world-]...[/][/] доступна снаружи как hello.world,
а изнутри блока hello - просто как world.
"""

from __future__ import annotations

import logging
import weakref
from typing import Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

ROOT_SCOPE_NAME = "page"
PATH_SEPARATOR = "."


def split_path(path: str) -> List[str]:
    """Делит точечный путь на сегменты."""
    return path.split(PATH_SEPARATOR)


class Scope:
    """
    Именованный узел дерева переменных.

    Скоуп владеет своими детьми; ссылка на родителя слабая и используется
    только для поиска вверх по дереву. Корневой скоуп должен удерживать
    вызывающий код на всё время прохода рендеринга.
    """

    def __init__(self, name: str, parent: Optional[Scope] = None):
        self.name = name
        self.content = ""
        self.children: List[Scope] = []
        self._parent_ref: Optional[weakref.ReferenceType[Scope]] = (
            weakref.ref(parent) if parent is not None else None
        )

    @classmethod
    def top(cls) -> Scope:
        """Создаёт корневой скоуп страницы."""
        return cls(ROOT_SCOPE_NAME)

    @property
    def parent(self) -> Optional[Scope]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def create_child(self, name: str) -> Scope:
        """
        Создаёт новый дочерний скоуп с пустым содержимым.

        Имена детей не обязаны быть уникальными - поиск всегда
        возвращает первое совпадение.
        """
        child = Scope(name, parent=self)
        self.children.append(child)
        return child

    def get_child(self, name: str) -> Optional[Scope]:
        """Первый непосредственный потомок с указанным именем."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def find(self, path: str) -> Optional[Scope]:
        """
        Находит скоуп по точечному пути.

        Порядок разрешения:
        1. Первый сегмент - имя собственного потомка: спускаемся строго вниз.
        2. Первый сегмент - собственное имя: спускаемся от себя по остатку пути.
        3. Иначе ищем ближайшего предка, у которого есть потомок с таким именем,
           и спускаемся от него.

        Returns:
            Найденный скоуп или None
        """
        segments = split_path(path)
        head = segments[0]

        if self.get_child(head) is not None:
            return self._descend(segments)

        if head == self.name:
            if len(segments) == 1:
                return self
            return self._descend(segments[1:])

        ancestor = self.walk_up(head)
        if ancestor is None:
            return None
        return ancestor._descend(segments)

    def resolve(self, path: str) -> Optional[str]:
        """
        Возвращает содержимое скоупа по точечному пути.

        Значение не перерендеривается - оно должно быть уже заполнено.

        Returns:
            Строковое содержимое или None, если переменная не найдена
        """
        scope = self.find(path)
        if scope is None:
            return None
        return scope.content

    def walk_up(self, target: str) -> Optional[Scope]:
        """Ближайший предок, у которого есть потомок с именем target."""
        cursor = self.parent
        while cursor is not None:
            logger.debug("Looking for '%s' in ancestor scope '%s'", target, cursor.name)
            if cursor.get_child(target) is not None:
                return cursor
            cursor = cursor.parent
        logger.debug("Could not find scope referred to by '%s' above '%s'", target, self.name)
        return None

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, Scope]]:
        """Обход поддерева в глубину: пары (уровень, скоуп)."""
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)

    @property
    def child_names(self) -> List[str]:
        return [child.name for child in self.children]

    def _descend(self, segments: Sequence[str]) -> Optional[Scope]:
        cursor: Scope = self
        for segment in segments:
            child = cursor.get_child(segment)
            if child is None:
                return None
            cursor = child
        return cursor

    def __repr__(self) -> str:
        return f"Scope({self.name!r}, children={self.child_names})"


__all__ = ["Scope", "ROOT_SCOPE_NAME", "PATH_SEPARATOR", "split_path"]
