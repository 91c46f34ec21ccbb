"""
Построитель дерева документа ("сгущение" токенов).

Преобразует последовательность токенов в дерево узлов. Расширенный тег
забирает в дети все узлы до ближайшего закрывающего тега [/]; конец потока
работает как неявное закрытие.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from .nodes import Assignment, Label, Operation, Text, TreeNode
from .tokens import Token, TokenType, CONTROL_ASSIGN, CONTROL_LABEL, CONTROL_TEMPLATE
from ..errors import SitixUserError

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")


class MalformedTagError(SitixUserError):
    """Тег, который не может быть превращён в узел дерева."""

    def __init__(self, message: str, token: Optional[Token] = None):
        if token is not None:
            message = f"{message} at {token.line}:{token.column}"
        super().__init__(message)
        self.token = token
        self.line = token.line if token else None
        self.column = token.column if token else None


def split_first_word(body: str) -> Tuple[str, str]:
    """
    Делит тело тега по первой серии пробельных символов.

    Returns:
        Кортеж (первое слово, обрезанный остаток); обе части могут быть пустыми
    """
    parts = _WHITESPACE_RUN.split(body.strip(), maxsplit=1)
    head = parts[0]
    rest = parts[1].strip() if len(parts) > 1 else ""
    return head, rest


def make_operation(control: str, body: str, token: Optional[Token] = None) -> Operation:
    """
    Выводит операцию узла из управляющего символа и тела тега.

    Raises:
        MalformedTagError: Для неподдерживаемого управляющего символа
    """
    if control == CONTROL_ASSIGN:
        name, value = split_first_word(body)
        return Assignment(name=name, value=value)

    if control == CONTROL_LABEL:
        path, default = split_first_word(body)
        return Label(path=path, default=default or None)

    if control == CONTROL_TEMPLATE:
        # Выбор шаблона делается присваиванием [=template name]
        raise MalformedTagError("Template tags are not supported, use [=template name]", token)

    raise MalformedTagError(f"Unsupported tag kind {control!r}", token)


class TreeBuilder:
    """
    Рекурсивный построитель дерева.

    Все рекурсивные вызовы потребляют токены из общего курсора.
    """

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.position = 0

    def parse(self) -> TreeNode:
        """
        Строит весь документ.

        Returns:
            Неявный корневой узел, детьми которого являются узлы верхнего уровня

        Raises:
            MalformedTagError: При неподдерживаемом теге
        """
        children: List[TreeNode] = []

        while not self._is_at_end():
            token = self._peek()
            if token.type == TokenType.CLOSING_TAG:
                # Лишний [/] на верхнем уровне некому поглотить
                logger.debug("Skipping unmatched closing tag at %d:%d", token.line, token.column)
                self._advance()
                continue
            children.append(self.congeal())

        return TreeNode(Text(""), tuple(children))

    def congeal(self) -> TreeNode:
        """
        Строит один узел (и его детей для расширенного тега).

        Returns:
            Узел дерева; пустой текстовый узел, если токены закончились
        """
        if self._is_at_end():
            return TreeNode.empty()

        token = self._advance()

        if token.type == TokenType.PLAIN_TEXT:
            return TreeNode(Text(token.value))

        if token.type == TokenType.SIMPLE_TAG:
            return TreeNode(make_operation(token.control, token.value, token))

        if token.type == TokenType.EXT_TAG:
            operation = make_operation(token.control, token.value, token)
            children: List[TreeNode] = []
            while True:
                if self._is_at_end():
                    logger.debug("Extended tag at %d:%d closed by end of stream", token.line, token.column)
                    break
                if self._peek().type == TokenType.CLOSING_TAG:
                    self._advance()
                    break
                children.append(self.congeal())
            return TreeNode(operation, tuple(children))

        # Закрывающий тег сюда попадать не должен: его поглощает цикл выше
        raise MalformedTagError("Unexpected closing tag", token)

    # ======= Внутренние методы =======

    def _peek(self) -> Token:
        return self.tokens[self.position]

    def _advance(self) -> Token:
        token = self.tokens[self.position]
        self.position += 1
        return token

    def _is_at_end(self) -> bool:
        return self.position >= len(self.tokens)


def parse_document(tokens: Sequence[Token]) -> TreeNode:
    """Удобная функция: токены -> корневой узел документа."""
    return TreeBuilder(tokens).parse()


__all__ = [
    "TreeBuilder",
    "MalformedTagError",
    "make_operation",
    "split_first_word",
    "parse_document",
]
