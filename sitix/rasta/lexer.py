"""
Лексический анализатор языка Rasta.

Превращает сырой текст документа в упорядоченную последовательность
токенов: литеральный текст и теги вида [c body], где c - управляющий символ.
Обратный слеш экранирует разделители как в тексте, так и в теле тега.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from .tokens import Token, TokenType, CONTROL_CLOSE, CONTROL_COMMENT
from ..errors import SitixUserError

logger = logging.getLogger(__name__)

TAG_OPEN = "["
TAG_CLOSE = "]"
ESCAPE = "\\"
EXTENSION_MARK = "-"

# \[ \] \\ в тексте; в теле тега дополнительно \-
_TEXT_ESCAPES = re.compile(r"\\([\[\]\\])")
_BODY_ESCAPES = re.compile(r"\\([\[\]\\\-])")


class LexerError(SitixUserError):
    """Ошибка лексического анализа."""

    def __init__(self, message: str, line: int = 1, column: int = 1, position: int = 0):
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column
        self.position = position


def unescape_text(raw: str) -> str:
    """Снимает экранирование с литерального текста."""
    return _TEXT_ESCAPES.sub(r"\1", raw)


def unescape_body(raw: str) -> str:
    """Снимает экранирование с тела тега."""
    return _BODY_ESCAPES.sub(r"\1", raw)


def ends_with_extension_mark(body: str) -> bool:
    """
    Проверяет, что тело тега оканчивается неэкранированным '-'.

    Перед дефисом должно стоять чётное число обратных слешей
    (каждая пара - это экранированный слеш).
    """
    if not body.endswith(EXTENSION_MARK):
        return False
    head = body[:-1]
    slashes = len(head) - len(head.rstrip(ESCAPE))
    return slashes % 2 == 0


class RastaLexer:
    """
    Лексический анализатор документов Rasta.

    Читает входной текст один раз слева направо. Между тегами весь текст
    уходит в PLAIN_TEXT, комментарии [# ...] отбрасываются целиком.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.

        Незакрытый тег в конце потока не является ошибкой - он просто
        обрывается на конце текста.
        """
        tokens: List[Token] = []

        while not self._is_at_end():
            start_pos, start_line, start_column = self._mark()
            raw, _ = self._read_raw_until(TAG_OPEN)
            text = unescape_text(raw)
            if text:
                tokens.append(Token(TokenType.PLAIN_TEXT, text, "", start_pos, start_line, start_column))

            if self._is_at_end():
                break

            tag = self._read_tag()
            if tag is not None:
                tokens.append(tag)

        return tokens

    # ======= Внутренние методы =======

    def _read_tag(self) -> Optional[Token]:
        """
        Читает тег после уже поглощённой '['.

        Возвращает None для комментариев и для тега, оборванного
        сразу после открывающей скобки.
        """
        # '[' уже поглощена _read_raw_until, её позиция на шаг левее
        start_pos = self.position - 1
        start_line = self.line
        start_column = max(self.column - 1, 1)

        self._skip_whitespace()
        if self._is_at_end():
            logger.debug("Tag cut off by end of stream at %d:%d", start_line, start_column)
            return None

        control = self.text[self.position]
        self._advance(1)

        raw, terminated = self._read_raw_until(TAG_CLOSE)
        if not terminated:
            logger.debug("Unterminated tag at %d:%d", start_line, start_column)

        if control == CONTROL_CLOSE:
            return Token(TokenType.CLOSING_TAG, "", control, start_pos, start_line, start_column)

        if control == CONTROL_COMMENT:
            return None

        body = raw.strip()
        token_type = TokenType.SIMPLE_TAG
        if ends_with_extension_mark(body):
            body = body[:-1].strip()
            token_type = TokenType.EXT_TAG

        return Token(token_type, unescape_body(body), control, start_pos, start_line, start_column)

    def _read_raw_until(self, terminator: str) -> Tuple[str, bool]:
        """
        Читает текст до неэкранированного terminator.

        Сам terminator поглощается, но в результат не попадает.
        Экранирующие последовательности возвращаются как есть.

        Returns:
            Кортеж (сырой текст, найден ли terminator)
        """
        start = self.position
        pos = self.position
        while pos < self.length:
            char = self.text[pos]
            if char == ESCAPE and pos + 1 < self.length:
                pos += 2
                continue
            if char == terminator:
                raw = self.text[start:pos]
                self._advance(pos - start + 1)
                return raw, True
            pos += 1

        raw = self.text[start:]
        self._advance(self.length - start)
        return raw, False

    def _skip_whitespace(self) -> None:
        while not self._is_at_end() and self.text[self.position].isspace():
            self._advance(1)

    def _advance(self, count: int) -> None:
        """
        Перемещает позицию на указанное количество символов,
        обновляя номера строк и колонок.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1

    def _mark(self) -> Tuple[int, int, int]:
        return self.position, self.line, self.column

    def _is_at_end(self) -> bool:
        return self.position >= self.length


def tokenize(text: str) -> List[Token]:
    """
    Удобная функция для токенизации документа.

    Args:
        text: Исходный текст документа

    Returns:
        Список токенов
    """
    return RastaLexer(text).tokenize()


def tokenize_bytes(data: bytes) -> List[Token]:
    """
    Токенизирует сырые байты, строго декодируя их как UTF-8.

    Raises:
        LexerError: Если поток не декодируется как текст
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise LexerError(f"Input is not valid UTF-8 text ({e.reason})", position=e.start) from e
    return tokenize(text)


__all__ = [
    "RastaLexer",
    "LexerError",
    "tokenize",
    "tokenize_bytes",
    "unescape_text",
    "unescape_body",
    "ends_with_extension_mark",
]
