"""
Лексические типы языка Rasta.

Поток токенов состоит всего из четырёх видов: обычный текст,
простой тег, расширенный тег (открывает вложенную область)
и закрывающий тег [/].
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в документе."""
    PLAIN_TEXT = "PLAIN_TEXT"    # литеральный текст
    SIMPLE_TAG = "SIMPLE_TAG"    # [c body]
    EXT_TAG = "EXT_TAG"          # [c body -] ... [/]
    CLOSING_TAG = "CLOSING_TAG"  # [/]


# Управляющие символы тегов
CONTROL_COMMENT = "#"
CONTROL_LABEL = "^"
CONTROL_ASSIGN = "="
CONTROL_TEMPLATE = "!"
CONTROL_CLOSE = "/"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.

    Для PLAIN_TEXT value хранит текст, для тегов - обрезанное тело тега.
    """
    type: TokenType
    value: str = ""
    control: str = ""
    position: int = 0    # Позиция в исходном тексте
    line: int = 1        # Номер строки (начиная с 1)
    column: int = 1      # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        if self.type == TokenType.PLAIN_TEXT:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        if self.type == TokenType.CLOSING_TAG:
            return f"Token({self.type.name}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.control!r}, {self.value!r}, {self.line}:{self.column})"


__all__ = [
    "TokenType",
    "Token",
    "CONTROL_COMMENT",
    "CONTROL_LABEL",
    "CONTROL_ASSIGN",
    "CONTROL_TEMPLATE",
    "CONTROL_CLOSE",
]
