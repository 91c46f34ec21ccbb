"""
Rasta - язык разметки шаблонов Sitix.

Теги вида [c body] встраиваются в произвольные текстовые файлы:
присваивание [= name value], чтение [^ name default], комментарий [# ...],
расширенные теги [c body -] ... [/] с вложенным содержимым.
"""

from __future__ import annotations

from .lexer import RastaLexer, LexerError, tokenize, tokenize_bytes
from .loader import DocumentLoadError, load_document, load_templates, parse_text
from .nodes import CONTENT_VARIABLE, Assignment, Label, Operation, Text, TreeNode
from .parser import MalformedTagError, TreeBuilder, make_operation, parse_document
from .renderer import Renderer, render
from .scope import ROOT_SCOPE_NAME, Scope
from .tokens import Token, TokenType

__all__ = [
    "RastaLexer",
    "LexerError",
    "tokenize",
    "tokenize_bytes",
    "Token",
    "TokenType",
    "Operation",
    "Assignment",
    "Label",
    "Text",
    "TreeNode",
    "CONTENT_VARIABLE",
    "TreeBuilder",
    "MalformedTagError",
    "make_operation",
    "parse_document",
    "Scope",
    "ROOT_SCOPE_NAME",
    "Renderer",
    "render",
    "DocumentLoadError",
    "load_document",
    "load_templates",
    "parse_text",
]
