"""
Загрузка документов и шаблонов с диска.

Тонкий слой между файловой системой и ядром: прочитать файл, строго
декодировать как UTF-8, токенизировать и построить дерево.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional

from .lexer import LexerError, tokenize, tokenize_bytes
from .nodes import TreeNode
from .parser import MalformedTagError, parse_document
from ..errors import SitixUserError

logger = logging.getLogger(__name__)


class DocumentLoadError(SitixUserError):
    """Файл не удалось прочитать как текст."""

    def __init__(self, message: str, path: Path, cause: Optional[Exception] = None):
        super().__init__(f"Failed to load document '{path}': {message}")
        self.path = path
        self.cause = cause


def parse_text(text: str) -> TreeNode:
    """
    Токенизирует и строит дерево документа из текста.

    Raises:
        MalformedTagError: При неподдерживаемом теге
    """
    return parse_document(tokenize(text))


def load_document(path: Path) -> TreeNode:
    """
    Загружает документ из файла.

    Args:
        path: Путь к файлу документа

    Returns:
        Корневой узел документа

    Raises:
        DocumentLoadError: Если файл не читается или не является UTF-8 текстом
        MalformedTagError: При неподдерживаемом теге
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DocumentLoadError(e.strerror or str(e), path, e) from e

    try:
        tokens = tokenize_bytes(data)
    except LexerError as e:
        raise DocumentLoadError(str(e), path, e) from e

    document = parse_document(tokens)
    logger.debug("Parsed document '%s' -> %d top-level nodes", path, len(document.children))
    return document


def load_templates(templates_dir: Path, suffixes: Iterable[str] = (".html",)) -> Dict[str, TreeNode]:
    """
    Загружает все шаблоны из каталога шаблонов.

    Имя шаблона - имя файла без расширения. Файлы, которые не удалось
    загрузить, пропускаются с предупреждением.

    Args:
        templates_dir: Каталог с шаблонами (не обходится рекурсивно)
        suffixes: Допустимые расширения файлов шаблонов

    Returns:
        Словарь имя шаблона -> дерево шаблона
    """
    allowed = {s.lower() for s in suffixes}
    templates: Dict[str, TreeNode] = {}

    for path in sorted(templates_dir.iterdir()):
        if not path.is_file() or path.suffix.lower() not in allowed:
            continue
        try:
            document = load_document(path)
        except (DocumentLoadError, MalformedTagError) as e:
            logger.warning("Skipping template %s: %s", path.name, e)
            continue
        if path.stem in templates:
            logger.warning("Template '%s' defined more than once, using %s", path.stem, path.name)
        templates[path.stem] = document
        logger.debug("Loaded template '%s' from %s", path.stem, path)

    return templates


__all__ = ["DocumentLoadError", "parse_text", "load_document", "load_templates"]
