"""
Утилиты для создания файлов и директорий в тестах.
"""

from __future__ import annotations

from pathlib import Path


def write(p: Path, text: str) -> Path:
    """
    Записывает текст в файл, создавая родительские директории при необходимости.

    Args:
        p: Путь к файлу
        text: Содержимое для записи

    Returns:
        Путь к созданному файлу
    """
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_bytes(p: Path, data: bytes) -> Path:
    """Записывает сырые байты (для бинарных и не-UTF-8 файлов)."""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    return p
