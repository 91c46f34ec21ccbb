"""
Модель конфигурации проекта Sitix.

Все поля имеют значения по умолчанию, поэтому проект без sitix.yaml
тоже валиден.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List

from .paths import DEFAULT_TEMPLATE, OUTPUT_DIR, TEMPLATES_DIR, resolve_dir
from ..errors import SitixUserError

logger = logging.getLogger(__name__)


class ConfigError(SitixUserError):
    """Ошибка загрузки конфигурации с указанием пути поля."""
    pass


def _as_str(data: Dict[str, Any], key: str, default: str) -> str:
    val = data.get(key, default)
    if not isinstance(val, str) or not val.strip():
        raise ConfigError(f"{key}: expected non-empty string, got {val!r}")
    return val.strip()


def _as_str_list(data: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    val = data.get(key, default)
    if isinstance(val, str):
        val = [val]
    if not isinstance(val, list) or not all(isinstance(x, str) for x in val):
        raise ConfigError(f"{key}: expected list of strings, got {val!r}")
    return [x.strip() for x in val if x.strip()]


def _as_suffixes(data: Dict[str, Any], key: str, default: List[str]) -> List[str]:
    # Расширения нормализуем к виду ".ext" в нижнем регистре
    out = []
    for s in _as_str_list(data, key, default):
        s = s.lower()
        out.append(s if s.startswith(".") else "." + s)
    return out


@dataclass
class SiteConfig:
    """Настройки сборки сайта (ключи sitix.yaml)."""
    templates_dir: str = TEMPLATES_DIR
    output_dir: str = OUTPUT_DIR
    default_template: str = DEFAULT_TEMPLATE
    template_suffixes: List[str] = field(default_factory=lambda: [".html"])
    page_extensions: List[str] = field(default_factory=lambda: [".html", ".htm"])
    exclude: List[str] = field(default_factory=list)
    respect_gitignore: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SiteConfig:
        """Создание экземпляра из словаря (из YAML)."""
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning("Unknown config key ignored: %s", key)

        defaults = cls()
        respect = data.get("respect_gitignore", defaults.respect_gitignore)
        if not isinstance(respect, bool):
            raise ConfigError(f"respect_gitignore: expected boolean, got {respect!r}")

        return cls(
            templates_dir=_as_str(data, "templates_dir", defaults.templates_dir),
            output_dir=_as_str(data, "output_dir", defaults.output_dir),
            default_template=_as_str(data, "default_template", defaults.default_template),
            template_suffixes=_as_suffixes(data, "template_suffixes", defaults.template_suffixes),
            page_extensions=_as_suffixes(data, "page_extensions", defaults.page_extensions),
            exclude=_as_str_list(data, "exclude", defaults.exclude),
            respect_gitignore=respect,
        )

    def templates_path(self, root: Path) -> Path:
        return resolve_dir(root, self.templates_dir)

    def output_path(self, root: Path) -> Path:
        return resolve_dir(root, self.output_dir)


__all__ = ["SiteConfig", "ConfigError"]
