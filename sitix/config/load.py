from __future__ import annotations

from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ConfigError, SiteConfig
from .paths import cfg_path

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path, *, output_dir: Optional[Path] = None) -> SiteConfig:
    """
    Загрузить sitix.yaml.

    • Если файла нет, вернуть дефолты.
    • output_dir из командной строки перекрывает значение из файла.
    """
    cfg = SiteConfig.from_dict(_read_yaml_map(cfg_path(root)))
    if output_dir is not None:
        cfg.output_dir = str(output_dir)
    return cfg


__all__ = ["load_config"]
