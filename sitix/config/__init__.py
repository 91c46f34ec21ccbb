from __future__ import annotations

from .load import load_config
from .model import ConfigError, SiteConfig
from .paths import CFG_FILE, DEFAULT_TEMPLATE, OUTPUT_DIR, TEMPLATES_DIR, cfg_path

__all__ = [
    "load_config",
    "SiteConfig",
    "ConfigError",
    "CFG_FILE",
    "TEMPLATES_DIR",
    "OUTPUT_DIR",
    "DEFAULT_TEMPLATE",
    "cfg_path",
]
