"""
Модели JSON-отчёта о сборке сайта.

Отчёт выводится командой `sitix build --json`.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PageAction(str, Enum):
    RENDERED = "rendered"  # Rasta-страница, прошедшая через шаблон
    COPIED = "copied"      # файл скопирован как есть
    ERROR = "error"


class PageResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: str
    output: Optional[str] = None
    action: PageAction
    template: Optional[str] = None
    error: Optional[str] = None


class BuildReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    protocol: int = 1
    tool_version: str = Field(alias="toolVersion")
    root: str
    output_dir: str = Field(alias="outputDir")
    templates: List[str] = Field(default_factory=list)
    pages: List[PageResult] = Field(default_factory=list)

    def count(self, action: PageAction) -> int:
        return sum(1 for p in self.pages if p.action == action)

    @property
    def has_errors(self) -> bool:
        return self.count(PageAction.ERROR) > 0


__all__ = ["PageAction", "PageResult", "BuildReport"]
