import logging
from pathlib import Path

import pytest

from tests.infrastructure import create_site


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Минимальный проект: шаблоны default/fancy, две страницы, ассет и страница без разметки."""
    return create_site(
        tmp_path,
        pages={
            "index.html": "[=-]Hello[/]",
            "about.html": "[=template fancy]\n[=-]About us[/]",
            "css/style.css": "body { color: red; }",
            "plain.html": "<p>no markup here</p>",
        },
        templates={"fancy": "<b>[^content]</b>"},
    )


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    # CLI вешает обработчик на логгер "sitix"; не даём ему пережить тест
    yield
    logger = logging.getLogger("sitix")
    for h in list(logger.handlers):
        logger.removeHandler(h)
