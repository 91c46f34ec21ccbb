"""
Unified test infrastructure for Sitix.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI as a subprocess
- project_builders: Minimal site projects on disk
"""

from .file_utils import write, write_bytes
from .cli_utils import run_cli, jload
from .project_builders import create_site, DEFAULT_TEMPLATE_TEXT

__all__ = [
    "write",
    "write_bytes",
    "run_cli",
    "jload",
    "create_site",
    "DEFAULT_TEMPLATE_TEXT",
]
