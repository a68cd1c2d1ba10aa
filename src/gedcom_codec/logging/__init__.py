"""
Logging package for ``gedcom_codec``.

Use ``get_logger(__name__)`` in modules to inherit shared handlers and write to a
module-specific log file.
"""

from .logger import enable_rich_console, get_logger

__all__ = [
    "enable_rich_console",
    "get_logger",
]
