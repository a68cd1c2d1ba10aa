"""
Exporter package.

JSON export of a parsed registry, used by the ``gedcom export`` command.
"""

from __future__ import annotations

from .json_exporter import (
    build_registry_dict,
    export_registry_json,
    serialize_registry_to_json_string,
)

__all__ = [
    "build_registry_dict",
    "export_registry_json",
    "serialize_registry_to_json_string",
]
