# src/gedcom_codec/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union


# This file lives at <project_root>/src/gedcom_codec/utils/pathing.py,
# so the project root is three parents up.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """
    Return the absolute path to the project root directory.

    The project root is the directory that contains:
      - src/
      - tests/
      - config/
    """
    return _PROJECT_ROOT


def resolve_project_path(relative: Union[str, Path]) -> Path:
    """
    Resolve a path relative to the project root. Absolute paths are
    returned unchanged.

    Examples:
        resolve_project_path("config/gedcom_codec.yml")
        resolve_project_path("logs")
    """
    path = Path(relative)
    if path.is_absolute():
        return path
    return project_root() / path


def tests_data_path(*parts: Union[str, Path]) -> Path:
    """
    Return the absolute path to a file under tests/data/.

    Examples:
        tests_data_path("sample_551.ged")
    """
    return resolve_project_path(Path("tests") / "data" / Path(*parts))
