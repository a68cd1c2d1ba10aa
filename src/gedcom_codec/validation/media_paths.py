"""
Media path checks.

This is the only step that touches the filesystem. It reads parsed media
objects and reports problems; the objects themselves are never changed.
"""

from __future__ import annotations

from pathlib import Path, PureWindowsPath
from typing import Iterable, List, Optional, Union

from gedcom_codec.validation.issues import IssueKind, Severity, ValidationError


def _is_absolute(file_path: str) -> bool:
    return Path(file_path).is_absolute() or PureWindowsPath(file_path).is_absolute()


def validate_media_paths(
    objects: Iterable[object],
    base_dir: Optional[Union[str, Path]] = None,
) -> List[ValidationError]:
    """
    Check the FILE paths of parsed media objects.

    Each object needs ``id`` and ``file_path`` attributes (ParsedObject).

      - absolute paths are reported (they rarely survive a move to
        another machine)
      - with ``base_dir`` given, relative paths whose file does not exist
        under it are reported

    Every finding is a ``path`` warning.
    """
    base = Path(base_dir) if base_dir is not None else None
    issues: List[ValidationError] = []

    for media in objects:
        ident = getattr(media, "id", None)
        file_path = (getattr(media, "file_path", "") or "").strip()
        if not file_path:
            continue

        if _is_absolute(file_path):
            issues.append(
                ValidationError(
                    IssueKind.PATH,
                    f"Media object {ident} uses an absolute path: {file_path}",
                    Severity.WARNING,
                    xref=ident,
                )
            )
            continue

        if base is not None and not (base / file_path.replace("\\", "/")).exists():
            issues.append(
                ValidationError(
                    IssueKind.PATH,
                    f"Media file not found for {ident}: {file_path} (base {base})",
                    Severity.WARNING,
                    xref=ident,
                )
            )

    return issues
