"""
Recoverable problems found while parsing, and the side-effecting media path
check.
"""

from .issues import (
    IssueKind,
    Severity,
    ValidationError,
    broken_reference,
    missing_field,
    structural,
)
from .media_paths import validate_media_paths

__all__ = [
    "IssueKind",
    "Severity",
    "ValidationError",
    "broken_reference",
    "missing_field",
    "structural",
    "validate_media_paths",
]
