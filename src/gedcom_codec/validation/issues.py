from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class IssueKind(str, Enum):
    STRUCTURAL = "structural"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    REFERENTIAL = "referential"
    PATH = "path"
    DUPLICATE_XREF = "duplicate_xref"
    MISSING_RECORD = "missing_record"


@dataclass(frozen=True)
class ValidationError:
    """
    A recoverable problem found while parsing or validating a document.

    Parsing never raises these; they are collected on the parsed file (or
    returned by a validation pass) so callers can decide how strict to be.
    """

    kind: IssueKind
    message: str
    severity: Severity = Severity.WARNING
    lineno: Optional[int] = None
    xref: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def __str__(self) -> str:
        where = f" (line {self.lineno})" if self.lineno else ""
        return f"[{self.severity.value}] {self.kind.value}: {self.message}{where}"


def structural(message: str, lineno: Optional[int] = None, xref: Optional[str] = None) -> ValidationError:
    return ValidationError(IssueKind.STRUCTURAL, message, Severity.WARNING, lineno, xref)


def missing_field(message: str, lineno: Optional[int] = None, xref: Optional[str] = None) -> ValidationError:
    return ValidationError(IssueKind.MISSING_REQUIRED_FIELD, message, Severity.WARNING, lineno, xref)


def broken_reference(message: str, lineno: Optional[int] = None, xref: Optional[str] = None) -> ValidationError:
    return ValidationError(IssueKind.REFERENTIAL, message, Severity.WARNING, lineno, xref)
