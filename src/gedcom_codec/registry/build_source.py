from __future__ import annotations

from typing import List, Optional, Tuple

from gedcom_codec.identity.uuid_factory import uuid_for_pointer
from gedcom_codec.loader.tokenizer import strip_pointer
from gedcom_codec.loader.tree_builder import Record, RecordType
from gedcom_codec.registry.entities import UNTITLED_SOURCE, ParsedSource
from gedcom_codec.registry.utils import require_type, top_notes, top_value
from gedcom_codec.validation.issues import ValidationError, missing_field


def _repository(record: Record) -> Optional[str]:
    line = record.child(0, "REPO")
    if line is None:
        return None
    if line.pointer:
        return strip_pointer(line.pointer)
    return line.value.strip() or None


def build_source_with_issues(record: Record) -> Tuple[ParsedSource, List[ValidationError]]:
    """
    Build a ParsedSource from a SOUR record, reporting what had to be filled in.

    A missing TITL becomes "Untitled Source" plus a missing_required_field
    warning; the title is never empty.
    """
    ident = require_type(record, RecordType.SOUR)
    issues: List[ValidationError] = []

    title = top_value(record, "TITL")
    if title is None:
        title = UNTITLED_SOURCE
        issues.append(
            missing_field(f"Source {ident} has no TITL", record.root.lineno or None, ident)
        )

    source = ParsedSource(
        id=ident,
        uuid=uuid_for_pointer(ident),
        title=title,
        author=top_value(record, "AUTH"),
        publication_date=top_value(record, "PUBL"),
        repository=_repository(record),
        description=top_value(record, "TEXT"),
        notes=top_notes(record),
    )
    return source, issues


def build_source(record: Record) -> ParsedSource:
    return build_source_with_issues(record)[0]
