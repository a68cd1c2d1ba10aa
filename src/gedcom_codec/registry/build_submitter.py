from __future__ import annotations

from typing import List, Tuple

from gedcom_codec.identity.uuid_factory import uuid_for_pointer
from gedcom_codec.loader.tree_builder import Record, RecordType
from gedcom_codec.registry.entities import ParsedSubmitter
from gedcom_codec.registry.utils import deep_value, require_type, top_notes, top_value
from gedcom_codec.validation.issues import ValidationError, missing_field


def build_submitter_with_issues(record: Record) -> Tuple[ParsedSubmitter, List[ValidationError]]:
    """Build a ParsedSubmitter from a SUBM record (NAME is required)."""
    ident = require_type(record, RecordType.SUBM)
    issues: List[ValidationError] = []

    name = top_value(record, "NAME")
    if name is None:
        issues.append(
            missing_field(f"Submitter {ident} has no NAME", record.root.lineno or None, ident)
        )

    submitter = ParsedSubmitter(
        id=ident,
        uuid=uuid_for_pointer(ident),
        name=name or "",
        address=top_value(record, "ADDR"),
        phone=deep_value(record, "PHON"),
        email=deep_value(record, "EMAIL"),
        notes=top_notes(record),
    )
    return submitter, issues


def build_submitter(record: Record) -> ParsedSubmitter:
    return build_submitter_with_issues(record)[0]
