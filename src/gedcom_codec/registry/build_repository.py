from __future__ import annotations

from typing import List, Tuple

from gedcom_codec.identity.uuid_factory import uuid_for_pointer
from gedcom_codec.loader.tree_builder import Record, RecordType
from gedcom_codec.registry.entities import ParsedRepository
from gedcom_codec.registry.utils import deep_value, require_type, top_notes, top_value
from gedcom_codec.validation.issues import ValidationError, missing_field


def build_repository_with_issues(record: Record) -> Tuple[ParsedRepository, List[ValidationError]]:
    """
    Build a ParsedRepository from a REPO record.

    CITY/STAE/CTRY sit under ADDR; PHON/EMAIL/WWW are read at any depth
    since 5.5 files nest them under ADDR too. A missing NAME leaves the
    name empty and is reported as a missing_required_field warning.
    """
    ident = require_type(record, RecordType.REPO)
    issues: List[ValidationError] = []

    name = top_value(record, "NAME")
    if name is None:
        issues.append(
            missing_field(f"Repository {ident} has no NAME", record.root.lineno or None, ident)
        )

    repository = ParsedRepository(
        id=ident,
        uuid=uuid_for_pointer(ident),
        name=name or "",
        address=top_value(record, "ADDR"),
        city=deep_value(record, "CITY"),
        state=deep_value(record, "STAE"),
        country=deep_value(record, "CTRY"),
        phone=deep_value(record, "PHON"),
        email=deep_value(record, "EMAIL"),
        website=deep_value(record, "WWW"),
        notes=top_notes(record),
    )
    return repository, issues


def build_repository(record: Record) -> ParsedRepository:
    return build_repository_with_issues(record)[0]
