from __future__ import annotations

from typing import List, Optional, Tuple

from gedcom_codec.identity.uuid_factory import uuid_for_pointer
from gedcom_codec.loader.tree_builder import Record, RecordType
from gedcom_codec.registry.entities import UNKNOWN_FORMAT, ParsedObject
from gedcom_codec.registry.utils import require_type, top_value
from gedcom_codec.validation.issues import ValidationError, missing_field


def _format(record: Record, file_position: Optional[int]) -> str:
    # 5.5.1 / 7.0: FORM is a substructure of FILE
    if file_position is not None:
        form = record.child(file_position, "FORM")
        if form is not None and form.value.strip():
            return form.value.strip()
    # 5.5: FORM might be a sibling of FILE
    sibling = top_value(record, "FORM")
    return sibling or UNKNOWN_FORMAT


def build_media_object_with_issues(record: Record) -> Tuple[ParsedObject, List[ValidationError]]:
    """
    Build a ParsedObject from a top-level OBJE record.

    Only the first FILE is projected. Paths and FORM values are kept as
    written (no case folding). A missing FILE yields an empty path and a
    missing_required_field warning; a missing FORM yields "UNKNOWN".
    """
    ident = require_type(record, RecordType.OBJE)
    issues: List[ValidationError] = []

    files = record.children(0, "FILE")
    file_position = files[0][0] if files else None
    file_path = files[0][1].value.strip() if files else ""
    if not file_path:
        issues.append(
            missing_field(f"Media object {ident} has no FILE", record.root.lineno or None, ident)
        )

    title = top_value(record, "TITL")
    if title is None and file_position is not None:
        # 7.0 places TITL under FILE
        titl = record.child(file_position, "TITL")
        if titl is not None:
            title = titl.value.strip() or None

    description = None
    note = record.child(0, "NOTE")
    if note is not None and note.pointer is None and note.value.strip():
        description = note.value

    media = ParsedObject(
        id=ident,
        uuid=uuid_for_pointer(ident),
        file_path=file_path,
        format=_format(record, file_position),
        title=title,
        description=description,
    )
    return media, issues


def build_media_object(record: Record) -> ParsedObject:
    return build_media_object_with_issues(record)[0]
