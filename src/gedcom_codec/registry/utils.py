from __future__ import annotations

from typing import List, Optional

from gedcom_codec.loader.tokenizer import strip_pointer
from gedcom_codec.loader.tree_builder import Record, RecordType


def require_type(record: Record, expected: RecordType) -> str:
    """Check the record type and return its id (raises ValueError otherwise)."""
    if record.type is not expected:
        raise ValueError(f"Expected {expected.value} record, got {record.tag}")
    if not record.id:
        raise ValueError(f"{expected.value} record is missing its xref")
    return record.id


def top_value(record: Record, tag: str) -> Optional[str]:
    """Trimmed value of the first level-1 line with this tag."""
    line = record.child(0, tag)
    if line is None:
        return None
    value = line.value.strip()
    return value or None


def top_pointers(record: Record, tag: str) -> List[str]:
    """Ids referenced by level-1 pointer lines with this tag, in order."""
    out: List[str] = []
    for _, line in record.children(0, tag):
        ident = strip_pointer(line.pointer)
        if ident:
            out.append(ident)
    return out


def top_pointer(record: Record, tag: str) -> Optional[str]:
    found = top_pointers(record, tag)
    return found[0] if found else None


def top_notes(record: Record) -> List[str]:
    """
    Inline level-1 NOTE texts (CONC/CONT already folded in).

    Empty NOTE lines and NOTE pointers to shared note records are skipped.
    """
    notes: List[str] = []
    for _, line in record.children(0, "NOTE"):
        if line.pointer is None and line.value.strip():
            notes.append(line.value)
    return notes


def deep_value(record: Record, tag: str) -> Optional[str]:
    """Trimmed value of the first line with this tag at any depth."""
    value = record.value(tag)
    if value is None:
        return None
    return value.strip() or None
