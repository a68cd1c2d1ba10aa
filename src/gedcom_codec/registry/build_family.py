from __future__ import annotations

from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.events.event import FAMILY_EVENT_TAGS, extract_events, first_event
from gedcom_codec.identity.uuid_factory import uuid_for_pointer
from gedcom_codec.loader.tree_builder import Record, RecordType
from gedcom_codec.registry.entities import ParsedFamily
from gedcom_codec.registry.utils import require_type, top_notes, top_pointer, top_pointers


def build_family(record: Record, version: GedcomVersion = GedcomVersion.V551) -> ParsedFamily:
    """
    Build a ParsedFamily from a FAM record.

    PURE FUNCTION:
      - no registry access
      - no side effects
      - no cross-entity linking (HUSB/WIFE/CHIL ids are kept as found)
    """
    ident = require_type(record, RecordType.FAM)

    events = extract_events(record, version, FAMILY_EVENT_TAGS)
    marriage = first_event(events, "MARR")
    divorce = first_event(events, "DIV")

    return ParsedFamily(
        id=ident,
        uuid=uuid_for_pointer(ident),
        husband=top_pointer(record, "HUSB"),
        wife=top_pointer(record, "WIFE"),
        children=top_pointers(record, "CHIL"),
        marriage_date=marriage.date if marriage else None,
        marriage_place=marriage.place if marriage else None,
        divorce_date=divorce.date if divorce else None,
        divorce_place=divorce.place if divorce else None,
        is_divorced=divorce is not None,
        notes=top_notes(record),
        events=events,
    )
