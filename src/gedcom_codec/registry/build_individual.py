from __future__ import annotations

from typing import Optional

from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.events.event import INDIVIDUAL_EVENT_TAGS, extract_events, first_event
from gedcom_codec.identity.uuid_factory import uuid_for_pointer
from gedcom_codec.loader.tree_builder import Record, RecordType
from gedcom_codec.registry.entities import ParsedIndividual, ParsedName
from gedcom_codec.registry.utils import require_type, top_notes, top_pointers, top_value

SEX_CODES = {"M", "F", "X"}


def parse_name(value: Optional[str]) -> ParsedName:
    """
    Split a GEDCOM NAME value.

        "John /Smith/"      -> first "John", last "Smith"
        "John /Smith/ Jr."  -> first "John", last "Smith", suffix "Jr."
        "/Smith/"           -> last "Smith" only
        "John"              -> given name only
        "John /Smith"       -> given name only (no closing slash)

    Whitespace around every part is trimmed; empty parts become None.
    """
    raw = value or ""
    given, _, rest = raw.partition("/")
    surname, closed, suffix = rest.partition("/")
    if not closed:
        # A surname needs a slash pair.
        return ParsedName(full=raw, first_name=raw.strip() or None)

    return ParsedName(
        full=raw,
        first_name=given.strip() or None,
        last_name=surname.strip() or None,
        suffix=suffix.strip() or None,
    )


def _sex(record: Record) -> Optional[str]:
    value = top_value(record, "SEX")
    if value is None:
        return None
    code = value.upper()[:1]
    return code if code in SEX_CODES else None


def build_individual(record: Record, version: GedcomVersion = GedcomVersion.V551) -> ParsedIndividual:
    """
    Project an INDI record into a ParsedIndividual.

    PURE FUNCTION:
      - reads only the given record
      - no cross-record resolution (family ids are kept as found)

    Birth/death fields come from the first BIRT/DEAT occurrence; every
    occurrence is still available on ``events``.
    """
    ident = require_type(record, RecordType.INDI)

    names = [parse_name(line.value) for _, line in record.children(0, "NAME")]
    events = extract_events(record, version, INDIVIDUAL_EVENT_TAGS)
    birth = first_event(events, "BIRT")
    death = first_event(events, "DEAT")

    return ParsedIndividual(
        id=ident,
        uuid=uuid_for_pointer(ident),
        names=names,
        sex=_sex(record),
        birth_date=birth.date if birth else None,
        birth_place=birth.place if birth else None,
        death_date=death.date if death else None,
        death_place=death.place if death else None,
        is_deceased=death is not None,
        occupation=top_value(record, "OCCU"),
        notes=top_notes(record),
        families_as_spouse=top_pointers(record, "FAMS"),
        families_as_child=top_pointers(record, "FAMC"),
        events=events,
    )
