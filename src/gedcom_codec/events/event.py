# src/gedcom_codec/events/event.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.dates.normalizer import ParsedDate, normalize_event_date
from gedcom_codec.loader.tokenizer import Line, strip_pointer
from gedcom_codec.loader.tree_builder import Record


# ---------------------------------------------------------------------------
# Event Tag Definitions (GEDCOM 5.5.1 / 7.0)
# ---------------------------------------------------------------------------

INDIVIDUAL_EVENT_TAGS: set[str] = {
    "BIRT", "CHR", "CHRA", "BAPM", "BARM", "BASM", "BLES",
    "ADOP", "CONF", "FCOM", "GRAD", "ORDN", "EMIG", "IMMI",
    "NATU", "CENS", "PROB", "WILL", "RETI", "DEAT", "BURI",
    "CREM", "EVEN",  # EVEN = generic event
}

FAMILY_EVENT_TAGS: set[str] = {
    "MARR", "MARB", "MARC", "MARL", "MARS",
    "ENGA", "ANUL", "DIV", "DIVF",
}

# Tags that carry citation / media pointers beneath an event.
CITATION_TAG = "SOUR"
MEDIA_TAG = "OBJE"

# Event type normalization map
EVENT_TYPE_MAP: Dict[str, str] = {
    "BIRT": "Birth",
    "CHR": "Christening",
    "CHRA": "Adult Christening",
    "BAPM": "Baptism",
    "BARM": "Bar Mitzvah",
    "BASM": "Bas Mitzvah",
    "ADOP": "Adoption",
    "MARR": "Marriage",
    "DIV": "Divorce",
    "ENGA": "Engagement",
    "DEAT": "Death",
    "BURI": "Burial",
    "CREM": "Cremation",
    "EMIG": "Emigration",
    "IMMI": "Immigration",
    "NATU": "Naturalization",
    "CENS": "Census",
    "GRAD": "Graduation",
    "WILL": "Will",
    "RETI": "Retirement",
    "EVEN": "Event",
}


@dataclass(frozen=True)
class ParsedEvent:
    """
    One occurrence of an event tag inside an INDI or FAM record.

    ``date`` is the ISO-8601 rendering (None when the DATE value is not a
    recognizable date); ``parsed_date`` keeps qualifiers and the raw text.
    """

    tag: str
    date: Optional[str] = None
    parsed_date: Optional[ParsedDate] = None
    place: Optional[str] = None
    value: Optional[str] = None
    sources: List[str] = field(default_factory=list)
    media: List[str] = field(default_factory=list)
    notes: List[str] = field(default_factory=list)
    lineno: Optional[int] = None

    @property
    def type(self) -> str:
        return normalize_event_type(self.tag)


# ---------------------------------------------------------------------------
# Tag Helpers
# ---------------------------------------------------------------------------

def is_event_tag(tag: str) -> bool:
    """Return True if the tag is any known individual or family event tag."""
    if not tag:
        return False
    t = tag.upper()
    return t in INDIVIDUAL_EVENT_TAGS or t in FAMILY_EVENT_TAGS


def is_family_event_tag(tag: str) -> bool:
    return tag.upper() in FAMILY_EVENT_TAGS if tag else False


def is_individual_event_tag(tag: str) -> bool:
    if not tag:
        return False
    return tag.upper() in INDIVIDUAL_EVENT_TAGS


def normalize_event_type(tag: str) -> str:
    t = (tag or "").upper()
    if t in EVENT_TYPE_MAP:
        return EVENT_TYPE_MAP[t]
    return f"CustomEvent({t})" if t else "Event"


# ---------------------------------------------------------------------------
# Utility helpers
# ---------------------------------------------------------------------------

def _trim(s: Optional[str]) -> Optional[str]:
    if s is None:
        return None
    s = s.strip()
    return s or None


def normalize_place(place: Optional[str]) -> Optional[str]:
    """
    Basic place normalization:
      - strip leading/trailing whitespace
      - collapse internal whitespace
      - normalize spaces around commas
    """
    if place is None:
        return None
    s = place.strip()
    s = re.sub(r"\s+", " ", s)
    s = re.sub(r"\s*,\s*", ", ", s)
    return s or None


def _pointer_id(line: Line) -> Optional[str]:
    """Record id referenced by a SOUR/OBJE line ('@S1@' -> 'S1')."""
    if line.pointer:
        return strip_pointer(line.pointer)
    value = line.value.strip()
    if value.startswith("@") and value.endswith("@") and len(value) > 2:
        return strip_pointer(value)
    return None


# ---------------------------------------------------------------------------
# Event-scoped pointer extraction
# ---------------------------------------------------------------------------

def extract_event_pointers(record: Record, event_tag: str, pointer_tag: str) -> List[str]:
    """
    Ids referenced by ``pointer_tag`` lines nested anywhere beneath each
    occurrence of ``event_tag`` in the record.

    Every occurrence of the event is scanned on its own: the walk covers
    exactly the event line's subtree, so a pointer line that follows a
    sibling or ancestor boundary is never collected. Ids are de-duplicated
    keeping first-seen order. Inline (pointer-less) SOUR/OBJE structures
    contribute nothing.
    """
    wanted = pointer_tag.upper()
    seen: Dict[str, None] = {}

    for position in record.tag_index.positions(event_tag):
        for _, line in record.subtree(position):
            if line.tag != wanted:
                continue
            ident = _pointer_id(line)
            if ident and ident not in seen:
                seen[ident] = None

    return list(seen)


def extract_event_sources(record: Record, event_tag: str) -> List[str]:
    """Source ids cited beneath ``event_tag`` (e.g. 'BIRT')."""
    return extract_event_pointers(record, event_tag, CITATION_TAG)


def extract_event_media(record: Record, event_tag: str) -> List[str]:
    """Media object ids attached beneath ``event_tag``."""
    return extract_event_pointers(record, event_tag, MEDIA_TAG)


def extract_all_event_citations(record: Record) -> Dict[str, List[str]]:
    """
    {event_tag: [source ids]} for every event tag present in the record.

    Events with no citations are included with an empty list.
    """
    out: Dict[str, List[str]] = {}
    for tag in record.tag_index.tags():
        if is_event_tag(tag):
            out[tag] = extract_event_sources(record, tag)
    return out


# ---------------------------------------------------------------------------
# Event occurrences
# ---------------------------------------------------------------------------

def _collect_pointers(record: Record, position: int, pointer_tag: str) -> List[str]:
    seen: Dict[str, None] = {}
    for _, line in record.subtree(position):
        if line.tag == pointer_tag:
            ident = _pointer_id(line)
            if ident and ident not in seen:
                seen[ident] = None
    return list(seen)


def build_event(record: Record, position: int, version: GedcomVersion = GedcomVersion.V551) -> ParsedEvent:
    """Project the event line at ``position`` into a ParsedEvent."""
    line = record.lines[position]

    date_line = record.child(position, "DATE")
    iso, parsed = (None, None)
    if date_line is not None and date_line.value.strip():
        iso, parsed = normalize_event_date(date_line.value, version)

    place_line = record.child(position, "PLAC")
    notes = [
        note.value
        for _, note in record.children(position, "NOTE")
        if note.value.strip()
    ]

    return ParsedEvent(
        tag=line.tag,
        date=iso,
        parsed_date=parsed,
        place=normalize_place(place_line.value) if place_line is not None else None,
        value=_trim(line.value),
        sources=_collect_pointers(record, position, CITATION_TAG),
        media=_collect_pointers(record, position, MEDIA_TAG),
        notes=notes,
        lineno=line.lineno or None,
    )


def extract_events(
    record: Record,
    version: GedcomVersion = GedcomVersion.V551,
    tags: Optional[set[str]] = None,
) -> List[ParsedEvent]:
    """
    Every level-1 event occurrence in the record, in document order.

    ``tags`` restricts the event tags considered (default: all known
    individual and family events).
    """
    events: List[ParsedEvent] = []
    for position, line in record.children(0):
        if tags is not None:
            if line.tag not in tags:
                continue
        elif not is_event_tag(line.tag):
            continue
        events.append(build_event(record, position, version))
    return events


def first_event(events: List[ParsedEvent], tag: str) -> Optional[ParsedEvent]:
    for event in events:
        if event.tag == tag:
            return event
    return None
