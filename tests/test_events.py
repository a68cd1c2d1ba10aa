# tests/test_events.py

from __future__ import annotations

from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.events.event import (
    build_event,
    extract_all_event_citations,
    extract_event_media,
    extract_event_sources,
    extract_events,
    is_event_tag,
    is_family_event_tag,
    is_individual_event_tag,
    normalize_event_type,
    normalize_place,
)

RECORD = """
0 @I1@ INDI
1 NAME John /Smith/
1 BIRT
2 DATE 15 JAN 1900
2 PLAC Boston
2 SOUR @S1@
3 PAGE p. 4
3 OBJE @O2@
2 SOUR @S2@
2 SOUR @S1@
2 OBJE @O1@
2 NOTE Born at home
1 SOUR @S9@
1 RESI
2 SOUR @S3@
1 BIRT
2 SOUR @S4@
1 DEAT
2 DATE ABT 1970
1 OBJE @O9@
"""


def test_is_event_tag_individual_and_family():
    assert is_event_tag("BIRT") is True
    assert is_event_tag("marr") is True
    assert is_event_tag("XYZ") is False
    assert is_event_tag("") is False


def test_is_family_event_tag():
    assert is_family_event_tag("MARR") is True
    assert is_family_event_tag("BIRT") is False
    assert is_individual_event_tag("BIRT") is True
    assert is_individual_event_tag("DIV") is False


def test_normalize_event_type():
    assert normalize_event_type("BIRT") == "Birth"
    assert normalize_event_type("_MILT") == "CustomEvent(_MILT)"


def test_normalize_place():
    assert normalize_place("  Boston ,  Suffolk,MA ") == "Boston, Suffolk, MA"
    assert normalize_place("   ") is None
    assert normalize_place(None) is None


# ---------------------------------------------------------
# Event-scoped pointer extraction
# ---------------------------------------------------------

def test_sources_are_scoped_to_every_occurrence(make_record):
    record = make_record(RECORD)
    # S1 once despite the repeat; S9 is a record-level citation; S3 belongs to RESI.
    assert extract_event_sources(record, "BIRT") == ["S1", "S2", "S4"]


def test_media_include_nested_lines(make_record):
    record = make_record(RECORD)
    assert extract_event_media(record, "BIRT") == ["O2", "O1"]
    assert extract_event_media(record, "DEAT") == []


def test_absent_event_gives_empty_list(make_record):
    assert extract_event_sources(make_record(RECORD), "BURI") == []


def test_scan_stops_at_shallower_line(make_record):
    record = make_record(
        """
        0 @I1@ INDI
        1 BIRT
        2 PLAC Here
        1 SOUR @S1@
        """
    )
    assert extract_event_sources(record, "BIRT") == []


def test_inline_citation_contributes_nothing(make_record):
    record = make_record("0 @I1@ INDI\n1 BIRT\n2 SOUR Family bible\n3 PAGE 1")
    assert extract_event_sources(record, "BIRT") == []


def test_extract_all_event_citations(make_record):
    citations = extract_all_event_citations(make_record(RECORD))

    assert citations["BIRT"] == ["S1", "S2", "S4"]
    assert citations["DEAT"] == []
    assert "RESI" not in citations
    assert "NAME" not in citations


# ---------------------------------------------------------
# Event occurrences
# ---------------------------------------------------------

def test_build_event(make_record):
    record = make_record(RECORD)
    event = build_event(record, 2)

    assert event.tag == "BIRT"
    assert event.type == "Birth"
    assert event.date == "1900-01-15"
    assert event.parsed_date.precision == "day"
    assert event.place == "Boston"
    assert event.sources == ["S1", "S2"]
    assert event.media == ["O2", "O1"]
    assert event.notes == ["Born at home"]


def test_extract_events_keeps_order_and_repeats(make_record):
    events = extract_events(make_record(RECORD))

    assert [e.tag for e in events] == ["BIRT", "BIRT", "DEAT"]
    assert events[2].parsed_date.qualifier == "ABT"
    assert events[2].date == "1970"


def test_extract_events_with_tag_filter(make_record):
    events = extract_events(make_record(RECORD), GedcomVersion.V551, {"DEAT"})
    assert [e.tag for e in events] == ["DEAT"]


def test_family_events(make_record):
    record = make_record("0 @F1@ FAM\n1 MARR\n2 DATE 1900\n1 DIV\n2 DATE 1930")
    events = extract_events(record)
    assert {e.tag for e in events} == {"MARR", "DIV"}
    assert events[1].type == "Divorce"
