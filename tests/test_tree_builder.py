# tests/test_tree_builder.py

from __future__ import annotations

import pytest

from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.loader import (
    Record,
    RecordType,
    build_records,
    read_header,
    segment_records,
    tokenize_file,
    tokenize_line,
    tokenize_text,
)

INDI = """
0 @I1@ INDI
1 NAME John /Smith/
1 BIRT
2 DATE 1 JAN 1900
2 SOUR @S1@
3 PAGE 12
1 DEAT
2 DATE 1970
1 FAMS @F1@
"""


def test_build_records_from_sample(sample_551_path) -> None:
    """
    Smoke test: every group of a valid file becomes a Record.
    """
    records, problems = build_records(segment_records(tokenize_file(sample_551_path)))

    assert problems == []
    assert records[0].type is RecordType.HEAD
    assert records[-1].type is RecordType.TRLR
    assert {r.type for r in records} >= {RecordType.INDI, RecordType.FAM, RecordType.SOUR, RecordType.OBJE}


def test_record_type_and_id(make_record) -> None:
    record = make_record(INDI)
    assert record.type is RecordType.INDI
    assert record.id == "I1"
    assert record.xref == "@I1@"
    assert len(record) == 9


def test_record_type_from_level0_tag(make_record) -> None:
    assert make_record("0 @N1@ NOTE shared text").type is RecordType.OTHER
    assert make_record("0 @R1@ REPO\n1 NAME x").type is RecordType.REPO
    assert make_record("0 @U1@ SUBM\n1 NAME x").type is RecordType.SUBM


def test_tag_index_lists_every_depth_in_order(make_record) -> None:
    record = make_record(INDI)

    assert record.tag_index.positions("DATE") == (3, 7)
    assert record.tag_index.first("SOUR") == 4
    assert "PAGE" in record.tag_index
    assert "OBJE" not in record.tag_index
    assert [line.value for line in record.find("DATE")] == ["1 JAN 1900", "1970"]


def test_children_and_parent_follow_levels(make_record) -> None:
    record = make_record(INDI)

    assert [line.tag for _, line in record.children(0)] == ["NAME", "BIRT", "DEAT", "FAMS"]
    assert [line.tag for _, line in record.children(2)] == ["DATE", "SOUR"]
    assert record.child(6, "DATE").value == "1970"
    assert record.parent(5) == 4
    assert record.parent(0) is None


def test_subtree_stops_at_sibling(make_record) -> None:
    record = make_record(INDI)
    assert [line.tag for _, line in record.subtree(2)] == ["DATE", "SOUR", "PAGE"]
    assert record.subtree_end(2) == 6


def test_top_level_only_returns_level_one(make_record) -> None:
    record = make_record("0 @I1@ INDI\n1 NOTE top\n1 BIRT\n2 NOTE nested")
    assert [line.value for _, line in record.top_level("NOTE")] == ["top"]


def test_record_must_start_at_level_zero() -> None:
    with pytest.raises(ValueError):
        Record.from_lines([tokenize_line("1 NAME x", lineno=1)])


def test_broken_groups_are_dropped() -> None:
    text = "0 HEAD\n0 @I1@ INDI\n2 DATE 1900\n0 @I2@ INDI\n0 TRLR"
    records, problems = build_records(segment_records(tokenize_text(text, strict=False)))

    assert [r.tag for r in records] == ["HEAD", "INDI", "TRLR"]
    assert records[1].id == "I2"
    assert len(problems) == 1


def test_continuations_are_folded_before_indexing() -> None:
    text = "0 @N1@ NOTE first\n1 CONC  half\n1 CONT second"
    records, _ = build_records(segment_records(tokenize_text(text)))

    assert records[0].root.value == "first half\nsecond"
    assert "CONC" not in records[0].tag_index


def test_read_header_version_and_charset(make_record) -> None:
    head = make_record("0 HEAD\n1 GEDC\n2 VERS 7.0.1\n1 CHAR UTF-8")
    assert read_header(head) == (GedcomVersion.V70, "UTF-8")


def test_read_header_ignores_source_program_version(make_record) -> None:
    head = make_record("0 HEAD\n1 SOUR app\n2 VERS 7.2\n1 GEDC\n2 VERS 5.5.1\n1 CHAR ANSEL")
    assert read_header(head) == (GedcomVersion.V551, "ANSEL")


def test_read_header_defaults() -> None:
    assert read_header(None) == (GedcomVersion.V551, "UTF-8")
