# tests/test_segmenter.py

from __future__ import annotations

import pytest

from gedcom_codec.loader import (
    GEDCOMStructureError,
    segment_records,
    tokenize_file,
    tokenize_text,
)
from gedcom_codec.validation import IssueKind


def test_sample_file_exists(sample_551_path) -> None:
    """
    Ensure the sample GEDCOM file is accessible and our path resolver works.
    """
    assert sample_551_path.is_file(), f"Expected GEDCOM file at: {sample_551_path}"


def test_segment_records_groups_top_level_records(sample_551_path) -> None:
    """
    The first group of a valid file is HEAD, every group starts at level 0
    and nothing is reported as broken.
    """
    tokens = list(tokenize_file(sample_551_path))
    groups = segment_records(tokens)

    assert groups, "Segmenter returned no groups"
    assert groups[0].root.tag == "HEAD"
    assert groups[-1].root.tag == "TRLR"
    assert all(g.root.level == 0 for g in groups)
    assert not any(g.is_broken for g in groups)


def test_every_line_belongs_to_exactly_one_group(sample_551_path) -> None:
    tokens = list(tokenize_file(sample_551_path))
    groups = segment_records(tokens)

    assert sum(len(g.lines) for g in groups) == len(tokens)


def test_level_jump_marks_only_that_record_broken() -> None:
    text = "0 HEAD\n0 @I1@ INDI\n1 NAME A\n3 DATE 1900\n0 @I2@ INDI\n1 NAME B\n0 TRLR"
    groups = segment_records(tokenize_text(text, strict=False))

    broken = [g for g in groups if g.is_broken]
    assert len(broken) == 1
    assert broken[0].root.xref == "@I1@"
    assert broken[0].problems[0].kind is IssueKind.STRUCTURAL
    assert broken[0].problems[0].lineno == 4


def test_syntax_error_is_attached_to_its_record() -> None:
    text = "0 HEAD\n0 @I1@ INDI\nX NAME A\n0 TRLR"
    groups = segment_records(tokenize_text(text, strict=False))

    assert [g.is_broken for g in groups] == [False, True, False]


def test_lines_before_first_record_form_an_orphan_group() -> None:
    groups = segment_records(tokenize_text("1 NAME stray\n0 HEAD\n0 TRLR", strict=False))

    assert groups[0].is_broken
    assert groups[0].root.tag == "NAME"
    assert [g.root.tag for g in groups[1:]] == ["HEAD", "TRLR"]


def test_strict_mode_raises_on_level_jump() -> None:
    with pytest.raises(GEDCOMStructureError):
        segment_records(tokenize_text("0 HEAD\n2 VERS 5.5.1"), strict=True)
