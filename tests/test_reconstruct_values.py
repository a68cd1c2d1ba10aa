# tests/test_reconstruct_values.py

from __future__ import annotations

from gedcom_codec.loader import Line, reconstruct_values
from gedcom_codec.validation import IssueKind


def _line(level, tag, value="", lineno=1):
    return Line(lineno=lineno, level=level, tag=tag, value=value)


def test_conc_appends_without_newline_and_cont_with_newline():
    lines = [
        _line(1, "NOTE", "Line one", 1),
        _line(2, "CONC", " and more", 2),
        _line(2, "CONT", "Second line", 3),
        _line(2, "CONC", " more text", 4),
    ]

    out, problems = reconstruct_values(lines)

    assert problems == []
    assert len(out) == 1
    assert out[0].value == "Line one and more\nSecond line more text"


def test_reconstruction_preserves_other_children():
    """
    Non-CONC/CONT lines stay in place; continuations only attach to the
    line directly one level above them.
    """
    lines = [
        _line(1, "NOTE", "Base", 1),
        _line(2, "CONC", " extra", 2),
        _line(1, "BIRT", "", 3),
        _line(2, "DATE", "1900", 4),
    ]

    out, _ = reconstruct_values(lines)

    assert [line.tag for line in out] == ["NOTE", "BIRT", "DATE"]
    assert out[0].value == "Base extra"


def test_input_lines_are_not_mutated():
    note = _line(1, "NOTE", "Base")
    reconstruct_values([note, _line(2, "CONT", "next")])
    assert note.value == "Base"


def test_empty_cont_adds_blank_line():
    out, _ = reconstruct_values([_line(1, "NOTE", "a"), _line(2, "CONT", ""), _line(2, "CONT", "b")])
    assert out[0].value == "a\n\nb"


def test_orphan_continuation_is_reported_and_kept():
    lines = [_line(1, "NAME", "A", 1), _line(1, "CONT", "dangling", 2)]

    out, problems = reconstruct_values(lines)

    assert len(out) == 2
    assert len(problems) == 1
    assert problems[0].kind is IssueKind.STRUCTURAL
    assert problems[0].lineno == 2
