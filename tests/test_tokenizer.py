# tests/test_tokenizer.py

from __future__ import annotations

import pytest

from gedcom_codec.loader import (
    GedcomSyntaxError,
    strip_pointer,
    tokenize_file,
    tokenize_line,
    tokenize_text,
)


def test_tokenize_line_simple_head() -> None:
    token = tokenize_line("0 HEAD", lineno=1)
    assert token.lineno == 1
    assert token.level == 0
    assert token.xref is None
    assert token.pointer is None
    assert token.tag == "HEAD"
    assert token.value == ""


def test_tokenize_line_with_xref_and_tag_only() -> None:
    token = tokenize_line("0 @I1@ INDI", lineno=1)
    assert token.level == 0
    assert token.xref == "@I1@"
    assert token.tag == "INDI"
    assert token.value == ""


def test_tokenize_line_with_value() -> None:
    line = "1 NOTE This is a test note"
    token = tokenize_line(line, lineno=10)
    assert token.level == 1
    assert token.pointer is None
    assert token.tag == "NOTE"
    assert token.value == "This is a test note"
    assert token.raw == line


def test_tokenize_line_pointer_value_becomes_pointer() -> None:
    token = tokenize_line("1 FAMS @F1@", lineno=3)
    assert token.pointer == "@F1@"
    assert token.value == ""


def test_continuation_value_is_never_a_pointer() -> None:
    token = tokenize_line("2 CONC @F1@", lineno=3)
    assert token.pointer is None
    assert token.value == "@F1@"


def test_conc_value_keeps_leading_space() -> None:
    token = tokenize_line("2 CONC  and more", lineno=2)
    assert token.value == " and more"


def test_tokenize_line_with_bom_on_first_line() -> None:
    # Simulate a UTF-8 BOM at the start of the first line.
    token = tokenize_line("\ufeff0 HEAD", lineno=1)
    assert token.level == 0
    assert token.tag == "HEAD"


def test_tokenize_line_tolerates_deep_levels() -> None:
    token = tokenize_line("12 _CUSTOM deep", lineno=1)
    assert token.level == 12
    assert token.tag == "_CUSTOM"


def test_tokenize_line_invalid_level_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("X HEAD", lineno=1)


def test_tokenize_line_missing_tag_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("0 ", lineno=1)


def test_tokenize_text_non_strict_yields_errors_in_place() -> None:
    items = list(tokenize_text("0 HEAD\nX BAD\n\n0 TRLR", strict=False))

    assert [lineno for lineno, _ in items] == [1, 2, 4]
    assert isinstance(items[1][1], GedcomSyntaxError)
    assert items[1][1].lineno == 2


def test_tokenize_text_strict_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        list(tokenize_text("0 HEAD\nX BAD", strict=True))


def test_tokenize_text_accepts_crlf() -> None:
    items = list(tokenize_text("0 HEAD\r\n1 CHAR UTF-8\r\n0 TRLR\r\n"))
    assert [line.tag for _, line in items] == ["HEAD", "CHAR", "TRLR"]
    assert items[1][1].value == "UTF-8"


def test_strip_pointer() -> None:
    assert strip_pointer("@I1@") == "I1"
    assert strip_pointer("I1") == "I1"
    assert strip_pointer("@@") is None
    assert strip_pointer(None) is None


def test_tokenize_file_reads_sample(sample_551_path) -> None:
    tokens = list(tokenize_file(sample_551_path))

    assert tokens, "Expected at least one token from the sample file"
    assert tokens[0].level == 0
    assert tokens[0].tag == "HEAD"
    assert tokens[-1].tag == "TRLR"


def test_tokenize_file_missing_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        list(tokenize_file(tmp_path / "nope.ged"))
