# tests/test_encoding.py

from __future__ import annotations

import pytest

from gedcom_codec.loader.encoding import (
    ansel_to_utf8,
    charset_name,
    detect_encoding,
    normalize_encoding,
    utf8_to_ansel,
)
from gedcom_codec.parser_core import parse_file
from gedcom_codec.registry import build_registry

ANSEL_DOC = (
    b"0 HEAD\n1 GEDC\n2 VERS 5.5.1\n1 CHAR ANSEL\n"
    b"0 @I1@ INDI\n1 NAME Hans /M\xe8uller/\n1 BIRT\n2 PLAC \xa1\xe2od\xe2z\n"
    b"0 TRLR\n"
)


# ---------------------------------------------------------
# Detection
# ---------------------------------------------------------

@pytest.mark.parametrize(
    "data, expected",
    [
        (b"0 HEAD\n1 CHAR ANSEL\n0 TRLR", "ANSEL"),
        (b"0 HEAD\r\n1 CHAR UTF8\r\n0 TRLR", "UTF-8"),
        ("0 HEAD\n1 CHAR ansel\n", "ANSEL"),
        (b"0 HEAD\n1 CHAR IBM WINDOWS\n", "CP1252"),
        (b"0 HEAD\n1 CHAR UNICODE\n", "UTF-16"),
        (b"0 HEAD\n0 TRLR", "UTF-8"),
        (b"\xef\xbb\xbf0 HEAD\n1 CHAR ANSEL\n", "UTF-8"),
        (b"\xff\xfe0\x00 \x00", "UTF-16"),
        ("0 HEAD\n".encode("utf-16-le"), "UTF-16-LE"),
        ("0 HEAD\n".encode("utf-16-be"), "UTF-16-BE"),
    ],
)
def test_detect_encoding(data, expected):
    assert detect_encoding(data) == expected


def test_charset_name_passes_unknown_names_through():
    assert charset_name(" iso-8859-1 ") == "ISO-8859-1"
    assert charset_name("UTF-16LE") == "UTF-16"


# ---------------------------------------------------------
# ANSEL
# ---------------------------------------------------------

def test_ansel_marks_precede_their_letter():
    assert ansel_to_utf8(b"M\xe8uller") == "Müller"
    assert ansel_to_utf8(b"Fran\xf0cois") == "François"
    assert ansel_to_utf8(b"\xa1\xe2od\xe2z") == "Łódź"


def test_ansel_spacing_characters():
    assert ansel_to_utf8(b"\xa5sop \xc3 \xb9") == "Æsop © £"
    assert ansel_to_utf8(b"Stra\xcfe") == "Straße"


def test_ansel_unknown_byte_is_replaced():
    assert ansel_to_utf8(b"A\x80B") == "A\ufffdB"


def test_utf8_to_ansel_writes_marks_first():
    assert utf8_to_ansel("Müller") == b"M\xe8uller"
    assert utf8_to_ansel("Łódź") == b"\xa1\xe2od\xe2z"
    assert utf8_to_ansel("Straße") == b"Stra\xcfe"


def test_utf8_to_ansel_unrepresentable():
    assert utf8_to_ansel("Tokyo 東京") == b"Tokyo ??"
    with pytest.raises(UnicodeEncodeError):
        utf8_to_ansel("東京", errors="strict")


def test_ansel_text_survives_both_directions():
    text = "Zoë Ångström, Dvořák"
    assert ansel_to_utf8(utf8_to_ansel(text)) == text


# ---------------------------------------------------------
# Whole documents
# ---------------------------------------------------------

def test_normalize_encoding_rewrites_char_line():
    text = normalize_encoding(ANSEL_DOC)

    assert "1 CHAR UTF-8" in text
    assert "ANSEL" not in text
    assert "1 NAME Hans /Müller/" in text


def test_utf8_document_is_left_alone():
    text = normalize_encoding("0 HEAD\n1 CHAR UTF-8\n1 NOTE Zoë\n".encode("utf-8"))
    assert text == "0 HEAD\n1 CHAR UTF-8\n1 NOTE Zoë\n"


def test_parse_ansel_file(tmp_path):
    path = tmp_path / "ansel.ged"
    path.write_bytes(ANSEL_DOC)

    file = parse_file(path)
    person = build_registry(file).individuals["I1"]

    assert file.charset == "UTF-8"
    assert person.name.last_name == "Müller"
    assert person.birth_place == "Łódź"


def test_parse_windows_and_utf16_files(tmp_path):
    ansi = tmp_path / "ansi.ged"
    ansi.write_bytes(b"0 HEAD\n1 CHAR ANSI\n0 @I1@ INDI\n1 NAME Jos\xe9 /Ruiz/\n0 TRLR\n")
    wide = tmp_path / "wide.ged"
    wide.write_text("0 HEAD\n1 CHAR UNICODE\n0 @I1@ INDI\n1 NAME Zoë /Ng/\n0 TRLR\n", encoding="utf-16")

    assert build_registry(parse_file(ansi)).individuals["I1"].name.first_name == "José"
    assert build_registry(parse_file(wide)).individuals["I1"].name.first_name == "Zoë"


def test_invalid_utf8_bytes_are_replaced(tmp_path):
    path = tmp_path / "bad.ged"
    path.write_bytes(b"0 HEAD\n0 @I1@ INDI\n1 NAME Bad\xff /Byte/\n0 TRLR\n")

    name = build_registry(parse_file(path)).individuals["I1"].name
    assert name.first_name == "Bad\ufffd"
