# tests/test_generator.py

from __future__ import annotations

from datetime import date

import pytest

from gedcom_codec.config import CodecConfig
from gedcom_codec.parser_core import parse
from gedcom_codec.registry import build_registry
from gedcom_codec.writer import (
    FamilyPayload,
    GedcomGenerator,
    GeneratorOptions,
    IndividualPayload,
    ObjectPayload,
    SourcePayload,
    splice_records,
)


def _generator(version="5.5.1", **kwargs) -> GedcomGenerator:
    options = GeneratorOptions(version=version, **kwargs)
    return GedcomGenerator(options, today=lambda: date(2024, 3, 9))


def _john(**kwargs) -> IndividualPayload:
    fields = dict(xref="@I1@", name="John /Smith/", sex="M", birth_date="1985-01-15")
    fields.update(kwargs)
    return IndividualPayload(**fields)


# ---------------------------------------------------------
# Document shape
# ---------------------------------------------------------

def test_header_and_trailer_551():
    lines = _generator(source_program="Tree App").generate([], []).split("\n")

    assert lines[:10] == [
        "0 HEAD",
        "1 SOUR Tree App",
        "2 NAME Tree App",
        "2 VERS 1.0",
        "1 DATE 9 MAR 2024",
        "1 GEDC",
        "2 VERS 5.5.1",
        "2 FORM LINEAGE-LINKED",
        "1 CHAR UTF-8",
        "1 SUBM @SUBM1@",
    ]
    assert lines[10:12] == ["0 @SUBM1@ SUBM", "1 NAME Unknown Submitter"]
    assert lines[-1] == "0 TRLR"


def test_header_date_follows_version():
    text = _generator("7.0").generate([], [])
    assert "1 DATE 2024-03-09" in text
    assert "2 VERS 7.0" in text


def test_records_in_input_order():
    individuals = [_john(xref="@I2@"), _john(xref="@I1@")]
    families = [FamilyPayload(xref="@F9@"), FamilyPayload(xref="@F1@")]
    text = _generator().generate(individuals, families)

    level0 = [line for line in text.split("\n") if line.startswith("0 ")]
    assert level0 == [
        "0 HEAD",
        "0 @SUBM1@ SUBM",
        "0 @I2@ INDI",
        "0 @I1@ INDI",
        "0 @F9@ FAM",
        "0 @F1@ FAM",
        "0 TRLR",
    ]


# ---------------------------------------------------------
# INDI / FAM emission rules
# ---------------------------------------------------------

def test_minimal_individual_has_only_name():
    text = _generator().generate([IndividualPayload(xref="@I1@", name="Solo /Person/")], [])
    block = text.split("0 @I1@ INDI\n", 1)[1].split("\n0 ", 1)[0]
    assert block == "1 NAME Solo /Person/"


def test_full_individual_551():
    ind = _john(
        birth_place="Boston",
        death_date="2050",
        occupation="Carpenter",
        notes=["First note", "Second note"],
        families_as_spouse=["@F1@"],
        families_as_child=["@F2@"],
    )
    text = _generator().generate([ind], [])

    assert (
        "0 @I1@ INDI\n"
        "1 NAME John /Smith/\n"
        "1 SEX M\n"
        "1 BIRT\n"
        "2 DATE 15 JAN 1985\n"
        "2 PLAC Boston\n"
        "1 DEAT\n"
        "2 DATE 2050\n"
        "1 OCCU Carpenter\n"
        "1 NOTE First note\n"
        "1 NOTE Second note\n"
        "1 FAMS @F1@\n"
        "1 FAMC @F2@"
    ) in text


def test_birth_with_place_only():
    text = _generator().generate([_john(birth_date=None, birth_place="Boston")], [])
    assert "1 BIRT\n2 PLAC Boston" in text
    assert "2 DATE" not in text


def test_family_block_order():
    fam = FamilyPayload(
        xref="@F1@",
        husband="@I1@",
        wife="@I2@",
        children=["@I3@", "@I4@"],
        marriage_date="1980-06",
        marriage_place="Boston",
        notes=["Married young"],
    )
    text = _generator().generate([], [fam])

    assert (
        "0 @F1@ FAM\n"
        "1 HUSB @I1@\n"
        "1 WIFE @I2@\n"
        "1 MARR\n"
        "2 DATE JUN 1980\n"
        "2 PLAC Boston\n"
        "1 CHIL @I3@\n"
        "1 CHIL @I4@\n"
        "1 NOTE Married young"
    ) in text


def test_divorce_flag_without_details_writes_div():
    text = _generator().generate([], [FamilyPayload(xref="@F1@", divorced=True)])
    assert "0 @F1@ FAM\n1 DIV\n0 TRLR" in text


def test_xrefs_are_written_verbatim():
    text = _generator().generate([IndividualPayload(xref="not-an-xref", name="X")], [])
    assert "0 not-an-xref INDI" in text


def test_long_note_is_wrapped():
    note = "word " * 60
    text = _generator(max_line_length=40).generate([_john(notes=[note.strip()])], [])
    lines = text.split("\n")

    assert all(len(line) <= 40 for line in lines)
    assert any(line.startswith("2 CONT ") or line.startswith("2 CONC ") for line in lines)


# ---------------------------------------------------------
# Standalone SOUR / OBJE
# ---------------------------------------------------------

def test_generate_source():
    block = _generator().generate_source(
        SourcePayload(
            xref="@S1@",
            title="Parish Register",
            author="St. Mary",
            publication_date="1901",
            repository="County Archive",
            description="Baptisms 1850-1870",
            notes="Transcribed",
        )
    )
    assert block.split("\n") == [
        "0 @S1@ SOUR",
        "1 TITL Parish Register",
        "1 AUTH St. Mary",
        "1 PUBL 1901",
        "1 REPO County Archive",
        "1 TEXT Baptisms 1850-1870",
        "1 NOTE Transcribed",
    ]


def test_source_text_reads_back():
    gen = _generator()
    block = gen.generate_source(
        SourcePayload(xref="@S1@", title="Register", description="Line one\nLine two is rather long")
    )
    doc = splice_records(gen.generate([], []), [block])

    source = build_registry(parse(doc)).sources["S1"]
    assert source.description == "Line one\nLine two is rather long"


def test_generate_object_form_level_depends_on_version():
    media = ObjectPayload(xref="@O1@", file_path="photos/a.jpg", format="jpg", title="A")

    assert _generator("7.0").generate_object(media).split("\n") == [
        "0 @O1@ OBJE",
        "1 FILE photos/a.jpg",
        "2 FORM jpg",
        "1 TITL A",
    ]
    assert "1 FORM jpg" in _generator("5.5.1").generate_object(media)


def test_generate_does_not_include_sources_or_objects():
    text = _generator().generate([_john()], [])
    assert "SOUR @" not in text
    assert " OBJE" not in text


def test_splice_records_before_trailer():
    gen = _generator()
    document = gen.generate([_john()], [])
    block = gen.generate_source(SourcePayload(xref="@S1@", title="T"))

    spliced = splice_records(document, [block, ""])

    assert spliced.endswith("0 @S1@ SOUR\n1 TITL T\n0 TRLR")
    assert splice_records(document, []) == document


# ---------------------------------------------------------
# Round trips
# ---------------------------------------------------------

@pytest.mark.parametrize("count", [0, 1, 5])
def test_round_trip_counts(count):
    individuals = [_john(xref=f"@I{n}@") for n in range(count)]
    families = [FamilyPayload(xref=f"@F{n}@", husband=f"@I{n}@") for n in range(count)]

    parsed = parse(_generator().generate(individuals, families))

    assert len(parsed.individuals) == count
    assert len(parsed.families) == count
    assert parsed.issues == ()


def test_end_to_end_70_birth_date():
    parsed = parse(_generator("7.0").generate([_john()], []))
    registry = build_registry(parsed)

    assert parsed.gedcom_version == "7.0"
    assert registry.individuals["I1"].birth_date == "1985-01-15"


def test_end_to_end_551_birth_date():
    text = _generator("5.5.1").generate([_john()], [])
    assert "2 DATE 15 JAN 1985" in text
    assert build_registry(parse(text)).individuals["I1"].birth_date == "1985-01-15"


def test_generated_note_reads_back():
    note = "Lived on the farm " * 10
    text = _generator(max_line_length=50).generate([_john(notes=[note.strip()])], [])

    parsed_note = build_registry(parse(text)).individuals["I1"].notes[0]
    assert parsed_note.replace("\n", "").replace(" ", "") == note.replace(" ", "")


# ---------------------------------------------------------
# Options
# ---------------------------------------------------------

def test_options_from_config():
    cfg = CodecConfig(
        {"generator": {"source_program": "Tree App", "max_line_length": 60, "version": "7.0"}}
    )
    options = GeneratorOptions.from_config(cfg)

    assert options.source_program == "Tree App"
    assert options.submitter_name == "Unknown Submitter"
    assert options.max_line_length == 60
    assert options.version == "7.0"


def test_options_from_empty_config_use_defaults():
    assert GeneratorOptions.from_config(CodecConfig({})) == GeneratorOptions()
