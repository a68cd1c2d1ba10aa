# tests/test_source_object_mappers.py

from __future__ import annotations

from gedcom_codec.mapper import EventMediaLink, EventSourceLink, ObjectMapper, SourceMapper
from gedcom_codec.registry.entities import ParsedObject, ParsedSource


def test_source_to_internal_and_back():
    parsed = ParsedSource(
        id="S1",
        uuid="uuid-s1",
        title="Census 1900",
        author="Bureau",
        publication_date="1901",
        repository="R1",
        description="Sheet 4",
        notes=["first", "second"],
    )
    mapper = SourceMapper()

    source = mapper.map_to_internal(parsed)
    assert source.id == "uuid-s1"
    assert source.notes == "first\nsecond"
    assert source.gedcom_id == "S1"
    assert mapper.map_to_internal(parsed, "db-7").id == "db-7"

    payload = mapper.to_payload(source, "@S1@")
    assert payload.xref == "@S1@"
    assert payload.title == "Census 1900"
    assert payload.repository == "R1"
    assert payload.description == "Sheet 4"
    assert payload.notes == "first\nsecond"


def test_source_without_notes():
    source = SourceMapper().map_to_internal(ParsedSource(id="S1", uuid="u"))
    assert source.notes is None
    assert source.title == "Untitled Source"


def test_event_source_link_accepts_custom_tags():
    link = SourceMapper().create_event_source_link("s", "p", "_MILT")
    assert link == EventSourceLink(source_id="s", person_id="p", event_type="_MILT")


def test_object_keeps_path_and_format_untouched():
    parsed = ParsedObject(id="O1", uuid="uuid-o1", file_path="Photos/A.JPG", format="JPG", title="A")
    mapper = ObjectMapper()

    media = mapper.map_to_internal(parsed)
    assert (media.file_path, media.format) == ("Photos/A.JPG", "JPG")

    payload = mapper.to_payload(media, "@O1@")
    assert payload.file_path == "Photos/A.JPG"
    assert payload.title == "A"


def test_event_media_link():
    link = ObjectMapper().create_event_media_link("m", "p", "BIRT")
    assert link == EventMediaLink(media_id="m", person_id="p", event_type="BIRT")
