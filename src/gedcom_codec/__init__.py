"""
gedcom_codec: read, validate, map and write GEDCOM 5.5.1 / 7.0 files.

    from gedcom_codec import parse_file, GedcomMapper, GedcomGenerator

    file = parse_file("family.ged")
    result = GedcomMapper().map_from_gedcom(file)
    individuals, families = GedcomMapper().map_to_gedcom(result.people, result.relationships)
    text = GedcomGenerator().generate(individuals, families)
"""

from gedcom_codec.core.exceptions import CodecError, EmptyDocumentError, ParseExecutionError
from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.events import extract_event_media, extract_event_sources
from gedcom_codec.loader.tree_builder import GedcomFile, Record, RecordType
from gedcom_codec.mapper import GedcomMapper, MapOptions, MapResult, ObjectMapper, SourceMapper
from gedcom_codec.parser_core import GedcomParser, parse, parse_file
from gedcom_codec.validation.issues import ValidationError
from gedcom_codec.writer import (
    FamilyPayload,
    GedcomGenerator,
    GeneratorOptions,
    IndividualPayload,
    ObjectPayload,
    SourcePayload,
    format_long_line,
)

__version__ = "1.0.0"

__all__ = [
    "CodecError",
    "EmptyDocumentError",
    "FamilyPayload",
    "GedcomFile",
    "GedcomGenerator",
    "GedcomMapper",
    "GedcomParser",
    "GedcomVersion",
    "GeneratorOptions",
    "IndividualPayload",
    "MapOptions",
    "MapResult",
    "ObjectMapper",
    "ObjectPayload",
    "ParseExecutionError",
    "Record",
    "RecordType",
    "SourceMapper",
    "SourcePayload",
    "ValidationError",
    "extract_event_media",
    "extract_event_sources",
    "format_long_line",
    "parse",
    "parse_file",
]
