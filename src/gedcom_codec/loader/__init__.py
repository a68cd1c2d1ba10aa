# src/gedcom_codec/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_codec.loader import (
        Line,
        GedcomSyntaxError,
        LineGroup,
        GEDCOMStructureError,
        Record,
        RecordType,
        TagIndex,
        GedcomFile,
        tokenize_line,
        tokenize_text,
        tokenize_file,
        segment_records,
        reconstruct_values,
        build_records,
    )
"""

from __future__ import annotations

from .encoding import ansel_to_utf8, detect_encoding, normalize_encoding, utf8_to_ansel
from .tokenizer import (
    GedcomSyntaxError,
    Line,
    read_text,
    strip_pointer,
    tokenize_file,
    tokenize_line,
    tokenize_text,
)
from .segmenter import GEDCOMStructureError, LineGroup, segment_records
from .value_reconstructor import reconstruct_values
from .tree_builder import GedcomFile, Record, RecordType, TagIndex, build_records, read_header


__all__ = [
    "ansel_to_utf8",
    "detect_encoding",
    "normalize_encoding",
    "utf8_to_ansel",
    "Line",
    "GedcomSyntaxError",
    "LineGroup",
    "GEDCOMStructureError",
    "Record",
    "RecordType",
    "TagIndex",
    "GedcomFile",
    "read_text",
    "strip_pointer",
    "tokenize_line",
    "tokenize_text",
    "tokenize_file",
    "segment_records",
    "reconstruct_values",
    "build_records",
    "read_header",
]
