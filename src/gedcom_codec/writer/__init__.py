"""
Writing GEDCOM text: line rendering, CONC/CONT wrapping and record generation.
"""

from .continuation import format_long_line
from .generator import GedcomGenerator, GeneratorOptions, splice_records
from .lines import format_line
from .payloads import FamilyPayload, IndividualPayload, ObjectPayload, SourcePayload

__all__ = [
    "FamilyPayload",
    "GedcomGenerator",
    "GeneratorOptions",
    "IndividualPayload",
    "ObjectPayload",
    "SourcePayload",
    "format_line",
    "format_long_line",
    "splice_records",
]
