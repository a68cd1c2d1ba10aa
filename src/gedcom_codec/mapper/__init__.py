from .mapper import GedcomMapper, date_to_iso, iso_to_date
from .models import (
    EventMediaLink,
    EventSourceLink,
    Gender,
    MapError,
    MapErrorType,
    MapOptions,
    MapResult,
    MediaObject,
    Person,
    Relationship,
    RelationshipType,
    Source,
)
from .object_mapper import ObjectMapper
from .source_mapper import SourceMapper

__all__ = [
    "EventMediaLink",
    "EventSourceLink",
    "GedcomMapper",
    "Gender",
    "MapError",
    "MapErrorType",
    "MapOptions",
    "MapResult",
    "MediaObject",
    "ObjectMapper",
    "Person",
    "Relationship",
    "RelationshipType",
    "Source",
    "SourceMapper",
    "date_to_iso",
    "iso_to_date",
]
