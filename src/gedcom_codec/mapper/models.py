# src/gedcom_codec/mapper/models.py

"""
The application-side person/family model the mapper translates to and from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date as Date
from enum import Enum
from typing import List, Optional

UNKNOWN_NAME = "Unknown"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class RelationshipType(str, Enum):
    SPOUSE = "SPOUSE"
    PARENT = "PARENT"  # related person is the parent of person
    CHILD = "CHILD"    # related person is the child of person


class MapErrorType(str, Enum):
    BROKEN_REFERENCE = "broken_reference"
    INVALID_FORMAT = "invalid_format"


@dataclass
class Person:
    id: str
    first_name: str = UNKNOWN_NAME
    last_name: str = UNKNOWN_NAME
    gender: Optional[Gender] = None
    date_of_birth: Optional[Date] = None
    birth_precision: Optional[str] = None  # year / month / day
    birth_place: Optional[str] = None
    date_of_passing: Optional[Date] = None
    death_precision: Optional[str] = None
    death_place: Optional[str] = None
    profession: Optional[str] = None
    bio: Optional[str] = None
    is_living: bool = True
    gedcom_id: Optional[str] = None  # xref without '@'


@dataclass
class Relationship:
    id: str
    person_id: str
    related_person_id: str
    type: RelationshipType
    marriage_date: Optional[Date] = None
    divorce_date: Optional[Date] = None
    is_active: bool = True
    family_id: Optional[str] = None


@dataclass
class MapError:
    type: MapErrorType
    message: str
    gedcom_id: Optional[str] = None


@dataclass
class MapOptions:
    ignore_missing_references: bool = False
    skip_validation: bool = False


@dataclass
class MapResult:
    people: List[Person] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)
    errors: List[MapError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


# -----------------------------
# Sources and media
# -----------------------------

@dataclass
class Source:
    id: str
    title: str
    author: Optional[str] = None
    publication_date: Optional[str] = None
    description: Optional[str] = None
    repository: Optional[str] = None
    notes: Optional[str] = None
    gedcom_id: Optional[str] = None


@dataclass
class MediaObject:
    id: str
    file_path: str
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    gedcom_id: Optional[str] = None


@dataclass(frozen=True)
class EventSourceLink:
    source_id: str
    person_id: str
    event_type: str


@dataclass(frozen=True)
class EventMediaLink:
    media_id: str
    person_id: str
    event_type: str
