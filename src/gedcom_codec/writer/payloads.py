# src/gedcom_codec/writer/payloads.py

"""
Input shapes for the generator.

xrefs are written exactly as given (e.g. "@I1@"), as are family and person
references. Dates are ISO-8601 strings (YYYY, YYYY-MM or YYYY-MM-DD) and are
rendered in the generator's version style.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class IndividualPayload:
    xref: str
    name: str  # "Given /Surname/"
    sex: Optional[str] = None  # M / F / X
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_date: Optional[str] = None
    death_place: Optional[str] = None
    occupation: Optional[str] = None
    notes: List[str] = field(default_factory=list)
    families_as_spouse: List[str] = field(default_factory=list)
    families_as_child: List[str] = field(default_factory=list)


@dataclass
class FamilyPayload:
    xref: str
    husband: Optional[str] = None
    wife: Optional[str] = None
    children: List[str] = field(default_factory=list)
    marriage_date: Optional[str] = None
    marriage_place: Optional[str] = None
    divorce_date: Optional[str] = None
    divorce_place: Optional[str] = None
    # A DIV block is written for a divorce with no date or place too.
    divorced: bool = False
    notes: List[str] = field(default_factory=list)


@dataclass
class SourcePayload:
    xref: str
    title: str
    author: Optional[str] = None
    publication_date: Optional[str] = None
    repository: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class ObjectPayload:
    xref: str
    file_path: str
    format: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
