from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from gedcom_codec.events.event import ParsedEvent
from gedcom_codec.validation.issues import ValidationError


# -----------------------------
# Base records (small atoms)
# -----------------------------

@dataclass(frozen=True, slots=True)
class ParsedName:
    """
    GEDCOM NAME value split into parts.

      - ParsedName(full="John /Smith/", first_name="John", last_name="Smith")
      - a name without slashes is given-name only
    """
    full: str = ""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    suffix: Optional[str] = None


# -----------------------------
# Entities
# -----------------------------

@dataclass(frozen=True, slots=True)
class ParsedIndividual:
    id: str
    uuid: str

    names: List[ParsedName] = field(default_factory=list)
    sex: Optional[str] = None  # M / F / X
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_date: Optional[str] = None
    death_place: Optional[str] = None
    is_deceased: bool = False
    occupation: Optional[str] = None
    notes: List[str] = field(default_factory=list)

    # Pointer ids, record order (no '@')
    families_as_spouse: List[str] = field(default_factory=list)  # FAMS
    families_as_child: List[str] = field(default_factory=list)   # FAMC

    events: List[ParsedEvent] = field(default_factory=list)

    @property
    def name(self) -> Optional[ParsedName]:
        return self.names[0] if self.names else None


@dataclass(frozen=True, slots=True)
class ParsedFamily:
    id: str
    uuid: str

    husband: Optional[str] = None
    wife: Optional[str] = None
    children: List[str] = field(default_factory=list)

    marriage_date: Optional[str] = None
    marriage_place: Optional[str] = None
    divorce_date: Optional[str] = None
    divorce_place: Optional[str] = None
    is_divorced: bool = False

    notes: List[str] = field(default_factory=list)
    events: List[ParsedEvent] = field(default_factory=list)

    @property
    def spouses(self) -> List[str]:
        return [p for p in (self.husband, self.wife) if p]


UNTITLED_SOURCE = "Untitled Source"
UNKNOWN_FORMAT = "UNKNOWN"


@dataclass(frozen=True, slots=True)
class ParsedSource:
    id: str
    uuid: str

    title: str = UNTITLED_SOURCE
    author: Optional[str] = None
    publication_date: Optional[str] = None
    repository: Optional[str] = None
    description: Optional[str] = None
    notes: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ParsedObject:
    id: str
    uuid: str

    file_path: str = ""
    format: str = UNKNOWN_FORMAT
    title: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ParsedRepository:
    id: str
    uuid: str

    name: str = ""
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    notes: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ParsedSubmitter:
    id: str
    uuid: str

    name: str = ""
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: List[str] = field(default_factory=list)


Parsed = Union[
    ParsedIndividual, ParsedFamily, ParsedSource, ParsedObject, ParsedRepository, ParsedSubmitter
]


# -----------------------------
# Registry
# -----------------------------

@dataclass(slots=True)
class GedcomRegistry:
    """
    Every projected record, indexed by record id (xref without '@').
    """
    individuals: Dict[str, ParsedIndividual] = field(default_factory=dict)
    families: Dict[str, ParsedFamily] = field(default_factory=dict)
    sources: Dict[str, ParsedSource] = field(default_factory=dict)
    objects: Dict[str, ParsedObject] = field(default_factory=dict)
    repositories: Dict[str, ParsedRepository] = field(default_factory=dict)
    submitters: Dict[str, ParsedSubmitter] = field(default_factory=dict)
    issues: List[ValidationError] = field(default_factory=list)

    def register_individual(self, ind: ParsedIndividual) -> None:
        self.individuals[ind.id] = ind

    def register_family(self, fam: ParsedFamily) -> None:
        self.families[fam.id] = fam

    def register_source(self, src: ParsedSource) -> None:
        self.sources[src.id] = src

    def register_object(self, obj: ParsedObject) -> None:
        self.objects[obj.id] = obj

    def register_repository(self, repo: ParsedRepository) -> None:
        self.repositories[repo.id] = repo

    def register_submitter(self, subm: ParsedSubmitter) -> None:
        self.submitters[subm.id] = subm

    def get_individual(self, ident: str) -> Optional[ParsedIndividual]:
        return self.individuals.get(ident)

    def get_family(self, ident: str) -> Optional[ParsedFamily]:
        return self.families.get(ident)

    def get_source(self, ident: str) -> Optional[ParsedSource]:
        return self.sources.get(ident)

    def get_object(self, ident: str) -> Optional[ParsedObject]:
        return self.objects.get(ident)

    def get_repository(self, ident: str) -> Optional[ParsedRepository]:
        return self.repositories.get(ident)

    def get_submitter(self, ident: str) -> Optional[ParsedSubmitter]:
        return self.submitters.get(ident)

    def __iter__(self) -> Iterator[Parsed]:
        yield from self.individuals.values()
        yield from self.families.values()
        yield from self.sources.values()
        yield from self.objects.values()
        yield from self.repositories.values()
        yield from self.submitters.values()

    def counts(self) -> Dict[str, int]:
        return {
            "individuals": len(self.individuals),
            "families": len(self.families),
            "sources": len(self.sources),
            "objects": len(self.objects),
            "repositories": len(self.repositories),
            "submitters": len(self.submitters),
        }
