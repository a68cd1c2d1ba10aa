# src/gedcom_codec/mapper/mapper.py

from __future__ import annotations

from datetime import date as Date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from gedcom_codec.dates.normalizer import parse_iso_date
from gedcom_codec.identity.uuid_factory import uuid_for_relationship
from gedcom_codec.loader.tree_builder import GedcomFile
from gedcom_codec.logging import get_logger
from gedcom_codec.mapper.models import (
    UNKNOWN_NAME,
    Gender,
    MapError,
    MapErrorType,
    MapOptions,
    MapResult,
    Person,
    Relationship,
    RelationshipType,
)
from gedcom_codec.registry.build_family import build_family
from gedcom_codec.registry.build_individual import build_individual
from gedcom_codec.registry.entities import ParsedFamily, ParsedIndividual
from gedcom_codec.registry.link_entities import validate
from gedcom_codec.writer.payloads import FamilyPayload, IndividualPayload

log = get_logger(__name__)

SEX_TO_GENDER = {"M": Gender.MALE, "F": Gender.FEMALE, "X": Gender.OTHER}
GENDER_TO_SEX = {g: s for s, g in SEX_TO_GENDER.items()}


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------

def iso_to_date(iso: Optional[str]) -> Tuple[Optional[Date], Optional[str]]:
    """'1990' -> (date(1990, 1, 1), 'year'); partial dates pin to the first day."""
    parsed = parse_iso_date(iso)
    return parsed.to_date(), parsed.precision


def date_to_iso(value: Optional[Date], precision: Optional[str] = None) -> Optional[str]:
    if value is None:
        return None
    if precision == "year":
        return f"{value.year:04d}"
    if precision == "month":
        return f"{value.year:04d}-{value.month:02d}"
    return value.isoformat()


def _unique(items: Iterable[Optional[str]]) -> List[str]:
    seen: Dict[str, None] = {}
    for item in items:
        if item and item not in seen:
            seen[item] = None
    return list(seen)


class GedcomMapper:
    """
    Parsed GEDCOM records <-> the application's Person/Relationship model.
    """

    # ---------------------------------------------------------
    # GEDCOM -> internal
    # ---------------------------------------------------------
    def map_from_gedcom(self, file: GedcomFile, options: Optional[MapOptions] = None) -> MapResult:
        options = options or MapOptions()
        result = MapResult()

        if not options.skip_validation:
            for issue in validate(file):
                if issue.is_error:
                    self._error(result, MapErrorType.INVALID_FORMAT, issue.message, issue.xref)
                else:
                    result.warnings.append(issue.message)

        individuals = [build_individual(r, file.version) for r in file.individuals]
        families = [build_family(r, file.version) for r in file.families]

        people_by_xref: Dict[str, Person] = {}
        for ind in individuals:
            person = self._person(ind, result, options)
            people_by_xref[ind.id] = person
            result.people.append(person)

        family_ids = {fam.id for fam in families}
        if not options.ignore_missing_references:
            for ind in individuals:
                for fam_id in _unique(ind.families_as_spouse + ind.families_as_child):
                    if fam_id not in family_ids:
                        self._error(
                            result,
                            MapErrorType.BROKEN_REFERENCE,
                            f"Individual {ind.id} references missing family {fam_id}",
                            ind.id,
                        )

        for fam in families:
            self._family_edges(fam, individuals, people_by_xref, result, options)

        log.info(
            "Mapped %d people, %d relationships (%d errors, %d warnings)",
            len(result.people),
            len(result.relationships),
            len(result.errors),
            len(result.warnings),
        )
        return result

    def _error(self, result: MapResult, kind: MapErrorType, message: str, gedcom_id: Optional[str]) -> None:
        log.warning("%s: %s", kind.value, message)
        result.errors.append(MapError(kind, message, gedcom_id))

    def _person(self, ind: ParsedIndividual, result: MapResult, options: MapOptions) -> Person:
        name = ind.name
        if name is None and not options.skip_validation:
            self._error(
                result,
                MapErrorType.INVALID_FORMAT,
                f"Individual {ind.id} has no NAME",
                ind.id,
            )

        born, born_precision = iso_to_date(ind.birth_date)
        died, died_precision = iso_to_date(ind.death_date)

        return Person(
            id=ind.uuid,
            first_name=(name.first_name if name else None) or UNKNOWN_NAME,
            last_name=(name.last_name if name else None) or UNKNOWN_NAME,
            gender=SEX_TO_GENDER.get(ind.sex or ""),
            date_of_birth=born,
            birth_precision=born_precision,
            birth_place=ind.birth_place,
            date_of_passing=died,
            death_precision=died_precision,
            death_place=ind.death_place,
            profession=ind.occupation,
            bio="\n".join(ind.notes) if ind.notes else None,
            is_living=not ind.is_deceased,
            gedcom_id=ind.id,
        )

    def _family_edges(
        self,
        fam: ParsedFamily,
        individuals: Sequence[ParsedIndividual],
        people: Dict[str, Person],
        result: MapResult,
        options: MapOptions,
    ) -> None:
        # Membership is the union of the FAM pointers and the INDI back-pointers.
        spouses = _unique(
            [fam.husband, fam.wife]
            + [ind.id for ind in individuals if fam.id in ind.families_as_spouse]
        )
        children = _unique(
            list(fam.children)
            + [ind.id for ind in individuals if fam.id in ind.families_as_child]
        )

        resolved_spouses: List[Person] = []
        resolved_children: List[Person] = []
        for ids, resolved in ((spouses, resolved_spouses), (children, resolved_children)):
            for xref in ids:
                person = people.get(xref)
                if person is not None:
                    resolved.append(person)
                elif not options.ignore_missing_references:
                    self._error(
                        result,
                        MapErrorType.BROKEN_REFERENCE,
                        f"Family {fam.id} references missing individual {xref}",
                        fam.id,
                    )

        married, _ = iso_to_date(fam.marriage_date)
        divorced, _ = iso_to_date(fam.divorce_date)

        for i, a in enumerate(resolved_spouses):
            for b in resolved_spouses[i + 1 :]:
                for src, dst in ((a, b), (b, a)):
                    result.relationships.append(
                        Relationship(
                            id=uuid_for_relationship("SPOUSE", src.id, dst.id, fam.id),
                            person_id=src.id,
                            related_person_id=dst.id,
                            type=RelationshipType.SPOUSE,
                            marriage_date=married,
                            divorce_date=divorced,
                            is_active=not fam.is_divorced,
                            family_id=fam.id,
                        )
                    )

        for parent in resolved_spouses:
            for child in resolved_children:
                result.relationships.append(
                    Relationship(
                        id=uuid_for_relationship("PARENT", child.id, parent.id, fam.id),
                        person_id=child.id,
                        related_person_id=parent.id,
                        type=RelationshipType.PARENT,
                        family_id=fam.id,
                    )
                )
                result.relationships.append(
                    Relationship(
                        id=uuid_for_relationship("CHILD", parent.id, child.id, fam.id),
                        person_id=parent.id,
                        related_person_id=child.id,
                        type=RelationshipType.CHILD,
                        family_id=fam.id,
                    )
                )

    # ---------------------------------------------------------
    # internal -> GEDCOM
    # ---------------------------------------------------------
    def map_to_gedcom(
        self,
        people: Sequence[Person],
        relationships: Sequence[Relationship],
    ) -> Tuple[List[IndividualPayload], List[FamilyPayload]]:
        """
        Build generator payloads. Individuals get @I<n>@ xrefs in input
        order; families (@F<n>@) come from spouse pairs first, then from
        parent sets that have no spouse pair. Dates are ISO-8601; the
        generator renders them for its version.
        """
        xrefs = {p.id: f"@I{n}@" for n, p in enumerate(people, start=1)}
        by_id = {p.id: p for p in people}
        individuals = {p.id: self._individual_payload(p, xrefs[p.id]) for p in people}

        families: Dict[frozenset, FamilyPayload] = {}

        def family_for(parent_ids: Sequence[str]) -> FamilyPayload:
            key = frozenset(parent_ids)
            fam = families.get(key)
            if fam is None:
                fam = FamilyPayload(xref=f"@F{len(families) + 1}@")
                self._assign_spouses(fam, [by_id[pid] for pid in parent_ids], xrefs)
                families[key] = fam
            return fam

        for rel in relationships:
            if rel.type is not RelationshipType.SPOUSE:
                continue
            if rel.person_id not in by_id or rel.related_person_id not in by_id:
                continue
            key = frozenset((rel.person_id, rel.related_person_id))
            if key in families:
                continue
            fam = family_for([rel.person_id, rel.related_person_id])
            fam.marriage_date = date_to_iso(rel.marriage_date)
            fam.divorce_date = date_to_iso(rel.divorce_date)
            fam.divorced = not rel.is_active or rel.divorce_date is not None

        # child id -> ordered parent ids
        parents: Dict[str, List[str]] = {}
        for rel in relationships:
            if rel.type is RelationshipType.PARENT:
                child, parent = rel.person_id, rel.related_person_id
            elif rel.type is RelationshipType.CHILD:
                parent, child = rel.person_id, rel.related_person_id
            else:
                continue
            if child not in by_id or parent not in by_id:
                continue
            known = parents.setdefault(child, [])
            if parent not in known:
                known.append(parent)

        for person in people:
            parent_ids = parents.get(person.id)
            if not parent_ids:
                continue
            fam = family_for(parent_ids)
            fam.children.append(xrefs[person.id])

        by_xref = {payload.xref: payload for payload in individuals.values()}
        for fam in families.values():
            for spouse in (fam.husband, fam.wife):
                if spouse:
                    by_xref[spouse].families_as_spouse.append(fam.xref)
            for child in fam.children:
                by_xref[child].families_as_child.append(fam.xref)

        return list(individuals.values()), list(families.values())

    @staticmethod
    def _assign_spouses(fam: FamilyPayload, spouses: List[Person], xrefs: Dict[str, str]) -> None:
        """MALE -> HUSB, FEMALE -> WIFE; otherwise first seen -> HUSB."""
        ordered = sorted(spouses, key=lambda p: 1 if p.gender is Gender.FEMALE else 0)
        if len(ordered) == 1 and ordered[0].gender is Gender.FEMALE:
            fam.wife = xrefs[ordered[0].id]
            return
        if ordered:
            fam.husband = xrefs[ordered[0].id]
        if len(ordered) > 1:
            fam.wife = xrefs[ordered[1].id]

    @staticmethod
    def _individual_payload(person: Person, xref: str) -> IndividualPayload:
        given = person.first_name or ""
        surname = person.last_name or ""
        return IndividualPayload(
            xref=xref,
            name=f"{given} /{surname}/".strip(),
            sex=GENDER_TO_SEX.get(person.gender) if person.gender else None,
            birth_date=date_to_iso(person.date_of_birth, person.birth_precision),
            birth_place=person.birth_place,
            death_date=date_to_iso(person.date_of_passing, person.death_precision),
            death_place=person.death_place,
            occupation=person.profession,
            notes=[person.bio] if person.bio else [],
        )
