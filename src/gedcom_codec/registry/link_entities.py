from __future__ import annotations

from typing import Dict, List, Optional

from gedcom_codec.loader.tree_builder import GedcomFile, Record, RecordType
from gedcom_codec.registry.entities import GedcomRegistry
from gedcom_codec.registry.utils import top_pointers
from gedcom_codec.validation.issues import (
    IssueKind,
    Severity,
    ValidationError,
    broken_reference,
)

# (record type, pointer tag) -> record type the pointer must resolve to
REFERENCE_RULES = (
    (RecordType.INDI, "FAMS", RecordType.FAM),
    (RecordType.INDI, "FAMC", RecordType.FAM),
    (RecordType.FAM, "HUSB", RecordType.INDI),
    (RecordType.FAM, "WIFE", RecordType.INDI),
    (RecordType.FAM, "CHIL", RecordType.INDI),
    (RecordType.SOUR, "REPO", RecordType.REPO),
)


def check_references(registry: GedcomRegistry) -> List[ValidationError]:
    """
    Cross-entity reference check over projected records.

    Dangling ids are reported, never repaired: the projections keep the
    ids exactly as found in the file.
    """
    issues: List[ValidationError] = []

    for ind in registry.individuals.values():
        for tag, ids in (("FAMS", ind.families_as_spouse), ("FAMC", ind.families_as_child)):
            for fam_id in ids:
                if fam_id not in registry.families:
                    issues.append(
                        broken_reference(
                            f"Broken reference: individual {ind.id} {tag} -> {fam_id}",
                            xref=ind.id,
                        )
                    )

    for fam in registry.families.values():
        members = [("HUSB", fam.husband), ("WIFE", fam.wife)]
        members.extend(("CHIL", child) for child in fam.children)
        for tag, person_id in members:
            if person_id and person_id not in registry.individuals:
                issues.append(
                    broken_reference(
                        f"Broken reference: family {fam.id} {tag} -> {person_id}",
                        xref=fam.id,
                    )
                )

    return issues


def _record_error(kind: IssueKind, message: str, record: Optional[Record] = None) -> ValidationError:
    if record is None:
        return ValidationError(kind, message, Severity.ERROR)
    return ValidationError(kind, message, Severity.ERROR, record.root.lineno or None, record.id)


def validate(file: GedcomFile) -> List[ValidationError]:
    """
    Document-level checks on a parsed file:

      - missing HEAD / TRLR             -> error
      - the same xref on two records    -> error
      - FAMS/FAMC/HUSB/WIFE/CHIL ids and SOUR -> REPO pointers that
        resolve to no record of the right type -> referential warning
    """
    issues: List[ValidationError] = []

    if file.header is None:
        issues.append(_record_error(IssueKind.MISSING_RECORD, "Missing required HEAD record"))
    if file.trailer is None:
        issues.append(_record_error(IssueKind.MISSING_RECORD, "Missing required TRLR record"))

    by_id: Dict[str, Record] = {}
    for record in file.records:
        if not record.id:
            continue
        if record.id in by_id:
            issues.append(
                _record_error(
                    IssueKind.DUPLICATE_XREF,
                    f"Duplicate xref @{record.id}@ (first defined on line {by_id[record.id].root.lineno})",
                    record,
                )
            )
            continue
        by_id[record.id] = record

    for record in file.records:
        for owner_type, tag, target_type in REFERENCE_RULES:
            if record.type is not owner_type:
                continue
            for target in top_pointers(record, tag):
                found = by_id.get(target)
                if found is None or found.type is not target_type:
                    issues.append(
                        broken_reference(
                            f"Broken reference: {record.tag} {record.id} {tag} -> @{target}@",
                            record.root.lineno or None,
                            record.id,
                        )
                    )

    return issues
