from __future__ import annotations

from gedcom_codec.loader.tree_builder import GedcomFile
from gedcom_codec.logging import get_logger
from gedcom_codec.registry.build_family import build_family
from gedcom_codec.registry.build_individual import build_individual
from gedcom_codec.registry.build_media_object import build_media_object_with_issues
from gedcom_codec.registry.build_repository import build_repository_with_issues
from gedcom_codec.registry.build_source import build_source_with_issues
from gedcom_codec.registry.build_submitter import build_submitter_with_issues
from gedcom_codec.registry.entities import GedcomRegistry
from gedcom_codec.registry.link_entities import check_references

log = get_logger(__name__)


# ----------------------------------------------------------------------
# Registry builder
# ----------------------------------------------------------------------

def build_registry(file: GedcomFile) -> GedcomRegistry:
    """
    Project every INDI/FAM/SOUR/OBJE/REPO/SUBM record of a parsed file.

    The registry's ``issues`` start with the file's own parse issues,
    followed by placeholder warnings from the SOUR/OBJE/REPO/SUBM
    projectors and the cross-entity reference check.
    """
    registry = GedcomRegistry(issues=list(file.issues))

    for record in file.individuals:
        registry.register_individual(build_individual(record, file.version))

    for record in file.families:
        registry.register_family(build_family(record, file.version))

    for record in file.sources:
        source, issues = build_source_with_issues(record)
        registry.register_source(source)
        registry.issues.extend(issues)

    for record in file.objects:
        media, issues = build_media_object_with_issues(record)
        registry.register_object(media)
        registry.issues.extend(issues)

    for record in file.repositories:
        repository, issues = build_repository_with_issues(record)
        registry.register_repository(repository)
        registry.issues.extend(issues)

    for record in file.submitters:
        submitter, issues = build_submitter_with_issues(record)
        registry.register_submitter(submitter)
        registry.issues.extend(issues)

    # -------------------------------
    # Relationship checks
    # -------------------------------
    references = check_references(registry)
    for issue in references:
        log.warning("%s", issue.message)
    registry.issues.extend(references)

    log.info(
        "Registry built (INDI=%d, FAM=%d, SOUR=%d, OBJE=%d, REPO=%d, SUBM=%d, issues=%d)",
        len(registry.individuals),
        len(registry.families),
        len(registry.sources),
        len(registry.objects),
        len(registry.repositories),
        len(registry.submitters),
        len(registry.issues),
    )
    return registry
