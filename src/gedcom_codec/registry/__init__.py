from __future__ import annotations

from .build_family import build_family
from .build_individual import build_individual, parse_name
from .build_media_object import build_media_object
from .build_registry import build_registry
from .build_repository import build_repository
from .build_source import build_source
from .build_submitter import build_submitter
from .entities import (
    GedcomRegistry,
    ParsedFamily,
    ParsedIndividual,
    ParsedName,
    ParsedObject,
    ParsedRepository,
    ParsedSource,
    ParsedSubmitter,
)
from .link_entities import check_references, validate

__all__ = [
    "GedcomRegistry",
    "ParsedFamily",
    "ParsedIndividual",
    "ParsedName",
    "ParsedObject",
    "ParsedRepository",
    "ParsedSource",
    "ParsedSubmitter",
    "build_family",
    "build_individual",
    "build_media_object",
    "build_registry",
    "build_repository",
    "build_source",
    "build_submitter",
    "check_references",
    "parse_name",
    "validate",
]
