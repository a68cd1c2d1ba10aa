"""
parser_core.py
Central parsing engine with full logging integration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Union

from gedcom_codec.config import get_config
from gedcom_codec.core.exceptions import EmptyDocumentError
from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.dates.normalizer import ParsedDate, parse_date, parse_iso_date
from gedcom_codec.loader.segmenter import GEDCOMStructureError, segment_records
from gedcom_codec.loader.tokenizer import read_text, tokenize_text
from gedcom_codec.loader.tree_builder import (
    GedcomFile,
    Record,
    RecordType,
    build_records,
    read_header,
)
from gedcom_codec.logging import get_logger
from gedcom_codec.registry.build_family import build_family
from gedcom_codec.registry.build_individual import build_individual, parse_name
from gedcom_codec.registry.build_media_object import build_media_object
from gedcom_codec.registry.build_registry import build_registry
from gedcom_codec.registry.build_repository import build_repository
from gedcom_codec.registry.build_source import build_source
from gedcom_codec.registry.build_submitter import build_submitter
from gedcom_codec.registry.entities import (
    GedcomRegistry,
    ParsedFamily,
    ParsedIndividual,
    ParsedName,
    ParsedObject,
    ParsedRepository,
    ParsedSource,
    ParsedSubmitter,
)
from gedcom_codec.registry.link_entities import validate
from gedcom_codec.validation.issues import IssueKind, Severity, ValidationError, structural

PROJECTED_TYPES = frozenset(
    {
        RecordType.INDI,
        RecordType.FAM,
        RecordType.SOUR,
        RecordType.OBJE,
        RecordType.REPO,
        RecordType.SUBM,
    }
)


class GedcomParser:
    """
    High-level parser:
      - tokenizes
      - groups lines into records
      - reassembles CONC/CONT values
      - builds Records (tag index + subtree arena)
      - projects typed views on request

    Parsing is resilient by default: a broken record is dropped and
    reported on ``GedcomFile.issues``. Only a document with no usable
    records raises. With ``strict=True`` the first structural problem is
    raised instead.
    """

    def __init__(self, config=None, *, strict: bool = False):
        self.cfg = config if config is not None else get_config()
        self.strict = strict
        self.log = get_logger(__name__)

    # ---------------------------------------------------------
    # Text -> GedcomFile
    # ---------------------------------------------------------
    def parse(self, text: str) -> GedcomFile:
        tokens = tokenize_text(text, strict=self.strict)
        groups = segment_records(tokens, strict=self.strict)
        records, problems = build_records(groups)

        if self.strict and problems:
            first = problems[0]
            raise GEDCOMStructureError(first.message, first.lineno or 0)

        if not records:
            raise EmptyDocumentError("Document contains no recognizable GEDCOM records")

        file = self._assemble(records, problems)

        for issue in file.issues:
            self.log.warning("%s", issue)

        self.log.info(
            "Parsed GEDCOM %s (INDI=%d, FAM=%d, SOUR=%d, OBJE=%d, REPO=%d, SUBM=%d, other=%d, issues=%d)",
            file.gedcom_version,
            len(file.individuals),
            len(file.families),
            len(file.sources),
            len(file.objects),
            len(file.repositories),
            len(file.submitters),
            len(file.others),
            len(file.issues),
        )
        return file

    def parse_file(self, path: Union[str, Path]) -> GedcomFile:
        self.log.info("Parsing GEDCOM input: %s", path)
        return self.parse(read_text(path))

    def _assemble(self, records: List[Record], problems: List[ValidationError]) -> GedcomFile:
        buckets: Dict[RecordType, List[Record]] = {t: [] for t in RecordType}
        header: Optional[Record] = None
        trailer: Optional[Record] = None
        issues = list(problems)

        for record in records:
            if record.type is RecordType.HEAD:
                if header is None:
                    header = record
                    continue
                issues.append(structural("Additional HEAD record ignored", record.root.lineno))
            elif record.type is RecordType.TRLR:
                if trailer is None:
                    trailer = record
                    continue
                issues.append(structural("Additional TRLR record ignored", record.root.lineno))
            elif record.type in PROJECTED_TYPES and not record.id:
                issues.append(
                    structural(f"{record.tag} record without xref ignored", record.root.lineno)
                )
                buckets[RecordType.OTHER].append(record)
                continue
            buckets[record.type].append(record)

        if header is None:
            issues.append(
                ValidationError(IssueKind.MISSING_RECORD, "Missing required HEAD record", Severity.ERROR)
            )
        if trailer is None:
            issues.append(
                ValidationError(IssueKind.MISSING_RECORD, "Missing required TRLR record", Severity.ERROR)
            )

        version, charset = read_header(header)
        others = buckets[RecordType.OTHER] + buckets[RecordType.HEAD] + buckets[RecordType.TRLR]

        return GedcomFile(
            header=header,
            trailer=trailer,
            individuals=tuple(buckets[RecordType.INDI]),
            families=tuple(buckets[RecordType.FAM]),
            sources=tuple(buckets[RecordType.SOUR]),
            objects=tuple(buckets[RecordType.OBJE]),
            repositories=tuple(buckets[RecordType.REPO]),
            submitters=tuple(buckets[RecordType.SUBM]),
            others=tuple(others),
            version=version,
            charset=charset,
            issues=tuple(issues),
        )

    # ---------------------------------------------------------
    # Projectors
    # ---------------------------------------------------------
    @staticmethod
    def parse_individual(record: Record, version: GedcomVersion = GedcomVersion.V551) -> ParsedIndividual:
        return build_individual(record, version)

    @staticmethod
    def parse_family(record: Record, version: GedcomVersion = GedcomVersion.V551) -> ParsedFamily:
        return build_family(record, version)

    @staticmethod
    def parse_source(record: Record) -> ParsedSource:
        return build_source(record)

    @staticmethod
    def parse_object(record: Record) -> ParsedObject:
        return build_media_object(record)

    @staticmethod
    def parse_repository(record: Record) -> ParsedRepository:
        return build_repository(record)

    @staticmethod
    def parse_submitter(record: Record) -> ParsedSubmitter:
        return build_submitter(record)

    @staticmethod
    def parse_name(value: Optional[str]) -> ParsedName:
        return parse_name(value)

    @staticmethod
    def parse_date(value: Optional[str], version: GedcomVersion = GedcomVersion.V551) -> ParsedDate:
        if GedcomVersion.parse(version) is GedcomVersion.V70:
            iso = parse_iso_date(value)
            if iso.is_valid:
                return iso
        return parse_date(value)

    def build_registry(self, file: GedcomFile) -> GedcomRegistry:
        return build_registry(file)

    def validate(self, file: GedcomFile) -> List[ValidationError]:
        issues = validate(file)
        for issue in issues:
            self.log.warning("%s", issue)
        return issues


def parse(text: str, *, strict: bool = False) -> GedcomFile:
    """Parse an in-memory GEDCOM document."""
    return GedcomParser(strict=strict).parse(text)


def parse_file(path: Union[str, Path], *, strict: bool = False) -> GedcomFile:
    """Parse a GEDCOM file from disk (character set taken from the file)."""
    return GedcomParser(strict=strict).parse_file(path)
