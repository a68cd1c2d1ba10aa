# src/gedcom_codec/writer/generator.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as Date
from typing import Callable, Iterable, List, Optional, Sequence

from gedcom_codec.config import CodecConfig, get_config
from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.dates.formatter import DateFormatter, formatter_for
from gedcom_codec.logging import get_logger
from gedcom_codec.writer.continuation import DEFAULT_MAX_LINE_LENGTH, format_long_line
from gedcom_codec.writer.lines import format_line
from gedcom_codec.writer.payloads import (
    FamilyPayload,
    IndividualPayload,
    ObjectPayload,
    SourcePayload,
)

log = get_logger(__name__)

GENERATOR_VERSION = "1.0"
SUBMITTER_XREF = "@SUBM1@"
TRAILER = "0 TRLR"


@dataclass
class GeneratorOptions:
    source_program: str = "program-name"
    submitter_name: str = "Unknown Submitter"
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    version: str = GedcomVersion.V551.value

    @classmethod
    def from_config(cls, cfg: Optional[CodecConfig] = None) -> "GeneratorOptions":
        """Options from the ``generator:`` section of the YAML config."""
        section = (cfg if cfg is not None else get_config()).generator
        defaults = cls()
        return cls(
            source_program=str(section.get("source_program") or defaults.source_program),
            submitter_name=str(section.get("submitter_name") or defaults.submitter_name),
            max_line_length=int(section.get("max_line_length") or defaults.max_line_length),
            version=str(section.get("version") or defaults.version),
        )


class GedcomGenerator:
    """
    Structured payloads -> GEDCOM text.

    Pure: output depends only on the payloads, the options and ``today``
    (used for the header DATE). Caller input is not validated; xrefs and
    values are written verbatim.
    """

    def __init__(
        self,
        options: Optional[GeneratorOptions] = None,
        today: Optional[Callable[[], Date]] = None,
    ):
        self.options = options or GeneratorOptions()
        self.version = GedcomVersion.parse(self.options.version)
        self.max_line_length = self.options.max_line_length or DEFAULT_MAX_LINE_LENGTH
        self.dates: DateFormatter = formatter_for(self.version)
        self._today = today or Date.today

    # ---------------------------------------------------------
    # Document
    # ---------------------------------------------------------
    def generate(
        self,
        individuals: Iterable[IndividualPayload],
        families: Iterable[FamilyPayload],
    ) -> str:
        blocks = [self._header(), self._submitter()]
        blocks.extend(self._individual(ind) for ind in individuals)
        blocks.extend(self._family(fam) for fam in families)
        blocks.append(TRAILER)

        log.debug(
            "Generated GEDCOM %s document with %d records",
            self.version.value,
            len(blocks),
        )
        return "\n".join(blocks)

    def format_date(self, iso_date: Optional[str]) -> str:
        return self.dates.format(iso_date)

    def format_long_line(self, level: int, tag: str, value: Optional[str]) -> List[str]:
        return format_long_line(level, tag, value, self.max_line_length)

    # ---------------------------------------------------------
    # Fixed records
    # ---------------------------------------------------------
    def _header(self) -> str:
        program = self.options.source_program
        lines = [
            format_line(0, "HEAD"),
            format_line(1, "SOUR", program),
            format_line(2, "NAME", program),
            format_line(2, "VERS", GENERATOR_VERSION),
            format_line(1, "DATE", self.dates.format_today(self._today())),
            format_line(1, "GEDC"),
            format_line(2, "VERS", self.version.value),
            format_line(2, "FORM", "LINEAGE-LINKED"),
            format_line(1, "CHAR", "UTF-8"),
            format_line(1, "SUBM", SUBMITTER_XREF),
        ]
        return "\n".join(lines)

    def _submitter(self) -> str:
        return "\n".join([
            format_line(0, "SUBM", xref=SUBMITTER_XREF),
            format_line(1, "NAME", self.options.submitter_name),
        ])

    # ---------------------------------------------------------
    # INDI / FAM
    # ---------------------------------------------------------
    def _event(self, tag: str, iso_date: Optional[str], place: Optional[str], force: bool = False) -> List[str]:
        """BIRT/DEAT/MARR/DIV block; nothing unless a date or place is present."""
        if not (iso_date or place or force):
            return []
        lines = [format_line(1, tag)]
        if iso_date:
            lines.append(format_line(2, "DATE", self.format_date(iso_date)))
        if place:
            lines.append(format_line(2, "PLAC", place))
        return lines

    def _notes(self, notes: Sequence[str]) -> List[str]:
        lines: List[str] = []
        for note in notes:
            lines.extend(self.format_long_line(1, "NOTE", note))
        return lines

    def _individual(self, ind: IndividualPayload) -> str:
        lines = [
            format_line(0, "INDI", xref=ind.xref),
            format_line(1, "NAME", ind.name),
        ]
        if ind.sex:
            lines.append(format_line(1, "SEX", ind.sex))
        lines.extend(self._event("BIRT", ind.birth_date, ind.birth_place))
        lines.extend(self._event("DEAT", ind.death_date, ind.death_place))
        if ind.occupation:
            lines.append(format_line(1, "OCCU", ind.occupation))
        lines.extend(self._notes(ind.notes))
        lines.extend(format_line(1, "FAMS", ref) for ref in ind.families_as_spouse)
        lines.extend(format_line(1, "FAMC", ref) for ref in ind.families_as_child)
        return "\n".join(lines)

    def _family(self, fam: FamilyPayload) -> str:
        lines = [format_line(0, "FAM", xref=fam.xref)]
        if fam.husband:
            lines.append(format_line(1, "HUSB", fam.husband))
        if fam.wife:
            lines.append(format_line(1, "WIFE", fam.wife))
        lines.extend(self._event("MARR", fam.marriage_date, fam.marriage_place))
        lines.extend(self._event("DIV", fam.divorce_date, fam.divorce_place, force=fam.divorced))
        lines.extend(format_line(1, "CHIL", child) for child in fam.children)
        lines.extend(self._notes(fam.notes))
        return "\n".join(lines)

    # ---------------------------------------------------------
    # Standalone SOUR / OBJE blocks
    # ---------------------------------------------------------
    def generate_source(self, source: SourcePayload) -> str:
        """A single SOUR record block; not included by ``generate``."""
        lines = [
            format_line(0, "SOUR", xref=source.xref),
            format_line(1, "TITL", source.title),
        ]
        if source.author:
            lines.append(format_line(1, "AUTH", source.author))
        if source.publication_date:
            lines.append(format_line(1, "PUBL", source.publication_date))
        if source.repository:
            lines.append(format_line(1, "REPO", source.repository))
        if source.description:
            lines.extend(self.format_long_line(1, "TEXT", source.description))
        if source.notes:
            lines.extend(self.format_long_line(1, "NOTE", source.notes))
        return "\n".join(lines)

    def generate_object(self, media: ObjectPayload) -> str:
        """A single OBJE record block; not included by ``generate``."""
        lines = [
            format_line(0, "OBJE", xref=media.xref),
            format_line(1, "FILE", media.file_path),
        ]
        if media.format:
            # 7.0 nests FORM under FILE; 5.5.1 exporters write it as a sibling.
            form_level = 2 if self.version is GedcomVersion.V70 else 1
            lines.append(format_line(form_level, "FORM", media.format))
        if media.title:
            lines.append(format_line(1, "TITL", media.title))
        if media.description:
            lines.extend(self.format_long_line(1, "NOTE", media.description))
        return "\n".join(lines)


def splice_records(document: str, blocks: Iterable[str]) -> str:
    """
    Insert extra record blocks (e.g. from ``generate_source``) just before
    the trailer. A document without a trailer gets the blocks appended.
    """
    extra = [b for b in blocks if b]
    if not extra:
        return document

    lines = document.split("\n")
    try:
        at = lines.index(TRAILER)
    except ValueError:
        at = len(lines)
    return "\n".join(lines[:at] + extra + lines[at:])
