# src/gedcom_codec/loader/segmenter.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple, Union

from gedcom_codec.core.exceptions import CodecError
from gedcom_codec.loader.tokenizer import GedcomSyntaxError, Line
from gedcom_codec.validation.issues import ValidationError, structural


class GEDCOMStructureError(CodecError):
    """Raised when hierarchical structure rules are violated."""

    def __init__(self, message: str, lineno: int = 0):
        super().__init__(message)
        self.lineno = lineno


@dataclass
class LineGroup:
    """
    The flat lines of one level-0 record, before continuation reassembly.

    ``problems`` holds the structural faults found while grouping; a group
    with any problem is discarded by the tree builder.
    """

    lines: List[Line] = field(default_factory=list)
    problems: List[ValidationError] = field(default_factory=list)

    @property
    def root(self) -> Optional[Line]:
        return self.lines[0] if self.lines else None

    @property
    def is_broken(self) -> bool:
        return bool(self.problems)


TokenItem = Union[Line, Tuple[int, Union[Line, GedcomSyntaxError]]]


def _unpack(item: TokenItem) -> Tuple[int, Union[Line, GedcomSyntaxError]]:
    if isinstance(item, Line):
        return item.lineno, item
    return item


def segment_records(tokens: Iterable[TokenItem], *, strict: bool = False) -> List[LineGroup]:
    """
    Group a flat token stream into per-record line groups.

    Rules:
        - A level-0 line starts a new record; every following line up to the
          next level-0 line (or EOF) belongs to it.
        - Levels may not jump more than +1 over the preceding line
          (e.g., level 3 cannot follow level 1).
        - Lines before the first level-0 line have no record and are
          reported as a single orphan group.

    Accepts either bare Lines or the (lineno, Line | GedcomSyntaxError)
    pairs produced by ``tokenize_text(strict=False)``. Syntax errors are
    attached to the record they occur in. With ``strict=True`` the first
    structural fault is raised instead.
    """
    groups: List[LineGroup] = []
    current: Optional[LineGroup] = None
    orphans: Optional[LineGroup] = None

    for item in tokens:
        lineno, tok = _unpack(item)

        if isinstance(tok, GedcomSyntaxError):
            if strict:
                raise tok
            if tok.level == 0:
                # An unreadable record opener starts its own (broken) record.
                current = LineGroup(problems=[structural(str(tok), lineno)])
                groups.append(current)
                continue
            target = current if current is not None else orphans
            if target is None:
                orphans = target = LineGroup()
            target.problems.append(structural(str(tok), lineno))
            continue

        # Level-0: always a new record
        if tok.level == 0:
            current = LineGroup(lines=[tok])
            groups.append(current)
            continue

        if current is None:
            if strict:
                raise GEDCOMStructureError(
                    f"Line {lineno}: level {tok.level} line appears before any record", lineno
                )
            if orphans is None:
                orphans = LineGroup()
            orphans.lines.append(tok)
            continue

        previous_level = current.lines[-1].level if current.lines else 0
        if tok.level > previous_level + 1:
            message = (
                f"Line {lineno}: level jumped from {previous_level} to {tok.level} "
                "without intermediate parent"
            )
            if strict:
                raise GEDCOMStructureError(message, lineno)
            current.problems.append(structural(message, lineno))

        current.lines.append(tok)

    if orphans is not None:
        if not orphans.problems:
            first = orphans.lines[0].lineno if orphans.lines else None
            orphans.problems.append(
                structural("Lines found before the first level-0 record", first)
            )
        groups.insert(0, orphans)

    return groups
