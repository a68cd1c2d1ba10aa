# src/gedcom_codec/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.loader.segmenter import LineGroup
from gedcom_codec.loader.tokenizer import Line, strip_pointer
from gedcom_codec.loader.value_reconstructor import reconstruct_values
from gedcom_codec.validation.issues import ValidationError


class RecordType(str, Enum):
    INDI = "INDI"
    FAM = "FAM"
    HEAD = "HEAD"
    TRLR = "TRLR"
    SOUR = "SOUR"
    OBJE = "OBJE"
    REPO = "REPO"
    SUBM = "SUBM"
    OTHER = "OTHER"

    @classmethod
    def from_tag(cls, tag: str) -> "RecordType":
        try:
            return cls(tag.upper())
        except ValueError:
            return cls.OTHER


class TagIndex:
    """
    Ordered multimap: tag -> positions (into Record.lines) of every line
    carrying that tag, at any depth, in document order.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: Dict[str, List[int]] = {}

    @classmethod
    def build(cls, lines: Sequence[Line]) -> "TagIndex":
        index = cls()
        for position, line in enumerate(lines):
            index.add(line.tag, position)
        return index

    def add(self, tag: str, position: int) -> None:
        self._entries.setdefault(tag.upper(), []).append(position)

    def positions(self, tag: str) -> Tuple[int, ...]:
        return tuple(self._entries.get(tag.upper(), ()))

    def first(self, tag: str) -> Optional[int]:
        found = self._entries.get(tag.upper())
        return found[0] if found else None

    def tags(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and tag.upper() in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<TagIndex tags={len(self._entries)}>"


def _build_arena(lines: Sequence[Line]) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    """
    Return (parents, ends) for a record's flat line list.

    parents[i] is the position of line i's parent (-1 for the root);
    ends[i] is one past the last position of line i's subtree.
    """
    parents: List[int] = [-1] * len(lines)
    ends: List[int] = [len(lines)] * len(lines)
    stack: List[int] = []

    for position, line in enumerate(lines):
        while stack and lines[stack[-1]].level >= line.level:
            ends[stack.pop()] = position
        parents[position] = stack[-1] if stack else -1
        stack.append(position)

    return tuple(parents), tuple(ends)


@dataclass(frozen=True)
class Record:
    """
    A level-0 record: its own line plus every deeper line up to the next
    level-0 line, with continuations already reassembled.

    Besides the flat ``lines`` the record keeps an explicit tree over them
    (parent positions and subtree bounds) so sub-structure lookups are
    bounded walks instead of fresh level scans.
    """

    type: RecordType
    id: Optional[str]
    lines: Tuple[Line, ...]
    tag_index: TagIndex = field(compare=False, repr=False)
    _parents: Tuple[int, ...] = field(compare=False, repr=False)
    _ends: Tuple[int, ...] = field(compare=False, repr=False)

    @classmethod
    def from_lines(cls, lines: Sequence[Line]) -> "Record":
        if not lines or lines[0].level != 0:
            raise ValueError("A record must start with a level-0 line")
        root = lines[0]
        parents, ends = _build_arena(lines)
        return cls(
            type=RecordType.from_tag(root.tag),
            id=strip_pointer(root.xref),
            lines=tuple(lines),
            tag_index=TagIndex.build(lines),
            _parents=parents,
            _ends=ends,
        )

    # ------------------------------------------------------------------ #
    # Lookup helpers
    # ------------------------------------------------------------------ #

    @property
    def root(self) -> Line:
        return self.lines[0]

    @property
    def tag(self) -> str:
        return self.root.tag

    @property
    def xref(self) -> Optional[str]:
        return self.root.xref

    def find(self, tag: str) -> List[Line]:
        """All lines with this tag anywhere in the record."""
        return [self.lines[p] for p in self.tag_index.positions(tag)]

    def first(self, tag: str) -> Optional[Line]:
        position = self.tag_index.first(tag)
        return self.lines[position] if position is not None else None

    def value(self, tag: str) -> Optional[str]:
        """Value of the first line with this tag, or None when absent/empty."""
        line = self.first(tag)
        if line is None:
            return None
        return line.value or None

    def parent(self, position: int) -> Optional[int]:
        p = self._parents[position]
        return p if p >= 0 else None

    def subtree_end(self, position: int) -> int:
        return self._ends[position]

    def subtree(self, position: int) -> Iterator[Tuple[int, Line]]:
        """Descendants of the line at ``position`` (excluding itself)."""
        for p in range(position + 1, self._ends[position]):
            yield p, self.lines[p]

    def children(self, position: int = 0, tag: Optional[str] = None) -> List[Tuple[int, Line]]:
        """Direct children of the line at ``position``, optionally by tag."""
        wanted = tag.upper() if tag else None
        found = []
        p = position + 1
        end = self._ends[position]
        while p < end:
            line = self.lines[p]
            if wanted is None or line.tag == wanted:
                found.append((p, line))
            p = self._ends[p]
        return found

    def child(self, position: int, tag: str) -> Optional[Line]:
        found = self.children(position, tag)
        return found[0][1] if found else None

    def top_level(self, tag: str) -> List[Tuple[int, Line]]:
        """Level-1 lines with this tag."""
        return [(p, self.lines[p]) for p in self.tag_index.positions(tag) if self.lines[p].level == 1]

    def __len__(self) -> int:
        return len(self.lines)

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        ident = f" {self.id}" if self.id else ""
        return f"<Record {self.type.value}{ident} lines={len(self.lines)}>"


@dataclass(frozen=True)
class GedcomFile:
    """
    The parsed document. Created only by the parser; never mutated.
    """

    header: Optional[Record]
    trailer: Optional[Record]
    individuals: Tuple[Record, ...] = ()
    families: Tuple[Record, ...] = ()
    sources: Tuple[Record, ...] = ()
    objects: Tuple[Record, ...] = ()
    repositories: Tuple[Record, ...] = ()
    submitters: Tuple[Record, ...] = ()
    others: Tuple[Record, ...] = ()
    version: GedcomVersion = GedcomVersion.V551
    charset: str = "UTF-8"
    issues: Tuple[ValidationError, ...] = ()

    @property
    def gedcom_version(self) -> str:
        return self.version.value

    @property
    def records(self) -> List[Record]:
        out: List[Record] = []
        if self.header is not None:
            out.append(self.header)
        out.extend(self.individuals)
        out.extend(self.families)
        out.extend(self.sources)
        out.extend(self.objects)
        out.extend(self.repositories)
        out.extend(self.submitters)
        out.extend(self.others)
        if self.trailer is not None:
            out.append(self.trailer)
        return out

    def find_by_id(self, record_id: str) -> Optional[Record]:
        """Return the record with this id ('I1' or '@I1@'), if any."""
        wanted = strip_pointer(record_id)
        for rec in self.records:
            if rec.id == wanted:
                return rec
        return None

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return (
            f"<GedcomFile {self.version.value} indi={len(self.individuals)} "
            f"fam={len(self.families)} sour={len(self.sources)} obje={len(self.objects)}>"
        )


def read_header(header: Optional[Record]) -> Tuple[GedcomVersion, str]:
    """Pull (version, charset) out of HEAD -> GEDC -> VERS and HEAD -> CHAR."""
    if header is None:
        return GedcomVersion.V551, "UTF-8"

    version = GedcomVersion.V551
    for position, _ in header.children(0, "GEDC"):
        vers = header.child(position, "VERS")
        if vers is not None and vers.value:
            version = GedcomVersion.parse(vers.value)
            break

    char = header.child(0, "CHAR")
    charset = char.value.strip() if char is not None and char.value.strip() else "UTF-8"
    return version, charset


def build_records(groups: Sequence[LineGroup]) -> Tuple[List[Record], List[ValidationError]]:
    """
    Turn segmented line groups into Records.

    Broken groups are dropped (their problems are returned); every surviving
    group has its CONC/CONT lines folded into the owning values before the
    Record and its tag index are built.
    """
    records: List[Record] = []
    problems: List[ValidationError] = []

    for group in groups:
        if group.is_broken or group.root is None or group.root.level != 0:
            problems.extend(group.problems)
            continue

        lines, continuation_problems = reconstruct_values(group.lines)
        problems.extend(continuation_problems)
        records.append(Record.from_lines(lines))

    return records, problems
