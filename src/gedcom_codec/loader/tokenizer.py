# src/gedcom_codec/loader/tokenizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from gedcom_codec.core.exceptions import CodecError
from gedcom_codec.loader.encoding import normalize_encoding

_POINTER_RE = re.compile(r"^@[^@\s]+@$")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")
CONTINUATION_TAGS = frozenset({"CONC", "CONT"})


@dataclass(frozen=True)
class Line:
    """
    A single GEDCOM physical line.

    Attributes:
        lineno: 1-based line number in the original text (0 when synthetic).
        level: Parsed GEDCOM level (0, 1, 2, ...).
        tag: GEDCOM tag, e.g. "INDI", "FAM", "HEAD", "NOTE", "CONC", "CONT".
        xref: Optional cross-reference identifier defining a record, e.g. "@I1@".
        pointer: Optional reference to another record, e.g. "@F1@" on a FAMS line.
        value: The line payload (empty when the payload is a pointer).
        raw: The original line content without trailing newline characters.
    """
    lineno: int
    level: int
    tag: str
    xref: Optional[str] = None
    pointer: Optional[str] = None
    value: str = ""
    raw: str = ""

    def with_value(self, value: str) -> "Line":
        return Line(
            lineno=self.lineno,
            level=self.level,
            tag=self.tag,
            xref=self.xref,
            pointer=self.pointer,
            value=value,
            raw=self.raw,
        )


class GedcomSyntaxError(CodecError, ValueError):
    """Raised when a GEDCOM line cannot be parsed according to basic syntax.

    ``level`` is set when the leading level was readable, so a broken
    level-0 line can still be told apart from a broken nested line.
    """

    def __init__(self, message: str, lineno: int = 0, level: Optional[int] = None):
        super().__init__(message)
        self.lineno = lineno
        self.level = level


def _strip_eol(line: str) -> str:
    """Strip trailing CR/LF characters but preserve all other whitespace."""
    return line.rstrip("\r\n")


def strip_pointer(pointer: Optional[str]) -> Optional[str]:
    """'@I1@' -> 'I1'. Values without delimiters are returned unchanged."""
    if pointer is None:
        return None
    p = pointer.strip()
    if p.startswith("@") and p.endswith("@") and len(p) >= 2:
        p = p[1:-1]
    return p or None


def tokenize_line(line: str, lineno: int = 0) -> Line:
    """
    Parse a single GEDCOM line into a Line.

    Hybrid parsing strategy:
        - Manually split off the level.
        - Then manually detect an optional xref (starts with '@' and
          continues until the next space).
        - Remaining part is split into TAG and optional VALUE.
        - A VALUE that is a single @...@ token becomes the line's pointer.

    This is deliberately strict about the required order:
        <level> [<xref>] <tag> [<value>]

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "1 FAMS @F1@"
    """
    raw = _strip_eol(line)

    # Handle optional UTF-8 BOM on the very first line.
    if lineno <= 1 and raw.startswith("\ufeff"):
        raw = raw.lstrip("\ufeff")

    if not raw.strip():
        raise GedcomSyntaxError(f"Empty or whitespace-only line at {lineno}", lineno)

    # Some exporters indent nested lines; leading whitespace carries no meaning.
    text = raw.lstrip(" \t")

    # --- 1. Extract level -------------------------------------------------
    parts = text.split(" ", 1)
    level_str = parts[0]
    known_level = int(level_str) if level_str.isdigit() else None

    if len(parts) == 1:
        raise GedcomSyntaxError(
            f"Line {lineno}: missing tag (only level found) -> {raw!r}", lineno, known_level
        )

    rest = parts[1]
    if not level_str.isdigit():
        raise GedcomSyntaxError(
            f"Line {lineno}: level is not numeric -> {level_str!r} in {raw!r}", lineno
        )

    level = int(level_str)
    rest = rest.lstrip(" ")

    if not rest:
        raise GedcomSyntaxError(f"Line {lineno}: missing tag after level -> {raw!r}", lineno, level)

    # --- 2. Extract optional xref ----------------------------------------
    xref: Optional[str] = None

    if rest.startswith("@"):
        try:
            space_index = rest.index(" ")
        except ValueError:
            raise GedcomSyntaxError(
                f"Line {lineno}: xref present but no tag -> {raw!r}", lineno, level
            ) from None

        xref = rest[:space_index]
        rest = rest[space_index + 1 :].lstrip(" ")

        if not rest:
            raise GedcomSyntaxError(
                f"Line {lineno}: xref present but missing tag -> {raw!r}", lineno, level
            )

    # --- 3. Extract tag and optional value --------------------------------
    if " " in rest:
        tag, value = rest.split(" ", 1)
    else:
        tag, value = rest, ""

    if not tag:
        raise GedcomSyntaxError(f"Line {lineno}: empty tag after level/xref -> {raw!r}", lineno, level)

    tag = tag.upper()
    pointer: Optional[str] = None
    if tag not in CONTINUATION_TAGS and _POINTER_RE.match(value):
        pointer, value = value, ""

    return Line(
        lineno=lineno,
        level=level,
        tag=tag,
        xref=xref,
        pointer=pointer,
        value=value,
        raw=raw,
    )


def tokenize_text(
    text: str, *, strict: bool = True
) -> Iterator[Tuple[int, Union[Line, GedcomSyntaxError]]]:
    """
    Yield (lineno, Line) for every non-blank line of an in-memory document.

    With ``strict=False`` syntax errors are yielded in place of the Line
    instead of being raised, so callers can discard just the affected record.
    """
    for lineno, raw_line in enumerate(_NEWLINE_RE.split(text), start=1):
        if not raw_line.strip() or raw_line.strip() == "\ufeff":
            continue
        try:
            yield lineno, tokenize_line(raw_line, lineno=lineno)
        except GedcomSyntaxError as exc:
            if strict:
                raise
            yield lineno, exc


def read_text(path: Union[str, Path]) -> str:
    """
    Read a GEDCOM file as text.

    The character set comes from the BOM or ``HEAD.CHAR`` (UTF-8 when
    neither says otherwise); ANSEL and other 8-bit sets are transcoded.
    Undecodable bytes are replaced.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    return normalize_encoding(file_path.read_bytes())


def tokenize_file(path: Union[str, Path]) -> Iterator[Line]:
    """
    Yield Line objects for every non-empty GEDCOM line in the given file.

    Raises:
        FileNotFoundError: if `path` does not exist.
        GedcomSyntaxError: if a line is syntactically invalid.
    """
    for _, line in tokenize_text(read_text(path), strict=True):
        yield line  # type: ignore[misc]
