# src/gedcom_codec/dates/normalizer.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import MINYEAR, date as Date
from typing import Dict, List, Optional, Tuple

from gedcom_codec.core.version import GedcomVersion


# ---------------------------------------------------------------------------
# Month and calendar helpers
# ---------------------------------------------------------------------------

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "SEPT": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

MONTH_ABBREVIATIONS = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

CALENDAR_ALIASES = {
    "JULIAN": "JULIAN",
    "OLD STYLE": "JULIAN",
    "GREGORIAN": "GREGORIAN",
    "NEW STYLE": "GREGORIAN",
}

_CALENDAR_ESCAPE_RE = re.compile(r"^@#D([A-Z ]+)@\s*", re.IGNORECASE)
_ISO_RE = re.compile(r"^(\d{3,4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?$")


# ---------------------------------------------------------------------------
# Qualifier mapping
# ---------------------------------------------------------------------------

# Each entry: alias (lowercase) -> (standard_code, approximate)
QUALIFIER_ALIASES: Dict[str, Tuple[str, bool]] = {}


def _add_qualifier_aliases(aliases: List[str], code: str, approximate: bool) -> None:
    for a in aliases:
        QUALIFIER_ALIASES[a.lower()] = (code, approximate)


# Every reported qualifier marks the date as approximate.

# About: ABT
_add_qualifier_aliases(
    ["abt", "abt.", "about", "approx", "approx.", "approximately",
     "circa", "c", "c.", "around", "ca", "ca."],
    "ABT",
    True,
)

# Before: BEF
_add_qualifier_aliases(
    ["before", "bef", "bef.", "prior to", "pre", "pre-", "earlier than"],
    "BEF",
    True,
)

# After: AFT
_add_qualifier_aliases(
    ["after", "aft", "aft.", "post", "post-", "later than"],
    "AFT",
    True,
)

# Calculated / estimated: approximate, but not one of the four qualifiers.
_add_qualifier_aliases(["cal", "cal.", "calculated"], "CAL", True)
_add_qualifier_aliases(["est", "est.", "estimated"], "EST", True)

RANGE_STARTERS = {"bet", "bet.", "between", "btw", "btw.", "betw", "betw."}
SPAN_STARTERS = {"from", "since"}

#: Qualifiers surfaced on ParsedDate.qualifier.
REPORTED_QUALIFIERS = {"ABT", "BEF", "AFT", "BET"}


@dataclass(frozen=True)
class ParsedDate:
    """
    A GEDCOM date value broken into numeric parts.

    Qualifiers and approximation are kept beside the numbers, never folded
    into them: "ABT 1900" is year=1900, is_approximate=True, qualifier="ABT".
    ABT, BEF, AFT and BET all set is_approximate, as do EST and CAL.
    For ranges the numeric fields describe the first date and ``end`` the
    second one.
    """

    raw: str
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    is_approximate: bool = False
    qualifier: Optional[str] = None
    calendar: Optional[str] = None
    end: Optional["ParsedDate"] = None

    @property
    def precision(self) -> Optional[str]:
        if self.year is None:
            return None
        if self.month is None:
            return "year"
        if self.day is None:
            return "month"
        return "day"

    @property
    def is_valid(self) -> bool:
        return self.year is not None

    def to_iso(self) -> Optional[str]:
        """'1985', '1985-01' or '1985-01-15' depending on precision."""
        if self.year is None:
            return None
        out = f"{self.year:04d}"
        if self.month is not None:
            out += f"-{self.month:02d}"
            if self.day is not None:
                out += f"-{self.day:02d}"
        return out

    def to_date(self) -> Optional[Date]:
        """Calendar date with missing parts pinned to the first month/day."""
        if self.year is None:
            return None
        return Date(self.year, self.month or 1, self.day or 1)


# ---------------------------------------------------------------------------
# Core parsing helpers
# ---------------------------------------------------------------------------

def _strip_calendar(raw: str) -> Tuple[str, Optional[str]]:
    """
    Remove a leading '@#DJULIAN@' escape or a trailing '(Julian)' label.
    """
    s = raw.strip()
    calendar = None

    escape = _CALENDAR_ESCAPE_RE.match(s)
    if escape:
        label = escape.group(1).strip().upper()
        calendar = CALENDAR_ALIASES.get(label, label)
        s = s[escape.end():]

    if s.endswith(")"):
        idx = s.rfind("(")
        if idx != -1:
            label = s[idx + 1 : -1].strip()
            cal = CALENDAR_ALIASES.get(label.upper())
            if cal:
                calendar = cal
                s = s[:idx].strip()

    return s, calendar


def _parse_year(token: str) -> Optional[int]:
    token = token.strip()
    # allow 3-digit "year" for deep history
    if len(token) in (3, 4) and token.isdigit() and int(token) >= MINYEAR:
        return int(token)
    return None


def _checked(year: int, month: Optional[int], day: Optional[int]) -> bool:
    if year < MINYEAR:
        return False
    if month is None:
        return True
    if not 1 <= month <= 12:
        return False
    if day is None:
        return True
    try:
        Date(year, month, day)
    except ValueError:
        return False
    return True


def _parse_simple(tokens: List[str]) -> Tuple[Optional[int], Optional[int], Optional[int]]:
    """
    Parse a date with no leading qualifier:
        - '1900'
        - 'JAN 1900'
        - '1 JAN 1900'
    Returns (year, month, day); all None when the text is not a date.
    """
    if len(tokens) == 1:
        return _parse_year(tokens[0]), None, None

    if len(tokens) == 2:
        mon = MONTHS.get(tokens[0].upper())
        year = _parse_year(tokens[1])
        if mon is not None and year is not None:
            return year, mon, None
        return None, None, None

    if len(tokens) == 3 and tokens[0].isdigit():
        mon = MONTHS.get(tokens[1].upper())
        year = _parse_year(tokens[2])
        day = int(tokens[0])
        if mon is not None and year is not None and _checked(year, mon, day):
            return year, mon, day

    return None, None, None


def _split_on(tokens: List[str], separators: List[str]) -> Optional[Tuple[List[str], List[str]]]:
    """
    Split tokens into (left, right) at the first occurrence of any separator token
    (case-insensitive). Returns None if no separator found.
    """
    lowers = [s.lower() for s in separators]
    for i, t in enumerate(tokens):
        if t.lower() in lowers:
            return tokens[:i], tokens[i + 1 :]
    return None


def _simple_date(raw: str, tokens: List[str], **extra) -> ParsedDate:
    year, month, day = _parse_simple(tokens)
    return ParsedDate(raw=raw, year=year, month=month, day=day, **extra)


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def parse_date(raw: Optional[str]) -> ParsedDate:
    """
    Parse a traditional (5.5.1 style) GEDCOM DATE value.

    Precision follows the input:
        - '1 JAN 1900'   -> 1900-01-01
        - 'JAN 1900'     -> 1900-01
        - '1900'         -> 1900

    Qualifiers (ABT, BEF, AFT, BET ... AND ..., FROM ... TO ..., CAL, EST and
    common English aliases) are recorded on the result, never applied to the
    numbers. Text that is not a date comes back with no numeric fields.
    """
    s = "" if raw is None else str(raw).strip()
    if not s:
        return ParsedDate(raw=s)

    base, calendar = _strip_calendar(s)
    tokens = [t for t in base.replace(",", " ").split() if t]
    if not tokens:
        return ParsedDate(raw=s, calendar=calendar)

    head = tokens[0].lower()

    # BET <date1> AND <date2>
    if head in RANGE_STARTERS:
        split = _split_on(tokens[1:], ["and", "&"])
        left, right = split if split else (tokens[1:], [])
        end = _simple_date(s, right) if right else None
        return _simple_date(
            s, left, is_approximate=True, qualifier="BET", calendar=calendar, end=end
        )

    # FROM <date1> [TO <date2>]
    if head in SPAN_STARTERS:
        split = _split_on(tokens[1:], ["to", "until", "thru", "through"])
        left, right = split if split else (tokens[1:], [])
        end = _simple_date(s, right) if right else None
        return _simple_date(s, left, calendar=calendar, end=end)

    # "TO <date>" on its own
    if head == "to":
        return _simple_date(s, tokens[1:], calendar=calendar)

    # Multi-word aliases ('prior to 1900', 'later than 1900').
    for width in (2, 1):
        alias = " ".join(tokens[:width]).lower()
        if len(tokens) > width and alias in QUALIFIER_ALIASES:
            code, approximate = QUALIFIER_ALIASES[alias]
            return _simple_date(
                s,
                tokens[width:],
                is_approximate=approximate,
                qualifier=code if code in REPORTED_QUALIFIERS else None,
                calendar=calendar,
            )

    return _simple_date(s, tokens, calendar=calendar)


def parse_iso_date(raw: Optional[str]) -> ParsedDate:
    """Parse an ISO-8601 (7.0 style) value: YYYY, YYYY-MM or YYYY-MM-DD."""
    s = "" if raw is None else str(raw).strip()
    m = _ISO_RE.match(s)
    if not m:
        return ParsedDate(raw=s)

    year = int(m.group(1))
    month = int(m.group(2)) if m.group(2) else None
    day = int(m.group(3)) if m.group(3) else None
    if not _checked(year, month, day):
        return ParsedDate(raw=s)
    return ParsedDate(raw=s, year=year, month=month, day=day)


def is_iso_date(raw: Optional[str]) -> bool:
    return parse_iso_date(raw).is_valid


def normalize_event_date(
    raw: Optional[str], version: GedcomVersion = GedcomVersion.V551
) -> Tuple[Optional[str], ParsedDate]:
    """
    Return (iso_string, parsed) for an event DATE value read from a file.

    7.0 files carry ISO dates which pass through untouched. Everything else,
    including traditional dates found in files that claim 7.0, goes through
    the traditional parser.
    """
    if raw is None or not str(raw).strip():
        return None, ParsedDate(raw="")

    if GedcomVersion.parse(version) is GedcomVersion.V70:
        iso = parse_iso_date(raw)
        if iso.is_valid:
            return str(raw).strip(), iso

    parsed = parse_date(raw)
    return parsed.to_iso(), parsed
