# src/gedcom_codec/dates/formatter.py

"""
Writing dates out in the style of the active GEDCOM version.

Each version is a strategy object; callers pick one with ``formatter_for``
instead of branching on the version string themselves.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Dict, Optional, Protocol

from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.dates.normalizer import MONTH_ABBREVIATIONS


class DateFormatter(Protocol):
    version: GedcomVersion

    def format(self, iso_date: Optional[str]) -> str:
        ...

    def format_today(self, today: Date) -> str:
        ...


class IsoDateFormatter:
    """7.0: values are already ISO-8601 and pass through unchanged."""

    version = GedcomVersion.V70

    def format(self, iso_date: Optional[str]) -> str:
        return iso_date or ""

    def format_today(self, today: Date) -> str:
        return today.isoformat()


class TraditionalDateFormatter:
    """5.5.1: '1985-01-15' -> '15 JAN 1985', '1985-01' -> 'JAN 1985'."""

    version = GedcomVersion.V551

    @staticmethod
    def _month(part: str) -> Optional[str]:
        try:
            index = int(part, 10)
        except ValueError:
            return None
        if 1 <= index <= 12:
            return MONTH_ABBREVIATIONS[index - 1]
        return None

    def format(self, iso_date: Optional[str]) -> str:
        if not iso_date:
            return ""

        parts = iso_date.split("-")
        if len(parts) == 3:
            month = self._month(parts[1])
            if month is None or not parts[2].isdigit():
                return iso_date
            return f"{int(parts[2], 10)} {month} {parts[0]}"
        if len(parts) == 2:
            month = self._month(parts[1])
            if month is None:
                return iso_date
            return f"{month} {parts[0]}"
        if len(parts) == 1:
            return parts[0]

        return iso_date

    def format_today(self, today: Date) -> str:
        return self.format(today.isoformat())


_FORMATTERS: Dict[GedcomVersion, DateFormatter] = {
    GedcomVersion.V70: IsoDateFormatter(),
    GedcomVersion.V551: TraditionalDateFormatter(),
}


def formatter_for(version: "GedcomVersion | str | None") -> DateFormatter:
    return _FORMATTERS[GedcomVersion.parse(version)]


def format_date(iso_date: Optional[str], version: "GedcomVersion | str | None" = GedcomVersion.V551) -> str:
    """Render an ISO date in the given version's style."""
    return formatter_for(version).format(iso_date)
