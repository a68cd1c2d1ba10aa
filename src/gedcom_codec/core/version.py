from __future__ import annotations

from enum import Enum


class GedcomVersion(str, Enum):
    """The two supported GEDCOM dialects."""

    V551 = "5.5.1"
    V70 = "7.0"

    @classmethod
    def parse(cls, text: "str | GedcomVersion | None") -> "GedcomVersion":
        """
        Resolve a header VERS value (or option string) into a dialect.

        Anything in the 7.x family maps to 7.0; everything else, including a
        missing value, is treated as 5.5.1.
        """
        if isinstance(text, GedcomVersion):
            return text
        if text and str(text).strip().startswith("7"):
            return cls.V70
        return cls.V551

    def __str__(self) -> str:  # pragma: no cover - cosmetic
        return self.value
