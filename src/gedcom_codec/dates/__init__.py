from .formatter import IsoDateFormatter, TraditionalDateFormatter, format_date, formatter_for
from .normalizer import ParsedDate, normalize_event_date, parse_date, parse_iso_date

__all__ = [
    "IsoDateFormatter",
    "ParsedDate",
    "TraditionalDateFormatter",
    "format_date",
    "formatter_for",
    "normalize_event_date",
    "parse_date",
    "parse_iso_date",
]
