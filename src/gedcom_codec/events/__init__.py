from .event import (
    FAMILY_EVENT_TAGS,
    INDIVIDUAL_EVENT_TAGS,
    ParsedEvent,
    build_event,
    extract_all_event_citations,
    extract_event_media,
    extract_event_pointers,
    extract_event_sources,
    extract_events,
    is_event_tag,
    is_family_event_tag,
    is_individual_event_tag,
)

__all__ = [
    "FAMILY_EVENT_TAGS",
    "INDIVIDUAL_EVENT_TAGS",
    "ParsedEvent",
    "build_event",
    "extract_all_event_citations",
    "extract_event_media",
    "extract_event_pointers",
    "extract_event_sources",
    "extract_events",
    "is_event_tag",
    "is_family_event_tag",
    "is_individual_event_tag",
]
