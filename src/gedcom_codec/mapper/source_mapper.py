# src/gedcom_codec/mapper/source_mapper.py

from __future__ import annotations

from typing import Optional

from gedcom_codec.mapper.models import EventSourceLink, Source
from gedcom_codec.registry.entities import ParsedSource
from gedcom_codec.writer.payloads import SourcePayload


class SourceMapper:
    """ParsedSource <-> internal Source, plus event citation links."""

    def map_to_internal(self, parsed: ParsedSource, internal_id: Optional[str] = None) -> Source:
        """
        Notes are joined with newlines (None when there are none). Without
        ``internal_id`` the source's deterministic uuid is used.
        """
        return Source(
            id=internal_id or parsed.uuid,
            title=parsed.title,
            author=parsed.author,
            publication_date=parsed.publication_date,
            description=parsed.description,
            repository=parsed.repository,
            notes="\n".join(parsed.notes) if parsed.notes else None,
            gedcom_id=parsed.id,
        )

    def to_payload(self, source: Source, xref: str) -> SourcePayload:
        return SourcePayload(
            xref=xref,
            title=source.title,
            author=source.author,
            publication_date=source.publication_date,
            repository=source.repository,
            description=source.description,
            notes=source.notes,
        )

    def create_event_source_link(self, source_id: str, person_id: str, event_type: str) -> EventSourceLink:
        """Any event tag is accepted as-is, custom ones included."""
        return EventSourceLink(source_id=source_id, person_id=person_id, event_type=event_type)
