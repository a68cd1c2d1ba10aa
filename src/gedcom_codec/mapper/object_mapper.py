# src/gedcom_codec/mapper/object_mapper.py

from __future__ import annotations

from typing import Optional

from gedcom_codec.mapper.models import EventMediaLink, MediaObject
from gedcom_codec.registry.entities import ParsedObject
from gedcom_codec.writer.payloads import ObjectPayload


class ObjectMapper:
    """ParsedObject <-> internal MediaObject, plus event media links."""

    def map_to_internal(self, parsed: ParsedObject, internal_id: Optional[str] = None) -> MediaObject:
        # File paths and FORM values are carried over untouched (case included).
        return MediaObject(
            id=internal_id or parsed.uuid,
            file_path=parsed.file_path,
            format=parsed.format,
            title=parsed.title,
            description=parsed.description,
            gedcom_id=parsed.id,
        )

    def to_payload(self, media: MediaObject, xref: str) -> ObjectPayload:
        return ObjectPayload(
            xref=xref,
            file_path=media.file_path,
            format=media.format,
            title=media.title,
            description=media.description,
        )

    def create_event_media_link(self, media_id: str, person_id: str, event_type: str) -> EventMediaLink:
        return EventMediaLink(media_id=media_id, person_id=person_id, event_type=event_type)
