# src/gedcom_codec/identity/uuid_factory.py
from __future__ import annotations

import uuid
from typing import Optional

# Fixed namespace so ids survive across runs and machines.
CODEC_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "urn:gedcom-codec")


def deterministic_uuid(*parts: object) -> str:
    """Stable UUID for an ordered tuple of parts (None counts as '')."""
    name = "|".join("" if p is None else str(p) for p in parts)
    return str(uuid.uuid5(CODEC_NAMESPACE, name))


# -----------------------------
# Record pointers
# -----------------------------

def normalize_pointer(pointer: Optional[str]) -> Optional[str]:
    """
    Canonical ``@ID@`` form of a record pointer.

    Whitespace and surrounding delimiters are dropped, so ``I1``, ``@I1@``
    and `` @I1@ `` compare equal. Case is kept: ``@i1@`` and ``@I1@`` are
    distinct records. Returns None for an empty pointer.
    """
    if pointer is None:
        return None
    ident = pointer.strip().strip("@")
    return f"@{ident}@" if ident else None


def uuid_for_pointer(pointer: str) -> str:
    """Identity of a record: 'I1' and '@I1@' map to the same UUID."""
    canonical = normalize_pointer(pointer)
    if canonical is None:
        raise ValueError(f"Invalid pointer: {pointer!r}")
    return deterministic_uuid("PTR", canonical)


def uuid_for_relationship(kind: str, from_id: str, to_id: str, family_id: Optional[str] = None) -> str:
    """Identity of a directed person-to-person edge."""
    return deterministic_uuid("REL", kind.upper(), from_id, to_id, family_id)


__all__ = [
    "CODEC_NAMESPACE",
    "deterministic_uuid",
    "normalize_pointer",
    "uuid_for_pointer",
    "uuid_for_relationship",
]
