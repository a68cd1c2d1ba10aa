"""
json_exporter.py
Structured JSON exporter for GedcomRegistry objects.

This exporter:
- Converts dataclasses and objects to dictionaries (NOT strings)
- Preserves full structure for downstream processing
- Is deterministic: the same registry always yields the same JSON
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from gedcom_codec.logging import get_logger
from gedcom_codec.registry.entities import GedcomRegistry

log = get_logger(__name__)


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Enums -> their value
    - Primitives pass through
    - dates -> ISO-8601 strings
    - dataclasses → dict (recursively)
    - dict → dict (recursively)
    - list / tuple / set → list (recursively)
    - anything else → str(obj)
    """
    if isinstance(obj, Enum):
        return obj.value

    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if isinstance(obj, date):
        return obj.isoformat()

    if is_dataclass(obj) and not isinstance(obj, type):
        return {k: _to_json_compatible(v) for k, v in asdict(obj).items()}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    return str(obj)


def build_registry_dict(registry: GedcomRegistry) -> Dict[str, Any]:
    """
    Convert the in-memory registry into a JSON-safe dict.
    """
    return {
        "counts": registry.counts(),
        "individuals": {ident: _to_json_compatible(ent) for ident, ent in registry.individuals.items()},
        "families": {ident: _to_json_compatible(ent) for ident, ent in registry.families.items()},
        "sources": {ident: _to_json_compatible(ent) for ident, ent in registry.sources.items()},
        "objects": {ident: _to_json_compatible(ent) for ident, ent in registry.objects.items()},
        "repositories": {ident: _to_json_compatible(ent) for ident, ent in registry.repositories.items()},
        "submitters": {ident: _to_json_compatible(ent) for ident, ent in registry.submitters.items()},
        "issues": [
            {
                "kind": issue.kind.value,
                "severity": issue.severity.value,
                "message": issue.message,
                "lineno": issue.lineno,
                "xref": issue.xref,
            }
            for issue in registry.issues
        ],
    }


def serialize_registry_to_json_string(registry: GedcomRegistry, indent: int | None = 2) -> str:
    if indent is None:
        return json.dumps(build_registry_dict(registry), separators=(",", ":"), ensure_ascii=False)
    return json.dumps(build_registry_dict(registry), indent=indent, ensure_ascii=False)


def export_registry_json(registry: GedcomRegistry, output_path: str | Path, indent: int | None = 2) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    log.info(
        "Exporting registry JSON to: %s (INDI=%d, FAM=%d, SOUR=%d, OBJE=%d, REPO=%d, SUBM=%d)",
        output_path,
        len(registry.individuals),
        len(registry.families),
        len(registry.sources),
        len(registry.objects),
        len(registry.repositories),
        len(registry.submitters),
    )

    json_str = serialize_registry_to_json_string(registry, indent=indent)

    with output_path.open("w", encoding="utf-8") as f:
        f.write(json_str)

    log.info("JSON export complete. size=%d bytes", output_path.stat().st_size)
