# src/gedcom_codec/writer/lines.py

from __future__ import annotations

from typing import Optional


def format_line(level: int, tag: str, value: Optional[str] = None, xref: Optional[str] = None) -> str:
    """
    Render one physical line: "<level> [<xref>] <tag> [<value>]".

    An empty or missing value adds no trailing space. xrefs and values are
    written verbatim.
    """
    line = f"{level}"
    if xref:
        line += f" {xref}"
    line += f" {tag}"
    if value:
        line += f" {value}"
    return line
