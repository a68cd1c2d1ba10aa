# src/gedcom_codec/writer/continuation.py

"""
Splitting long values across CONC / CONT lines.

    1 NOTE <as much of the value as fits>
    2 CONT <next chunk, broken at a space>     (space dropped, reads back as a line break)
    2 CONC <next chunk, hard break>            (nothing dropped or added)

The first line is always a hard cut at the width left after "<level> <tag> ".
Each later chunk is broken at its last space when that space sits at or
beyond the chunk's midpoint (emitted as CONT); otherwise the full chunk is
emitted as CONC. The final chunk is always CONT.
"""

from __future__ import annotations

import re
from typing import List, Optional

from gedcom_codec.writer.lines import format_line

DEFAULT_MAX_LINE_LENGTH = 80

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def _width(max_line_length: int, prefix: str) -> int:
    # At least one character per line, so tiny limits still terminate.
    return max(1, max_line_length - len(prefix))


def _wrap(
    head_level: int,
    head_tag: str,
    text: str,
    cont_level: int,
    max_line_length: int,
) -> List[str]:
    head_prefix = f"{head_level} {head_tag} "
    first_width = _width(max_line_length, head_prefix)

    if len(text) <= first_width:
        return [format_line(head_level, head_tag, text)]

    lines = [format_line(head_level, head_tag, text[:first_width])]
    remaining = text[first_width:]
    width = _width(max_line_length, f"{cont_level} CONT ")

    while remaining:
        if len(remaining) <= width:
            lines.append(format_line(cont_level, "CONT", remaining))
            break

        chunk = remaining[:width]
        last_space = chunk.rfind(" ")

        if last_space > 0 and last_space >= width / 2:
            lines.append(format_line(cont_level, "CONT", chunk[:last_space]))
            remaining = remaining[last_space + 1 :]
        else:
            lines.append(format_line(cont_level, "CONC", chunk))
            remaining = remaining[width:]

    return lines


def format_long_line(
    level: int,
    tag: str,
    value: Optional[str],
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
) -> List[str]:
    """
    Render ``tag`` with ``value`` at ``level``, spilling into CONC/CONT
    lines at ``level + 1`` when the line would exceed ``max_line_length``.

    Line breaks inside ``value`` are written as CONT lines, each wrapped
    with the same rules.
    """
    if not value:
        return [format_line(level, tag)]

    first, *rest = _NEWLINE_RE.split(value)
    lines = _wrap(level, tag, first, level + 1, max_line_length)
    for logical in rest:
        lines.extend(_wrap(level + 1, "CONT", logical, level + 1, max_line_length))
    return lines
