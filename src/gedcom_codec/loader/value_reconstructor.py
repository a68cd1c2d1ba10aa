# src/gedcom_codec/loader/value_reconstructor.py

"""
Value Reconstructor: Handles GEDCOM CONT / CONC tags.

Rules (GEDCOM 5.5.1 / 7.0):
    - CONC: Append text directly to the owner's value.
            No newline added.

    - CONT: Append a newline + the text.
            Always produces a new line in the logical output.

Examples:
    Owner NOTE value: "Line one"
    Child CONC value: " and more"
        → "Line one and more"

    Child CONT value: "Second line"
        → "Line one and more\nSecond line"

The owner of a continuation line is the nearest preceding non-continuation
line whose level is exactly one less. Continuation lines are removed from
the output; the input list is not mutated.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from gedcom_codec.loader.tokenizer import CONTINUATION_TAGS, Line
from gedcom_codec.validation.issues import ValidationError, structural


def reconstruct_values(lines: List[Line]) -> Tuple[List[Line], List[ValidationError]]:
    """
    Merge CONC / CONT lines into the value of the line they continue.

    Example:
        1 NOTE First line
        2 CONC continued
        2 CONT next line

    becomes:
        1 NOTE "First linecontinued\nnext line"

    Returns (lines, problems). An orphan continuation (nothing at level-1 to
    attach to) is kept as an ordinary line and reported.
    """
    out: List[Line] = []
    problems: List[ValidationError] = []

    # Position in `out` of the line currently accumulating continuations.
    owner: Optional[int] = None

    for line in lines:
        if line.tag in CONTINUATION_TAGS:
            if owner is not None and out[owner].level == line.level - 1:
                base = out[owner]
                if line.tag == "CONC":
                    out[owner] = base.with_value(base.value + line.value)
                else:
                    out[owner] = base.with_value(base.value + "\n" + line.value)
                continue

            problems.append(
                structural(f"{line.tag} line has no value to continue", line.lineno)
            )
            out.append(line)
            continue

        out.append(line)
        owner = len(out) - 1

    return out, problems
