from __future__ import annotations

import time
from pathlib import Path
from typing import Tuple

from rich.console import Console

from gedcom_codec.loader.tree_builder import GedcomFile
from gedcom_codec.logging import enable_rich_console
from gedcom_codec.parser_core import GedcomParser
from gedcom_codec.registry.entities import GedcomRegistry

console = Console()


def load_gedcom(path: Path, *, verbose: bool = False) -> Tuple[GedcomFile, GedcomRegistry]:
    """
    Parse a file and project its records.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    if verbose:
        enable_rich_console()

    t0 = time.perf_counter()

    parser = GedcomParser()
    file = parser.parse_file(path)
    registry = parser.build_registry(file)

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Loaded GEDCOM {file.version.value} in {elapsed:.2f}s")

    return file, registry


def write_text(payload: str, *, out: Path | None) -> None:
    """
    Write text to a file, or stdout when no path is given.
    """
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
