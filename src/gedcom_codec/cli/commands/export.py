from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_codec.cli.utils import load_gedcom, write_text
from gedcom_codec.exporter.json_exporter import serialize_registry_to_json_string

console = Console()


def export_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Export parsed GEDCOM records to JSON (stdout by default).
    """
    _, registry = load_gedcom(gedcom, verbose=verbose)

    if verbose:
        console.log("Exporting JSON")

    write_text(
        serialize_registry_to_json_string(registry, indent=2 if pretty else None),
        out=out,
    )

    if verbose:
        console.log("Export complete")
