from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gedcom_codec.cli.utils import load_gedcom
from gedcom_codec.registry.link_entities import validate
from gedcom_codec.validation.issues import IssueKind
from gedcom_codec.validation.media_paths import validate_media_paths

console = Console()


def validate_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    media_dir: Optional[Path] = typer.Option(
        None,
        "--media-dir",
        "-m",
        help="Check that OBJE FILE paths exist under this directory",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Report structural, referential and media path problems.

    Exits with status 1 when any error-severity problem is found.
    """
    file, registry = load_gedcom(gedcom, verbose=verbose)

    # Parse issues minus the HEAD/TRLR checks that validate() repeats.
    issues = [i for i in file.issues if i.kind is not IssueKind.MISSING_RECORD]
    issues.extend(validate(file))
    issues.extend(i for i in registry.issues if i.kind is IssueKind.MISSING_REQUIRED_FIELD)
    issues.extend(validate_media_paths(registry.objects.values(), media_dir))

    if not issues:
        console.print("[green]No problems found.[/green]")
        return

    table = Table(title=f"GEDCOM Validation: {gedcom.name}")
    table.add_column("Severity", style="bold")
    table.add_column("Kind")
    table.add_column("Line", justify="right")
    table.add_column("Message")

    for issue in issues:
        style = "red" if issue.is_error else "yellow"
        table.add_row(
            f"[{style}]{issue.severity.value}[/{style}]",
            issue.kind.value,
            str(issue.lineno or ""),
            issue.message,
        )

    console.print(table)

    if any(issue.is_error for issue in issues):
        raise typer.Exit(code=1)
