from __future__ import annotations

from collections import Counter
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedcom_codec.cli.utils import load_gedcom

console = Console()


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a GEDCOM file.
    """
    file, registry = load_gedcom(gedcom, verbose=verbose)

    table = Table(title=f"GEDCOM Statistics ({file.version.value}, {file.charset})")
    table.add_column("Entity", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Individuals", str(len(registry.individuals)))
    table.add_row("Families", str(len(registry.families)))
    table.add_row("Sources", str(len(registry.sources)))
    table.add_row("Media Objects", str(len(registry.objects)))
    table.add_row("Repositories", str(len(registry.repositories)))
    table.add_row("Submitters", str(len(registry.submitters)))
    table.add_row("Other Records", str(len(file.others)))

    kinds = Counter(issue.kind.value for issue in registry.issues)
    for kind, count in sorted(kinds.items()):
        table.add_row(f"Issues: {kind}", str(count))

    console.print(table)
