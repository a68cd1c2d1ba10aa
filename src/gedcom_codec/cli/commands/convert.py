from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom_codec.cli.utils import load_gedcom, write_text
from gedcom_codec.core.version import GedcomVersion
from gedcom_codec.mapper import GedcomMapper, MapOptions, ObjectMapper, SourceMapper
from gedcom_codec.writer.generator import GedcomGenerator, GeneratorOptions, splice_records

console = Console()


def convert_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True),
    to: str = typer.Option(
        GedcomVersion.V70.value,
        "--to",
        "-t",
        help="Target GEDCOM version (5.5.1 or 7.0)",
    ),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    max_line_length: Optional[int] = typer.Option(
        None,
        "--max-line-length",
        help="Wrap long values at this width (config default otherwise)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Re-emit a GEDCOM file as 5.5.1 or 7.0.

    People and relationships go through the internal model, so only the
    fields it carries survive. Sources and media objects keep their xrefs.
    """
    if to not in {v.value for v in GedcomVersion}:
        raise typer.BadParameter(f"unsupported version {to!r}", param_hint="--to")
    version = GedcomVersion.parse(to)

    file, registry = load_gedcom(gedcom, verbose=verbose)

    mapper = GedcomMapper()
    result = mapper.map_from_gedcom(file, MapOptions(ignore_missing_references=True))
    individuals, families = mapper.map_to_gedcom(result.people, result.relationships)

    options = GeneratorOptions.from_config()
    options.version = version.value
    if max_line_length:
        options.max_line_length = max_line_length
    generator = GedcomGenerator(options)

    sources = SourceMapper()
    objects = ObjectMapper()
    blocks = [
        generator.generate_source(sources.to_payload(sources.map_to_internal(s), f"@{s.id}@"))
        for s in registry.sources.values()
    ]
    blocks.extend(
        generator.generate_object(objects.to_payload(objects.map_to_internal(o), f"@{o.id}@"))
        for o in registry.objects.values()
    )

    document = splice_records(generator.generate(individuals, families), blocks)
    write_text(document, out=out)

    if verbose:
        console.log(
            f"Converted {len(individuals)} individuals, {len(families)} families "
            f"to GEDCOM {version.value}"
        )
