from __future__ import annotations

import typer

from gedcom_codec.cli.commands.convert import convert_command
from gedcom_codec.cli.commands.export import export_command
from gedcom_codec.cli.commands.stats import stats_command
from gedcom_codec.cli.commands.validate import validate_command

app = typer.Typer(
    name="gedcom",
    help="GEDCOM 5.5.1 / 7.0 parser, validator, converter, and exporter",
    add_completion=False,
)

app.command("convert")(convert_command)
app.command("export")(export_command)
app.command("stats")(stats_command)
app.command("validate")(validate_command)


def main():
    app()


if __name__ == "__main__":
    main()
