"""CLI interface for attachval using Typer framework."""

import json as jsonlib
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from attachval import __description__, __version__
from attachval.collaborators import RecordAttachmentResolver, load_manifest
from attachval.config import OutputFormat, load_config
from attachval.errors import ConfigurationError, ErrorKind
from attachval.messages import MessageCatalog
from attachval.validation.framework import ValidationReport
from attachval.validation.registry import build_validators

app = typer.Typer(
    name="attachval",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

EXIT_CONFIGURATION_ERROR = 2


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"attachval version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """attachval - Metadata validation for file attachments."""


def _output_table(report: ValidationReport, catalog: MessageCatalog) -> None:
    status_color = "green" if report.valid else "red"
    status = "VALID" if report.valid else "INVALID"
    console.print(f"[{status_color}]Validation Status: {status}[/{status_color}]")
    console.print(f"Exit Code: {report.exit_code}")

    if report.counters:
        console.print("\n[blue]Counters:[/blue]")
        counter_table = Table()
        counter_table.add_column("Metric", style="cyan")
        counter_table.add_column("Count", style="white", justify="right")

        for key, value in sorted(report.counters.items()):
            counter_table.add_row(key.replace("_", " ").title(), str(value))

        console.print(counter_table)

    if report.invalid_records:
        console.print("\n[blue]Errors Found:[/blue]")
        errors_table = Table()
        errors_table.add_column("Record", style="cyan")
        errors_table.add_column("File", style="dim")
        errors_table.add_column("Kind", style="white")
        errors_table.add_column("Message", style="white")

        for record in report.invalid_records:
            for entry in record.errors:
                errors_table.add_row(
                    record.id,
                    entry.filename or "",
                    f"[red]{entry.kind.value}[/red]",
                    catalog.full_message(entry)
                )

        console.print(errors_table)
    else:
        console.print("\n[green]No errors found![/green]")


def _output_markdown(report: ValidationReport, catalog: MessageCatalog) -> None:
    console.print("# Validation Report")
    console.print(f"**Valid:** {str(report.valid).lower()}")
    console.print(f"**Exit Code:** {report.exit_code}")
    console.print()

    if report.counters:
        console.print("## Counters")
        for key, value in report.counters.items():
            console.print(f"- {key}: {value}")
        console.print()

    if report.invalid_records:
        console.print("## Errors")
        for record in report.invalid_records:
            for entry in record.errors:
                console.print(f"- **{record.id}** `{entry.filename}` {entry.kind.value}: {catalog.full_message(entry)}")


@app.command()
def check(
    manifest: Annotated[
        Path,
        typer.Argument(help="JSON manifest of records, attachments and their metadata")
    ],
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Configuration file path (default: search for .attachval.json)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: from config)")
    ] = None,
) -> None:
    """Validate attachment metadata of every record in a manifest."""
    valid_formats = [f.value for f in OutputFormat]

    if format is not None and format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    try:
        attachval_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIGURATION_ERROR)

    logging.basicConfig(
        level=attachval_config.logging.level.logging_level,
        format="%(levelname)s: %(message)s"
    )
    output_format = format or attachval_config.output.format

    if not attachval_config.attributes and output_format != OutputFormat.JSON.value:
        console.print("[yellow]Warning:[/yellow] No attributes configured, nothing to validate")

    try:
        records, provider = load_manifest(manifest.resolve())
        record_validator = build_validators(attachval_config, RecordAttachmentResolver(), provider)
        report = record_validator.validate(records)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(EXIT_CONFIGURATION_ERROR)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    catalog = MessageCatalog()
    if output_format == OutputFormat.JSON.value:
        data = report.to_dict()
        for record_data, record in zip(data["records"], report.records):
            record_data["messages"] = [catalog.full_message(entry) for entry in record.errors]
        typer.echo(jsonlib.dumps(data, indent=2))
    elif output_format == OutputFormat.MARKDOWN.value:
        _output_markdown(report, catalog)
    else:
        _output_table(report, catalog)

    raise typer.Exit(report.exit_code)


@app.command()
def kinds() -> None:
    """List all error kinds with their default messages."""
    catalog = MessageCatalog()

    table = Table(title="Error Kinds")
    table.add_column("Kind", style="cyan", no_wrap=True)
    table.add_column("Default Message", style="white", overflow="fold")

    for kind in ErrorKind:
        table.add_row(kind.value, catalog.template_for(kind))

    console.print(table)


if __name__ == "__main__":
    app()
