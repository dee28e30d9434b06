"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from firebase_schema_validator.configuration import (
    DEFAULT_DECLARATIONS_FILENAME,
    override_settings,
    write_declarations_scaffold,
)
from firebase_schema_validator.declaration_ingestion import (
    DeclarationDocument,
    DeclarationFormatError,
    read_declarations,
    write_declarations,
)
from firebase_schema_validator.results_writing import ReportFormat, render_report
from firebase_schema_validator.schema_registry import SchemaRegistry, ValidationReport


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="firebase-schema-validator")
@click.option("--verbose", is_flag=True, default=False, help="Log resolution details to stderr.")
def cli(verbose: bool) -> None:
    """Validate Firebase schema declarations before code generation."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command(name="generate-declarations")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_DECLARATIONS_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the starter declarations file to write",
)
def generate_declarations(output_path: str) -> None:
    """Generate a starter YAML declarations file with guidance comments."""
    try:
        resolved_output = write_declarations_scaffold(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="validate")
@click.option(
    "--declarations",
    "declarations_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON declarations file",
)
@click.option(
    "--first-conflict-only",
    is_flag=True,
    default=False,
    help="Stop each storage declaration at its first conflict.",
)
@click.option(
    "--warnings-as-errors",
    is_flag=True,
    default=False,
    help="Reject the schema when warnings are reported.",
)
@click.option(
    "--format",
    "report_format",
    type=click.Choice([option.value for option in ReportFormat]),
    default=ReportFormat.TEXT.value,
    show_default=True,
    help="Report output format",
)
def validate(
    declarations_path: str,
    first_conflict_only: bool,
    warnings_as_errors: bool,
    report_format: str,
) -> None:
    """Validate a declarations file and report every problem found."""
    _, report = _validate_file(
        declarations_path,
        first_conflict_only=first_conflict_only,
        warnings_as_errors=warnings_as_errors,
    )
    click.echo(render_report(report, report_format))
    if not report.is_valid:
        raise CliError(f"schema rejected: {declarations_path}")


@cli.command(name="normalize")
@click.option(
    "--declarations",
    "declarations_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON declarations file",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the normalized declarations file to write",
)
def normalize(declarations_path: str, output_path: str) -> None:
    """Write the normalized declarations of a valid schema."""
    document, report = _validate_file(declarations_path)
    if report.graph is None:
        click.echo(render_report(report, ReportFormat.TEXT), err=True)
        raise CliError(f"schema rejected: {declarations_path}")
    try:
        resolved_output = write_declarations(
            output_path, report.graph.declarations, document.settings
        )
    except OSError as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def _validate_file(
    declarations_path: str,
    *,
    first_conflict_only: bool = False,
    warnings_as_errors: bool = False,
) -> tuple[DeclarationDocument, ValidationReport]:
    try:
        document = read_declarations(declarations_path)
    except (DeclarationFormatError, OSError) as exc:
        raise CliError(str(exc)) from exc
    registry = SchemaRegistry(
        override_settings(
            document.settings,
            first_conflict_only=first_conflict_only,
            warnings_as_errors=warnings_as_errors,
        )
    )
    registry.declare_all(document.declarations)
    return document, registry.validate()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
