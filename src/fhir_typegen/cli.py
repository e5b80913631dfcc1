"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from fhir_typegen.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from fhir_typegen.run_execution import (
    GenerationRequest,
    RunExecutionError,
    execute_generation_run,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="fhir-typegen")
def cli() -> None:
    """Generate typed shapes and validators from FHIR StructureDefinitions."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generation configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML generation configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON generation configuration file",
)
@click.option(
    "--input",
    "input_pattern",
    required=False,
    help="Glob pattern of StructureDefinition JSON files (relative to the working directory)",
)
@click.option(
    "--output",
    "output_dir",
    required=False,
    type=click.Path(file_okay=False, path_type=str),
    help="Directory receiving the generated modules",
)
@click.option(
    "--no-barrel",
    "skip_barrel",
    is_flag=True,
    default=False,
    help="Skip the __init__.py re-exporting every definition.",
)
@click.option(
    "--source-only",
    "source_only_mode",
    is_flag=True,
    default=False,
    help="Omit imports between generated modules.",
)
@click.option(
    "--no-format",
    "skip_format",
    is_flag=True,
    default=False,
    help="Write generated modules without the ruff formatting pass.",
)
@click.option(
    "--skip-failed",
    "skip_failed_definitions",
    is_flag=True,
    default=False,
    help="Leave out definitions whose field types cannot be resolved.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stdout.")
# pylint: disable-next=too-many-arguments
def generate(
    config_path: str | None,
    input_pattern: str | None,
    output_dir: str | None,
    skip_barrel: bool,
    source_only_mode: bool,
    skip_format: bool,
    skip_failed_definitions: bool,
    verbose: bool,
) -> None:
    """Generate one module per StructureDefinition."""
    configure_logging(verbose)
    try:
        outcome = execute_generation_run(
            GenerationRequest(
                config_path=config_path,
                input_pattern=input_pattern,
                output_dir=output_dir,
                aggregate_exports=False if skip_barrel else None,
                source_only_mode=True if source_only_mode else None,
                format_output=False if skip_format else None,
                skip_failed_definitions=True if skip_failed_definitions else None,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc
    for skipped in outcome.skipped:
        click.echo(f"skipped {skipped.name}: {skipped.reason}", err=True)
    click.echo(str(outcome.output_dir))


def configure_logging(verbose: bool) -> None:
    """Route library log records to stdout; DEBUG when verbose, WARNING otherwise."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("fhir_typegen")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


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
