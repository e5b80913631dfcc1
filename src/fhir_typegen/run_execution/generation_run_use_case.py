"""Generation run use-case service."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path

from fhir_typegen.configuration import (
    Configuration,
    ConfigurationError,
    GenerationOptions,
    default_configuration,
    ensure_supported_options,
    load_configuration,
)
from fhir_typegen.definition_ingestion import (
    DefinitionError,
    SchemaDefinition,
    read_definition_documents,
)
from fhir_typegen.module_rendering import Module, render_barrel, render_module
from fhir_typegen.output_writing import (
    ModuleFormattingError,
    ModuleWriteError,
    format_module,
    write_modules,
)
from fhir_typegen.output_writing.module_formatting import FormatterRunner
from fhir_typegen.output_writing.module_writer import FileWriter
from fhir_typegen.type_graph import StructuralInputError, TypeGraphError, UnresolvableTypeError

from .run_contracts import GeneratedModules, GenerationRequest, RunOutcome, SkippedDefinition

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a generation run cannot be completed."""


def execute_generation_run(
    request: GenerationRequest,
    *,
    run_formatter: FormatterRunner | None = None,
    write_file: FileWriter | None = None,
) -> RunOutcome:
    """Read definitions, generate every module, format them, then write them all.

    Nothing is written unless every module was generated and formatted. Writes
    that already succeeded are kept if a later write fails.
    """
    try:
        configuration = _resolve_configuration(request)
        options = configuration.options
        ensure_supported_options(options)
        input_pattern, input_base = _resolve_input(request, configuration)
        output_dir = _resolve_output_dir(request, configuration)
        definitions = read_definition_documents(input_pattern, base_dir=input_base)
        logger.info("Generating %d schema definition(s) from %s", len(definitions), input_pattern)

        generated = generate_modules(definitions, options)
        modules = list(generated.modules)
        if options.format_output:
            modules = [format_module(module, run_formatter=run_formatter) for module in modules]
        written = write_modules(
            modules,
            output_dir,
            parallelism=options.write_parallelism,
            write_file=write_file,
        )
    except (
        ConfigurationError,
        DefinitionError,
        TypeGraphError,
        ModuleFormattingError,
        ModuleWriteError,
        OSError,
    ) as exc:
        raise RunExecutionError(str(exc)) from exc

    logger.info("Wrote %d module(s) to %s", len(written), output_dir)
    return RunOutcome(
        output_dir=output_dir.resolve(),
        written_paths=tuple(written),
        skipped=generated.skipped,
    )


def generate_modules(
    definitions: Sequence[SchemaDefinition], options: GenerationOptions
) -> GeneratedModules:
    """Render one module per definition plus the optional barrel, without side effects.

    Raises:
      StructuralInputError: On inconsistent paths or duplicate definition names.
      UnresolvableTypeError: On an unresolvable field unless skipping is enabled.
    """
    _ensure_unique_names(definitions)
    known_definitions = frozenset(definition.name for definition in definitions)
    modules: list[Module] = []
    generated: list[SchemaDefinition] = []
    skipped: list[SkippedDefinition] = []
    for definition in definitions:
        try:
            modules.append(
                render_module(definition, options, known_definitions=known_definitions)
            )
        except UnresolvableTypeError as exc:
            if not options.skip_failed_definitions:
                raise
            logger.warning("Skipping %s: %s", definition.name, exc)
            skipped.append(SkippedDefinition(name=definition.name, reason=str(exc)))
            continue
        generated.append(definition)

    if options.aggregate_exports and generated:
        modules.append(render_barrel(generated))
    return GeneratedModules(modules=tuple(modules), skipped=tuple(skipped))


def _ensure_unique_names(definitions: Sequence[SchemaDefinition]) -> None:
    seen: set[str] = set()
    for definition in definitions:
        if definition.name in seen:
            raise StructuralInputError(
                "schema definition name is supplied more than once",
                definition_name=definition.name,
            )
        seen.add(definition.name)


def _resolve_configuration(request: GenerationRequest) -> Configuration:
    configuration = (
        load_configuration(request.config_path)
        if request.config_path
        else default_configuration()
    )
    overrides = {
        key: value
        for key, value in (
            ("aggregate_exports", request.aggregate_exports),
            ("source_only_mode", request.source_only_mode),
            ("format_output", request.format_output),
            ("skip_failed_definitions", request.skip_failed_definitions),
            ("use_full_schema_history", request.use_full_schema_history),
        )
        if value is not None
    }
    if not overrides:
        return configuration
    return dataclasses.replace(
        configuration, options=dataclasses.replace(configuration.options, **overrides)
    )


def _resolve_input(request: GenerationRequest, configuration: Configuration) -> tuple[str, Path]:
    if request.input_pattern:
        return request.input_pattern, Path.cwd()
    if configuration.input_pattern:
        return configuration.input_pattern, configuration.base_dir
    raise ConfigurationError("An input pattern is required (--input or 'input' in the config).")


def _resolve_output_dir(request: GenerationRequest, configuration: Configuration) -> Path:
    if request.output_dir:
        return Path(request.output_dir)
    if configuration.output_dir:
        return configuration.output_dir
    raise ConfigurationError("An output directory is required (--output or 'output_dir').")
