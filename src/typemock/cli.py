"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from typemock.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from typemock.prompt_rendering import GenerationSettings, build_generation_request
from typemock.schema_extraction import (
    DeclarationNotFound,
    InterfaceSchema,
    extract_all_interface_schemas,
    extract_interface_schema,
    summarize_declarations,
)
from typemock.type_model import SourceLoadError

_DEFAULT_INDENT = 2


class CliError(Exception):
    """Custom CLI error."""


@dataclass(frozen=True)
class _CommandInputs:
    source_path: Path
    indent: int
    generation: GenerationSettings


_config_option = click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file",
)
_source_option = click.option(
    "--source",
    "source_path",
    required=False,
    type=click.Path(path_type=str),
    help="Declaration source file; overrides source.path from --config",
)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="typemock-schema")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log extraction details.")
def cli(verbose: bool) -> None:
    """Declaration schema extraction utility."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="list")
@_config_option
@_source_option
def list_declarations(config_path: str | None, source_path: str | None) -> None:
    """List the structural declarations of the source file."""
    inputs = _resolve_inputs(config_path, source_path)
    try:
        schemas = extract_all_interface_schemas(inputs.source_path)
    except SourceLoadError as exc:
        raise CliError(str(exc)) from exc
    payload = {
        "file": str(inputs.source_path),
        "interfaces": [summary.to_payload() for summary in summarize_declarations(schemas)],
    }
    _echo_json(payload, inputs.indent)


@cli.command(name="extract")
@click.argument("declaration_name")
@_config_option
@_source_option
def extract(declaration_name: str, config_path: str | None, source_path: str | None) -> None:
    """Print the schema of one declaration as JSON."""
    inputs = _resolve_inputs(config_path, source_path)
    schema = _extract_schema(inputs.source_path, declaration_name)
    _echo_json(schema.to_payload(), inputs.indent)


@cli.command(name="prompt")
@click.argument("declaration_name")
@_config_option
@_source_option
@click.option(
    "--count",
    default=1,
    show_default=True,
    type=click.IntRange(min=1),
    help="Number of distinct sample objects to request",
)
def prompt(
    declaration_name: str, config_path: str | None, source_path: str | None, count: int
) -> None:
    """Print the sample-data generation request for one declaration."""
    inputs = _resolve_inputs(config_path, source_path)
    schema = _extract_schema(inputs.source_path, declaration_name)
    request = build_generation_request(schema, inputs.generation, count=count)
    _echo_json(request.to_chat_payload(), inputs.indent)


def _resolve_inputs(config_path: str | None, source_path: str | None) -> _CommandInputs:
    if config_path is None:
        if source_path is None:
            raise CliError("Provide --config or --source.")
        return _CommandInputs(
            source_path=Path(source_path).resolve(),
            indent=_DEFAULT_INDENT,
            generation=GenerationSettings(),
        )
    try:
        configuration = load_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    resolved_source = (
        Path(source_path).resolve() if source_path is not None else configuration.source.path
    )
    return _CommandInputs(
        source_path=resolved_source,
        indent=configuration.output.indent,
        generation=configuration.generation,
    )


def _extract_schema(source_path: Path, declaration_name: str) -> InterfaceSchema:
    try:
        extracted = extract_interface_schema(source_path, declaration_name)
    except SourceLoadError as exc:
        raise CliError(str(exc)) from exc
    if isinstance(extracted, DeclarationNotFound):
        available = ", ".join(extracted.available_names) or "none"
        raise CliError(f"{extracted.message}\nAvailable declarations: {available}")
    return extracted


def _echo_json(payload: Any, indent: int) -> None:
    click.echo(json.dumps(payload, indent=indent, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="typemock", standalone_mode=False)
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
