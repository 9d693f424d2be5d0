import json
import posixpath
import sys
from pathlib import Path
from typing import Any, NoReturn

import rich_click as click
import yaml
from ariadne.exceptions import GraphQLFileSyntaxError
from graphql import GraphQLError
from pydantic import ValidationError
from rich.traceback import install

from gqlmodules import __version__, log
from gqlmodules.config import ModulesConfig, load_modules_config
from gqlmodules.tools.string import indent, with_quotes
from gqlmodules.utils.extraction import get_all_type_names
from gqlmodules.utils.modules import ModuleReport, ModuleResolutionError, build_module_reports
from gqlmodules.utils.schema_loader import load_document, load_sources, resolve_graphql_files
from gqlmodules.utils.type_usage import collect_used_types

SCHEMA_LOAD_ERRORS = (OSError, GraphQLError, GraphQLFileSyntaxError)


class PathResolverOption(click.Option):
    def process_value(self, ctx: click.Context, value: Any) -> list[Path] | None:
        value = super().process_value(ctx, value)
        if not value:
            return None
        return resolve_graphql_files(list(set(value)))


def schema_option(required: bool = True) -> Any:
    return click.option(
        "--schema",
        "-s",
        "schemas",
        type=click.Path(exists=True, path_type=Path),
        cls=PathResolverOption,
        required=required,
        multiple=True,
        help="The GraphQL schema file or directory containing schema files. Can be specified multiple times.",
    )


optional_output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    required=False,
    help="Write the result as JSON to this file instead of printing it",
)


quoted_option = click.option(
    "--quoted",
    is_flag=True,
    default=False,
    help="Print type names wrapped in single quotes",
)


def write_json(output: Path, data: Any) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    log.success(f"Result written to {output}")


def exit_with_error(message: str, error: Exception) -> NoReturn:
    log.error(f"{message}: {error}")
    sys.exit(1)


@click.group(context_settings={"auto_envvar_prefix": "GQLMODULES"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    if log_file:
        log.add_file_handler(log_file)

    log_level = log_level.upper()
    log.setLevel(log_level)
    if log_level == "DEBUG":
        _ = install(show_locals=True)


@cli.command(name="used-types")
@schema_option()
@optional_output_option
@quoted_option
def used_types(schemas: list[Path], output: Path | None, quoted: bool) -> None:
    """List every non built-in type referenced by the schema, in order of first appearance."""
    try:
        document = load_document(schemas)
    except SCHEMA_LOAD_ERRORS as e:
        exit_with_error("Failed to load schema", e)

    type_names = collect_used_types(document)

    if output:
        write_json(output, type_names)
        return

    for type_name in type_names:
        click.echo(with_quotes(type_name) if quoted else type_name)


@cli.command(name="unique-types")
@schema_option()
def unique_types(schemas: list[Path]) -> None:
    """List the types defined or extended across all schema files, each once."""
    try:
        document = load_document(schemas)
    except SCHEMA_LOAD_ERRORS as e:
        exit_with_error("Failed to load schema", e)

    type_names = get_all_type_names(document)

    log.rule("Defined types")
    for type_name in type_names:
        log.list_item(type_name)
    log.key_value("Total", len(type_names))


def _print_module_report(report: ModuleReport, base_dir: str, quoted: bool) -> None:
    file_indent = indent(2)
    type_indent = indent(4)

    log.rule(report.name)
    log.print("files:")
    for file_name in report.files:
        log.list_item(posixpath.relpath(file_name, base_dir), prefix=file_indent("-"))
    log.print("used types:")
    for type_name in report.used_types:
        log.list_item(with_quotes(type_name) if quoted else type_name, prefix=type_indent("-"))


@cli.command()
@schema_option(required=False)
@click.option(
    "--base-dir",
    "-b",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory containing one sub-directory per module",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file containing the modules configuration",
)
@optional_output_option
@quoted_option
def modules(
    schemas: list[Path] | None,
    base_dir: Path | None,
    config_path: Path | None,
    output: Path | None,
    quoted: bool,
) -> None:
    """Group schema files into modules by directory and list the types each module uses."""
    try:
        config = load_modules_config(config_path) or ModulesConfig()
    except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
        exit_with_error("Invalid modules config", e)

    schema_files = resolve_graphql_files([*(schemas or []), *config.schemas])
    base_dir = base_dir or config.base_dir
    quoted = quoted or config.quoted

    if base_dir is None:
        raise click.UsageError("A base directory is required, pass --base-dir or set 'baseDir' in the config file.")
    if not schema_files:
        raise click.UsageError("No schema files given, pass --schema or set 'schemas' in the config file.")

    base_path = base_dir.resolve().as_posix()

    try:
        sources = load_sources([path.resolve() for path in schema_files])
        reports = build_module_reports(sources, base_path)
    except (*SCHEMA_LOAD_ERRORS, ModuleResolutionError) as e:
        exit_with_error("Failed to group schema into modules", e)

    log.info(f"Found {len(reports)} module(s) under {base_dir}")

    if output:
        write_json(output, {name: report.to_dict() for name, report in reports.items()})
        return

    for report in reports.values():
        _print_module_report(report, base_path, quoted)


if __name__ == "__main__":
    cli()
