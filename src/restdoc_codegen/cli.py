"""CLI entry point for restdoc-codegen."""

import logging
from pathlib import Path

import click

from restdoc_codegen.config import GeneratorConfig, load_config
from restdoc_codegen.errors import RestDocError
from restdoc_codegen.generator.rest import RestRenderer
from restdoc_codegen.generator.types import TypesRenderer
from restdoc_codegen.parser.schema import ApiSchema, load_schema

doc_argument = click.argument("doc_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
output_option = click.option(
    "-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path),
    help="Output file for the generated code (default: stdout).",
)
config_option = click.option(
    "--config", "config_path", default=None, envvar="RESTDOC_CONFIG",
    type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML generator configuration.",
)
verbose_option = click.option("-v", "--verbose", is_flag=True, help="Log every extracted field.")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _load(doc_path: Path, config_path: Path | None, verbose: bool) -> tuple[ApiSchema, GeneratorConfig]:
    _setup_logging(verbose)
    try:
        config = load_config(config_path)
        return load_schema(doc_path, config), config
    except RestDocError as e:
        raise click.ClickException(str(e)) from e


def _write(code: str, output: Path | None) -> None:
    if output is None:
        click.echo(code, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(code, encoding="utf-8")
    click.echo(f"Generated code saved to {output}", err=True)


@click.group()
def main():
    """restdoc-codegen: generate Rust code from an HTML REST API reference."""
    pass


@main.command()
@doc_argument
@output_option
@config_option
@verbose_option
def types(doc_path: Path, output: Path | None, config_path: Path | None, verbose: bool):
    """Generate enum and struct definitions."""
    schema, _ = _load(doc_path, config_path, verbose)
    click.echo(f"Found {len(schema.enums)} enums and {len(schema.records)} structs.", err=True)
    try:
        code = TypesRenderer().render(schema)
    except RestDocError as e:
        raise click.ClickException(str(e)) from e
    _write(code, output)


@main.command()
@doc_argument
@output_option
@config_option
@verbose_option
def rest(doc_path: Path, output: Path | None, config_path: Path | None, verbose: bool):
    """Generate REST method callers."""
    schema, config = _load(doc_path, config_path, verbose)
    click.echo(f"Found {len(schema.operations)} operations.", err=True)
    try:
        code = RestRenderer(config).render(schema)
    except RestDocError as e:
        raise click.ClickException(str(e)) from e
    _write(code, output)
