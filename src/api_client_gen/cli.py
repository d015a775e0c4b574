"""CLI entry point for api-client-gen."""

import logging
from pathlib import Path

import click

from api_client_gen.config import GeneratorConfig, find_config_file, load_config
from api_client_gen.generator.code import CodeGenerator
from api_client_gen.generator.errors import GenerationError, InvalidOutputError
from api_client_gen.generator.parts import build_parts_enum
from api_client_gen.parser.base import ApiSpec, SpecLoadError
from api_client_gen.parser.detect import detect_format
from api_client_gen.parser.openapi import parse_openapi
from api_client_gen.parser.rest_spec import parse_rest_spec

FORMATS = ["auto", "rest-spec", "openapi"]


def _parse_doc(doc_path: Path, fmt: str) -> ApiSpec:
    """Parse API description based on format."""
    try:
        if fmt == "auto":
            fmt = detect_format(doc_path)

        if fmt == "openapi":
            return parse_openapi(doc_path)
        return parse_rest_spec(doc_path)
    except SpecLoadError as e:
        raise click.ClickException(str(e)) from e


def _load_config(config_path: Path | None, doc_path: Path) -> GeneratorConfig:
    if config_path is None:
        start = doc_path if doc_path.is_dir() else doc_path.parent
        config_path = find_config_file(start)
        if config_path is None:
            return GeneratorConfig()
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.group()
def main():
    """API Client Gen: generate typed REST API clients from API descriptions."""
    pass


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for the generated package.")
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Document format.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(path_type=Path), help="Path to configuration file.")
@click.option("--endpoint", "patterns", multiple=True, help="Only generate endpoints matching this glob (repeatable).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def generate(doc_path: Path, output: Path, fmt: str, config_path: Path | None, patterns: tuple[str, ...], verbose: bool):
    """Generate a client package from an API description."""
    _setup_logging(verbose)
    config = _load_config(config_path, doc_path)
    if patterns:
        config = config.model_copy(update={"include": list(patterns)})

    click.echo(f"Parsing {doc_path} (format: {fmt})...")
    spec = _parse_doc(doc_path, fmt)
    click.echo(f"Found {len(spec.endpoints)} endpoints.")

    try:
        result = CodeGenerator(config).generate(spec)
    except InvalidOutputError as e:
        raise click.ClickException(str(e)) from e
    for failure in result.failures:
        click.echo(f"  Skipped {failure.endpoint}: {failure.message}", err=True)
    if not result.generated:
        raise click.ClickException("No endpoints could be generated.")

    output.mkdir(parents=True, exist_ok=True)
    for filename, content in result.files.items():
        file_path = output / filename
        file_path.write_text(content, encoding="utf-8")
        click.echo(f"  Created {file_path}")

    click.echo(
        f"Generated {len(result.generated)} endpoints ({len(result.failures)} skipped) "
        f"into {len(result.files)} files in {output}"
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "fmt", default="auto", type=click.Choice(FORMATS), help="Document format.")
@click.option("--endpoint", "patterns", multiple=True, help="Only show endpoints matching this glob (repeatable).")
def inspect(doc_path: Path, fmt: str, patterns: tuple[str, ...]):
    """Show the parts variants each endpoint would get."""
    spec = _parse_doc(doc_path, fmt)
    config = GeneratorConfig(include=list(patterns))
    for endpoint in CodeGenerator(config).select_endpoints(spec.endpoints):
        try:
            parts = build_parts_enum(endpoint, spec.common_parts)
        except GenerationError as e:
            click.echo(f"{endpoint.name}: error: {e}")
            continue
        click.echo(f"{endpoint.name} -> {parts.type_name}")
        for variant in parts.variants:
            signature = ", ".join(variant.signature) or "-"
            click.echo(f"  {variant.name:<24} ({signature})  {variant.template}")
