"""CLI entry point for arm-type-catalog."""

import logging
from pathlib import Path

import click

from arm_type_catalog.generator.catalog import build_catalog, render_catalog
from arm_type_catalog.parser.base import OperationDescriptor
from arm_type_catalog.parser.detect import LoaderError, collect_documents
from arm_type_catalog.parser.swagger import parse_documents
from arm_type_catalog.processor.providers import (
    collect_api_versions,
    generate_all_versions,
    generate_definitions,
)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _load_operations(paths: tuple[Path, ...]) -> list[OperationDescriptor]:
    """Load every API description found under the given files/directories."""
    documents = collect_documents(list(paths))
    if not documents:
        raise click.ClickException("No Swagger/OpenAPI documents found.")
    try:
        return parse_documents(documents)
    except LoaderError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug).")
def main(verbose: int):
    """ARM Type Catalog: list resource types and list actions from REST API descriptions."""
    logging.basicConfig(
        level=LOG_LEVELS.get(verbose, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("--api-version", envvar="ARM_TYPE_CATALOG_API_VERSION", default=None, help="Only process this API version (default: every version found).")
@click.option("--format", "fmt", default="yaml", type=click.Choice(["yaml", "json"]), help="Output format.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Write the catalogue to this file instead of stdout.")
@click.option("--workers", default=1, type=click.IntRange(min=1), help="Parse operations in this many threads.")
def providers(doc_paths: tuple[Path, ...], api_version: str | None, fmt: str, output: Path | None, workers: int):
    """Build the provider catalogue from API description files or directories."""
    operations = _load_operations(doc_paths)
    click.echo(f"Loaded {len(operations)} operations.", err=True)

    if api_version:
        passes = {api_version: generate_definitions(operations, api_version, max_workers=workers)}
    else:
        passes = generate_all_versions(operations, max_workers=workers)

    text = render_catalog(build_catalog(passes), fmt)
    if output is None:
        click.echo(text, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(f"Catalogue saved to {output}", err=True)


@main.command("api-versions")
@click.argument("doc_paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
def api_versions(doc_paths: tuple[Path, ...]):
    """List the API versions declared by the given documents."""
    for version in collect_api_versions(_load_operations(doc_paths)):
        click.echo(version)
