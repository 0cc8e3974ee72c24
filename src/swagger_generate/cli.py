"""CLI entry point for swagger-generate."""

import logging
from pathlib import Path

import click

from swagger_generate.config import Settings, load_settings
from swagger_generate.exceptions import SwaggerGenerateError
from swagger_generate.generator.document import generate_document
from swagger_generate.manifest.loader import Manifest, ManifestResolver, filter_api_routes, load_manifest
from swagger_generate.models import RouteDescriptor
from swagger_generate.writer import write_outputs


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load(manifest_path: Path, **overrides) -> tuple[Manifest, Settings, list[RouteDescriptor]]:
    """Load manifest + settings and apply the API route filter."""
    try:
        manifest = load_manifest(manifest_path)
        settings = load_settings(manifest.app, **overrides)
    except (SwaggerGenerateError, ValueError) as e:
        raise click.ClickException(str(e)) from e
    routes = filter_api_routes(manifest.routes, settings)
    return manifest, settings, routes


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """swagger-generate — build OpenAPI docs from a route manifest."""
    _setup_logging(verbose)


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(file_okay=False, path_type=Path), help="Output directory for the YAML document and viewer page.")
@click.option("--base-url", default=None, help="Server URL (defaults to manifest app.url or $APP_URL).")
@click.option("--title", default=None, help="Document title.")
@click.option("--api-version", default=None, help="Document version.")
@click.option("--no-html", is_flag=True, help="Skip the Swagger UI viewer page.")
def generate(manifest_path: Path, output: Path, base_url: str | None, title: str | None, api_version: str | None, no_html: bool):
    """Generate api-docs.yaml (and docs.html) from a route manifest."""
    manifest, settings, routes = _load(manifest_path, server_url=base_url, title=title, version=api_version)
    click.echo(f"Documenting {len(routes)} of {len(manifest.routes)} routes...")

    resolver = ManifestResolver(manifest, manifest_path.parent)
    try:
        document = generate_document(routes, resolver, settings, manifest.response_patterns())
        written = write_outputs(
            document,
            output,
            yaml_filename=settings.yaml_filename,
            html_filename=None if no_html else settings.html_filename,
        )
    except SwaggerGenerateError as e:
        raise click.ClickException(str(e)) from e

    for path in written:
        click.echo(f"  Created {path}")
    click.echo(f"Swagger YAML generated: {settings.docs_url}")


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def routes(manifest_path: Path):
    """List the routes that will be documented."""
    _, _, api_routes = _load(manifest_path)
    for route in api_routes:
        methods = "|".join(m.upper() for m in route.methods if m.upper() != "HEAD")
        click.echo(f"{methods:<12} {route.path}  {route.action}")
    click.echo(f"{len(api_routes)} routes.")
