"""Command-line interface for the Postman collection generator."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_CONTROLLER_BASE,
    DEFAULT_HTTP_METHOD_MARKER,
    DEFAULT_LOG_FILE,
    DEFAULT_OUTPUT,
    DEFAULT_ROUTE_MARKER,
    Settings,
)
from .discovery import scan_sources
from .errors import SchemaFetchError
from .generator import CollectionGenerator
from .validator import CollectionValidator, load_schema

app = typer.Typer(help="Generate Postman collections from controller classes.")

SourcesArgument = Annotated[
    list[Path],
    typer.Argument(help="Source roots to scan (directories or .py files)."),
]
ControllerBaseOption = Annotated[
    str,
    typer.Option(
        "--controller-base",
        envvar="POSTGEN_CONTROLLER_BASE",
        help="Qualified name of the controller base class.",
    ),
]
RouteMarkerOption = Annotated[
    str,
    typer.Option(
        "--route-marker",
        envvar="POSTGEN_ROUTE_MARKER",
        help="Qualified name of the route marker class.",
    ),
]
HttpMethodMarkerOption = Annotated[
    str,
    typer.Option(
        "--http-method-marker",
        envvar="POSTGEN_HTTP_METHOD_MARKER",
        help="Qualified name of the HTTP method marker base class.",
    ),
]
DefaultVerbOption = Annotated[
    str | None,
    typer.Option(
        "--default-verb",
        envvar="POSTGEN_DEFAULT_VERB",
        help="Verb for methods that only carry a route marker (they get none by default).",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log discovery details."),
]


def _version_callback(show_version: bool) -> None:
    if show_version:
        typer.echo(__version__)
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.callback()
def main(
    _: Annotated[
        bool,
        typer.Option(
            "--version",
            is_eager=True,
            help="Print the current postgen version and exit.",
            callback=_version_callback,
        ),
    ] = False,
) -> None:
    """Global CLI options."""


@app.command()
def generate(
    sources: SourcesArgument,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", envvar="POSTGEN_OUTPUT", help="Collection file to write."),
    ] = DEFAULT_OUTPUT,
    log_file: Annotated[
        Path,
        typer.Option("--log-file", envvar="POSTGEN_LOG_FILE", help="Discovery log to write."),
    ] = DEFAULT_LOG_FILE,
    controller_base: ControllerBaseOption = DEFAULT_CONTROLLER_BASE,
    route_marker: RouteMarkerOption = DEFAULT_ROUTE_MARKER,
    http_method_marker: HttpMethodMarkerOption = DEFAULT_HTTP_METHOD_MARKER,
    base_url: Annotated[
        str,
        typer.Option("--base-url", envvar="POSTGEN_BASE_URL", help="Origin for request URLs."),
    ] = DEFAULT_BASE_URL,
    default_verb: DefaultVerbOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Scan sources and write a Postman collection of their controllers."""
    _configure_logging(verbose)
    settings = Settings(
        controller_base=controller_base,
        route_marker=route_marker,
        http_method_marker=http_method_marker,
        base_url=base_url,
        output=output,
        log_file=log_file,
        default_verb=default_verb.upper() if default_verb else None,
    )

    typer.echo("Scanning sources...")
    result = scan_sources(sources, settings)

    try:
        result.diagnostics.write(settings.log_file)
    except OSError as exc:
        typer.secho(f"Could not write log {settings.log_file}: {exc}", fg=typer.colors.YELLOW, err=True)

    if result.application is None:
        typer.secho(
            "  Warning: Controller base or marker types not found. No collection written.",
            fg=typer.colors.YELLOW,
        )
        return

    application = result.application
    typer.echo(f"  Found {len(application.controllers)} controllers")
    typer.echo(f"  Found {application.endpoint_count} endpoints")

    generator = CollectionGenerator(settings.output, base_url=settings.base_url)
    try:
        output_file = generator.generate(application)
    except OSError as exc:
        typer.secho(f"Failed to write {settings.output}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    typer.secho(f"Generated {output_file}", fg=typer.colors.GREEN)


@app.command()
def endpoints(
    sources: SourcesArgument,
    controller_base: ControllerBaseOption = DEFAULT_CONTROLLER_BASE,
    route_marker: RouteMarkerOption = DEFAULT_ROUTE_MARKER,
    http_method_marker: HttpMethodMarkerOption = DEFAULT_HTTP_METHOD_MARKER,
    default_verb: DefaultVerbOption = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: table|json"),
    ] = "table",
    verbose: VerboseOption = False,
) -> None:
    """List discovered endpoints without writing any files."""
    _configure_logging(verbose)
    settings = Settings(
        controller_base=controller_base,
        route_marker=route_marker,
        http_method_marker=http_method_marker,
        default_verb=default_verb.upper() if default_verb else None,
    )
    result = scan_sources(sources, settings)
    if result.application is None:
        typer.secho("Controller base or marker types not found.", fg=typer.colors.YELLOW)
        return

    rows = [
        {
            "controller": controller.name,
            "method": method.name,
            "http_method": method.http_method,
            "route_prefix": controller.route_prefix,
            "route": method.route,
        }
        for controller, methods in result.application.controllers
        for method in methods
    ]

    if format == "json":
        typer.echo(json.dumps(rows, indent=2))
        return
    if format != "table":
        raise typer.BadParameter("format must be 'table' or 'json'")

    for row in rows:
        path = "/".join(part for part in (row["route_prefix"], row["route"]) if part)
        typer.echo(f"{row['http_method'] or '-':<8} /{path:<40} {row['controller']}.{row['method']}")
    typer.echo(f"{len(rows)} endpoints")


@app.command()
def validate(
    collection: Annotated[Path, typer.Argument(help="Collection file to validate.")],
    schema: Annotated[
        Path | None,
        typer.Option("--schema", help="JSON schema file (defaults to the bundled subset)."),
    ] = None,
    schema_url: Annotated[
        str | None,
        typer.Option("--schema-url", help="Download the schema from this URL instead."),
    ] = None,
) -> None:
    """Validate a collection file against the Postman collection schema."""
    if not collection.exists():
        typer.secho(f"Error: {collection} does not exist", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        if schema_url:
            validator = CollectionValidator.from_url(schema_url)
        elif schema is not None:
            validator = CollectionValidator(load_schema(schema))
        else:
            validator = CollectionValidator()
    except SchemaFetchError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    try:
        errors = validator.validate(collection)
    except json.JSONDecodeError as exc:
        typer.secho(f"Error: {collection} is not valid JSON: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if errors:
        for error in errors:
            typer.secho(f"  {error}", fg=typer.colors.RED)
        typer.secho(f"{collection} is invalid ({len(errors)} errors)", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.secho(f"{collection} is valid", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
