"""Command-line interface for featuregen."""

import re
import sys
from pathlib import Path

import click

from .config import load_settings
from .errors import FeatureGenError
from .feature.serializer import OutputFormat
from .log import setup_logging
from .output.formatter import (
    format_analysis,
    format_endpoint_listing,
    format_error,
    format_generation_result,
    format_validation_result,
)
from .session import SpecSession
from .validators.runner import validate_spec_file

TEXT_OR_JSON = click.Choice(["text", "json"])


def _fail(error: FeatureGenError) -> None:
    click.echo(format_error(error), err=True)
    sys.exit(2)


def _session(ctx: click.Context, spec_file: str) -> SpecSession:
    session = SpecSession(settings=ctx.obj["settings"])
    try:
        session.load(spec_file)
    except FeatureGenError as e:
        _fail(e)
    return session


def feature_filename(method: str, path: str, output_format: OutputFormat) -> str:
    """``GET /items/{id}`` in gherkin becomes ``get_items_id.feature``."""
    slug = re.sub(r"[^A-Za-z0-9]+", "_", path).strip("_").lower() or "root"
    return f"{method.lower()}_{slug}.{output_format.extension}"


@click.group()
@click.version_option(package_name="featuregen")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="FEATUREGEN_CONFIG",
    help="YAML settings file (defaults to FEATUREGEN_CONFIG env var)",
)
@click.option("-v", "--verbose", count=True, help="-v for INFO, -vv for DEBUG logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: int):
    """featuregen: generate Gherkin feature files from OpenAPI documents."""
    try:
        settings = load_settings(config_path)
    except FeatureGenError as e:
        _fail(e)

    if verbose >= 2:
        level = "DEBUG"
    elif verbose == 1:
        level = "INFO"
    else:
        level = settings.log_level
    setup_logging(level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("spec_file", type=click.Path(exists=True))
@click.option("--format", "output_format", type=TEXT_OR_JSON, default="text", help="Output format")
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
def validate(spec_file: str, output_format: str, strict: bool):
    """Check references in an OpenAPI document.

    SPEC_FILE is the path to a YAML or JSON document.

    Exit codes:
      0 - Validation passed
      1 - Validation failed (errors found)
      2 - File or document error
    """
    try:
        result = validate_spec_file(spec_file)
    except FeatureGenError as e:
        _fail(e)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command("list-endpoints")
@click.argument("spec_file", type=click.Path(exists=True))
@click.option("--method", help="Only endpoints with this HTTP method")
@click.option("--tag", help="Only endpoints carrying this tag")
@click.option("--path", "path_filter", help="Only endpoints whose path contains this text")
@click.option("--format", "output_format", type=TEXT_OR_JSON, default="text", help="Output format")
@click.pass_context
def list_endpoints_cmd(
    ctx: click.Context,
    spec_file: str,
    method: str | None,
    tag: str | None,
    path_filter: str | None,
    output_format: str,
):
    """List the endpoints of a document, grouped by tag."""
    session = _session(ctx, spec_file)
    listing = session.list_endpoints(method=method, tag=tag, path=path_filter)
    click.echo(format_endpoint_listing(listing, output_format))  # type: ignore


@main.command()
@click.argument("spec_file", type=click.Path(exists=True))
@click.argument("path")
@click.argument("method")
@click.option("--format", "output_format", type=TEXT_OR_JSON, default="text", help="Output format")
@click.pass_context
def analyze(ctx: click.Context, spec_file: str, path: str, method: str, output_format: str):
    """Show the resolved analysis of one endpoint.

    Exit codes:
      0 - Success
      2 - File, document or resolution error
    """
    session = _session(ctx, spec_file)
    try:
        analysis = session.analyze_endpoint(path, method)
    except FeatureGenError as e:
        _fail(e)
    click.echo(format_analysis(analysis, output_format))  # type: ignore


@main.command()
@click.argument("spec_file", type=click.Path(exists=True))
@click.argument("path")
@click.argument("method")
@click.option(
    "--type",
    "scenario_types",
    multiple=True,
    help="Scenario type to generate (repeatable; defaults to the configured types)",
)
@click.option("--format", "output_format", type=TEXT_OR_JSON, default="text", help="Output format")
@click.pass_context
def generate(
    ctx: click.Context,
    spec_file: str,
    path: str,
    method: str,
    scenario_types: tuple[str, ...],
    output_format: str,
):
    """Summarize the scenarios generated for one endpoint."""
    session = _session(ctx, spec_file)
    try:
        result = session.generate_scenarios(path, method, list(scenario_types) or None)
        identifier = session.spec.get_endpoint(path, method).identifier
    except FeatureGenError as e:
        _fail(e)
    click.echo(format_generation_result(result, identifier, output_format))  # type: ignore


@main.command()
@click.argument("spec_file", type=click.Path(exists=True))
@click.argument("path", required=False)
@click.argument("method", required=False)
@click.option("--all", "export_all", is_flag=True, default=False, help="Export every endpoint")
@click.option("--type", "scenario_types", multiple=True, help="Scenario type to include (repeatable)")
@click.option("--format", "output_format", default=None, help="gherkin, json or markdown")
@click.option("--output-dir", default=None, help="Write one file per endpoint instead of stdout")
@click.pass_context
def export(
    ctx: click.Context,
    spec_file: str,
    path: str | None,
    method: str | None,
    export_all: bool,
    scenario_types: tuple[str, ...],
    output_format: str | None,
    output_dir: str | None,
):
    """Render feature files for one endpoint, or every endpoint with --all.

    Exit codes:
      0 - Success
      2 - File, document, resolution or usage error
    """
    if not export_all and not (path and method):
        raise click.UsageError("Give PATH and METHOD, or --all")

    session = _session(ctx, spec_file)
    types = list(scenario_types) or None
    try:
        fmt = OutputFormat.parse(output_format or session.settings.output_format)
        if export_all:
            rendered = session.export_all(fmt, types)
        else:
            result = session.generate_scenarios(path, method, types)
            endpoint = session.spec.get_endpoint(path, method)
            rendered = {
                endpoint.identifier: session.export_feature(
                    result.scenarios, endpoint.path, endpoint.method, fmt
                )
            }
    except FeatureGenError as e:
        _fail(e)

    if output_dir is None:
        click.echo("\n".join(rendered.values()), nl=False)
        sys.exit(0)

    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    for identifier, text in rendered.items():
        endpoint_method, endpoint_path = identifier.split(" ", 1)
        file_path = out_path / feature_filename(endpoint_method, endpoint_path, fmt)
        file_path.write_text(text, encoding="utf-8")
        click.echo(f"Generated: {file_path}")

    click.echo(f"\nExported {len(rendered)} feature file(s)")
    sys.exit(0)


if __name__ == "__main__":
    main()
