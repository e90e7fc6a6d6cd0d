"""OpenAPI/Swagger document commands."""

from pathlib import Path
from typing import Annotated

import typer

from schemascope.cli.context import CLIContext
from schemascope.cli.output import OutputFormatter
from schemascope.cli.parsing import read_api_document
from schemascope.exceptions import SchemaScopeError
from schemascope.openapi.resolver import SchemaResolver
from schemascope.openapi.spec import (
    get_domain_models,
    get_referenced_schemas,
    group_by_tags,
)
from schemascope.validation.cache import SchemaCache, directory_loader
from schemascope.validation.validator import validate_spec

# Create openapi subcommand group
app = typer.Typer(help="Inspect and resolve OpenAPI/Swagger documents")

SpecArgument = Annotated[Path, typer.Argument(help="API document (.json, .yaml, .yml)")]


def _load(spec: Path, formatter: OutputFormatter) -> dict:
    try:
        return read_api_document(spec)
    except (OSError, ValueError, SchemaScopeError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


@app.command("schemas")
def openapi_schemas(
    ctx: typer.Context,
    spec: SpecArgument,
    domain_only: Annotated[
        bool,
        typer.Option("--domain-only", help="Hide request/response wrapper schemas"),
    ] = False,
    referenced_only: Annotated[
        bool,
        typer.Option("--referenced-only", help="Only schemas referenced by other schemas"),
    ] = False,
) -> None:
    """List the schema definitions of an API document."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    resolver = SchemaResolver(_load(spec, formatter))
    schemas = resolver.schemas
    if domain_only:
        schemas = get_domain_models(schemas)
    if referenced_only:
        schemas = get_referenced_schemas(schemas)

    if cli_ctx.json_output:
        formatter.print_data(list(schemas))
    else:
        formatter.print_table(
            f"Schemas ({len(schemas)} total)",
            [
                {
                    "Name": name,
                    "Type": schema.get("type", "") if isinstance(schema, dict) else "",
                    "Properties": len(schema.get("properties") or {})
                    if isinstance(schema, dict)
                    else 0,
                }
                for name, schema in schemas.items()
            ],
            ["Name", "Type", "Properties"],
        )


@app.command("resolve")
def openapi_resolve(
    ctx: typer.Context,
    spec: SpecArgument,
    name: Annotated[str, typer.Argument(help="Schema name (e.g., Pet)")],
    example: Annotated[
        bool,
        typer.Option("--example", "-x", help="Print an example value instead of the schema"),
    ] = False,
) -> None:
    """Resolve a named schema with every reference inlined.

    Examples:

        schemascope openapi resolve petstore.yaml Pet

        schemascope openapi resolve petstore.yaml Pet --example
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    resolver = SchemaResolver(_load(spec, formatter))
    if name not in resolver.schemas:
        available = ", ".join(resolver.schemas) or "none"
        formatter.print_error(
            SchemaScopeError(
                f"Schema '{name}' not found. Available schemas: {available}",
                {"schema_name": name, "available_schemas": list(resolver.schemas)},
            )
        )
        raise typer.Exit(code=1)

    resolved = resolver.resolve_named(name)
    formatter.print_data(resolver.example(resolved) if example else resolved)


@app.command("endpoints")
def openapi_endpoints(ctx: typer.Context, spec: SpecArgument) -> None:
    """List operations grouped by tag."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    document = _load(spec, formatter)
    grouped = group_by_tags(document.get("paths") or {})

    if cli_ctx.json_output:
        formatter.print_data(
            {
                tag: [endpoint.model_dump(by_alias=True) for endpoint in endpoints]
                for tag, endpoints in grouped.items()
            }
        )
        return

    rows = [
        {
            "Tag": tag,
            "Method": endpoint.method,
            "Path": endpoint.path,
            "Summary": endpoint.summary or "",
            "Deprecated": "✓" if endpoint.deprecated else "",
        }
        for tag, endpoints in grouped.items()
        for endpoint in endpoints
    ]
    formatter.print_table(
        f"Endpoints ({len(rows)} total)",
        rows,
        ["Tag", "Method", "Path", "Summary", "Deprecated"],
    )


@app.command("validate")
def openapi_validate(
    ctx: typer.Context,
    spec: SpecArgument,
    schemas_dir: Annotated[
        Path,
        typer.Option(
            "--schemas-dir",
            envvar="SCHEMASCOPE_SCHEMAS_DIR",
            help="Directory holding openapi-<version>.json / swagger-2.0.json meta-schemas",
        ),
    ],
) -> None:
    """Validate an API document against the meta-schema for its version."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    cache = SchemaCache(loader=directory_loader(schemas_dir))
    report = validate_spec(_load(spec, formatter), cache)
    formatter.print_validation(report)
    if not report.valid:
        raise typer.Exit(code=1)
