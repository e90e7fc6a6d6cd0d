"""Entity descriptor commands."""

from pathlib import Path
from typing import Annotated

import typer

from schemascope.cli.context import CLIContext
from schemascope.cli.output import OutputFormatter
from schemascope.cli.parsing import read_descriptor, read_documents
from schemascope.core.types import GridLayout, ParseResult
from schemascope.entities.graph import project_graph
from schemascope.entities.parser import parse_entities
from schemascope.exceptions import SchemaScopeError
from schemascope.validation.validator import validate_entity

# Create entities subcommand group
app = typer.Typer(help="Parse entity descriptors into an entity graph")

FilesArgument = Annotated[
    list[Path],
    typer.Argument(help="Entity descriptor files (.json, .entity.js)"),
]


def _parse_files(files: list[Path]) -> ParseResult:
    documents, unreadable = read_documents(files)
    result = parse_entities(documents)
    if not unreadable:
        return result
    return result.model_copy(update={"failures": unreadable + result.failures})


@app.command("parse")
def entities_parse(
    ctx: typer.Context,
    files: FilesArgument,
    graph: Annotated[
        bool,
        typer.Option("--graph", "-g", help="Include the positioned node/edge graph"),
    ] = False,
    grid_columns: Annotated[
        int,
        typer.Option("--grid-columns", min=1, help="Nodes per grid row"),
    ] = 3,
) -> None:
    """Parse a batch of descriptors and analyze their relations.

    Documents that fail to parse are reported as warnings; the command only
    fails when no document could be parsed.

    Examples:

        schemascope entities parse User.json Order.entity.js

        schemascope --json entities parse entities/*.js --graph
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    result = _parse_files(files)

    if cli_ctx.json_output:
        output = result.model_dump(by_alias=True)
        if graph:
            entity_graph = project_graph(
                result.entities, result.relations, GridLayout(columns=grid_columns)
            )
            output["graph"] = entity_graph.model_dump(by_alias=True)
        formatter.print_data(output)
    else:
        formatter.print_table(
            f"Entities ({len(result.entities)} total)",
            [
                {
                    "Name": entity.name,
                    "Table": entity.table_name,
                    "Columns": len(entity.columns),
                    "Indexes": len(entity.indexes),
                    "Relations": len(entity.relations),
                }
                for entity in result.entities.values()
            ],
            ["Name", "Table", "Columns", "Indexes", "Relations"],
        )
        formatter.print_table(
            f"Relations ({len(result.relations)} total)",
            [
                {"Id": rel.id, "Type": rel.type, "Cardinality": rel.cardinality}
                for rel in result.relations
            ],
            ["Id", "Type", "Cardinality"],
        )
        formatter.print_failures(result.failures)

    if result.is_empty and result.has_failures:
        raise typer.Exit(code=1)


@app.command("describe")
def entities_describe(
    ctx: typer.Context,
    entity_name: Annotated[str, typer.Argument(help="Entity name")],
    files: FilesArgument,
) -> None:
    """Show one entity of a batch with its columns, indexes and relations."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    result = _parse_files(files)
    entity = result.entities.get(entity_name)
    if entity is None:
        available = ", ".join(result.entities) or "none"
        formatter.print_error(
            SchemaScopeError(
                f"Entity '{entity_name}' not found. Available entities: {available}",
                {"entity_name": entity_name, "available_entities": list(result.entities)},
            )
        )
        raise typer.Exit(code=1)

    formatter.print_entity_info(entity)
    formatter.print_failures(result.failures)


@app.command("validate")
def entities_validate(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Entity descriptor file")],
) -> None:
    """Validate a descriptor against the TypeORM or Sequelize schema."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        descriptor = read_descriptor(file)
    except (OSError, SchemaScopeError) as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)

    report = validate_entity(descriptor)
    formatter.print_validation(report)
    if not report.valid:
        raise typer.Exit(code=1)
