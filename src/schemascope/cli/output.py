"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from schemascope.core.types import Entity, ParseFailure, ValidationReport
from schemascope.exceptions import SchemaScopeError

console = Console()


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_table(
        self,
        title: str,
        data: list[dict[str, Any]],
        columns: list[str],
    ) -> None:
        """Print data as Rich table or JSON array.

        Args:
            title: Table title
            data: List of row dictionaries
            columns: Column names to display
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            table = Table(title=title, show_header=True, header_style="bold magenta")
            for col in columns:
                table.add_column(col)
            for row in data:
                table.add_row(*[str(row.get(col, "")) for col in columns])
            console.print(table)

    def print_entity_info(self, entity: Entity) -> None:
        """Print an entity with its columns, indexes and relations.

        Args:
            entity: Entity to display
        """
        if self.json_mode:
            print(json.dumps(entity.model_dump(by_alias=True), default=str, indent=2))
            return

        console.print(f"\n[bold]Entity:[/bold] {entity.name}")
        console.print(f"Table: {entity.table_name}")
        if entity.description:
            console.print(f"Description: {entity.description}")

        if entity.columns:
            console.print(f"\n[bold]Columns ({len(entity.columns)}):[/bold]")
            columns_table = Table(show_header=True, header_style="bold cyan")
            for header in ("Name", "Type", "PK", "Nullable", "Unique", "Generated"):
                columns_table.add_column(header)
            for column in entity.columns:
                columns_table.add_row(
                    column.name,
                    column.type,
                    "✓" if column.primary_key else "",
                    "✓" if column.nullable else "",
                    "✓" if column.unique else "",
                    "✓" if column.generated else "",
                )
            console.print(columns_table)

        if entity.indexes:
            console.print(f"\n[bold]Indexes ({len(entity.indexes)}):[/bold]")
            index_table = Table(show_header=True, header_style="bold cyan")
            index_table.add_column("Name")
            index_table.add_column("Columns")
            index_table.add_column("Unique")
            for index in entity.indexes:
                index_table.add_row(
                    index.name or "", ", ".join(index.columns), "✓" if index.unique else ""
                )
            console.print(index_table)

        if entity.relations:
            console.print(f"\n[bold]Relations ({len(entity.relations)}):[/bold]")
            rel_table = Table(show_header=True, header_style="bold cyan")
            rel_table.add_column("Name")
            rel_table.add_column("Column")
            rel_table.add_column("To")
            rel_table.add_column("Type")
            for rel in entity.relations:
                rel_table.add_row(
                    rel.name or "",
                    rel.from_column,
                    f"{rel.to_entity}.{rel.to_column}",
                    rel.type,
                )
            console.print(rel_table)

    def print_failures(self, failures: list[ParseFailure]) -> None:
        """Print documents that failed to parse as warnings (terminal mode only)."""
        if self.json_mode:
            return
        for failure in failures:
            console.print(f"⚠ {failure.document}: {failure.reason}", style="yellow")

    def print_validation(self, report: ValidationReport) -> None:
        if self.json_mode:
            print(json.dumps(report.model_dump(by_alias=True), default=str, indent=2))
            return
        if report.valid:
            console.print(f"✓ Valid ({report.kind})", style="green")
            return
        console.print(f"✗ Invalid ({report.kind})", style="red")
        for issue in report.errors:
            console.print(f"  {issue.path}: {issue.message}", style="dim")

    def print_error(self, error: Exception) -> None:
        """Print error message.

        Args:
            error: Exception to display
        """
        if self.json_mode:
            if isinstance(error, SchemaScopeError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            if isinstance(error, SchemaScopeError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)

    def print_data(self, data: Any) -> None:
        """Print generic JSON-compatible data (schemas, examples, ...)."""
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            console.print_json(data=data, default=str)
