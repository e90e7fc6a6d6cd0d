"""SchemaScope CLI - Main entry point."""

from typing import Annotated

import typer

import schemascope
from schemascope.cli.context import CLIContext, get_log_level

# Create main Typer app
app = typer.Typer(
    name="schemascope",
    help="SchemaScope CLI - Entity graphs and resolved API schemas",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            envvar="SCHEMASCOPE_LOG_LEVEL",
            help="Logging level for diagnostics on stderr (default: WARNING)",
        ),
    ] = None,
) -> None:
    """Initialize CLI context with global options."""
    cli_ctx = CLIContext(json_output=json_output, log_level=get_log_level(log_level))
    cli_ctx.configure_logging()
    ctx.obj = cli_ctx


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"SchemaScope v{schemascope.__version__}")


# Register command groups
from schemascope.cli.commands import entities, openapi  # noqa: E402

app.add_typer(entities.app, name="entities")
app.add_typer(openapi.app, name="openapi")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
