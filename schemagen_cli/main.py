"""schemagen CLI - Main entry point."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from .commands import generate, inspect
from .config import settings

app = typer.Typer(
    name="schemagen",
    help="Generate JSON manifests, GraphQL schemas and TypeScript declarations from a database schema",
    add_completion=False,
)

# Add subcommands
app.command("generate")(generate.generate)
app.command("tables")(generate.tables)
app.command("inspect")(inspect.inspect)

console = Console()


def setup_logging(level: str):
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Output directory: {settings.output_dir}")
    console.print(f"  Snapshot dialect: {settings.dialect or 'Not set'}")
    console.print(f"  Indentation: {settings.indentation} {'space(s)' if settings.use_spaces else 'tab(s)'}")
    console.print(f"  camelCase names: {'Yes' if settings.camel_case else 'No'}")
    console.print(f"  camelCase file names: {'Yes' if settings.camel_case_file_names else 'No'}")
    console.print(f"  TypeScript output: {'Yes' if settings.typescript else 'No'}")
    console.print(f"  Resolver find method: {settings.resolver_find_method}")
    console.print(f"  Log level: {settings.log_level}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    schemagen - Render database schemas into JSON, GraphQL and TypeScript artifacts.

    Examples:

        schemagen tables app.db

        schemagen inspect app.db --tables users

        schemagen generate app.db -o ./out --camel-case

        schemagen generate snapshot.json --dialect postgres --target graphql
    """
    setup_logging("DEBUG" if verbose else settings.log_level)


if __name__ == "__main__":
    app()
