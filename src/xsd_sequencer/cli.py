"""Command-line interface for xsd-sequencer.

This module provides a CLI for generating field-ordering files from XSD
schemas, displaying resolved orders, and checking order coverage.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table as RichTable
from typing_extensions import Annotated

from xsd_sequencer.config import Config
from xsd_sequencer.errors import MalformedInputError, SchemaOrderError
from xsd_sequencer.generator.go import generate_go_ordering
from xsd_sequencer.generator.json_map import generate_json_ordering
from xsd_sequencer.schema.xsd import XsdTokenSource
from xsd_sequencer.schema_tree.nodes import OrderMap
from xsd_sequencer.schema_tree.resolver import CyclePolicy, OrderResolver
from xsd_sequencer.validator.coverage import OrderCoverageValidator

app = typer.Typer(
    name="xsd-sequencer",
    help="Extract the declared field order of XSD sequences and generate ordering maps",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

OUTPUT_FORMATS = ("go", "json")


def get_config(
    schema_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    output_file: Optional[str] = None,
    cycle_policy: Optional[CyclePolicy] = None,
) -> Config:
    """Get configuration from environment or CLI options.

    Args:
        schema_dir: Override the schema directory from environment
        output_dir: Override the output directory from environment
        output_file: Override the generated file name from environment
        cycle_policy: Override the cycle policy from environment

    Returns:
        Config instance
    """
    config = Config()

    # Override config values if provided via CLI
    if schema_dir:
        config.schema_dir = schema_dir
    if output_dir:
        config.output_dir = output_dir
    if output_file:
        config.output_file = output_file
    if cycle_policy:
        config.cycle_policy = cycle_policy

    return config


def configure_logging(level: str) -> None:
    """Route library logging through rich at the given level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def fail(error: Exception) -> None:
    """Print an error and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    raise typer.Exit(1)


def render_order_map(order_map: OrderMap, schema_file: Path, output_format: str) -> str:
    """Render a resolved order map in the requested output format.

    Raises:
        ValueError: If the format is not one of OUTPUT_FORMATS
    """
    if output_format == "go":
        return generate_go_ordering(order_map, schema_file)
    if output_format == "json":
        return generate_json_ordering(order_map)
    raise ValueError(f"Unknown output format: {output_format}. Expected one of: go, json")


def format_order_lines(order_map: OrderMap) -> list[str]:
    """Format each key and its children as one ``key: a, b`` line."""
    return [f"{key or '<root>'}: {', '.join(children)}" for key, children in order_map.items()]


@app.callback()
def main_callback(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log walk and resolution details")
    ] = False,
) -> None:
    """Extract the declared field order of XSD sequences."""
    try:
        log_level = "DEBUG" if verbose else Config().log_level
    except ValidationError as e:
        fail(e)
    configure_logging(log_level)


@app.command()
def generate(
    schema_dir: Annotated[
        Optional[Path], typer.Argument(help="Directory with .xsd files (default from config)")
    ] = None,
    output_dir: Annotated[
        Optional[Path], typer.Option("--output-dir", "-o", help="Root directory for generated files")
    ] = None,
    output_file: Annotated[
        Optional[str], typer.Option("--output-file", help="File name written for each schema")
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: go or json")
    ] = "go",
    cycle_policy: Annotated[
        Optional[CyclePolicy], typer.Option("--cycle-policy", help="fail or reuse on cyclic types")
    ] = None,
) -> None:
    """Generate an ordering file for every schema in a directory.

    Each schema FOO.xsd produces <output-dir>/foo/<output-file>. A schema that
    cannot be walked completely aborts the run, since a partial ordering would
    be silently wrong.

    Example:
        xsd-sequencer generate schemas

        xsd-sequencer generate schemas --format json --output-file ordering.json
    """
    config = get_config(schema_dir, output_dir, output_file, cycle_policy)

    try:
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown output format: {output_format}. Expected one of: go, json")

        schema_files = config.iter_schema_files()
        if not schema_files:
            console.print(f"[yellow]No .xsd files found in {config.schema_dir}[/yellow]")
            return

        for schema_file in schema_files:
            console.print(f"[blue]Resolving field order for {schema_file}...[/blue]")
            order_map = XsdTokenSource(schema_file).resolve_order(
                cycle_policy=config.cycle_policy,
                ignored_names=config.ignored_node_names(),
            )

            output_path = config.output_path_for(schema_file)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(
                render_order_map(order_map, schema_file, output_format), encoding="utf-8"
            )
            console.print(f"[green]✓[/green] {len(order_map)} paths written to {output_path}")

    except (SchemaOrderError, OSError, ValueError) as e:
        fail(e)


@app.command(name="show-order")
def show_order(
    schema_file: Annotated[Path, typer.Argument(help="The .xsd file to resolve")],
    key: Annotated[
        Optional[str], typer.Option("--key", "-k", help="Only show this path or type name")
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path (stdout if not specified)"),
    ] = None,
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: table or text")
    ] = "table",
    cycle_policy: Annotated[
        Optional[CyclePolicy], typer.Option("--cycle-policy", help="fail or reuse on cyclic types")
    ] = None,
) -> None:
    """Display the resolved child order of every path in a schema.

    Example:
        xsd-sequencer show-order schemas/FA_2.xsd

        xsd-sequencer show-order schemas/FA_2.xsd --key TAdres --format text
    """
    config = get_config(cycle_policy=cycle_policy)

    try:
        order_map = XsdTokenSource(schema_file).resolve_order(
            cycle_policy=config.cycle_policy,
            ignored_names=config.ignored_node_names(),
        )

        if key is not None:
            if key not in order_map:
                raise ValueError(f"No resolved order for {key!r} in {schema_file}")
            order_map = {key: order_map[key]}

        if format == "table" and not output:
            rich_table = RichTable(title=f"Field order: {schema_file.name}")
            rich_table.add_column("Path", style="cyan")
            rich_table.add_column("Children", style="magenta")
            for path, children in order_map.items():
                rich_table.add_row(path or "<root>", ", ".join(children))
            console.print(rich_table)
            return

        # File output always uses the text representation
        text_output = "\n".join(format_order_lines(order_map))
        if output:
            output.write_text(text_output + "\n", encoding="utf-8")
            console.print(f"[green]✓[/green] Field order written to {output}")
        else:
            console.print(escape(text_output), soft_wrap=True)

    except (SchemaOrderError, OSError, ValueError) as e:
        fail(e)


@app.command()
def check(
    schema_file: Annotated[Path, typer.Argument(help="The .xsd file to check")],
    cycle_policy: Annotated[
        Optional[CyclePolicy], typer.Option("--cycle-policy", help="fail or reuse on cyclic types")
    ] = None,
) -> None:
    """Report order coverage of a schema's declared types.

    Lists complex types without a sequence and typed fields whose type has no
    ordered children. Exits with status 1 only if the schema could not be
    walked or resolved.

    Example:
        xsd-sequencer check schemas/FA_2.xsd
    """
    config = get_config(cycle_policy=cycle_policy)
    source = XsdTokenSource(schema_file)

    try:
        index = source.build_index(ignored_names=config.ignored_node_names())
    except MalformedInputError as e:
        if e.partial is not None:
            err_console.print(
                f"[yellow]Walk stopped after {len(e.partial.sequence_order)} sequence scopes[/yellow]"
            )
        fail(e)
    except OSError as e:
        fail(e)

    try:
        order_map = OrderResolver(index, config.cycle_policy).resolve()
    except SchemaOrderError as e:
        fail(e)

    report = OrderCoverageValidator(index, order_map).validate()

    console.print(f"Coverage Report for {schema_file}")
    console.print("=" * 80)
    console.print(f"Complex types declared: {len(index.complex_types)}")
    console.print(f"Sequence scopes:        {len(index.sequence_order)}")
    console.print(f"Resolved paths:         {report.resolved_keys}")

    if report.unsequenced_types:
        console.print("")
        console.print("[yellow]Complex types without a sequence:[/yellow]")
        for type_name in report.unsequenced_types:
            console.print(f"  {type_name}")

    if report.leaf_references:
        rich_table = RichTable(title="Leaf type references")
        rich_table.add_column("Field path", style="cyan")
        rich_table.add_column("Type", style="magenta")
        rich_table.add_column("Declared", style="yellow")
        for path, type_name in report.leaf_references.items():
            declared = "no" if path in report.undeclared_references else "complex type"
            rich_table.add_row(path, type_name, declared)
        console.print(rich_table)

    console.print("[green]✓ Field order resolved[/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
