#!/usr/bin/env python3
"""
growthchart CLI

Command-line interface for creating growth charts from a table of
measurements.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()


def setup_paths():
    """Add the project root to sys.path for imports."""
    root = Path(__file__).parent
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


setup_paths()


def setup_logging(level: int) -> None:
    """Route log records through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fmt(value: Optional[float], digits: int = 2) -> str:
    return "-" if value is None else f"{value:.{digits}f}"


# Shared arguments for commands that run the pipeline
def chart_arguments(func):
    func = click.option("--name", type=str, help="Subject name shown in the chart title")(func)
    func = click.option("--which", type=click.Choice(["height", "weight", "bmi"]), required=True,
                        help="Which chart to generate")(func)
    func = click.argument("table", type=click.File("r", encoding="utf-8-sig"))(func)
    func = click.argument("dob", type=click.DateTime(formats=["%Y-%m-%d"]))(func)
    func = click.argument("gender", type=click.Choice(["M", "F"]))(func)
    return func


@click.group()
@click.version_option(version="0.1.0", prog_name="growthchart")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """
    growthchart - Growth charts from a measurement table

    Reads a CSV/TSV table with an age or date column and height/weight
    columns, and plots the measurements against reference z-score curves.
    """
    from src.config import get_config

    config = get_config()
    setup_logging(logging.DEBUG if verbose else config.log_level_number)


@cli.command()
@chart_arguments
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output PNG path")
@click.option("--output-dir", type=click.Path(file_okay=False),
              help="Directory for the generated PNG (default: temp dir)")
@click.option("--spec-json", type=click.Path(dir_okay=False),
              help="Also write the chart series as JSON")
@click.option("--no-open", is_flag=True, help="Do not open the chart in a viewer")
def chart(
    gender: str,
    dob: datetime,
    table,
    which: str,
    name: Optional[str],
    output: Optional[str],
    output_dir: Optional[str],
    spec_json: Optional[str],
    no_open: bool,
):
    """
    Create a growth chart (height, weight or BMI) and open it.

    TABLE is a CSV/TSV file, or - for stdin. Dates must be YYYY-MM-DD, age
    in years, weight in kg, height in cm.

    Examples:

        growthchart chart M 2014-04-15 data.csv --which height

        growthchart chart F 2016-02-01 data.tsv --which bmi --name Alice --no-open
    """
    from src.config import get_config
    from src.pipeline import generate_growth_chart

    config = get_config()
    if output_dir:
        config.output_dir = Path(output_dir)
    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    result = generate_growth_chart(
        gender,
        dob.date(),
        table.read(),
        which,
        name=name,
        config=config,
        output_path=Path(output) if output else None,
        open_viewer=False if no_open else None,
        spec_json=Path(spec_json) if spec_json else None,
    )

    if not result.ok:
        console.print(f"[red]✗ {result.status}: {escape(result.message)}[/red]")
        sys.exit(1)

    console.print(f"[green]✓ Chart written to {result.path}[/green]")
    if spec_json:
        console.print(f"[dim]Series JSON: {spec_json}[/dim]")


@cli.command()
@chart_arguments
@click.option("--json", "as_json", is_flag=True, help="Print rows as JSON")
def inspect(
    gender: str,
    dob: datetime,
    table,
    which: str,
    name: Optional[str],
    as_json: bool,
):
    """
    Show resolved columns and reference values without drawing a chart.

    Example:

        growthchart inspect M 2014-04-15 data.csv --which weight
    """
    from src.config import get_config
    from src.exporters import export_rows_summary
    from src.pipeline import GrowthChartError, run_pipeline
    from src.reference import TableReferenceLookup

    config = get_config()
    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    try:
        lookup = TableReferenceLookup(reference_file=config.reference_file)
        run = run_pipeline(gender, dob.date(), table.read(), which, name=name, lookup=lookup)
    except GrowthChartError as e:
        console.print(f"[red]✗ 400: {escape(str(e))}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(export_rows_summary(run.rows), indent=2))
        return

    roles = run.roles
    console.print(Panel(
        f"[bold]{run.spec.title}[/bold]\n\n"
        f"Age column: {roles.age or '-'}\n"
        f"Date column: {roles.date or '-'}\n"
        f"Height column: {roles.height or '-'}\n"
        f"Weight column: {roles.weight or '-'}\n"
        f"Rows: {len(run.rows)}",
        title="Columns",
        border_style="blue",
    ))

    rows_table = Table(title=f"{which} vs reference")
    rows_table.add_column("Row", justify="right")
    rows_table.add_column("Age (x)", justify="right")
    rows_table.add_column(which, justify="right", style="cyan")
    rows_table.add_column("z-2", justify="right", style="red")
    rows_table.add_column("z0", justify="right", style="green")
    rows_table.add_column("z+2", justify="right", style="red")
    rows_table.add_column("z-score", justify="right")
    rows_table.add_column("Percentile", justify="right")

    for row in run.rows:
        rows_table.add_row(
            str(row.row_index),
            _fmt(row.age),
            _fmt(row.measured),
            _fmt(row.bands.z2neg),
            _fmt(row.bands.z0),
            _fmt(row.bands.z2),
            _fmt(row.z_score),
            _fmt(row.percentile, 1),
        )

    console.print(rows_table)


@cli.command()
def info():
    """
    Show information about growthchart.
    """
    from knowledge.growth import GrowthReference
    from src.config import get_config

    config = get_config()
    reference = GrowthReference.load(config.reference_file)

    console.print(Panel(
        "[bold]growthchart[/bold]\n\n"
        "Plots a child's height, weight or BMI against reference\n"
        "z-score curves (z = -3 .. +3).\n\n"
        f"[dim]Reference data: {reference.source}[/dim]\n"
        f"[dim]Ages covered: 0-{reference.max_age:g} months[/dim]",
        title="About",
        border_style="blue",
    ))

    console.print("\n[bold]Input table:[/bold]")
    console.print("  • CSV or TSV with a header line")
    console.print("  • An 'age' (years) or 'date'/'time' (YYYY-MM-DD) column")
    console.print("  • 'height' (cm) and/or 'weight' (kg) columns")

    console.print("\n[bold]Quick Start:[/bold]")
    console.print("  growthchart chart M 2014-04-15 data.csv --which height")
    console.print("  growthchart inspect F 2016-02-01 data.csv --which bmi")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
