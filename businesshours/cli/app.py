"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Optional, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.calculator import BusinessHoursCalculator
from ..domain.exceptions import BusinessHoursError
from ..domain.models import BusinessWindow
from ..services.batch import BatchService, parse_timestamp

app = typer.Typer(
    name="businesshours",
    help="Compute elapsed business hours, discounting nights, weekends and holidays",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Business hours calculator.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_config(config_file: Optional[Path]) -> tuple[AppConfig, Path]:
    """
    Load the configuration and return it with the directory it came from.

    An explicitly given config file must exist; without one, a missing
    default config.yaml falls back to built-in defaults.
    """
    config_path = config_file or get_default_config_path()
    if config_file is None and not config_path.exists():
        return AppConfig(), Path.cwd()
    return AppConfig.load_from_yaml(config_path), config_path.parent


def _build_calculator(
    config: AppConfig,
    base_dir: Path,
    start_hour: Optional[int] = None,
    end_hour: Optional[int] = None,
) -> BusinessHoursCalculator:
    window = config.build_window()
    if start_hour is not None or end_hour is not None:
        window = BusinessWindow(
            start_hour=window.start_hour if start_hour is None else start_hour,
            end_hour=window.end_hour if end_hour is None else end_hour,
        )
    holidays = config.load_holiday_calendar(base_dir).to_holiday_set()
    return BusinessHoursCalculator(window=window, holidays=holidays, options=config.build_options())


@app.command()
def compute(
    start: Annotated[str, typer.Argument(help="Start timestamp, e.g. '2024-11-25 10:00'")],
    end: Annotated[str, typer.Argument(help="End timestamp, e.g. '2024-11-26 14:00'")],
    config_file: ConfigOption = None,
    start_hour: Annotated[Optional[int], typer.Option("--start-hour", help="Override the window opening hour")] = None,
    end_hour: Annotated[Optional[int], typer.Option("--end-hour", help="Override the window closing hour")] = None,
    breakdown: Annotated[bool, typer.Option("--breakdown", "-b", help="Show the per-part breakdown.")] = False,
):
    """
    Compute business hours between two timestamps.

    Examples:

        businesshours compute "2024-11-25 10:00" "2024-11-25 14:00"

        businesshours compute "2024-11-26 15:00" "2024-11-28 10:00" --breakdown

        businesshours compute 2024-11-25T07:00 2024-11-25T11:00 --start-hour 8
    """
    try:
        config, base_dir = _load_config(config_file)
        calculator = _build_calculator(config, base_dir, start_hour, end_hour)

        start_dt = parse_timestamp(start, config.timestamp_format)
        end_dt = parse_timestamp(end, config.timestamp_format)
        result = calculator.breakdown(start_dt, end_dt)

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except BusinessHoursError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if breakdown:
        table = Table(
            title=f"Business hours ({calculator.window})",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Part", style="bold yellow")
        table.add_column("Hours", justify="right")

        table.add_row("First day", str(result.first_day_hours))
        table.add_row(f"In between ({result.business_days_between} days)", str(result.inbetween_hours))
        table.add_row("Last day", str(result.last_day_hours))
        table.add_row("[bold]Total[/bold]", f"[bold]{result.total_hours}[/bold]")

        console.print()
        console.print(table)
        console.print(f"Start day: [dim]{result.case.value}[/dim]\n")
    else:
        console.print(result.total_hours)


@app.command()
def batch(
    input_file: Annotated[Path, typer.Argument(help="Input CSV file with a header row")],
    output_file: Annotated[Path, typer.Argument(help="Output CSV file")],
    config_file: ConfigOption = None,
):
    """
    Compute business hours for every record of a CSV file.

    Records that cannot be processed are reported and get an empty result
    cell; the rest of the file is still processed.
    """
    try:
        config, base_dir = _load_config(config_file)
        calculator = _build_calculator(config, base_dir)
    except (FileNotFoundError, BusinessHoursError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] Input file not found: {escape(str(input_file))}")
        raise typer.Exit(1)

    service = BatchService(
        calculator=calculator,
        columns=config.columns,
        timestamp_format=config.timestamp_format,
    )
    try:
        result = service.run(input_file, output_file)
    except BusinessHoursError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(
        f"[bold green]✓ {result.processed} of {len(result.rows)} record(s) processed[/bold green] "
        f"→ {output_file}"
    )
    if result.gap_warnings:
        console.print(
            f"[yellow]⚠ {result.gap_warnings} record(s) fall outside the holiday calendar coverage[/yellow]"
        )

    if result.failures:
        table = Table(
            title="Failed records",
            show_header=True,
            header_style="bold red"
        )
        table.add_column("Row", justify="right")
        table.add_column("Reason", style="dim")

        for failure in result.failures:
            table.add_row(str(failure.row_number), escape(failure.message))

        console.print()
        console.print(table)
        console.print()


@app.command()
def holidays(
    config_file: ConfigOption = None,
):
    """
    List the configured holidays.
    """
    try:
        config, base_dir = _load_config(config_file)
        calendar = config.load_holiday_calendar(base_dir)
    except (FileNotFoundError, BusinessHoursError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not calendar.names:
        console.print("[yellow]No holidays configured.[/yellow]")
        return

    holiday_set = calendar.to_holiday_set()
    table = Table(
        title=f"Holidays (covered {holiday_set.covered_from} - {holiday_set.covered_to})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold yellow")
    table.add_column("Weekday")
    table.add_column("Name", style="dim")

    for day in sorted(calendar.names):
        table.add_row(day.isoformat(), day.strftime("%A"), escape(calendar.names[day]))

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]businesshours[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
