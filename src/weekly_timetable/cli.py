"""CLI entry point for the weekly timetable generator."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import ConfigLoader, SolverSettings, sample_problem_data, write_problem
from .constants import DAY_NAMES, PERIODS
from .exceptions import ConfigError, ValidationError
from .exporters import get_exporter
from .models import ScheduleProblem
from .scheduler import CpSatVerifier, FeasibilityPrecheck, TimetableScheduler, Verdict
from .scheduler.constants import DEFAULT_VERIFY_TIME_LIMIT
from .scheduler.models import ScheduleResult
from .utils import period_key

app = typer.Typer(
    name="timetable",
    help="Generate weekly class timetables under faculty workload limits",
    add_completion=False,
)
console = Console()

# Exit code for runs that end without a timetable
EXIT_NO_TIMETABLE = 2


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


OUTPUT_SUFFIXES = {
    OutputFormat.json: ".json",
    OutputFormat.csv: ".csv",
    OutputFormat.excel: ".xlsx",
}


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _load(config_file: Path) -> tuple[ScheduleProblem, SolverSettings]:
    """Load problem and settings, exiting with code 1 on bad input."""
    try:
        loader = ConfigLoader(config_file)
        return loader.load_problem(), loader.load_settings()
    except ConfigError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print("[bold red]Error:[/bold red] Invalid input")
        for error in e.errors:
            console.print(f"  [red]• {error}[/red]")
        raise typer.Exit(1)


@app.command()
def generate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Problem JSON file (or a directory holding timetable.json)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    node_budget: Annotated[
        Optional[int],
        typer.Option("--node-budget", min=1, help="Maximum search nodes"),
    ] = None,
    time_limit: Annotated[
        Optional[float],
        typer.Option("--time-limit", min=0.001, help="Time limit in seconds"),
    ] = None,
    no_balance: Annotated[
        bool,
        typer.Option("--no-balance", help="Do not spread subjects across the week"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate a timetable and optionally export it."""
    _setup_logging(verbose)
    problem, settings = _load(config_file)
    settings = settings.with_overrides(
        node_budget=node_budget,
        time_limit=time_limit,
        balance_distribution=False if no_balance else None,
    )

    scheduler = TimetableScheduler(
        node_budget=settings.node_budget,
        time_limit=settings.time_limit,
        balance=settings.balance_distribution,
    )
    with console.status("[bold green]Generating timetable..."):
        result = scheduler.schedule(problem)

    console.print(f"\n[bold]Timetable for:[/bold] {config_file.name}")
    if result.is_solved:
        console.print(f"[bold green]✓ Solved[/bold green] ({result.statistics.total_assignments} lessons)")
        for school_class in problem.classes:
            console.print(_class_table(result, school_class.name))
        _show_statistics(result, verbose)
    else:
        _show_failure(result)

    if output:
        output_path = output if output.suffix else output.with_suffix(OUTPUT_SUFFIXES[format])
        exporter = get_exporter(format.value)
        with console.status(f"[bold green]Exporting to {output_path}..."):
            exporter.export(result, output_path)
        console.print(f"\n[bold green]✓[/bold green] Result exported to: {output_path}")

    if not result.is_solved:
        raise typer.Exit(EXIT_NO_TIMETABLE)


@app.command()
def validate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Problem JSON file to validate"),
    ],
) -> None:
    """Validate a problem file without scheduling."""
    problem, settings = _load(config_file)

    console.print(f"\n[bold]Validation Results for:[/bold] {config_file.name}")
    console.print("[bold green]✓ Problem is valid[/bold green]")
    console.print(f"  Faculty: {len(problem.faculty)}")
    console.print(f"  Classes: {len(problem.classes)}")
    console.print(f"  Subjects: {len(problem.subject_by_id)}")
    console.print(
        f"  Weekly periods requested: {sum(c.total_weekly_hours for c in problem.classes)}"
    )
    console.print(f"  Node budget: {settings.node_budget}")


@app.command()
def check(
    config_file: Annotated[
        Path,
        typer.Argument(help="Problem JSON file to check"),
    ],
    time_limit: Annotated[
        float,
        typer.Option("--time-limit", min=0.001, help="CP-SAT time limit in seconds"),
    ] = DEFAULT_VERIFY_TIME_LIMIT,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Decide feasibility with the precheck and an OR-Tools CP-SAT model."""
    _setup_logging(verbose)
    problem, _ = _load(config_file)

    reasons = FeasibilityPrecheck(problem).check()
    if reasons:
        console.print("[bold red]✗ Infeasible[/bold red] (found before search)")
        for reason in reasons:
            console.print(f"  [red]• {reason}[/red]")
        raise typer.Exit(EXIT_NO_TIMETABLE)

    with console.status("[bold green]Running CP-SAT solver..."):
        verification = CpSatVerifier(problem, time_limit=time_limit).verify()

    if verification.verdict is Verdict.FEASIBLE:
        console.print("[bold green]✓ Feasible[/bold green]")
    elif verification.verdict is Verdict.INFEASIBLE:
        console.print("[bold red]✗ Infeasible[/bold red]")
    else:
        console.print(
            f"[bold yellow]? Unknown[/bold yellow] (no verdict within {time_limit}s)"
        )
    console.print(f"  Solver status: {verification.solver_status}")
    console.print(f"  Wall time: {verification.wall_time_seconds:.2f}s")

    if verification.verdict is not Verdict.FEASIBLE:
        raise typer.Exit(EXIT_NO_TIMETABLE)


@app.command()
def sample(
    output: Annotated[
        Path,
        typer.Argument(help="Where to write the sample problem file"),
    ],
) -> None:
    """Write the built-in sample roster as a problem file."""
    path = write_problem(sample_problem_data(), output)
    console.print(f"[bold green]✓[/bold green] Sample problem written to: {path}")


def _class_table(result: ScheduleResult, class_name: str) -> Table:
    table = Table(title=class_name)
    table.add_column("Period", style="cyan")
    for day in DAY_NAMES:
        table.add_column(day, style="green")

    for period in PERIODS:
        key = period_key(period)
        cells = []
        for day in DAY_NAMES:
            cell = result.timetable[day][class_name][key]
            cells.append(
                f"{escape(cell['subject'])}\n[dim]{escape(cell['faculty'])}[/dim]" if cell else "-"
            )
        table.add_row(key, *cells)
    return table


def _show_statistics(result: ScheduleResult, verbose: bool) -> None:
    stats = result.statistics

    if stats.faculty_load:
        console.print("\n[bold]Faculty load:[/bold]")
        for name, load in stats.faculty_load.items():
            console.print(f"  {name}: {load}")

    console.print(f"\n  Distribution penalty: {stats.distribution_penalty}")
    if verbose:
        console.print(f"  Nodes expanded: {stats.nodes_expanded}")
        console.print(f"  Backtracks: {stats.backtracks}")
        console.print(f"  Max depth: {stats.max_depth}")
        console.print(f"  Solver time: {stats.solver_time_seconds}s")


def _show_failure(result: ScheduleResult) -> None:
    failure = result.failure
    console.print(f"[bold red]✗ {failure.kind.value.replace('_', ' ').capitalize()}[/bold red]")
    console.print(f"  {failure.message}")
    for reason in failure.reasons:
        console.print(f"  [red]• {reason}[/red]")


if __name__ == "__main__":
    app()
