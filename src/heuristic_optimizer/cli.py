"""Command-line utilities for the heuristic_optimizer package."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import get_version
from .api import load_spec, run_experiment, run_statistics, summarize, write_convergence
from .loggers import Logger, ResultOnlyLogger, TimeLogger, VerboseLogger

app = typer.Typer(help="Population-based global optimization")
console = Console()


def _fmt(value: float | None, precision: int = 6) -> str:
    return "-" if value is None else f"{value:.{precision}f}"


@app.command()
def version() -> None:
    """Print the installed package version."""
    typer.echo(get_version())


@app.command()
def run(
    config: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    seed: Annotated[int, typer.Option()] = 0,
    verbose: Annotated[bool, typer.Option(help="Print the best point every iteration.")] = False,
    precision: Annotated[int, typer.Option(min=0)] = 6,
) -> None:
    """Run a single optimization described by a YAML/JSON experiment file."""
    try:
        spec = load_spec(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    loggers: list[Logger] = [ResultOnlyLogger(console, precision), TimeLogger(console)]
    if verbose:
        loggers.insert(0, VerboseLogger(console, precision))
    console.print(f"[cyan]Running[/] {spec.name} ({spec.algorithm}, seed {seed})")
    run_experiment(spec, seed=seed, loggers=loggers)


@app.command()
def stats(
    config: Annotated[Path, typer.Argument(..., exists=True, readable=True)],
    runs: Annotated[int, typer.Option(min=1)] = 10,
    workers: Annotated[int, typer.Option(min=1, help="Worker processes.")] = 1,
    seed: Annotated[int, typer.Option(help="Seed of the first run.")] = 0,
    convergence: Annotated[
        Path | None,
        typer.Option(help="Write the averaged convergence curve to this JSON file."),
    ] = None,
) -> None:
    """Run many independent trials and report success rate and goal statistics."""
    try:
        spec = load_spec(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    results = run_statistics(spec, runs, workers=workers, base_seed=seed)
    summary = summarize(spec, results)

    table = Table(title=f"Statistics ({spec.name}, {spec.algorithm})")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Runs", str(summary.runs))
    table.add_row("Success rate", _fmt(summary.success_rate, 3))
    table.add_row("Average goal", _fmt(summary.average_goal))
    table.add_row("Std. deviation of goal", _fmt(summary.standard_deviation_goal))
    table.add_row("Average goal calls", _fmt(summary.average_call_count, 1))
    console.print(table)

    if convergence is not None:
        write_convergence(results, convergence)
        console.print(f"[bold green]Convergence written:[/] {convergence}")


def main() -> None:
    """Entry point for `python -m heuristic_optimizer.cli`."""
    app()


if __name__ == "__main__":
    main()
