"""Observers notified by the optimizers at each stage of a run."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from rich.console import Console

from .core import AlgorithmState


class Logger:
    """Base observer; every hook is a no-op so subclasses override only what they need."""

    def start(self, state: AlgorithmState) -> None:
        """Called once after the optimizer created its initial population."""

    def resume(self, state: AlgorithmState) -> None:
        """Called before iterating, including after a pause."""

    def next_iteration(self, state: AlgorithmState) -> None:
        """Called at the end of every iteration."""

    def finish(self, state: AlgorithmState) -> None:
        """Called after the optimizer stopped."""


def _format_vector(values: Sequence[float] | float, precision: int) -> list[str]:
    if isinstance(values, (int, float)):
        return [f"{values:.{precision}f}"]
    return [f"{value:.{precision}f}" for value in values]


class VerboseLogger(Logger):
    """Prints the iteration number, best point and best goal after every iteration."""

    def __init__(self, console: Console | None = None, precision: int = 6) -> None:
        self.console = console or Console()
        self.precision = precision

    def next_iteration(self, state: AlgorithmState) -> None:
        best = state.get_best_solution()
        if best is None:
            return
        parameters, goal = best
        columns = [f"{state.iteration:<8}"]
        columns.extend(f"{value:<20}" for value in _format_vector(parameters, self.precision))
        columns.append(f"{goal:20.{self.precision}f}")
        self.console.print("  ".join(columns), highlight=False)


class ResultOnlyLogger(Logger):
    """Prints the final solution, its goal and the iteration count."""

    def __init__(self, console: Console | None = None, precision: int = 6) -> None:
        self.console = console or Console()
        self.precision = precision

    def finish(self, state: AlgorithmState) -> None:
        best = state.get_best_solution()
        if best is None:
            self.console.print("[bold red]Solution not found[/]")
        else:
            parameters, goal = best
            self.console.print("[bold]Solution:[/]")
            for value in _format_vector(parameters, self.precision):
                self.console.print(f"  {value}", highlight=False)
            self.console.print(f"[bold]Goal:[/] {goal:.{self.precision}f}")
        self.console.print(f"[bold]Iterations count:[/] {state.iteration}")


class TimeLogger(Logger):
    """Prints wall-clock time between ``resume`` and ``finish``."""

    def __init__(
        self,
        console: Console | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.console = console or Console()
        self.clock = clock
        self.start_time: float | None = None
        self.elapsed_ms: float | None = None

    def resume(self, state: AlgorithmState) -> None:
        self.start_time = self.clock()

    def finish(self, state: AlgorithmState) -> None:
        if self.start_time is None:
            return
        self.elapsed_ms = (self.clock() - self.start_time) * 1000.0
        self.console.print(f"[bold]Time elapsed:[/] {self.elapsed_ms:.0f} ms")
