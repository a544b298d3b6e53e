"""Public API for downstream modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import ujson as json

from .core import IterativeOptimizer, Solution
from .dsl import (
    ExperimentFactory,
    ExperimentSpec,
    build_optimizer,
    load_experiment_spec,
    save_experiment_spec,
    success_predicate,
)
from .loggers import Logger
from .parallel import TrialResults, run_trials

__all__ = [
    "ExperimentSpec",
    "StatisticsSummary",
    "load_spec",
    "save_spec",
    "run_experiment",
    "run_statistics",
    "summarize",
    "write_convergence",
]


@dataclass
class StatisticsSummary:
    runs: int
    success_rate: float | None
    average_goal: float | None
    standard_deviation_goal: float | None
    average_call_count: float | None


def load_spec(path: str | Path) -> ExperimentSpec:
    """Read an experiment spec from disk."""
    return load_experiment_spec(path)


def save_spec(spec: ExperimentSpec, path: str | Path) -> None:
    """Persist an experiment spec to disk."""
    save_experiment_spec(spec, path)


def run_experiment(
    spec: ExperimentSpec, seed: int = 0, loggers: list[Logger] | None = None
) -> Solution | None:
    """Run a single optimization and return its best solution."""
    optimizer: IterativeOptimizer = build_optimizer(spec, seed=seed, loggers=loggers)
    return optimizer.find_min()


def run_statistics(
    spec: ExperimentSpec, runs: int, workers: int = 1, base_seed: int = 0
) -> TrialResults:
    """Run ``runs`` independent trials of ``spec`` and collect their statistics."""
    return run_trials(ExperimentFactory(spec), runs, workers=workers, base_seed=base_seed)


def summarize(spec: ExperimentSpec, results: TrialResults) -> StatisticsSummary:
    statistics = results.statistics
    return StatisticsSummary(
        runs=statistics.run_count,
        success_rate=statistics.success_rate(success_predicate(spec)),
        average_goal=statistics.average_goal(),
        standard_deviation_goal=statistics.standard_deviation_goal(),
        average_call_count=results.call_count.average_call_count(),
    )


def write_convergence(results: TrialResults, path: str | Path) -> None:
    """Write the averaged convergence curve as JSON rows ``{"iteration", "goal"}``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = [
        {"iteration": index + 1, "goal": goal}
        for index, goal in enumerate(results.statistics.average_convergence())
    ]
    path.write_text(json.dumps(rows, indent=2))
