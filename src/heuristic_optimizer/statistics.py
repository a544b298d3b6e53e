"""Cross-run statistics for stochastic optimizers.

A ``Statistics`` object collects one final result and one convergence curve per run.
Runs are usually executed by separate optimizer instances (possibly in separate
processes); their collectors are merged afterwards with ``unite``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any

import numpy as np

from .core import AlgorithmState, Objective, ObjectiveLike, Solution, as_objective
from .loggers import Logger

Convergence = list[list[Solution | None]]
SuccessPredicate = Callable[[Solution], bool]


class Statistics:
    def __init__(self) -> None:
        # index: run number
        self.results: list[Solution | None] = []
        # convergence[run][iteration]: best solution after that iteration
        self.convergence: Convergence = []

    @property
    def run_count(self) -> int:
        return len(self.results)

    def start_run(self) -> None:
        self.convergence.append([])

    def add_convergence(self, state: AlgorithmState) -> None:
        if not self.convergence:
            self.start_run()
        self.convergence[-1].append(state.get_best_solution())

    def add_result(self, state: AlgorithmState) -> None:
        self.results.append(state.get_best_solution())

    def unite(self, other: Statistics) -> None:
        """Append every run of ``other`` after the runs already collected."""
        self.results.extend(other.results)
        self.convergence.extend(other.convergence)

    def success_rate(self, predicate: SuccessPredicate) -> float | None:
        return get_success_rate(self.results, predicate)

    def average_goal(self) -> float | None:
        return get_average_goal(self.results)

    def standard_deviation_goal(self) -> float | None:
        return get_standard_deviation_goal(self.results)

    def average_convergence(self) -> list[float | None]:
        return get_average_convergence(self.convergence)


class StatisticsLogger(Logger):
    """Feeds run results and best-so-far curves into a ``Statistics`` collector."""

    def __init__(self, statistics: Statistics) -> None:
        self.statistics = statistics

    def start(self, state: AlgorithmState) -> None:
        self.statistics.start_run()

    def next_iteration(self, state: AlgorithmState) -> None:
        self.statistics.add_convergence(state)

    def finish(self, state: AlgorithmState) -> None:
        self.statistics.add_result(state)


def get_min_iterations(convergence: Convergence) -> int:
    if not convergence:
        return 0
    return min(len(run) for run in convergence)


def get_average_convergence(convergence: Convergence) -> list[float | None]:
    """Per-iteration mean goal over runs, truncated to the shortest run.

    Runs without a solution at an iteration are left out of that iteration's mean;
    if no run has one the entry is ``None``.
    """
    averages: list[float | None] = []
    for i in range(get_min_iterations(convergence)):
        goals = [run[i][1] for run in convergence if run[i] is not None]
        averages.append(float(np.mean(goals)) if goals else None)
    return averages


def _goals(results: Sequence[Solution | None]) -> list[float]:
    return [result[1] for result in results if result is not None]


def get_success_rate(
    results: Sequence[Solution | None], predicate: SuccessPredicate
) -> float | None:
    """Fraction of runs whose solution satisfies ``predicate``; runs without one count as failures."""
    if not results:
        return None
    successes = sum(1 for result in results if result is not None and predicate(result))
    return successes / len(results)


def get_average_goal(results: Sequence[Solution | None]) -> float | None:
    goals = _goals(results)
    if not goals:
        return None
    return float(np.mean(goals))


def get_standard_deviation_goal(results: Sequence[Solution | None]) -> float | None:
    """Population standard deviation of the final goals."""
    goals = _goals(results)
    if not goals:
        return None
    return float(np.std(goals))


def get_predicate_success_vec_solution(
    answer: Sequence[float], delta: Sequence[float]
) -> SuccessPredicate:
    """Success when every coordinate lies within ``delta[i]`` of ``answer[i]``."""
    if len(answer) != len(delta):
        raise ValueError("answer and delta must have the same length")
    answer = list(answer)
    delta = list(delta)

    def predicate(solution: Solution) -> bool:
        point = solution[0]
        if len(point) != len(answer):
            return False
        return all(
            math.isfinite(x) and abs(x - expected) <= tolerance
            for x, expected, tolerance in zip(point, answer, delta)
        )

    return predicate


def get_predicate_success_goal(threshold: float) -> SuccessPredicate:
    """Success when the final goal is finite and at most ``threshold``."""

    def predicate(solution: Solution) -> bool:
        return math.isfinite(solution[1]) and solution[1] <= threshold

    return predicate


class CallCountData:
    """Objective evaluation counts, one entry per run."""

    def __init__(self) -> None:
        self.call_counts: list[int] = []

    @property
    def run_count(self) -> int:
        return len(self.call_counts)

    def start_run(self) -> None:
        self.call_counts.append(0)

    def add_call(self) -> None:
        if not self.call_counts:
            self.start_run()
        self.call_counts[-1] += 1

    def unite(self, other: CallCountData) -> None:
        self.call_counts.extend(other.call_counts)

    def average_call_count(self) -> float | None:
        if not self.call_counts:
            return None
        return float(np.mean(self.call_counts))


class CountingObjective:
    """Wraps an objective and counts its evaluations as a new run of ``call_count``."""

    def __init__(self, goal: ObjectiveLike, call_count: CallCountData) -> None:
        self.goal: Objective = as_objective(goal)
        self.call_count = call_count
        self.call_count.start_run()

    def get(self, x: Any) -> float:
        self.call_count.add_call()
        return self.goal.get(x)
