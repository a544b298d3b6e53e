"""Shared types for optimizers, objectives and run state."""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, Protocol, Union

# (parameters, objective value)
Solution = tuple[Any, float]

Interval = tuple[float, float]


class Objective(Protocol):
    """Scalar function to minimize."""

    def get(self, x: Any) -> float: ...


ObjectiveLike = Union[Objective, Callable[[Any], float]]


class GoalFromFunction:
    """Adapts a plain callable to the ``Objective`` protocol."""

    def __init__(self, function: Callable[[Any], float]) -> None:
        self.function = function

    def get(self, x: Any) -> float:
        return float(self.function(x))


def as_objective(goal: ObjectiveLike) -> Objective:
    if hasattr(goal, "get") and callable(goal.get):
        return goal  # type: ignore[return-value]
    if callable(goal):
        return GoalFromFunction(goal)
    raise TypeError(f"Objective must be callable or expose get(), got {type(goal).__name__}")


class AlgorithmState(Protocol):
    """Read-only view of a running optimizer handed to stop checkers and loggers."""

    @property
    def iteration(self) -> int: ...

    def get_best_solution(self) -> Solution | None: ...


class Optimizer(Protocol):
    def find_min(self) -> Solution | None: ...


class IterativeOptimizer(Optimizer, Protocol):
    def next_iterations(self) -> Solution | None: ...


def score_key(score: float) -> tuple[int, float]:
    """Total order over scores where NaN and infinities rank after every finite value.

    Minimizing with this key never prefers a non-finite score; maximizing with it
    (worst tracking) always does.
    """
    if math.isfinite(score):
        return (0, score)
    return (1, 0.0)


def is_better(score: float, incumbent: float) -> bool:
    """True when ``score`` strictly beats ``incumbent`` for minimization."""
    return score_key(score) < score_key(incumbent)


def is_worse(score: float, incumbent: float) -> bool:
    """True when ``score`` strictly loses to ``incumbent`` (non-finite always loses)."""
    return score_key(score) > score_key(incumbent)


def validate_intervals(intervals: list[Interval]) -> list[Interval]:
    if not intervals:
        raise ValueError("At least one interval is required.")
    checked: list[Interval] = []
    for idx, (low, high) in enumerate(intervals):
        if not low < high:
            raise ValueError(f"Interval {idx} is empty or inverted: ({low}, {high})")
        checked.append((float(low), float(high)))
    return checked
