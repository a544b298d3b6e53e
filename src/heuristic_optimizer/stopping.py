"""Stop criteria for iterative optimizers."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable, Sequence
from typing import Protocol

from .core import AlgorithmState


class StopChecker(Protocol):
    """Returns True once the optimizer should stop; queried after every iteration."""

    def can_stop(self, state: AlgorithmState) -> bool: ...


class CompositeAny:
    """Stops when any of the checkers does."""

    def __init__(self, stop_checkers: Sequence[StopChecker]) -> None:
        if not stop_checkers:
            raise ValueError("CompositeAny requires at least one stop checker.")
        self.stop_checkers = list(stop_checkers)

    def can_stop(self, state: AlgorithmState) -> bool:
        return any(checker.can_stop(state) for checker in self.stop_checkers)


class CompositeAll:
    """Stops when all of the checkers do."""

    def __init__(self, stop_checkers: Sequence[StopChecker]) -> None:
        if not stop_checkers:
            raise ValueError("CompositeAll requires at least one stop checker.")
        self.stop_checkers = list(stop_checkers)

    def can_stop(self, state: AlgorithmState) -> bool:
        return all(checker.can_stop(state) for checker in self.stop_checkers)


class MaxIterations:
    def __init__(self, max_iter: int) -> None:
        if max_iter < 0:
            raise ValueError("max_iter must be >= 0")
        self.max_iter = max_iter

    def can_stop(self, state: AlgorithmState) -> bool:
        return state.iteration >= self.max_iter


class Threshold:
    """Stops once the best goal value drops to ``threshold`` or below."""

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold

    def can_stop(self, state: AlgorithmState) -> bool:
        best = state.get_best_solution()
        if best is None:
            return False
        return best[1] <= self.threshold


class GoalNotChange:
    """Stops when the best goal value has not moved by more than ``delta`` for
    ``max_iter`` iterations.
    """

    def __init__(self, max_iter: int, delta: float) -> None:
        if max_iter < 0:
            raise ValueError("max_iter must be >= 0")
        self.max_iter = max_iter
        self.delta = delta
        self.old_goal = sys.float_info.max
        self.change_iter = 0

    def can_stop(self, state: AlgorithmState) -> bool:
        best = state.get_best_solution()
        if best is None:
            return False
        iteration = state.iteration
        # A resumed or reset optimizer can report an iteration below the recorded one.
        if self.change_iter > iteration:
            self.change_iter = iteration
        if abs(best[1] - self.old_goal) > self.delta:
            self.old_goal = best[1]
            self.change_iter = iteration
        return iteration - self.change_iter > self.max_iter


class TimeLimit:
    """Stops after ``seconds`` of wall-clock time measured from the first query."""

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if seconds <= 0:
            raise ValueError("seconds must be > 0")
        self.seconds = seconds
        self.clock = clock
        self._started: float | None = None

    def can_stop(self, state: AlgorithmState) -> bool:
        now = self.clock()
        if self._started is None:
            self._started = now
        return now - self._started >= self.seconds
