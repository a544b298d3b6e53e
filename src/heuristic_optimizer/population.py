"""Candidate and population tracking for the genetic optimizer."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .core import Objective, Solution, is_better, is_worse, score_key


@dataclass
class Candidate:
    """One evaluated point of the search space."""

    parameters: Any
    score: float
    alive: bool = True

    def kill(self) -> None:
        """Exclude the candidate from the next generation."""
        self.alive = False

    def solution(self) -> Solution:
        return (self.parameters, self.score)


class Population:
    """Current generation of candidates plus best/worst bookkeeping."""

    def __init__(self, goal: Objective) -> None:
        self.goal = goal
        self._candidates: list[Candidate] = []
        self._best: Candidate | None = None
        self._worst: Candidate | None = None
        self._iteration = 0

    def __len__(self) -> int:
        return len(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    def __getitem__(self, index: int) -> Candidate:
        return self._candidates[index]

    @property
    def candidates(self) -> list[Candidate]:
        return list(self._candidates)

    @property
    def best(self) -> Candidate | None:
        return self._best

    @property
    def worst(self) -> Candidate | None:
        return self._worst

    @property
    def iteration(self) -> int:
        return self._iteration

    def len_alive(self) -> int:
        return sum(1 for candidate in self._candidates if candidate.alive)

    def get_best_solution(self) -> Solution | None:
        if self._best is None:
            return None
        return self._best.solution()

    def reset(self) -> None:
        """Remove every candidate and go back to generation 0."""
        self._candidates.clear()
        self._best = None
        self._worst = None
        self._iteration = 0

    def push(self, parameters: Any) -> Candidate:
        """Evaluate ``parameters`` once and insert the resulting live candidate."""
        candidate = Candidate(parameters=parameters, score=float(self.goal.get(parameters)))
        self._candidates.append(candidate)
        if self._best is None or is_better(candidate.score, self._best.score):
            self._best = candidate
        if self._worst is None or is_worse(candidate.score, self._worst.score):
            self._worst = candidate
        return candidate

    def append(self, parameters_list: Iterable[Any]) -> None:
        for parameters in parameters_list:
            self.push(parameters)

    def remove_dead(self) -> None:
        """Drop killed candidates and rescan best/worst among the survivors."""
        self._candidates = [candidate for candidate in self._candidates if candidate.alive]
        self.update_best_worst()

    def update_best_worst(self) -> None:
        alive = [candidate for candidate in self._candidates if candidate.alive]
        if not alive:
            self._best = None
            self._worst = None
            return
        self._best = min(alive, key=lambda candidate: score_key(candidate.score))
        self._worst = max(alive, key=lambda candidate: score_key(candidate.score))

    def next_iteration(self) -> None:
        self._iteration += 1
