"""Selection operators that mark candidates dead.

Selectors never remove anything themselves; the optimizer calls
``Population.remove_dead`` once every selector in the list has run.
"""

from __future__ import annotations

import math
from typing import Protocol

from .core import score_key
from .population import Population


class Selection(Protocol):
    def kill(self, population: Population) -> None: ...


class KillNonFinite:
    """Kills every candidate whose score is NaN or infinite."""

    def kill(self, population: Population) -> None:
        for candidate in population:
            if not math.isfinite(candidate.score):
                candidate.kill()


class LimitPopulation:
    """Kills the worst alive candidates so that at most ``max_count`` survive."""

    def __init__(self, max_count: int) -> None:
        self.set_limit(max_count)

    def set_limit(self, max_count: int) -> None:
        if max_count <= 0:
            raise ValueError("max_count must be > 0")
        self.max_count = max_count

    def kill(self, population: Population) -> None:
        alive_count = population.len_alive()
        if alive_count > self.max_count:
            kill_worst(population, alive_count - self.max_count)


def kill_worst(population: Population, count: int) -> None:
    """Kill the ``count`` worst-scoring alive candidates.

    Keeps a kill list of at most ``count`` indices together with the position of its
    least bad member. A later candidate worse than that member takes its slot.
    """
    if count <= 0:
        return
    kill_list: list[int] = []
    least_bad = 0
    for index, candidate in enumerate(population):
        if not candidate.alive:
            continue
        key = score_key(candidate.score)
        if len(kill_list) < count:
            kill_list.append(index)
            if len(kill_list) == 1 or key < score_key(population[kill_list[least_bad]].score):
                least_bad = len(kill_list) - 1
            continue
        if key > score_key(population[kill_list[least_bad]].score):
            kill_list[least_bad] = index
            least_bad = min(
                range(len(kill_list)),
                key=lambda pos: score_key(population[kill_list[pos]].score),
            )
    for index in kill_list:
        population[index].kill()
