"""Run many independent optimizer trials, optionally across processes."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Protocol

from .core import Optimizer, Solution
from .loggers import Logger
from .statistics import CallCountData, Statistics, StatisticsLogger


class TrialOptimizer(Optimizer, Protocol):
    loggers: list[Logger]

    def set_loggers(self, loggers: Sequence[Logger]) -> None: ...


class TrialFactory(Protocol):
    """Builds a fresh optimizer for one trial.

    The optimizer must route its objective through a ``CountingObjective`` bound to
    ``call_count`` when call counts are wanted. Factories handed to worker processes
    must be picklable (a module-level function or an instance of a module-level class).
    """

    def __call__(self, seed: int, call_count: CallCountData) -> TrialOptimizer: ...


@dataclass
class TrialResults:
    statistics: Statistics = field(default_factory=Statistics)
    call_count: CallCountData = field(default_factory=CallCountData)

    def unite(self, other: TrialResults) -> None:
        self.statistics.unite(other.statistics)
        self.call_count.unite(other.call_count)


def run_trial(factory: TrialFactory, seed: int, results: TrialResults) -> Solution | None:
    optimizer = factory(seed, results.call_count)
    optimizer.set_loggers([*optimizer.loggers, StatisticsLogger(results.statistics)])
    return optimizer.find_min()


def run_batch(factory: TrialFactory, seeds: Sequence[int]) -> TrialResults:
    """Run the trials for ``seeds`` in order inside the current process."""
    results = TrialResults()
    for seed in seeds:
        run_trial(factory, seed, results)
    return results


def _split(seeds: list[int], parts: int) -> list[list[int]]:
    size, extra = divmod(len(seeds), parts)
    batches = []
    start = 0
    for index in range(parts):
        stop = start + size + (1 if index < extra else 0)
        if stop > start:
            batches.append(seeds[start:stop])
        start = stop
    return batches


def run_trials(
    factory: TrialFactory, runs: int, workers: int = 1, base_seed: int = 0
) -> TrialResults:
    """Run ``runs`` trials seeded ``base_seed .. base_seed + runs - 1``.

    Each worker process runs a contiguous batch of seeds with its own collectors and
    returns them once; batches are merged in seed order so results do not depend on
    ``workers``.
    """
    if runs < 0:
        raise ValueError("runs must be >= 0")
    if workers < 1:
        raise ValueError("workers must be >= 1")
    seeds = list(range(base_seed, base_seed + runs))
    if workers == 1 or runs <= 1:
        return run_batch(factory, seeds)

    batches = _split(seeds, min(workers, runs))
    merged = TrialResults()
    with ProcessPoolExecutor(max_workers=len(batches)) as executor:
        futures = [executor.submit(run_batch, factory, batch) for batch in batches]
        for future in futures:
            merged.unite(future.result())
    return merged
