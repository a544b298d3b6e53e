import math

import pytest

from heuristic_optimizer.core import (
    as_objective,
    is_better,
    is_worse,
    score_key,
    validate_intervals,
)
from heuristic_optimizer.population import Population


def test_push_tracks_best_and_worst_incrementally(score_population: Population) -> None:
    score_population.append([3.0, 1.0, 5.0, 2.0])
    assert len(score_population) == 4
    assert score_population.best is not None and score_population.best.score == 1.0
    assert score_population.worst is not None and score_population.worst.score == 5.0
    assert score_population.get_best_solution() == (1.0, 1.0)


def test_non_finite_never_best_when_finite_alive(score_population: Population) -> None:
    score_population.append([math.nan, 7.0, math.inf, -math.inf])
    assert score_population.best is not None
    assert score_population.best.score == 7.0
    assert not math.isfinite(score_population.worst.score)


def test_only_non_finite_candidates_can_be_best(score_population: Population) -> None:
    score_population.push(math.nan)
    assert score_population.best is not None
    assert math.isnan(score_population.best.score)


def test_remove_dead_rescans(score_population: Population) -> None:
    score_population.append([1.0, 2.0, 3.0])
    score_population[0].kill()
    score_population[2].kill()
    assert score_population.len_alive() == 1
    score_population.remove_dead()
    assert len(score_population) == 1
    assert score_population.best.score == 2.0
    assert score_population.worst.score == 2.0


def test_remove_all_leaves_no_best(score_population: Population) -> None:
    score_population.append([1.0])
    score_population[0].kill()
    score_population.remove_dead()
    assert score_population.best is None
    assert score_population.get_best_solution() is None


def test_reset_and_iteration(score_population: Population) -> None:
    score_population.append([1.0, 2.0])
    score_population.next_iteration()
    score_population.next_iteration()
    assert score_population.iteration == 2
    score_population.reset()
    assert len(score_population) == 0
    assert score_population.iteration == 0
    assert score_population.best is None


def test_push_evaluates_once() -> None:
    calls: list[float] = []

    def goal(x: float) -> float:
        calls.append(x)
        return x * 2

    population = Population(as_objective(goal))
    candidate = population.push(4.0)
    assert candidate.score == 8.0
    assert calls == [4.0]


def test_score_ordering() -> None:
    assert score_key(1.0) < score_key(math.nan)
    assert score_key(1e300) < score_key(math.inf)
    assert is_better(0.0, math.nan)
    assert not is_better(-math.inf, 0.0)
    assert is_worse(math.nan, 1.0)
    assert not is_better(math.nan, math.inf)


def test_as_objective_rejects_non_callables() -> None:
    with pytest.raises(TypeError):
        as_objective(42)  # type: ignore[arg-type]


def test_validate_intervals() -> None:
    assert validate_intervals([(0, 1)]) == [(0.0, 1.0)]
    with pytest.raises(ValueError):
        validate_intervals([])
    with pytest.raises(ValueError):
        validate_intervals([(1.0, 1.0)])
