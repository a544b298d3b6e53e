import math

import pytest

from heuristic_optimizer.testfunctions import (
    FUNCTIONS,
    minimum_location,
    paraboloid,
    rastrigin,
    rosenbrock,
    schwefel,
)


@pytest.mark.parametrize("name", sorted(FUNCTIONS))
def test_minimum_location_is_a_minimum(name: str) -> None:
    point = minimum_location(name, 3)
    assert FUNCTIONS[name](point) == pytest.approx(0.0, abs=1e-3)


def test_paraboloid_values() -> None:
    assert paraboloid([1.0, 2.0, 3.0]) == 0.0
    assert paraboloid([0.0, 0.0]) == 5.0
    assert paraboloid([1e200, 0.0]) == math.inf


def test_rastrigin_and_rosenbrock_values() -> None:
    assert rastrigin([0.0, 0.0]) == 0.0
    assert rastrigin([1.0]) == pytest.approx(1.0)
    assert rosenbrock([0.0, 0.0]) == 1.0
    with pytest.raises(ValueError):
        rosenbrock([1.0])


@pytest.mark.parametrize("function", [schwefel, rastrigin])
def test_non_finite_input_gives_nan(function) -> None:
    assert math.isnan(function([0.0, math.inf]))
    assert math.isnan(function([math.nan]))


def test_unknown_benchmark() -> None:
    with pytest.raises(ValueError):
        minimum_location("sphere", 2)
