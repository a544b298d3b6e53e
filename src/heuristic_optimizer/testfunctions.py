"""Benchmark objectives with known minima."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

# Every coordinate of the Schwefel minimum.
SCHWEFEL_MINIMUM = 420.9687


def paraboloid(x: Sequence[float]) -> float:
    """``sum((x_i - (i + 1))**2)``; minimum 0 at ``(1, 2, ..., n)``."""
    total = 0.0
    for i, value in enumerate(x):
        diff = value - (i + 1)
        total += diff * diff
    return total


def schwefel(x: Sequence[float]) -> float:
    """Minimum close to 0 at ``x_i = 420.9687`` inside ``[-500, 500]``."""
    if not all(math.isfinite(value) for value in x):
        return math.nan
    return 418.9829 * len(x) - sum(value * math.sin(math.sqrt(abs(value))) for value in x)


def rastrigin(x: Sequence[float]) -> float:
    """Minimum 0 at the origin."""
    if not all(math.isfinite(value) for value in x):
        return math.nan
    return 10.0 * len(x) + sum(
        value * value - 10.0 * math.cos(2.0 * math.pi * value) for value in x
    )


def rosenbrock(x: Sequence[float]) -> float:
    """Minimum 0 at ``(1, ..., 1)``; needs at least two dimensions."""
    if len(x) < 2:
        raise ValueError("rosenbrock needs at least two dimensions")
    total = 0.0
    for current, following in zip(x, x[1:]):
        valley = following - current * current
        total += 100.0 * valley * valley + (1.0 - current) * (1.0 - current)
    return total


FUNCTIONS: dict[str, Callable[[Sequence[float]], float]] = {
    "paraboloid": paraboloid,
    "schwefel": schwefel,
    "rastrigin": rastrigin,
    "rosenbrock": rosenbrock,
}


def minimum_location(name: str, dimension: int) -> list[float]:
    """Coordinates of the global minimum of a named benchmark."""
    if name == "paraboloid":
        return [float(i + 1) for i in range(dimension)]
    if name == "schwefel":
        return [SCHWEFEL_MINIMUM] * dimension
    if name == "rastrigin":
        return [0.0] * dimension
    if name == "rosenbrock":
        return [1.0] * dimension
    raise ValueError(f"Unknown benchmark function '{name}'")
