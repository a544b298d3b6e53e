import math
import random

import pytest

from heuristic_optimizer.crossover import (
    CrossBitwise,
    CrossMean,
    FloatCrossExp,
    FloatCrossGeometricMean,
    VecCrossAllGenes,
)


def test_cross_bitwise_int8_child_mixes_parents() -> None:
    rng = random.Random(0)  # noqa: S311 - deterministic unit tests
    cross = CrossBitwise("int8", rng=rng)
    allowed = {(1 << pos) - 1 for pos in range(1, 8)}
    for _ in range(50):
        (child,) = cross.cross([0, -1])
        assert child in allowed


def test_cross_bitwise_identical_parents() -> None:
    rng = random.Random(1)  # noqa: S311 - deterministic unit tests
    for dtype, value in [("float64", 3.25), ("float32", -0.5), ("uint16", 513), ("int64", -7)]:
        assert CrossBitwise(dtype, rng=rng).cross([value, value]) == [value]


def test_cross_bitwise_requires_two_parents() -> None:
    cross = CrossBitwise("int32")
    with pytest.raises(ValueError):
        cross.cross([1])
    with pytest.raises(ValueError):
        cross.cross([1, 2, 3])


def test_float_cross_exp_identical_parents() -> None:
    rng = random.Random(2)  # noqa: S311 - deterministic unit tests
    cross = FloatCrossExp(rng=rng)
    for value in [3.5, -1e-3, 42.0]:
        assert cross.cross([value, value]) == [value]


def test_float_cross_exp_sign_comes_from_a_parent() -> None:
    rng = random.Random(3)  # noqa: S311 - deterministic unit tests
    cross = FloatCrossExp(rng=rng)
    children = {cross.cross([2.0, -2.0])[0] for _ in range(64)}
    assert children == {2.0, -2.0}


def test_float_cross_exp_stays_between_close_parents() -> None:
    rng = random.Random(4)  # noqa: S311 - deterministic unit tests
    cross = FloatCrossExp(rng=rng)
    for _ in range(100):
        (child,) = cross.cross([1.5, 1.75])
        assert 1.0 <= child < 2.0


def test_float_cross_exp_float32() -> None:
    rng = random.Random(5)  # noqa: S311 - deterministic unit tests
    (child,) = FloatCrossExp("float32", rng=rng).cross([0.25, 0.25])
    assert child == 0.25


def test_float_cross_exp_rejects_integer_dtype() -> None:
    with pytest.raises(ValueError):
        FloatCrossExp("int32")


def test_mean_crosses() -> None:
    assert CrossMean().cross([1.0, 2.0, 6.0]) == [3.0]
    assert FloatCrossGeometricMean().cross([2.0, 8.0]) == [pytest.approx(4.0)]
    assert math.isnan(FloatCrossGeometricMean().cross([-2.0, 8.0])[0])
    with pytest.raises(ValueError):
        CrossMean().cross([1.0])


def test_vec_cross_all_genes() -> None:
    cross = VecCrossAllGenes(CrossMean())
    assert cross.cross([[1.0, 2.0], [3.0, 4.0]]) == [[2.0, 3.0]]
    assert cross.cross([[0.0], [3.0], [6.0]]) == [[3.0]]


def test_vec_cross_all_genes_validation() -> None:
    cross = VecCrossAllGenes(CrossMean())
    with pytest.raises(ValueError):
        cross.cross([[1.0, 2.0]])
    with pytest.raises(ValueError):
        cross.cross([[1.0, 2.0], [1.0]])
