import random

import pytest

from heuristic_optimizer.bits import bit_view
from heuristic_optimizer.mutations import BitwiseMutation, VecMutation


def test_bitwise_mutation_flips_exactly_one_bit() -> None:
    rng = random.Random(0)  # noqa: S311 - deterministic unit tests
    view = bit_view("int16")
    mutation = BitwiseMutation(1, "int16", rng=rng)
    for value in [0, 1, -300, 32767]:
        mutated = mutation.mutation(value)
        assert bin(view.to_bits(value) ^ view.to_bits(mutated)).count("1") == 1


def test_bitwise_mutation_float_returns_float() -> None:
    rng = random.Random(1)  # noqa: S311 - deterministic unit tests
    mutated = BitwiseMutation(3, rng=rng).mutation(1.0)
    assert isinstance(mutated, float)


def test_bitwise_mutation_rejects_zero_bits() -> None:
    with pytest.raises(ValueError):
        BitwiseMutation(0)


def test_vec_mutation_zero_probability_copies() -> None:
    rng = random.Random(2)  # noqa: S311 - deterministic unit tests
    mutation = VecMutation(0.0, BitwiseMutation(1, rng=rng), rng=rng)
    genes = [1.0, 2.0, 3.0]
    result = mutation.mutation(genes)
    assert result == genes
    assert result is not genes


def test_vec_mutation_full_probability_changes_every_gene() -> None:
    rng = random.Random(3)  # noqa: S311 - deterministic unit tests
    mutation = VecMutation(100.0, BitwiseMutation(1, rng=rng), rng=rng)
    genes = [1.0, -2.0, 3.5, 100.0]
    result = mutation.mutation(genes)
    assert all(new != old for new, old in zip(result, genes))


def test_vec_mutation_rate_is_percent() -> None:
    rng = random.Random(4)  # noqa: S311 - deterministic unit tests
    mutation = VecMutation(25.0, BitwiseMutation(1, rng=rng), rng=rng)
    genes = [1.0] * 4000
    changed = sum(1 for value in mutation.mutation(genes) if value != 1.0)
    assert 800 < changed < 1200


@pytest.mark.parametrize("probability", [-1.0, 100.5])
def test_vec_mutation_rejects_bad_probability(probability: float) -> None:
    with pytest.raises(ValueError):
        VecMutation(probability, BitwiseMutation(1))
