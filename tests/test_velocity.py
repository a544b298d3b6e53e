import math
import random

import pytest

from heuristic_optimizer.swarm import Particle, Swarm
from heuristic_optimizer.velocity import (
    CanonicalVelocityCalculator,
    ClassicVelocityCalculator,
    ConstInertia,
    InertiaVelocityCalculator,
    LinearInertia,
    MaxVelocityAbs,
    MaxVelocityDimensions,
    NegativeReinforcement,
)


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.value


def _swarm() -> tuple[Swarm, Particle]:
    swarm = Swarm()
    particle = Particle([2.0, 2.0], [1.0, -1.0], 10.0)
    swarm.replace_particles([particle, Particle([0.0, 4.0], [0.0, 0.0], 1.0)])
    particle.move_to([3.0, 1.0], 20.0)
    return swarm, particle


def test_classic_velocity_formula() -> None:
    swarm, particle = _swarm()
    calculator = ClassicVelocityCalculator(1.0, 2.0, rng=FixedRandom(0.5))
    # personal best (2, 2), global best (0, 4), position (3, 1)
    assert calculator.calc_new_velocity(swarm, particle) == pytest.approx([-2.5, 2.5])


def test_canonical_velocity_is_scaled_classic() -> None:
    swarm, particle = _swarm()
    calculator = CanonicalVelocityCalculator(2.0, 3.0, 0.5, rng=FixedRandom(0.5))
    assert calculator.xi == pytest.approx(1.0 / 3.0)
    classic = ClassicVelocityCalculator(2.0, 3.0, rng=FixedRandom(0.5))
    expected = [calculator.xi * v for v in classic.calc_new_velocity(swarm, particle)]
    assert calculator.calc_new_velocity(swarm, particle) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("phi_personal", "phi_global", "alpha"),
    [(2.0, 2.0, 0.5), (1.0, 1.0, 0.5), (3.0, 3.0, 0.0), (3.0, 3.0, 1.0)],
)
def test_canonical_parameter_validation(phi_personal, phi_global, alpha) -> None:
    with pytest.raises(ValueError):
        CanonicalVelocityCalculator(phi_personal, phi_global, alpha)


def test_velocity_requires_initialized_swarm() -> None:
    particle = Particle([0.0], [0.0], 0.0)
    with pytest.raises(ValueError):
        ClassicVelocityCalculator(1.0, 1.0).calc_new_velocity(Swarm(), particle)


def test_inertia_schedules() -> None:
    assert ConstInertia(0.7).get(100) == 0.7
    linear = LinearInertia(0.4, 0.9, 10)
    assert linear.get(0) == pytest.approx(0.9)
    assert linear.get(5) == pytest.approx(0.65)
    assert linear.get(10) == pytest.approx(0.4)
    with pytest.raises(ValueError):
        LinearInertia(0.4, 0.9, 0)


def test_inertia_velocity_weights_previous_velocity() -> None:
    swarm, particle = _swarm()
    calculator = InertiaVelocityCalculator(1.0, 2.0, ConstInertia(0.5), rng=FixedRandom(0.5))
    # classic result minus half of the previous velocity (1, -1)
    assert calculator.calc_new_velocity(swarm, particle) == pytest.approx([-3.0, 3.0])


def test_negative_reinforcement_without_randomness_keeps_scaled_velocity() -> None:
    swarm, particle = _swarm()
    calculator = NegativeReinforcement(1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 0.5, rng=FixedRandom(0.0))
    assert calculator.calc_new_velocity(swarm, particle) == pytest.approx([0.5, -0.5])


def test_negative_reinforcement_pushes_away_from_worst() -> None:
    swarm, particle = _swarm()
    other = swarm.particles[1]
    calculator = NegativeReinforcement(0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, rng=FixedRandom(1.0))
    # global worst is the initial snapshot of the worse particle at (2, 2)
    velocity = calculator.calc_new_velocity(swarm, other)
    assert velocity == pytest.approx([-2.0, 2.0])


def test_max_velocity_dimensions_clamps_with_sign() -> None:
    corrector = MaxVelocityDimensions([1.0, -2.0, 3.0])
    assert corrector.correct_velocity([5.0, -5.0, 0.5]) == [1.0, -2.0, 0.5]
    with pytest.raises(ValueError):
        corrector.correct_velocity([0.0])


def test_max_velocity_abs_rescales_norm() -> None:
    corrector = MaxVelocityAbs(1.0)
    velocity = corrector.correct_velocity([3.0, 4.0])
    assert velocity == pytest.approx([0.6, 0.8])
    assert math.hypot(*velocity) == pytest.approx(1.0)
    assert corrector.correct_velocity([0.3, 0.4]) == [0.3, 0.4]
    with pytest.raises(ValueError):
        MaxVelocityAbs(0.0)
