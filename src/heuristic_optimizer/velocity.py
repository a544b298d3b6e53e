"""Velocity update formulas and velocity clamps for particle swarms."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Protocol

from .swarm import Particle, Swarm, Vector


def _require_best(swarm: Swarm) -> Particle:
    if swarm.best_particle is None:
        raise ValueError("Swarm has no best particle; initialize it before moving particles.")
    return swarm.best_particle


class ClassicVelocityCalculator:
    """``v + phi_p * r_p * (p_best - x) + phi_g * r_g * (g_best - x)``."""

    def __init__(
        self, phi_personal: float, phi_global: float, rng: random.Random | None = None
    ) -> None:
        self.phi_personal = phi_personal
        self.phi_global = phi_global
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def calc_new_velocity(self, swarm: Swarm, particle: Particle) -> Vector:
        global_best = _require_best(swarm).coordinates
        velocity = []
        for i, x in enumerate(particle.coordinates):
            r_personal = self.rng.uniform(0.0, 1.0)
            r_global = self.rng.uniform(0.0, 1.0)
            velocity.append(
                particle.velocity[i]
                + self.phi_personal * r_personal * (particle.best_personal_coordinates[i] - x)
                + self.phi_global * r_global * (global_best[i] - x)
            )
        return velocity


class CanonicalVelocityCalculator:
    """Clerc-Kennedy constriction: the classic formula scaled by ``xi = 2 * alpha / (phi - 2)``.

    Requires ``phi_personal + phi_global > 4`` and ``0 < alpha < 1``.
    """

    def __init__(
        self,
        phi_personal: float,
        phi_global: float,
        alpha: float,
        rng: random.Random | None = None,
    ) -> None:
        phi = phi_personal + phi_global
        if not phi > 4.0:
            raise ValueError(f"phi_personal + phi_global must be > 4, got {phi}")
        if not 0.0 < alpha < 1.0:
            raise ValueError(f"alpha must lie in (0, 1), got {alpha}")
        self.phi_personal = phi_personal
        self.phi_global = phi_global
        self.xi = 2.0 * alpha / (phi - 2.0)
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def calc_new_velocity(self, swarm: Swarm, particle: Particle) -> Vector:
        global_best = _require_best(swarm).coordinates
        velocity = []
        for i, x in enumerate(particle.coordinates):
            r_personal = self.rng.uniform(0.0, 1.0)
            r_global = self.rng.uniform(0.0, 1.0)
            velocity.append(
                self.xi
                * (
                    particle.velocity[i]
                    + self.phi_personal * r_personal * (particle.best_personal_coordinates[i] - x)
                    + self.phi_global * r_global * (global_best[i] - x)
                )
            )
        return velocity


class Inertia(Protocol):
    def get(self, iteration: int) -> float: ...


class ConstInertia:
    def __init__(self, w: float) -> None:
        self.w = w

    def get(self, iteration: int) -> float:
        return self.w


class LinearInertia:
    """Inertia decreasing linearly from ``w_max`` at iteration 0 to ``w_min`` at ``t_max``."""

    def __init__(self, w_min: float, w_max: float, t_max: int) -> None:
        if t_max <= 0:
            raise ValueError("t_max must be > 0")
        self.w_min = w_min
        self.w_max = w_max
        self.t_max = t_max

    def get(self, iteration: int) -> float:
        return self.w_max - (self.w_max - self.w_min) * iteration / self.t_max


class InertiaVelocityCalculator:
    """Classic formula with the previous velocity weighted by an inertia schedule."""

    def __init__(
        self,
        phi_personal: float,
        phi_global: float,
        inertia: Inertia,
        rng: random.Random | None = None,
    ) -> None:
        self.phi_personal = phi_personal
        self.phi_global = phi_global
        self.inertia = inertia
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def calc_new_velocity(self, swarm: Swarm, particle: Particle) -> Vector:
        global_best = _require_best(swarm).coordinates
        w = self.inertia.get(swarm.iteration)
        velocity = []
        for i, x in enumerate(particle.coordinates):
            r_personal = self.rng.uniform(0.0, 1.0)
            r_global = self.rng.uniform(0.0, 1.0)
            velocity.append(
                w * particle.velocity[i]
                + self.phi_personal * r_personal * (particle.best_personal_coordinates[i] - x)
                + self.phi_global * r_global * (global_best[i] - x)
            )
        return velocity


class NegativeReinforcement:
    """Attraction to personal, current and global bests; repulsion from the matching worsts.

    The sum is scaled by ``xi``.
    """

    def __init__(
        self,
        phi_best_personal: float,
        phi_best_current: float,
        phi_best_global: float,
        phi_worst_personal: float,
        phi_worst_current: float,
        phi_worst_global: float,
        xi: float,
        rng: random.Random | None = None,
    ) -> None:
        self.phi_best_personal = phi_best_personal
        self.phi_best_current = phi_best_current
        self.phi_best_global = phi_best_global
        self.phi_worst_personal = phi_worst_personal
        self.phi_worst_current = phi_worst_current
        self.phi_worst_global = phi_worst_global
        self.xi = xi
        self.rng = rng or random.Random()  # noqa: S311  # nosec B311 - not crypto

    def calc_new_velocity(self, swarm: Swarm, particle: Particle) -> Vector:
        global_best = _require_best(swarm).coordinates
        current_best = swarm.current_best_particle()
        current_worst = swarm.current_worst_particle()
        if swarm.worst_particle is None or current_best is None or current_worst is None:
            raise ValueError("Swarm is empty; initialize it before moving particles.")
        global_worst = swarm.worst_particle.coordinates

        rng = self.rng
        velocity = []
        for i, x in enumerate(particle.coordinates):
            attraction = (
                self.phi_best_personal
                * rng.uniform(0.0, 1.0)
                * (particle.best_personal_coordinates[i] - x)
                + self.phi_best_current * rng.uniform(0.0, 1.0) * (current_best.coordinates[i] - x)
                + self.phi_best_global * rng.uniform(0.0, 1.0) * (global_best[i] - x)
            )
            repulsion = (
                self.phi_worst_personal
                * rng.uniform(0.0, 1.0)
                * (particle.worst_personal_coordinates[i] - x)
                + self.phi_worst_current
                * rng.uniform(0.0, 1.0)
                * (current_worst.coordinates[i] - x)
                + self.phi_worst_global * rng.uniform(0.0, 1.0) * (global_worst[i] - x)
            )
            velocity.append(self.xi * (particle.velocity[i] + attraction - repulsion))
        return velocity


class MaxVelocityDimensions:
    """Clamps each velocity component to ``[-max, max]`` of its dimension, keeping the sign."""

    def __init__(self, max_velocity: Sequence[float]) -> None:
        self.max_velocity = [abs(value) for value in max_velocity]

    def correct_velocity(self, velocity: Vector) -> Vector:
        if len(velocity) != len(self.max_velocity):
            raise ValueError(
                f"Velocity has {len(velocity)} components, expected {len(self.max_velocity)}"
            )
        return [
            v if abs(v) <= v_max else math.copysign(v_max, v)
            for v, v_max in zip(velocity, self.max_velocity)
        ]


class MaxVelocityAbs:
    """Rescales the velocity vector so its Euclidean norm does not exceed ``max_velocity``."""

    def __init__(self, max_velocity: float) -> None:
        if max_velocity <= 0:
            raise ValueError("max_velocity must be > 0")
        self.max_velocity = max_velocity

    def correct_velocity(self, velocity: Vector) -> Vector:
        norm = math.sqrt(sum(v * v for v in velocity))
        if norm > self.max_velocity:
            return [v * self.max_velocity / norm for v in velocity]
        return list(velocity)
