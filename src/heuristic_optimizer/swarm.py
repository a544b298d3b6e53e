"""Particle swarm optimization engine.

Each iteration moves every particle by a velocity computed from its own history and
the swarm's best (and, for some calculators, worst) positions. Velocity and position
correctors run after the velocity formula and after the move respectively.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .core import ObjectiveLike, Solution, as_objective, is_better, is_worse, score_key
from .loggers import Logger
from .stopping import StopChecker

Vector = list[float]


class CoordinatesInitializer(Protocol):
    def get_coordinates(self) -> list[Vector]: ...


class VelocityInitializer(Protocol):
    def get_velocity(self) -> list[Vector]: ...


class VelocityCalculator(Protocol):
    def calc_new_velocity(self, swarm: Swarm, particle: Particle) -> Vector: ...


class PostVelocityCalc(Protocol):
    def correct_velocity(self, velocity: Vector) -> Vector: ...


class PostMove(Protocol):
    """Adjusts coordinates in place before the goal is evaluated."""

    def post_move(self, coordinates: Vector) -> None: ...


class Particle:
    """A point moving through the search space together with its personal extremes."""

    def __init__(self, coordinates: Sequence[float], velocity: Sequence[float], value: float):
        self.coordinates = list(coordinates)
        self.velocity = list(velocity)
        self.value = value
        self.best_personal_coordinates = list(coordinates)
        self.best_personal_value = value
        self.worst_personal_coordinates = list(coordinates)
        self.worst_personal_value = value

    def __repr__(self) -> str:
        return f"Particle(coordinates={self.coordinates!r}, value={self.value!r})"

    def copy(self) -> Particle:
        clone = Particle(self.coordinates, self.velocity, self.value)
        clone.best_personal_coordinates = list(self.best_personal_coordinates)
        clone.best_personal_value = self.best_personal_value
        clone.worst_personal_coordinates = list(self.worst_personal_coordinates)
        clone.worst_personal_value = self.worst_personal_value
        return clone

    def set_velocity(self, velocity: Sequence[float]) -> None:
        self.velocity = list(velocity)

    def move_to(self, coordinates: Sequence[float], value: float) -> None:
        self.coordinates = list(coordinates)
        self.value = value
        if is_better(value, self.best_personal_value):
            self.best_personal_coordinates = list(coordinates)
            self.best_personal_value = value
        if is_worse(value, self.worst_personal_value):
            self.worst_personal_coordinates = list(coordinates)
            self.worst_personal_value = value

    def solution(self) -> Solution:
        return (list(self.coordinates), self.value)


def _find_best(particles: Sequence[Particle]) -> Particle | None:
    if not particles:
        return None
    return min(particles, key=lambda particle: score_key(particle.value))


def _find_worst(particles: Sequence[Particle]) -> Particle | None:
    if not particles:
        return None
    return max(particles, key=lambda particle: score_key(particle.value))


class Swarm:
    """Particles of one run plus the best and worst positions seen so far."""

    def __init__(self) -> None:
        self.particles: list[Particle] = []
        self.best_particle: Particle | None = None
        self.worst_particle: Particle | None = None
        self._iteration = 0

    def __len__(self) -> int:
        return len(self.particles)

    @property
    def iteration(self) -> int:
        return self._iteration

    def get_best_solution(self) -> Solution | None:
        if self.best_particle is None:
            return None
        return self.best_particle.solution()

    def reset(self) -> None:
        self.particles = []
        self.best_particle = None
        self.worst_particle = None
        self._iteration = 0

    def next_iteration(self) -> None:
        self._iteration += 1

    def replace_particles(self, particles: Sequence[Particle]) -> None:
        self.particles = list(particles)
        best = _find_best(self.particles)
        worst = _find_worst(self.particles)
        self.best_particle = best.copy() if best is not None else None
        self.worst_particle = worst.copy() if worst is not None else None

    def current_best_particle(self) -> Particle | None:
        return _find_best(self.particles)

    def current_worst_particle(self) -> Particle | None:
        return _find_worst(self.particles)

    def update_best_particle(self) -> None:
        current = self.current_best_particle()
        if current is None:
            return
        if self.best_particle is None or is_better(current.value, self.best_particle.value):
            self.best_particle = current.copy()

    def update_worst_particle(self) -> None:
        current = self.current_worst_particle()
        if current is None:
            return
        if self.worst_particle is None or is_worse(current.value, self.worst_particle.value):
            self.worst_particle = current.copy()


class ParticleSwarmOptimizer:
    def __init__(
        self,
        goal: ObjectiveLike,
        stop_checker: StopChecker,
        coordinates_initializer: CoordinatesInitializer,
        velocity_initializer: VelocityInitializer,
        velocity_calculator: VelocityCalculator,
        post_velocity_calc: Sequence[PostVelocityCalc] = (),
        post_moves: Sequence[PostMove] = (),
        loggers: Sequence[Logger] = (),
    ) -> None:
        self.goal = as_objective(goal)
        self.stop_checker = stop_checker
        self.coordinates_initializer = coordinates_initializer
        self.velocity_initializer = velocity_initializer
        self.velocity_calculator = velocity_calculator
        self.post_velocity_calc = list(post_velocity_calc)
        self.post_moves = list(post_moves)
        self.loggers = list(loggers)
        self._swarm = Swarm()

    @property
    def swarm(self) -> Swarm:
        return self._swarm

    def set_stop_checker(self, stop_checker: StopChecker) -> None:
        self.stop_checker = stop_checker

    def set_velocity_calculator(self, velocity_calculator: VelocityCalculator) -> None:
        self.velocity_calculator = velocity_calculator

    def set_post_velocity_calc(self, post_velocity_calc: Sequence[PostVelocityCalc]) -> None:
        self.post_velocity_calc = list(post_velocity_calc)

    def set_post_moves(self, post_moves: Sequence[PostMove]) -> None:
        self.post_moves = list(post_moves)

    def set_loggers(self, loggers: Sequence[Logger]) -> None:
        self.loggers = list(loggers)

    def find_min(self) -> Solution | None:
        self._renew_swarm()
        for logger in self.loggers:
            logger.start(self._swarm)
        return self.next_iterations()

    def next_iterations(self) -> Solution | None:
        swarm = self._swarm
        for logger in self.loggers:
            logger.resume(swarm)

        while len(swarm) > 0:
            for particle in swarm.particles:
                self._move_particle(particle)
            swarm.update_best_particle()
            swarm.update_worst_particle()
            swarm.next_iteration()
            for logger in self.loggers:
                logger.next_iteration(swarm)
            if self.stop_checker.can_stop(swarm):
                break

        for logger in self.loggers:
            logger.finish(swarm)
        return swarm.get_best_solution()

    def _renew_swarm(self) -> None:
        coordinates = self.coordinates_initializer.get_coordinates()
        velocities = self.velocity_initializer.get_velocity()
        if len(coordinates) != len(velocities):
            raise ValueError(
                f"Initializers disagree on swarm size: {len(coordinates)} coordinates, "
                f"{len(velocities)} velocities"
            )
        particles = []
        for point, velocity in zip(coordinates, velocities):
            point = list(point)
            for post_move in self.post_moves:
                post_move.post_move(point)
            particles.append(Particle(point, velocity, float(self.goal.get(point))))
        self._swarm.reset()
        self._swarm.replace_particles(particles)

    def _move_particle(self, particle: Particle) -> None:
        velocity = self.velocity_calculator.calc_new_velocity(self._swarm, particle)
        for corrector in self.post_velocity_calc:
            velocity = corrector.correct_velocity(velocity)
        particle.set_velocity(velocity)

        new_coordinates = [x + v for x, v in zip(particle.coordinates, particle.velocity)]
        for post_move in self.post_moves:
            post_move.post_move(new_coordinates)
        particle.move_to(new_coordinates, float(self.goal.get(new_coordinates)))
