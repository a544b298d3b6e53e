"""Generational genetic algorithm engine."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .core import ObjectiveLike, Solution, as_objective
from .creation import Creator
from .crossover import Cross
from .loggers import Logger
from .mutations import Mutation
from .pairing import Pairing
from .population import Population
from .prebirth import PreBirth
from .selection import Selection
from .stopping import StopChecker


class GeneticOptimizer:
    """Runs pairing, crossover, mutation, pre-birth, insertion and selection per generation.

    The stop checker is consulted after each generation, so a run with a non-empty
    initial population always evolves at least once. An empty population ends the run.
    """

    def __init__(
        self,
        goal: ObjectiveLike,
        stop_checker: StopChecker,
        creator: Creator,
        pairing: Pairing,
        cross: Cross,
        mutation: Mutation,
        selections: Sequence[Selection],
        pre_births: Sequence[PreBirth] = (),
        loggers: Sequence[Logger] = (),
    ) -> None:
        self.stop_checker = stop_checker
        self.creator = creator
        self.pairing = pairing
        self.cross = cross
        self.mutation = mutation
        self.selections = list(selections)
        self.pre_births = list(pre_births)
        self.loggers = list(loggers)
        self._population = Population(as_objective(goal))

    @property
    def population(self) -> Population:
        return self._population

    def set_stop_checker(self, stop_checker: StopChecker) -> None:
        self.stop_checker = stop_checker

    def set_pairing(self, pairing: Pairing) -> None:
        self.pairing = pairing

    def set_cross(self, cross: Cross) -> None:
        self.cross = cross

    def set_mutation(self, mutation: Mutation) -> None:
        self.mutation = mutation

    def set_selections(self, selections: Sequence[Selection]) -> None:
        self.selections = list(selections)

    def set_pre_births(self, pre_births: Sequence[PreBirth]) -> None:
        self.pre_births = list(pre_births)

    def set_loggers(self, loggers: Sequence[Logger]) -> None:
        self.loggers = list(loggers)

    def find_min(self) -> Solution | None:
        """Start from a fresh population and run until the stop checker fires."""
        self._population.reset()
        self._population.append(self.creator.create())
        for logger in self.loggers:
            logger.start(self._population)
        return self.next_iterations()

    def next_iterations(self) -> Solution | None:
        """Continue from the current population; used to resume after ``find_min``."""
        population = self._population
        for logger in self.loggers:
            logger.resume(population)

        while len(population) > 0:
            self._next_generation()
            for logger in self.loggers:
                logger.next_iteration(population)
            if self.stop_checker.can_stop(population):
                break

        for logger in self.loggers:
            logger.finish(population)
        return population.get_best_solution()

    def _next_generation(self) -> None:
        population = self._population
        children = [self.mutation.mutation(child) for child in self._run_pairing()]
        for pre_birth in self.pre_births:
            pre_birth.pre_birth(population, children)
        population.append(children)
        for selection in self.selections:
            selection.kill(population)
        population.remove_dead()
        population.next_iteration()

    def _run_pairing(self) -> list[Any]:
        population = self._population
        children: list[Any] = []
        for family in self.pairing.get_pairs(population):
            parents = [population[index].parameters for index in family]
            children.extend(self.cross.cross(parents))
        return children
