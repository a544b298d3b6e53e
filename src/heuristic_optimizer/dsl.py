"""Typed experiment configuration and builders turning it into optimizers."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Literal

import ujson as json
import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from . import crossover, mutations, pairing, postmove, prebirth, selection, stopping, velocity
from .core import Interval, ObjectiveLike
from .creation import RandomCreator
from .genetic import GeneticOptimizer
from .initializing import (
    RandomCoordinatesInitializer,
    RandomVelocityInitializer,
    ZeroVelocityInitializer,
)
from .loggers import Logger
from .statistics import (
    CallCountData,
    CountingObjective,
    SuccessPredicate,
    get_predicate_success_vec_solution,
)
from .swarm import ParticleSwarmOptimizer, PostMove, PostVelocityCalc, VelocityCalculator
from .testfunctions import FUNCTIONS, minimum_location

FunctionName = Literal["paraboloid", "schwefel", "rastrigin", "rosenbrock"]

DEFAULT_BOUNDS: dict[str, Interval] = {
    "paraboloid": (-100.0, 100.0),
    "schwefel": (-500.0, 500.0),
    "rastrigin": (-5.12, 5.12),
    "rosenbrock": (-5.0, 10.0),
}


class ObjectiveConfig(BaseModel):
    """Benchmark function and the box it is searched in."""

    function: FunctionName = "paraboloid"
    dimension: int = Field(default=5, gt=0)
    low: float = -100.0
    high: float = 100.0

    @model_validator(mode="before")
    @classmethod
    def default_bounds(cls, data: Any) -> Any:
        if isinstance(data, dict):
            function = data.get("function", "paraboloid")
            low, high = DEFAULT_BOUNDS.get(str(function), DEFAULT_BOUNDS["paraboloid"])
            data = {"low": low, "high": high, **data}
        return data

    @model_validator(mode="after")
    def check_bounds(self) -> ObjectiveConfig:
        if not self.low < self.high:
            raise ValueError(f"low ({self.low}) must be below high ({self.high})")
        if self.function == "rosenbrock" and self.dimension < 2:
            raise ValueError("rosenbrock needs dimension >= 2")
        minimum = minimum_location(self.function, self.dimension)
        if not all(self.low <= x <= self.high for x in minimum):
            raise ValueError(
                f"The minimum of {self.function} lies outside [{self.low}, {self.high}]"
            )
        return self

    def intervals(self) -> list[Interval]:
        return [(self.low, self.high)] * self.dimension


class GoalNotChangeConfig(BaseModel):
    max_iterations: int = Field(ge=0)
    delta: float = Field(ge=0.0)


class StopConfig(BaseModel):
    """Stop criteria combined with ``mode`` (any: first to fire, all: every one)."""

    mode: Literal["any", "all"] = "any"
    max_iterations: int | None = Field(default=3000, ge=0)
    threshold: float | None = 1e-6
    goal_not_change: GoalNotChangeConfig | None = None
    time_limit: float | None = Field(default=None, gt=0.0)

    @model_validator(mode="after")
    def require_criterion(self) -> StopConfig:
        if (
            self.max_iterations is None
            and self.threshold is None
            and self.goal_not_change is None
            and self.time_limit is None
        ):
            raise ValueError("At least one stop criterion is required.")
        return self


class GeneticConfig(BaseModel):
    population_size: int = Field(default=200, gt=0)
    dtype: Literal["float32", "float64"] = "float64"
    cross: Literal["exp", "bitwise", "mean", "geometric_mean"] = "exp"
    pairing: Literal["tournament", "random"] = "tournament"
    families_count: int | None = Field(default=None, gt=0)
    partners_count: int = Field(default=2, ge=2)
    rounds_count: int = Field(default=2, ge=1)
    mutation_probability: float = Field(default=15.0, ge=0.0, le=100.0)
    mutation_bits: int = Field(default=3, ge=1)
    check_intervals: bool = True

    @model_validator(mode="after")
    def check_partners(self) -> GeneticConfig:
        if self.cross in {"exp", "bitwise"} and self.partners_count != 2:
            raise ValueError(f"cross '{self.cross}' needs partners_count == 2")
        return self


class InertiaConfig(BaseModel):
    kind: Literal["const", "linear"] = "const"
    w: float = 0.85
    w_min: float = 0.2
    w_max: float = 0.9
    t_max: int = Field(default=400, gt=0)


class NegativeReinforcementConfig(BaseModel):
    phi_best_personal: float = 3.2
    phi_best_current: float = 1.0
    phi_best_global: float = 1.0
    phi_worst_personal: float = 0.0
    phi_worst_current: float = 0.0
    phi_worst_global: float = 0.0
    xi: float = 0.5


class SwarmConfig(BaseModel):
    particles_count: int = Field(default=30, gt=0)
    velocity: Literal["classic", "canonical", "inertia", "negative_reinforcement"] = "canonical"
    phi_personal: float = 3.2
    phi_global: float = 1.0
    alpha: float = Field(default=0.9, gt=0.0, lt=1.0)
    inertia: InertiaConfig = Field(default_factory=InertiaConfig)
    negative_reinforcement: NegativeReinforcementConfig = Field(
        default_factory=NegativeReinforcementConfig
    )
    initial_velocity: Literal["zero", "random"] = "zero"
    max_velocity: float | None = Field(default=None, gt=0.0)
    max_velocity_dimensions: list[float] | None = None
    teleport_probability: float = Field(default=0.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_canonical(self) -> SwarmConfig:
        if self.velocity == "canonical" and not self.phi_personal + self.phi_global > 4.0:
            raise ValueError("canonical velocity requires phi_personal + phi_global > 4")
        return self


class SuccessConfig(BaseModel):
    """Tolerance around the known minimum used to count successful runs."""

    delta: float = Field(default=0.1, gt=0.0)


class ExperimentSpec(BaseModel):
    """Complete experiment: objective, exactly one algorithm and its stop criteria."""

    name: str = "experiment"
    objective: ObjectiveConfig = Field(default_factory=ObjectiveConfig)
    genetic: GeneticConfig | None = None
    swarm: SwarmConfig | None = None
    stop: StopConfig = Field(default_factory=StopConfig)
    success: SuccessConfig = Field(default_factory=SuccessConfig)

    model_config = {"extra": "forbid"}

    @model_validator(mode="before")
    @classmethod
    def default_algorithm(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("genetic") is None and data.get("swarm") is None:
            data = {**data, "genetic": {}}
        return data

    @model_validator(mode="after")
    def single_algorithm(self) -> ExperimentSpec:
        if self.genetic is not None and self.swarm is not None:
            raise ValueError("Configure either 'genetic' or 'swarm', not both.")
        if self.swarm is not None and self.swarm.max_velocity_dimensions is not None:
            if len(self.swarm.max_velocity_dimensions) != self.objective.dimension:
                raise ValueError("max_velocity_dimensions must match the objective dimension")
        return self

    @property
    def algorithm(self) -> str:
        return "swarm" if self.swarm is not None else "genetic"


def load_experiment_spec(path: str | Path) -> ExperimentSpec:
    """Load a spec from YAML or JSON."""
    path = Path(path)
    data: Any
    text = path.read_text()
    if path.suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    try:
        return ExperimentSpec(**(data or {}))
    except ValidationError as exc:
        raise ValueError(f"Invalid config {path}") from exc


def save_experiment_spec(spec: ExperimentSpec, path: str | Path) -> None:
    """Persist a spec as YAML or JSON based on file suffix."""
    path = Path(path)
    payload = spec.model_dump(mode="python")
    if path.suffix in {".yaml", ".yml"}:
        path.write_text(yaml.safe_dump(payload, sort_keys=False))
    else:
        path.write_text(json.dumps(payload, indent=2))


def build_stop_checker(config: StopConfig) -> stopping.StopChecker:
    checkers: list[stopping.StopChecker] = []
    if config.threshold is not None:
        checkers.append(stopping.Threshold(config.threshold))
    if config.goal_not_change is not None:
        checkers.append(
            stopping.GoalNotChange(
                config.goal_not_change.max_iterations, config.goal_not_change.delta
            )
        )
    if config.max_iterations is not None:
        checkers.append(stopping.MaxIterations(config.max_iterations))
    if config.time_limit is not None:
        checkers.append(stopping.TimeLimit(config.time_limit))
    if config.mode == "all":
        return stopping.CompositeAll(checkers)
    return stopping.CompositeAny(checkers)


def _build_single_cross(config: GeneticConfig, rng: random.Random) -> crossover.Cross:
    if config.cross == "exp":
        return crossover.FloatCrossExp(config.dtype, rng=rng)
    if config.cross == "bitwise":
        return crossover.CrossBitwise(config.dtype, rng=rng)
    if config.cross == "mean":
        return crossover.CrossMean()
    return crossover.FloatCrossGeometricMean()


def build_genetic(
    spec: ExperimentSpec,
    goal: ObjectiveLike,
    rng: random.Random,
    loggers: list[Logger] | None = None,
) -> GeneticOptimizer:
    config = spec.genetic or GeneticConfig()
    intervals = spec.objective.intervals()
    if config.pairing == "tournament":
        pairs: pairing.Pairing = pairing.Tournament(
            config.families_count or max(1, config.population_size // 2),
            partners_count=config.partners_count,
            rounds_count=config.rounds_count,
            rng=rng,
        )
    else:
        pairs = pairing.RandomPairing(rng)
    pre_births: list[prebirth.PreBirth] = []
    if config.check_intervals:
        pre_births.append(prebirth.CheckChromoInterval(intervals))
    return GeneticOptimizer(
        goal=goal,
        stop_checker=build_stop_checker(spec.stop),
        creator=RandomCreator(config.population_size, intervals, rng=rng),
        pairing=pairs,
        cross=crossover.VecCrossAllGenes(_build_single_cross(config, rng)),
        mutation=mutations.VecMutation(
            config.mutation_probability,
            mutations.BitwiseMutation(config.mutation_bits, config.dtype, rng=rng),
            rng=rng,
        ),
        selections=[
            selection.KillNonFinite(),
            selection.LimitPopulation(config.population_size),
        ],
        pre_births=pre_births,
        loggers=loggers or [],
    )


def _build_velocity_calculator(config: SwarmConfig, rng: random.Random) -> VelocityCalculator:
    if config.velocity == "classic":
        return velocity.ClassicVelocityCalculator(config.phi_personal, config.phi_global, rng=rng)
    if config.velocity == "canonical":
        return velocity.CanonicalVelocityCalculator(
            config.phi_personal, config.phi_global, config.alpha, rng=rng
        )
    if config.velocity == "inertia":
        inertia: velocity.Inertia
        if config.inertia.kind == "linear":
            inertia = velocity.LinearInertia(
                config.inertia.w_min, config.inertia.w_max, config.inertia.t_max
            )
        else:
            inertia = velocity.ConstInertia(config.inertia.w)
        return velocity.InertiaVelocityCalculator(
            config.phi_personal, config.phi_global, inertia, rng=rng
        )
    nr = config.negative_reinforcement
    return velocity.NegativeReinforcement(
        nr.phi_best_personal,
        nr.phi_best_current,
        nr.phi_best_global,
        nr.phi_worst_personal,
        nr.phi_worst_current,
        nr.phi_worst_global,
        nr.xi,
        rng=rng,
    )


def build_swarm(
    spec: ExperimentSpec,
    goal: ObjectiveLike,
    rng: random.Random,
    loggers: list[Logger] | None = None,
) -> ParticleSwarmOptimizer:
    config = spec.swarm or SwarmConfig()
    intervals = spec.objective.intervals()
    count = config.particles_count
    if config.initial_velocity == "random":
        span = spec.objective.high - spec.objective.low
        velocity_initializer: Any = RandomVelocityInitializer(
            [(-span, span)] * spec.objective.dimension, count, rng=rng
        )
    else:
        velocity_initializer = ZeroVelocityInitializer(spec.objective.dimension, count)

    post_velocity: list[PostVelocityCalc] = []
    if config.max_velocity_dimensions is not None:
        post_velocity.append(velocity.MaxVelocityDimensions(config.max_velocity_dimensions))
    if config.max_velocity is not None:
        post_velocity.append(velocity.MaxVelocityAbs(config.max_velocity))

    post_moves: list[PostMove] = []
    if config.teleport_probability > 0.0:
        post_moves.append(postmove.RandomTeleport(intervals, config.teleport_probability, rng=rng))
    post_moves.append(postmove.MoveToBoundary(intervals))

    return ParticleSwarmOptimizer(
        goal=goal,
        stop_checker=build_stop_checker(spec.stop),
        coordinates_initializer=RandomCoordinatesInitializer(intervals, count, rng=rng),
        velocity_initializer=velocity_initializer,
        velocity_calculator=_build_velocity_calculator(config, rng),
        post_velocity_calc=post_velocity,
        post_moves=post_moves,
        loggers=loggers or [],
    )


def build_optimizer(
    spec: ExperimentSpec,
    seed: int = 0,
    call_count: CallCountData | None = None,
    loggers: list[Logger] | None = None,
) -> GeneticOptimizer | ParticleSwarmOptimizer:
    """Build the configured optimizer with every operator sharing one seeded random source."""
    rng = random.Random(seed)  # noqa: S311  # nosec B311 - not crypto
    goal: ObjectiveLike = FUNCTIONS[spec.objective.function]
    if call_count is not None:
        goal = CountingObjective(goal, call_count)
    if spec.algorithm == "swarm":
        return build_swarm(spec, goal, rng, loggers)
    return build_genetic(spec, goal, rng, loggers)


def success_predicate(spec: ExperimentSpec) -> SuccessPredicate:
    """Success when the solution lies within ``success.delta`` of the known minimum."""
    dimension = spec.objective.dimension
    return get_predicate_success_vec_solution(
        minimum_location(spec.objective.function, dimension),
        [spec.success.delta] * dimension,
    )


class ExperimentFactory:
    """Picklable trial factory for ``parallel.run_trials``."""

    def __init__(self, spec: ExperimentSpec) -> None:
        self.spec = spec

    def __call__(
        self, seed: int, call_count: CallCountData
    ) -> GeneticOptimizer | ParticleSwarmOptimizer:
        return build_optimizer(self.spec, seed=seed, call_count=call_count)
