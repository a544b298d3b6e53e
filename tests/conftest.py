from dataclasses import dataclass, field

import pytest

from heuristic_optimizer.core import GoalFromFunction, Solution
from heuristic_optimizer.dsl import ExperimentSpec
from heuristic_optimizer.loggers import Logger
from heuristic_optimizer.population import Population


@dataclass
class FakeState:
    iteration: int = 0
    best: Solution | None = None

    def get_best_solution(self) -> Solution | None:
        return self.best


@dataclass
class RecordingLogger(Logger):
    events: list[str] = field(default_factory=list)
    sizes: list[int] = field(default_factory=list)
    best_scores: list[float] = field(default_factory=list)

    def start(self, state) -> None:
        self.events.append("start")

    def resume(self, state) -> None:
        self.events.append("resume")

    def next_iteration(self, state) -> None:
        self.events.append("next_iteration")
        self.sizes.append(len(state))
        best = state.get_best_solution()
        if best is not None:
            self.best_scores.append(best[1])

    def finish(self, state) -> None:
        self.events.append("finish")


@pytest.fixture()
def score_population() -> Population:
    """Population whose candidates are plain numbers scored as themselves."""
    return Population(GoalFromFunction(float))


@pytest.fixture()
def small_spec() -> ExperimentSpec:
    return ExperimentSpec(
        name="tiny-paraboloid",
        objective={"function": "paraboloid", "dimension": 2, "low": -10.0, "high": 10.0},
        genetic={"population_size": 20, "families_count": 10},
        stop={"max_iterations": 10, "threshold": None},
    )


@pytest.fixture()
def fake_state() -> type[FakeState]:
    return FakeState


@pytest.fixture()
def recorder() -> RecordingLogger:
    return RecordingLogger()
