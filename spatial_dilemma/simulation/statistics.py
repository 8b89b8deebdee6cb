"""Population statistics derived on demand from the current agents."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from spatial_dilemma.domain.agent import Agent
from spatial_dilemma.domain.strategy import MovementStrategy, StrategyType


def mean(values: list[float]) -> float:
    """Return the arithmetic mean, or 0.0 for no values."""
    if not values:
        return 0.0
    return sum(values) / len(values)


@dataclass(frozen=True)
class SimulationStatistics:
    """Read-only population summary at one point in time."""

    generation: int = 0
    turn: int = 0
    total_agents: int = 0
    strategy_counts: dict[str, int] = field(default_factory=dict)
    movement_strategy_counts: dict[str, int] = field(default_factory=dict)
    average_cooperation_rate: float = 0.0
    average_mobility: float = 0.0
    average_score: float = 0.0

    @classmethod
    def calculate(
        cls, agents: Iterable[Agent], generation: int = 0, turn: int = 0
    ) -> SimulationStatistics:
        population = list(agents)
        strategy_counts = {strategy.value: 0 for strategy in StrategyType}
        movement_counts = {strategy.value: 0 for strategy in MovementStrategy}
        for agent in population:
            strategy_counts[agent.strategy.value] += 1
            movement_counts[agent.movement_strategy.value] += 1
        return cls(
            generation=generation,
            turn=turn,
            total_agents=len(population),
            strategy_counts=strategy_counts,
            movement_strategy_counts=movement_counts,
            average_cooperation_rate=mean([a.cooperation_rate() for a in population]),
            average_mobility=mean([a.mobility for a in population]),
            average_score=mean([float(a.score) for a in population]),
        )

    def strategy_percentage(self, strategy: StrategyType) -> float:
        if self.total_agents == 0:
            return 0.0
        return self.strategy_counts.get(strategy.value, 0) / self.total_agents * 100.0

    def movement_strategy_percentage(self, strategy: MovementStrategy) -> float:
        if self.total_agents == 0:
            return 0.0
        return self.movement_strategy_counts.get(strategy.value, 0) / self.total_agents * 100.0

    def dominant_strategy(self) -> str | None:
        """Most common game strategy; ties resolve to declaration order."""
        if self.total_agents == 0:
            return None
        return max(self.strategy_counts, key=lambda name: self.strategy_counts[name])
