"""Tests for spatial_dilemma.simulation.statistics module."""

from __future__ import annotations

import pytest

from spatial_dilemma.domain.agent import Agent
from spatial_dilemma.domain.position import Position
from spatial_dilemma.domain.strategy import Action, MovementStrategy, StrategyType
from spatial_dilemma.simulation.statistics import SimulationStatistics, mean


def _agents() -> list[Agent]:
    a = Agent(0, Position(0, 0), StrategyType.PAVLOV, 0.2, MovementStrategy.SETTLER)
    b = Agent(1, Position(1, 0), StrategyType.PAVLOV, 0.6, MovementStrategy.EXPLORER, score=0)
    c = Agent(2, Position(2, 0), StrategyType.ALL_DEFECT, 1.0, MovementStrategy.SETTLER, score=1)
    a.add_game_result(1, Action.COOPERATE, Action.COOPERATE, 3)
    c.add_game_result(1, Action.DEFECT, Action.COOPERATE, 5)
    return [a, b, c]


class TestMean:
    def test_empty_is_zero(self) -> None:
        assert mean([]) == 0.0

    def test_average(self) -> None:
        assert mean([1.0, 2.0, 6.0]) == pytest.approx(3.0)


class TestCalculate:
    def test_counts_cover_every_variant(self) -> None:
        stats = SimulationStatistics.calculate(_agents(), generation=2, turn=7)
        assert stats.generation == 2
        assert stats.turn == 7
        assert stats.total_agents == 3
        assert stats.strategy_counts == {
            "all_cooperate": 0,
            "all_defect": 1,
            "tit_for_tat": 0,
            "pavlov": 2,
        }
        assert set(stats.movement_strategy_counts) == {m.value for m in MovementStrategy}
        assert stats.movement_strategy_counts["settler"] == 2
        assert stats.movement_strategy_counts["explorer"] == 1
        assert sum(stats.movement_strategy_counts.values()) == 3

    def test_averages(self) -> None:
        stats = SimulationStatistics.calculate(_agents())
        # cooperation rates: 1.0, 0.5 (no history), 0.0
        assert stats.average_cooperation_rate == pytest.approx(0.5)
        assert stats.average_mobility == pytest.approx(0.6)
        # scores: 0 + 3, 0, 1 + 5
        assert stats.average_score == pytest.approx(3.0)

    def test_empty_population(self) -> None:
        stats = SimulationStatistics.calculate([])
        assert stats.total_agents == 0
        assert stats.average_cooperation_rate == 0.0
        assert stats.average_mobility == 0.0
        assert stats.dominant_strategy() is None
        assert stats.strategy_percentage(StrategyType.PAVLOV) == 0.0


class TestDerivedViews:
    def test_percentages(self) -> None:
        stats = SimulationStatistics.calculate(_agents())
        assert stats.strategy_percentage(StrategyType.PAVLOV) == pytest.approx(200 / 3)
        assert stats.strategy_percentage(StrategyType.TIT_FOR_TAT) == 0.0
        assert stats.movement_strategy_percentage(MovementStrategy.SETTLER) == pytest.approx(
            200 / 3
        )

    def test_dominant_strategy(self) -> None:
        assert SimulationStatistics.calculate(_agents()).dominant_strategy() == "pavlov"

    def test_dominant_strategy_tie_uses_declaration_order(self) -> None:
        agents = [
            Agent(0, Position(0, 0), StrategyType.PAVLOV, 0.5),
            Agent(1, Position(1, 0), StrategyType.ALL_DEFECT, 0.5),
        ]
        assert SimulationStatistics.calculate(agents).dominant_strategy() == "all_defect"

    def test_is_frozen(self) -> None:
        stats = SimulationStatistics.calculate(_agents())
        with pytest.raises(AttributeError):
            stats.turn = 3  # type: ignore[misc]
