"""Domain layer: positions, strategies, agents, grid, and game resolution."""

from spatial_dilemma.domain.agent import (
    Agent,
    GameHistory,
    GameRecord,
    crossover,
    mutate,
    random_agent,
)
from spatial_dilemma.domain.game import PAYOFF_MATRIX, payoff, play_game
from spatial_dilemma.domain.grid import PositionGrid
from spatial_dilemma.domain.position import Position
from spatial_dilemma.domain.snapshot import AgentSnapshot, Snapshot
from spatial_dilemma.domain.strategy import (
    COMPLEX_STRATEGIES,
    Action,
    MovementStrategy,
    StrategyType,
)

__all__ = [
    "Action",
    "Agent",
    "AgentSnapshot",
    "COMPLEX_STRATEGIES",
    "GameHistory",
    "GameRecord",
    "MovementStrategy",
    "PAYOFF_MATRIX",
    "Position",
    "PositionGrid",
    "Snapshot",
    "StrategyType",
    "crossover",
    "mutate",
    "payoff",
    "play_game",
    "random_agent",
]
