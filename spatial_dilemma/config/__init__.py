"""Configuration layer: constants and typed config dataclasses."""

from spatial_dilemma.config.constants import (
    EXPECTED_PAYOFF,
    GRID_HEIGHT,
    GRID_WIDTH,
    HISTORY_CAPACITY,
    MUTATION_RATE,
    NUM_AGENTS,
    NUM_STEPS,
    STRATEGY_PENALTY_RATE,
    TURNS_PER_GENERATION,
)
from spatial_dilemma.config.types import RunConfig, RunResult, SimulationConfig

__all__ = [
    "EXPECTED_PAYOFF",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "HISTORY_CAPACITY",
    "MUTATION_RATE",
    "NUM_AGENTS",
    "NUM_STEPS",
    "RunConfig",
    "RunResult",
    "STRATEGY_PENALTY_RATE",
    "SimulationConfig",
    "TURNS_PER_GENERATION",
]
