"""Configuration dataclasses for simulations and batch runs.

All frozen dataclasses that parameterise a single simulation and a seeded
batch of simulations live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from spatial_dilemma.config.constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    HISTORY_CAPACITY,
    MUTATION_RATE,
    NUM_AGENTS,
    NUM_STEPS,
    STRATEGY_PENALTY_RATE,
    TURNS_PER_GENERATION,
)

__all__ = [
    "RunConfig",
    "RunResult",
    "SimulationConfig",
]


@dataclass(frozen=True)
class SimulationConfig:
    """Runtime knobs of one simulation.

    Immutable within a turn; the scheduler swaps in a replaced copy from its
    setters between turns.
    """

    turns_per_generation: int = TURNS_PER_GENERATION
    torus_enabled: bool = False
    strategy_penalty_enabled: bool = False
    strategy_penalty_rate: float = STRATEGY_PENALTY_RATE
    history_capacity: int = HISTORY_CAPACITY
    mutation_rate: float = MUTATION_RATE

    def __post_init__(self) -> None:
        if self.turns_per_generation < 1:
            raise ValueError("turns_per_generation must be >= 1")
        if not 0.0 <= self.strategy_penalty_rate <= 1.0:
            raise ValueError("strategy_penalty_rate must be in [0.0, 1.0]")
        if self.history_capacity < 1:
            raise ValueError("history_capacity must be >= 1")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be in [0.0, 1.0]")


@dataclass(frozen=True)
class RunConfig:
    """Seeded batch parameters for :func:`run_batch`."""

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    agent_count: int = NUM_AGENTS
    steps: int = NUM_STEPS
    n_runs: int = 1
    base_seed: int = 0
    record_agents: bool = False
    simulation: SimulationConfig = field(default_factory=SimulationConfig)

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError("grid dimensions must be >= 1")
        if self.agent_count < 0:
            raise ValueError("agent_count must be >= 0")
        if self.steps < 1:
            raise ValueError("steps must be >= 1")
        if self.n_runs < 1:
            raise ValueError("n_runs must be >= 1")


@dataclass(frozen=True)
class RunResult:
    """Top-level result for one seeded simulation run."""

    run_id: str
    seed: int
    steps: int
    final_generation: int
    final_turn: int
    total_agents: int
    average_cooperation_rate: float
    dominant_strategy: str | None
