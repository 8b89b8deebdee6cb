"""Centralized domain constants for the spatial dilemma simulation.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_WIDTH = 50
"""Default grid width in cells."""

GRID_HEIGHT = 50
"""Default grid height in cells."""

NUM_AGENTS = 500
"""Default number of agents per simulation."""

NUM_STEPS = 300
"""Default number of turns for a batch run."""

TURNS_PER_GENERATION = 100
"""Default number of turns between two reproduction cycles."""

HISTORY_CAPACITY = 10
"""Number of game records an agent retains across all opponents."""

PAYOFF_MUTUAL_COOPERATION = 3
"""Reward payoff when both agents cooperate."""

PAYOFF_SUCKER = 0
"""Payoff of a cooperator exploited by a defector."""

PAYOFF_TEMPTATION = 5
"""Payoff of a defector exploiting a cooperator."""

PAYOFF_MUTUAL_DEFECTION = 1
"""Punishment payoff when both agents defect."""

EXPECTED_PAYOFF = 2.0
"""Baseline payoff subtracted from the mean retained payoff in recent performance."""

PAVLOV_WIN_THRESHOLD = 3
"""Payoff at or above which Pavlov repeats its previous action."""

EMPTY_HISTORY_COOPERATION_RATE = 0.5
"""Cooperation rate reported by an agent that has not played yet."""

MUTATION_RATE = 0.05
"""Per-offspring probability of mutation."""

STRATEGY_MUTATION_PROBABILITY = 0.5
"""Chance a triggered mutation replaces the game strategy."""

MOVEMENT_MUTATION_PROBABILITY = 0.3
"""Chance a triggered mutation replaces the movement strategy."""

MOBILITY_MUTATION_DELTA = 0.2
"""Half-width of the uniform mobility perturbation."""

MOVEMENT_INHERITANCE_PROBABILITY = 0.75
"""Chance a child inherits a parent's movement strategy instead of a random one."""

STRATEGY_PENALTY_RATE = 0.15
"""Default selection-weight penalty for memory-based strategies."""

PLACEMENT_ATTEMPTS_PER_AGENT = 10
"""Random placement draws allowed per requested agent at initialization."""

POSITION_ATTEMPTS_PER_AGENT = 10
"""Non-colliding position draws allowed per offspring before collisions are accepted."""

FLUSH_THRESHOLD = 8_192
"""Flush buffered log rows to Parquet once this in-memory row count is reached."""
