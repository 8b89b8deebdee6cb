"""Agents, their bounded game history, and the genetic operators on them."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from random import Random

from spatial_dilemma.config.constants import (
    EMPTY_HISTORY_COOPERATION_RATE,
    EXPECTED_PAYOFF,
    HISTORY_CAPACITY,
    MOBILITY_MUTATION_DELTA,
    MOVEMENT_INHERITANCE_PROBABILITY,
    MOVEMENT_MUTATION_PROBABILITY,
    MUTATION_RATE,
    STRATEGY_MUTATION_PROBABILITY,
)
from spatial_dilemma.domain.position import Position
from spatial_dilemma.domain.snapshot import AgentSnapshot
from spatial_dilemma.domain.strategy import Action, MovementStrategy, StrategyType


def clamp_unit(value: float) -> float:
    """Clamp *value* into [0.0, 1.0]."""
    return min(max(value, 0.0), 1.0)


@dataclass(frozen=True)
class GameRecord:
    """Outcome of one game from the recording agent's point of view."""

    opponent_id: int
    my_action: Action
    opponent_action: Action
    payoff: int


class GameHistory:
    """Sliding window of the most recent games across all opponents.

    Capacity is shared by every opponent: once full, appending evicts the
    oldest record overall.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._records: deque[GameRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._records.maxlen or 0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[GameRecord]:
        return iter(self._records)

    def add_game(
        self, opponent_id: int, my_action: Action, opponent_action: Action, payoff: int
    ) -> None:
        self._records.append(GameRecord(opponent_id, my_action, opponent_action, payoff))

    def last_against(self, opponent_id: int) -> GameRecord | None:
        """Return the newest retained record against *opponent_id*, if any."""
        for record in reversed(self._records):
            if record.opponent_id == opponent_id:
                return record
        return None

    def cooperation_rate(self) -> float:
        if not self._records:
            return EMPTY_HISTORY_COOPERATION_RATE
        cooperations = sum(1 for r in self._records if r.my_action is Action.COOPERATE)
        return cooperations / len(self._records)

    def recent_performance(self) -> float:
        """Mean retained payoff relative to the expected payoff baseline."""
        if not self._records:
            return 0.0
        return sum(r.payoff for r in self._records) / len(self._records) - EXPECTED_PAYOFF


@dataclass
class Agent:
    """A player occupying one grid cell.

    ``position`` mirrors the grid index and must only be changed through
    :meth:`PositionGrid.move_agent`.
    """

    agent_id: int
    position: Position
    strategy: StrategyType
    mobility: float
    movement_strategy: MovementStrategy = MovementStrategy.ADAPTIVE
    score: int = 0
    history: GameHistory = field(default_factory=GameHistory)

    def __post_init__(self) -> None:
        self.mobility = clamp_unit(self.mobility)

    def decide_action(self, opponent_id: int) -> Action:
        record = self.history.last_against(opponent_id)
        if record is None:
            return self.strategy.decide_action(None, None, None)
        return self.strategy.decide_action(record.opponent_action, record.my_action, record.payoff)

    def add_game_result(
        self, opponent_id: int, my_action: Action, opponent_action: Action, payoff: int
    ) -> None:
        self.history.add_game(opponent_id, my_action, opponent_action, payoff)
        self.score += payoff

    def cooperation_rate(self) -> float:
        return self.history.cooperation_rate()

    def recent_performance(self) -> float:
        return self.history.recent_performance()

    def snapshot(self) -> AgentSnapshot:
        return AgentSnapshot(
            agent_id=self.agent_id,
            x=self.position.x,
            y=self.position.y,
            strategy=self.strategy.value,
            movement_strategy=self.movement_strategy.value,
            mobility=self.mobility,
            score=self.score,
            cooperation_rate=self.cooperation_rate(),
        )


def random_agent(
    agent_id: int,
    position: Position,
    rng: Random,
    history_capacity: int = HISTORY_CAPACITY,
) -> Agent:
    """Create an agent with random strategies and a jittered default mobility."""
    strategy = StrategyType.random(rng)
    movement_strategy = MovementStrategy.random(rng)
    jitter = rng.uniform(-MOBILITY_MUTATION_DELTA, MOBILITY_MUTATION_DELTA)
    return Agent(
        agent_id=agent_id,
        position=position,
        strategy=strategy,
        mobility=movement_strategy.default_mobility + jitter,
        movement_strategy=movement_strategy,
        history=GameHistory(history_capacity),
    )


def crossover(
    parent1: Agent,
    parent2: Agent,
    agent_id: int,
    position: Position,
    rng: Random,
    history_capacity: int = HISTORY_CAPACITY,
) -> Agent:
    """Breed a child with a fresh history and zero score.

    The strategy comes from either parent with equal chance and mobility is
    the parents' mean. The movement strategy is inherited from a random
    parent, or drawn at random with probability 1 - 0.75.
    """
    strategy = parent1.strategy if rng.random() < 0.5 else parent2.strategy
    mobility = (parent1.mobility + parent2.mobility) / 2.0
    if rng.random() < MOVEMENT_INHERITANCE_PROBABILITY:
        movement_strategy = (
            parent1.movement_strategy if rng.random() < 0.5 else parent2.movement_strategy
        )
    else:
        movement_strategy = MovementStrategy.random(rng)
    return Agent(
        agent_id=agent_id,
        position=position,
        strategy=strategy,
        mobility=mobility,
        movement_strategy=movement_strategy,
        history=GameHistory(history_capacity),
    )


def mutate(agent: Agent, rng: Random, rate: float = MUTATION_RATE) -> bool:
    """Mutate *agent* in place with probability *rate*; return whether it mutated."""
    if rng.random() >= rate:
        return False
    if rng.random() < STRATEGY_MUTATION_PROBABILITY:
        agent.strategy = StrategyType.random(rng)
    delta = rng.uniform(-MOBILITY_MUTATION_DELTA, MOBILITY_MUTATION_DELTA)
    agent.mobility = clamp_unit(agent.mobility + delta)
    if rng.random() < MOVEMENT_MUTATION_PROBABILITY:
        agent.movement_strategy = MovementStrategy.random(rng)
    return True
