"""Game actions, game strategies and movement strategies.

Every variant set is closed; behaviour is a pure function of the variant and
the newest record against the opponent in question.
"""

from __future__ import annotations

from enum import Enum
from random import Random

from spatial_dilemma.config.constants import PAVLOV_WIN_THRESHOLD


class Action(Enum):
    """Move played in one round of the prisoner's dilemma."""

    COOPERATE = "cooperate"
    DEFECT = "defect"

    def opposite(self) -> Action:
        return Action.DEFECT if self is Action.COOPERATE else Action.COOPERATE


class StrategyType(Enum):
    """Game strategy deciding Cooperate/Defect against a given opponent."""

    ALL_COOPERATE = "all_cooperate"
    ALL_DEFECT = "all_defect"
    TIT_FOR_TAT = "tit_for_tat"
    PAVLOV = "pavlov"

    @classmethod
    def random(cls, rng: Random) -> StrategyType:
        return rng.choice(list(cls))

    def decide_action(
        self,
        last_opponent_action: Action | None,
        last_my_action: Action | None,
        last_payoff: int | None,
    ) -> Action:
        """Apply this strategy's rule to the newest record against one opponent.

        With no record against the opponent every strategy cooperates.
        """
        if last_opponent_action is None or last_my_action is None or last_payoff is None:
            return Action.COOPERATE
        if self is StrategyType.ALL_COOPERATE:
            return Action.COOPERATE
        if self is StrategyType.ALL_DEFECT:
            return Action.DEFECT
        if self is StrategyType.TIT_FOR_TAT:
            return last_opponent_action
        # Pavlov: win-stay, lose-shift
        if last_payoff >= PAVLOV_WIN_THRESHOLD:
            return last_my_action
        return last_my_action.opposite()


COMPLEX_STRATEGIES: frozenset[StrategyType] = frozenset(
    {StrategyType.TIT_FOR_TAT, StrategyType.PAVLOV}
)
"""Strategies whose selection weight is reduced when the complexity penalty is on."""


class MovementStrategy(Enum):
    """Relocation temperament of an agent."""

    EXPLORER = "explorer"
    SETTLER = "settler"
    ADAPTIVE = "adaptive"
    OPPORTUNIST = "opportunist"
    SOCIAL = "social"
    ANTISOCIAL = "antisocial"

    @classmethod
    def random(cls, rng: Random) -> MovementStrategy:
        return rng.choice(list(cls))

    @property
    def default_mobility(self) -> float:
        return _DEFAULT_MOBILITY[self]


_DEFAULT_MOBILITY: dict[MovementStrategy, float] = {
    MovementStrategy.EXPLORER: 0.8,
    MovementStrategy.SETTLER: 0.2,
    MovementStrategy.ADAPTIVE: 0.5,
    MovementStrategy.OPPORTUNIST: 0.4,
    MovementStrategy.SOCIAL: 0.6,
    MovementStrategy.ANTISOCIAL: 0.7,
}
