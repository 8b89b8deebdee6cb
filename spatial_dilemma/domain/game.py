"""Fixed prisoner's-dilemma payoff matrix and pairwise game resolution."""

from __future__ import annotations

from spatial_dilemma.config.constants import (
    PAYOFF_MUTUAL_COOPERATION,
    PAYOFF_MUTUAL_DEFECTION,
    PAYOFF_SUCKER,
    PAYOFF_TEMPTATION,
)
from spatial_dilemma.domain.agent import Agent
from spatial_dilemma.domain.strategy import Action

PAYOFF_MATRIX: dict[tuple[Action, Action], tuple[int, int]] = {
    (Action.COOPERATE, Action.COOPERATE): (PAYOFF_MUTUAL_COOPERATION, PAYOFF_MUTUAL_COOPERATION),
    (Action.COOPERATE, Action.DEFECT): (PAYOFF_SUCKER, PAYOFF_TEMPTATION),
    (Action.DEFECT, Action.COOPERATE): (PAYOFF_TEMPTATION, PAYOFF_SUCKER),
    (Action.DEFECT, Action.DEFECT): (PAYOFF_MUTUAL_DEFECTION, PAYOFF_MUTUAL_DEFECTION),
}


def payoff(action1: Action, action2: Action) -> tuple[int, int]:
    """Return ``(payoff1, payoff2)`` for the given pair of actions."""
    return PAYOFF_MATRIX[(action1, action2)]


def play_game(agent1: Agent, agent2: Agent) -> tuple[Action, Action]:
    """Play one round between two agents and record it on both.

    Both actions are decided before either history changes, so neither agent
    sees the round it is about to play.
    """
    action1 = agent1.decide_action(agent2.agent_id)
    action2 = agent2.decide_action(agent1.agent_id)
    payoff1, payoff2 = payoff(action1, action2)
    agent1.add_game_result(agent2.agent_id, action1, action2, payoff1)
    agent2.add_game_result(agent1.agent_id, action2, action1, payoff2)
    return action1, action2
