"""Tests for spatial_dilemma.domain.strategy module."""

from __future__ import annotations

from random import Random

import pytest

from spatial_dilemma.domain.strategy import (
    COMPLEX_STRATEGIES,
    Action,
    MovementStrategy,
    StrategyType,
)

C, D = Action.COOPERATE, Action.DEFECT


class TestAction:
    def test_opposite(self) -> None:
        assert C.opposite() is D
        assert D.opposite() is C


class TestDecideAction:
    @pytest.mark.parametrize("strategy", list(StrategyType))
    def test_first_encounter_cooperates(self, strategy: StrategyType) -> None:
        assert strategy.decide_action(None, None, None) is C

    def test_all_cooperate_after_betrayal(self) -> None:
        assert StrategyType.ALL_COOPERATE.decide_action(D, C, 0) is C

    def test_all_defect_after_first_record(self) -> None:
        assert StrategyType.ALL_DEFECT.decide_action(C, D, 5) is D
        assert StrategyType.ALL_DEFECT.decide_action(C, C, 3) is D

    def test_tit_for_tat_mirrors_defection(self) -> None:
        assert StrategyType.TIT_FOR_TAT.decide_action(D, C, 0) is D

    def test_tit_for_tat_mirrors_cooperation(self) -> None:
        assert StrategyType.TIT_FOR_TAT.decide_action(C, D, 5) is C

    @pytest.mark.parametrize(
        ("my_last", "payoff", "expected"),
        [
            (C, 3, C),  # mutual cooperation: stay
            (D, 5, D),  # successful exploitation: stay
            (C, 0, D),  # exploited: shift
            (D, 1, C),  # mutual defection: shift
        ],
    )
    def test_pavlov_win_stay_lose_shift(
        self, my_last: Action, payoff: int, expected: Action
    ) -> None:
        opponent_last = C if payoff in (3, 5) else D
        assert StrategyType.PAVLOV.decide_action(opponent_last, my_last, payoff) is expected


class TestVariantSets:
    def test_complex_strategies_are_memory_based_pair(self) -> None:
        assert COMPLEX_STRATEGIES == {StrategyType.TIT_FOR_TAT, StrategyType.PAVLOV}

    def test_random_strategy_is_member(self) -> None:
        rng = Random(0)
        for _ in range(20):
            assert StrategyType.random(rng) in StrategyType
            assert MovementStrategy.random(rng) in MovementStrategy

    def test_default_mobility_in_unit_interval(self) -> None:
        for movement in MovementStrategy:
            assert 0.0 <= movement.default_mobility <= 1.0
        assert MovementStrategy.ADAPTIVE.default_mobility == 0.5
