"""Tests for the interception rules: predict, flank and block."""

from __future__ import annotations

import pytest

from pursuit.agents import TargetState
from pursuit.ai.behaviors import BlockEscapeRoute, FlankPacmanRule, PredictPacmanRule
from pursuit.types import DOWN, LEFT, RIGHT, UP
from tests.helpers import make_agent, make_controller, make_world


class TestPredictPacmanRule:
    def test_predict_wraps(self) -> None:
        rule = PredictPacmanRule(steps=3)
        assert rule.predict(TargetState((5, 5), RIGHT), 10, 10) == (8, 5)
        assert rule.predict(TargetState((8, 5), RIGHT), 10, 10) == (1, 5)
        assert rule.predict(TargetState((5, 1), UP), 10, 10) == (5, 8)

    def test_heads_for_predicted_cell(self) -> None:
        rule = PredictPacmanRule(steps=3, priority=2.5)
        agent = make_agent(0, (2, 5))
        controller = make_controller([rule], agent=agent, world=make_world())

        vote = rule.evaluate(controller, set(), TargetState((5, 5), RIGHT), [agent])

        assert vote.direction == RIGHT
        # Six cells away: 10 / 7 caps at 1.
        assert vote.strength == pytest.approx(2.5)

    def test_strength_falls_off_with_distance(self) -> None:
        rule = PredictPacmanRule(steps=1, priority=1.0)
        agent = make_agent(0, (0, 5))
        controller = make_controller([rule], agent=agent, world=make_world())

        vote = rule.evaluate(
            controller, set(), TargetState((11, 5), RIGHT), [agent]
        )

        # The route wraps left, but strength uses the straight distance.
        assert vote.direction == LEFT
        assert vote.strength == pytest.approx(10 / 13)

    def test_stationary_target_abstains(self) -> None:
        rule = PredictPacmanRule()
        agent = make_agent(0, (2, 5))
        controller = make_controller([rule], agent=agent, world=make_world())

        vote = rule.evaluate(controller, set(), TargetState((5, 5)), [agent])

        assert not vote.is_cast

    def test_predicted_wall_abstains(self) -> None:
        rule = PredictPacmanRule(steps=3)
        agent = make_agent(0, (2, 5))
        controller = make_controller([rule], agent=agent, world=make_world())

        target = TargetState((5, 5), RIGHT)
        vote = rule.evaluate(controller, {(8, 5)}, target, [agent])

        assert not vote.is_cast


class TestFlankPacmanRule:
    def test_flank_points_are_perpendicular_to_heading(self) -> None:
        rule = FlankPacmanRule()
        assert rule.flank_points(TargetState((5, 5), RIGHT), 20, 20) == [
            (8, 7),
            (8, 3),
        ]
        assert rule.flank_points(TargetState((5, 5), UP), 20, 20) == [
            (7, 2),
            (3, 2),
        ]

    def test_heads_for_first_flank_point(self) -> None:
        rule = FlankPacmanRule(priority=2.0)
        agent = make_agent(0, (8, 9))
        controller = make_controller([rule], agent=agent, world=make_world())

        vote = rule.evaluate(controller, set(), TargetState((5, 5), RIGHT), [agent])

        assert vote.direction == UP
        assert vote.strength == pytest.approx(2.0)

    def test_falls_back_to_second_flank_point(self) -> None:
        rule = FlankPacmanRule(priority=2.0)
        agent = make_agent(0, (8, 9))
        controller = make_controller([rule], agent=agent, world=make_world())

        vote = rule.evaluate(
            controller, {(8, 7)}, TargetState((5, 5), RIGHT), [agent]
        )

        assert vote.direction == UP
        assert vote.strength == pytest.approx(min(1.0, 5 / 6.1) * 2.0)

    def test_stationary_target_abstains(self) -> None:
        rule = FlankPacmanRule()
        agent = make_agent(0, (8, 9))
        controller = make_controller([rule], agent=agent, world=make_world())

        vote = rule.evaluate(controller, set(), TargetState((5, 5)), [agent])

        assert not vote.is_cast


class TestBlockEscapeRoute:
    def test_first_open_exit_is_chosen(self) -> None:
        rule = BlockEscapeRoute()
        agent = make_agent(0, (5, 1))
        controller = make_controller([rule], agent=agent, world=make_world())

        exit_cell = rule.choose_exit(controller, set(), TargetState((5, 5)), [agent])

        assert exit_cell == (5, 4)

    def test_exits_claimed_by_others_are_skipped(self) -> None:
        rule = BlockEscapeRoute()
        agent = make_agent(0, (5, 1), next_position=(5, 2))
        mover = make_agent(1, (5, 3), next_position=(5, 4))
        controller = make_controller([rule], agent=agent, world=make_world())

        exit_cell = rule.choose_exit(
            controller, set(), TargetState((5, 5)), [agent, mover]
        )

        assert exit_cell == (5, 6)

    def test_dead_end_is_not_worth_blocking(self) -> None:
        rule = BlockEscapeRoute()
        agent = make_agent(0, (5, 1))
        controller = make_controller([rule], agent=agent, world=make_world())
        walls = {(5, 4), (4, 5), (6, 5)}

        vote = rule.evaluate(controller, walls, TargetState((5, 5)), [agent])

        assert not vote.is_cast

    def test_votes_toward_exit(self) -> None:
        rule = BlockEscapeRoute(priority=2.2)
        agent = make_agent(0, (5, 1))
        controller = make_controller([rule], agent=agent, world=make_world())

        vote = rule.evaluate(controller, set(), TargetState((5, 5)), [agent])

        assert vote.direction == DOWN
        assert vote.strength == pytest.approx(2.2)

    def test_all_exits_claimed_abstains(self) -> None:
        rule = BlockEscapeRoute()
        agent = make_agent(0, (0, 0))
        claimers = [
            make_agent(i + 1, (0, 9), next_position=cell)
            for i, cell in enumerate([(5, 4), (5, 6), (4, 5), (6, 5)])
        ]
        controller = make_controller([rule], agent=agent, world=make_world())

        target = TargetState((5, 5))
        vote = rule.evaluate(controller, set(), target, [agent, *claimers])

        assert not vote.is_cast
