"""Tests for IntelligentWanderRule and WanderRule."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from pursuit.agents import TargetState
from pursuit.ai.behaviors import IntelligentWanderRule, WanderRule
from pursuit.types import DOWN, LEFT, UP, Millis
from tests.helpers import FixedRNG, make_agent, make_controller, make_world

TARGET = TargetState((0, 0))


def test_first_move_prefers_earliest_direction_among_new_cells() -> None:
    rule = IntelligentWanderRule(priority=0.8, rng=FixedRNG(0.0))
    agent = make_agent(0, (5, 5))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))

    vote = rule.evaluate(controller, set(), TARGET, [agent])

    assert vote.direction == UP
    assert vote.strength == 0.8
    assert list(rule.position_history) == [(5, 5)]
    assert list(rule.direction_history) == [UP]


def test_reversing_and_revisiting_are_penalised() -> None:
    rule = IntelligentWanderRule(rng=FixedRNG(0.0))
    agent = make_agent(0, (5, 5))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))

    rule.evaluate(controller, set(), TARGET, [agent])
    agent.commit((5, 4))
    agent.arrive()

    ranked = rule.score_candidates(
        [(UP, (5, 3)), (DOWN, (5, 5))], controller.world.now()
    )
    assert [c.direction for c in ranked] == [UP, DOWN]
    # DOWN: new cell (+0.3), reverses UP (-0.4), just left it (-0.3).
    assert ranked[1].score == pytest.approx(-0.4)


def test_runner_up_taken_on_high_roll() -> None:
    roll = FixedRNG(0.0)
    rule = IntelligentWanderRule(rng=roll)
    agent = make_agent(0, (5, 5))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))

    rule.evaluate(controller, set(), TARGET, [agent])
    agent.commit((5, 4))
    agent.arrive()
    roll.value = 0.9
    vote = rule.evaluate(controller, set(), TARGET, [agent])

    # UP, LEFT and RIGHT tie on +0.3; the runner-up is LEFT.
    assert vote.direction == LEFT


def test_default_stream_drives_choice() -> None:
    import pursuit.ai.behaviors.wander as wander_module

    rule = IntelligentWanderRule()
    agent = make_agent(0, (5, 5))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))

    with patch.object(wander_module._explore_rng, "random", return_value=1.0):
        vote = rule.evaluate(controller, set(), TARGET, [agent])

    assert vote.direction == DOWN


def test_stale_cells_get_a_smaller_bonus() -> None:
    rule = IntelligentWanderRule()
    rule.first_seen[(1, 0)] = Millis(0.0)
    rule.first_seen[(2, 0)] = Millis(0.0)

    ranked = rule.score_candidates([(UP, (1, 0))], Millis(10_000.0))
    assert ranked[0].score == 0.0

    ranked = rule.score_candidates([(UP, (2, 0))], Millis(10_001.0))
    assert ranked[0].score == pytest.approx(0.2)


def test_cells_held_by_other_agents_are_skipped() -> None:
    rule = IntelligentWanderRule(rng=FixedRNG(0.0))
    agent = make_agent(0, (5, 5))
    standing = make_agent(1, (5, 4))
    moving = make_agent(2, (3, 6), next_position=(5, 6))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))

    vote = rule.evaluate(controller, set(), TARGET, [agent, standing, moving])

    assert vote.direction == LEFT


def test_boxed_in_abstains() -> None:
    rule = IntelligentWanderRule()
    agent = make_agent(0, (5, 5))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))
    walls = {(5, 4), (5, 6), (4, 5), (6, 5)}

    assert not rule.evaluate(controller, walls, TARGET, [agent]).is_cast


def test_wander_picks_among_open_moves() -> None:
    rule = WanderRule(priority=0.5, rng=FixedRNG(index=0))
    agent = make_agent(0, (5, 5))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))

    vote = rule.evaluate(controller, {(5, 4)}, TARGET, [agent])

    assert vote.direction == DOWN
    assert vote.strength == 0.5


def test_wander_boxed_in_abstains() -> None:
    rule = WanderRule()
    agent = make_agent(0, (5, 5))
    controller = make_controller([rule], agent=agent, world=make_world(10, 10))
    walls = {(5, 4), (5, 6), (4, 5), (6, 5)}

    assert not rule.evaluate(controller, walls, TARGET, [agent]).is_cast
