from __future__ import annotations

import pytest

from pursuit.agents import PursuerAgent, TargetState, WorldContext
from pursuit.ai.intel import SharedIntelligence
from pursuit.grid import (
    distance,
    get_line,
    has_line_of_sight,
    legal_directions,
    occupied_cells,
    open_neighbors,
    step,
    wrap,
)
from pursuit.types import DIRECTIONS, DOWN, LEFT, RIGHT, UP, ZERO, AgentId, opposite
from pursuit.util.clock import ManualClock
from tests.helpers import make_agent


def test_wrap_folds_negative_and_overflowing_coordinates() -> None:
    assert wrap(-1, 10, 10, 10) == (9, 0)
    assert wrap(23, -11, 10, 10) == (3, 9)


def test_step_wraps() -> None:
    assert step((0, 0), LEFT, 8, 6) == (7, 0)
    assert step((0, 5), DOWN, 8, 6) == (0, 0)


def test_distance_is_euclidean_without_wrap() -> None:
    assert distance((0, 0), (3, 4)) == pytest.approx(5.0)
    # Opposite edges are adjacent for movement, but not for distance.
    assert distance((0, 0), (9, 0)) == pytest.approx(9.0)


def test_get_line_includes_both_endpoints() -> None:
    assert get_line((0, 0), (3, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_line_of_sight_ignores_endpoints() -> None:
    walls = {(2, 0)}
    assert not has_line_of_sight(walls, (0, 0), (4, 0))
    assert has_line_of_sight(walls, (0, 0), (2, 0))
    assert has_line_of_sight(walls, (1, 0), (2, 0))
    assert has_line_of_sight(walls, (3, 3), (3, 3))


def test_open_neighbors_follow_direction_order() -> None:
    pairs = open_neighbors((1, 1), {(1, 0)}, 5, 5)
    assert [d for d, _ in pairs] == [DOWN, LEFT, RIGHT]
    assert [c for _, c in pairs] == [(1, 2), (0, 1), (2, 1)]


def test_occupied_cells_skips_the_excluded_agent() -> None:
    me = make_agent(0, (5, 5), next_position=(5, 6))
    other = make_agent(1, (1, 1), next_position=(1, 2))
    assert occupied_cells([me, other], AgentId(0)) == {(1, 1)}
    assert occupied_cells([me, other], AgentId(0), include_committed=True) == {
        (1, 1),
        (1, 2),
    }


def test_legal_directions_block_walls_and_claimed_cells() -> None:
    me = make_agent(0, (5, 5))
    standing = make_agent(1, (5, 4))
    moving = make_agent(2, (3, 5), next_position=(4, 5))
    walls = {(6, 5)}
    assert legal_directions(me, walls, [me, standing, moving], 20, 20) == [DOWN]


def test_direction_constants() -> None:
    assert DIRECTIONS == (UP, DOWN, LEFT, RIGHT)
    assert ZERO not in DIRECTIONS
    assert opposite(UP) == DOWN
    assert opposite(LEFT) == RIGHT


def test_agent_defaults() -> None:
    agent = PursuerAgent(AgentId(2), (4, 4))
    assert agent.next_position == (4, 4)
    assert agent.name == "Ghost 3"

    agent.commit((5, 4))
    agent.arrive()
    assert agent.position == (5, 4)


def test_agent_destination_falls_back_to_current_cell() -> None:
    agent = PursuerAgent(AgentId(0), (2, 2), next_position=(2, 3))
    assert agent.destination == (2, 3)

    agent.next_position = None
    assert agent.destination == (2, 2)
    assert occupied_cells([agent], AgentId(9), include_committed=True) == {(2, 2)}

    agent.arrive()
    assert agent.position == (2, 2)


def test_target_is_moving() -> None:
    assert not TargetState((1, 1)).is_moving
    assert TargetState((1, 1), RIGHT).is_moving


def test_world_rejects_empty_grid() -> None:
    with pytest.raises(ValueError):
        WorldContext(0, 10, SharedIntelligence(), ManualClock())


def test_world_now_reads_clock() -> None:
    clock = ManualClock(start_ms=500.0)
    world = WorldContext(10, 10, SharedIntelligence(), clock)
    clock.advance(250.0)
    assert world.now() == 750.0
