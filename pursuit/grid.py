"""Geometry helpers for the wrap-around maze grid.

Positions wrap modulo the grid size for movement, but distances and lines
of sight are measured straight across the board without wrapping. A
pursuer on the far side of a tunnel does not "see" through it.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from collections.abc import Set as AbstractSet
from typing import TYPE_CHECKING

import tcod.los

from pursuit.types import DIRECTIONS, Direction, GridPos

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent
    from pursuit.types import AgentId


def wrap(x: int, y: int, width: int, height: int) -> GridPos:
    """Fold a possibly out-of-range coordinate back onto the grid."""
    return (x % width, y % height)


def step(pos: GridPos, direction: Direction, width: int, height: int) -> GridPos:
    """Return the cell reached by moving one step from ``pos``."""
    return wrap(pos[0] + direction[0], pos[1] + direction[1], width, height)


def distance(a: GridPos, b: GridPos) -> float:
    """Euclidean distance between two cells."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def get_line(start: GridPos, end: GridPos) -> list[GridPos]:
    """Return Bresenham line points from ``start`` to ``end``, inclusive."""
    return [(int(x), int(y)) for x, y in tcod.los.bresenham(start, end).tolist()]


def has_line_of_sight(
    walls: AbstractSet[GridPos], start: GridPos, end: GridPos
) -> bool:
    """Check whether no wall lies strictly between ``start`` and ``end``.

    The endpoints themselves are never tested, so adjacent cells always see
    each other.
    """
    if start == end:
        return True
    return not any(point in walls for point in get_line(start, end)[1:-1])


def occupied_cells(
    others: Iterable[PursuerAgent],
    exclude: AgentId,
    *,
    include_committed: bool = False,
) -> set[GridPos]:
    """Collect the cells held by every agent except ``exclude``.

    Args:
        others: All agents on the board. The deciding agent may be included.
        exclude: The deciding agent's id.
        include_committed: Also collect each agent's committed next cell.
    """
    cells: set[GridPos] = set()
    for other in others:
        if other.agent_id == exclude:
            continue
        cells.add(other.position)
        if include_committed:
            cells.add(other.destination)
    return cells


def open_neighbors(
    pos: GridPos,
    walls: AbstractSet[GridPos],
    width: int,
    height: int,
    blocked: AbstractSet[GridPos] = frozenset(),
) -> list[tuple[Direction, GridPos]]:
    """List the (direction, cell) pairs one step away that are enterable.

    Order follows ``DIRECTIONS``.
    """
    result: list[tuple[Direction, GridPos]] = []
    for direction in DIRECTIONS:
        nxt = step(pos, direction, width, height)
        if nxt in walls or nxt in blocked:
            continue
        result.append((direction, nxt))
    return result


def legal_directions(
    agent: PursuerAgent,
    walls: AbstractSet[GridPos],
    others: Sequence[PursuerAgent],
    width: int,
    height: int,
) -> list[Direction]:
    """Directions the agent may take without entering a wall or another agent.

    A cell counts as taken when another agent is standing on it or has
    already committed to moving into it.
    """
    blocked = occupied_cells(others, agent.agent_id, include_committed=True)
    return [
        direction
        for direction, _cell in open_neighbors(
            agent.position, walls, width, height, blocked
        )
    ]
