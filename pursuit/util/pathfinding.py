from __future__ import annotations

from collections import deque
from collections.abc import Set as AbstractSet

from pursuit.constants.ai import AIConstants as AI
from pursuit.types import DIRECTIONS, Direction, GridPos


def next_step_toward(
    start: GridPos,
    target: GridPos,
    walls: AbstractSet[GridPos],
    avoid: AbstractSet[GridPos],
    width: int,
    height: int,
    *,
    max_length: int = AI.MAX_PATH_LENGTH,
) -> Direction | None:
    """Return the first step of the shortest route found to target.

    Breadth-first search over the wrap-around grid. Neighbours are expanded
    in ``DIRECTIONS`` order, so when several shortest routes exist the one
    whose first step comes earliest in that order wins.

    Only the first direction is returned, not the whole path: callers
    re-plan every decision tick anyway.

    Args:
        start: The searching agent's cell.
        target: The cell to reach.
        walls: Permanently impassable cells.
        avoid: Cells that are impassable for this search only (typically
            the other agents' cells). A target inside ``avoid`` is
            unreachable.
        width: Grid width; x coordinates wrap modulo this.
        height: Grid height; y coordinates wrap modulo this.
        max_length: Depth of the full search. Past it a branch stops
            splitting: each cell queues only its first open neighbour, so
            long corridors are still followed but side turns are dropped.

    Returns:
        The first direction of the route, or ``None`` when start equals
        target or the search runs out of cells without reaching it.
    """
    if start == target:
        return None

    # Each entry: (cell, first step taken from start, steps so far)
    queue: deque[tuple[GridPos, Direction | None, int]] = deque([(start, None, 0)])
    visited: set[GridPos] = {start}

    while queue:
        (x, y), first_step, steps = queue.popleft()
        for direction in DIRECTIONS:
            nxt = ((x + direction[0]) % width, (y + direction[1]) % height)
            if nxt in visited or nxt in walls or nxt in avoid:
                continue

            step = first_step if first_step is not None else direction
            if nxt == target:
                return step

            visited.add(nxt)
            queue.append((nxt, step, steps + 1))
            if steps + 1 > max_length:
                break

    return None
