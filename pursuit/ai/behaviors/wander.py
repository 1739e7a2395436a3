"""Wander behaviors: IntelligentWanderRule and WanderRule.

IntelligentWanderRule explores: it remembers where it has been recently,
dislikes doubling back, and is drawn to cells it has never looked at. A
little randomness between the two best candidates keeps pursuers from
locking into identical loops.

WanderRule is the plain fallback - any open neighbour, uniformly at random.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pursuit.ai.rules import Rule, Vote
from pursuit.constants.ai import AIConstants as AI
from pursuit.grid import occupied_cells, open_neighbors
from pursuit.types import Direction, GridPos, Millis, opposite
from pursuit.util import rng

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState
    from pursuit.ai.controller import AgentDecisionController
    from pursuit.util.rng import RNG

_explore_rng = rng.get("ai.explore")
_wander_rng = rng.get("ai.wander")


@dataclass(slots=True)
class ExploreCandidate:
    """One open neighbour scored for exploration value."""

    direction: Direction
    cell: GridPos
    score: float


class IntelligentWanderRule(Rule):
    """Explore the maze while avoiding recently visited cells.

    Scoring per open neighbour:
        -0.3 for each occurrence in the recent position history
        -0.4 if the move reverses the last chosen direction
        +0.3 the first time the cell is considered, or
        +0.2 if it was first considered more than 10 seconds ago

    The best candidate is taken with probability 0.67, otherwise the
    runner-up. The vote strength is always the rule's priority.
    """

    rule_id = "intelligent_wander"
    display_name = "IntelligentWander"

    def __init__(self, priority: float = 0.8, *, rng: RNG | None = None) -> None:
        super().__init__(priority)
        self._rng = rng if rng is not None else _explore_rng
        self.position_history: deque[GridPos] = deque(
            maxlen=AI.WANDER_POSITION_HISTORY
        )
        self.direction_history: deque[Direction] = deque(
            maxlen=AI.WANDER_DIRECTION_HISTORY
        )
        # Cell -> time it was first considered as a move.
        self.first_seen: dict[GridPos, Millis] = {}

    def score_candidates(
        self,
        candidates: list[tuple[Direction, GridPos]],
        now: Millis,
    ) -> list[ExploreCandidate]:
        """Score and rank open neighbours, best first.

        Side effect: cells seen for the first time are stamped with ``now``.
        """
        last_direction = self.direction_history[-1] if self.direction_history else None
        scored: list[ExploreCandidate] = []

        for direction, cell in candidates:
            score = -AI.WANDER_REVISIT_PENALTY * self.position_history.count(cell)

            if last_direction is not None and direction == opposite(last_direction):
                score -= AI.WANDER_REVERSE_PENALTY

            first_seen = self.first_seen.get(cell)
            if first_seen is None:
                self.first_seen[cell] = now
                score += AI.WANDER_NEW_CELL_BONUS
            elif now - first_seen > AI.WANDER_STALE_AFTER_MS:
                score += AI.WANDER_STALE_CELL_BONUS

            scored.append(ExploreCandidate(direction, cell, score))

        # Stable sort: equal scores keep DIRECTIONS order.
        scored.sort(key=lambda c: c.score, reverse=True)
        return scored

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        agent = controller.agent
        world = controller.world
        self.position_history.append(agent.position)

        blocked = occupied_cells(others, agent.agent_id, include_committed=True)
        candidates = open_neighbors(
            agent.position, walls, world.width, world.height, blocked
        )
        if not candidates:
            return Vote.abstain()

        ranked = self.score_candidates(candidates, world.now())
        if len(ranked) >= 2 and self._rng.random() >= AI.WANDER_BEST_CHOICE_CHANCE:
            chosen = ranked[1].direction
        else:
            chosen = ranked[0].direction

        self.direction_history.append(chosen)
        return Vote(chosen, self.priority)


class WanderRule(Rule):
    """Pick any open neighbour uniformly at random."""

    rule_id = "wander"
    display_name = "Wander"

    def __init__(self, priority: float = 0.5, *, rng: RNG | None = None) -> None:
        super().__init__(priority)
        self._rng = rng if rng is not None else _wander_rng

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        agent = controller.agent
        world = controller.world
        blocked = occupied_cells(others, agent.agent_id, include_committed=True)
        options = [
            direction
            for direction, _cell in open_neighbors(
                agent.position, walls, world.width, world.height, blocked
            )
        ]
        if not options:
            return Vote.abstain()
        return Vote(self._rng.choice(options), self.priority)

