"""Separation behavior: spread out when pursuers bunch up."""

from __future__ import annotations

from collections.abc import Sequence
from collections.abc import Set as AbstractSet
from typing import TYPE_CHECKING

from pursuit.ai.rules import Rule, Vote
from pursuit.grid import distance, open_neighbors

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState
    from pursuit.ai.controller import AgentDecisionController
    from pursuit.types import GridPos


class AvoidOtherGhostsRule(Rule):
    """Step away from pursuers closer than ``min_distance``.

    Greedy, one step at a time: of the open neighbours, take the one with
    the largest summed distance to every crowding pursuer. Only current
    cells count here; committed moves are ignored. The closer the nearest
    crowding pursuer, the stronger the vote.
    """

    rule_id = "avoid_others"
    display_name = "AvoidOtherGhosts"

    def __init__(self, min_distance: float = 2, priority: float = 1.5) -> None:
        super().__init__(priority)
        if min_distance <= 0:
            msg = "min_distance must be positive"
            raise ValueError(msg)
        self.min_distance = min_distance

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        agent = controller.agent
        world = controller.world
        here = agent.position

        crowding = [
            other.position
            for other in others
            if other.agent_id != agent.agent_id
            and distance(other.position, here) < self.min_distance
        ]
        if not crowding:
            return Vote.abstain()

        best_direction = None
        best_total = -1.0
        for direction, cell in open_neighbors(here, walls, world.width, world.height):
            total = sum(distance(pos, cell) for pos in crowding)
            if total > best_total:
                best_total = total
                best_direction = direction

        if best_direction is None:
            return Vote.abstain()

        nearest = min(distance(pos, here) for pos in crowding)
        strength = (self.min_distance - nearest) / self.min_distance
        return Vote(best_direction, strength * self.priority)
