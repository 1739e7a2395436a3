"""Patrol behavior: cycle through a fixed list of waypoints.

Each completed lap makes the patrol a little less insistent, so a pursuer
that has walked its beat many times becomes easier for other rules to
outvote.
"""

from __future__ import annotations

from collections.abc import Sequence
from collections.abc import Set as AbstractSet
from typing import TYPE_CHECKING

from pursuit.ai.rules import Rule, Vote
from pursuit.constants.ai import AIConstants as AI
from pursuit.types import GridPos

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState
    from pursuit.ai.controller import AgentDecisionController


class SmartPatrolRule(Rule):
    """Walk an ordered waypoint loop with lap-based priority decay.

    Attributes:
        waypoints: The loop, visited in order and wrapping to the start.
        current_index: Index of the waypoint currently headed for.
        completions: Number of laps finished.
        adaptive_priority: Vote strength; starts at ``priority`` and drops by
            0.1 per lap, never below 0.5.
    """

    rule_id = "smart_patrol"
    display_name = "SmartPatrol"

    def __init__(
        self, waypoints: Sequence[GridPos] = (), priority: float = 1.5
    ) -> None:
        super().__init__(priority)
        self.waypoints: list[GridPos] = [(int(x), int(y)) for x, y in waypoints]
        self.current_index = 0
        self.completions = 0
        self.adaptive_priority = priority

    @property
    def current_waypoint(self) -> GridPos | None:
        if not self.waypoints:
            return None
        return self.waypoints[self.current_index]

    def _advance(self) -> None:
        self.current_index = (self.current_index + 1) % len(self.waypoints)
        if self.current_index == 0:
            self.completions += 1
            self.adaptive_priority = max(
                AI.PATROL_MIN_PRIORITY,
                self.priority - self.completions * AI.PATROL_DECAY_PER_LAP,
            )

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        if not self.waypoints:
            return Vote.abstain()

        if controller.agent.position == self.waypoints[self.current_index]:
            self._advance()

        direction = self._step_toward(
            controller, walls, self.waypoints[self.current_index], others
        )
        if direction is None:
            return Vote.abstain()
        return Vote(direction, self.adaptive_priority)
