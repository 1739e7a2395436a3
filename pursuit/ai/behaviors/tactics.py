"""Interception tactics: predict, flank and block.

All three aim at a cell other than the target's current one:

- PredictPacmanRule heads for where the target will be in a few steps.
- FlankPacmanRule heads for a point beside the target's path ahead.
- BlockEscapeRoute heads for one of the target's open exits that no other
  pursuer has already claimed.

Distances used for vote strength are measured from the deciding agent to
the chosen aim point.
"""

from __future__ import annotations

from collections.abc import Sequence
from collections.abc import Set as AbstractSet
from typing import TYPE_CHECKING

from pursuit.ai.rules import Rule, Vote
from pursuit.constants.ai import AIConstants as AI
from pursuit.grid import distance, open_neighbors, wrap
from pursuit.types import GridPos

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState
    from pursuit.ai.controller import AgentDecisionController


def _intercept_strength(agent_pos: GridPos, aim: GridPos) -> float:
    return min(
        1.0,
        AI.INTERCEPT_STRENGTH_NUMERATOR
        / (distance(agent_pos, aim) + AI.DISTANCE_EPSILON),
    )


class PredictPacmanRule(Rule):
    """Head for the target's extrapolated position.

    Attributes:
        steps: How many cells ahead along the target's heading to aim.
    """

    rule_id = "predict_pacman"
    display_name = "PredictPacman"

    def __init__(self, steps: int = 3, priority: float = 2.5) -> None:
        super().__init__(priority)
        if steps < 0:
            msg = "steps must be non-negative"
            raise ValueError(msg)
        self.steps = steps

    def predict(self, target: TargetState, width: int, height: int) -> GridPos:
        """Return the cell ``steps`` ahead of the target, wrapped onto the grid."""
        (x, y), (dx, dy) = target.position, target.direction
        return wrap(x + dx * self.steps, y + dy * self.steps, width, height)

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        if not target.is_moving:
            return Vote.abstain()

        world = controller.world
        predicted = self.predict(target, world.width, world.height)
        if predicted in walls:
            return Vote.abstain()

        direction = self._step_toward(controller, walls, predicted, others)
        if direction is None:
            return Vote.abstain()

        dist = distance(controller.agent.position, predicted)
        strength = min(1.0, AI.PREDICT_STRENGTH_NUMERATOR / (dist + 1.0))
        return Vote(direction, strength * self.priority)


class FlankPacmanRule(Rule):
    """Approach a point to the side of the target's path ahead.

    The lead point is three cells ahead of the target. The two flank points
    sit two cells either side of it, perpendicular to the heading; the
    positive offset is tried first.
    """

    rule_id = "flank_pacman"
    display_name = "FlankPacman"

    def __init__(self, priority: float = 2.0) -> None:
        super().__init__(priority)

    def flank_points(
        self, target: TargetState, width: int, height: int
    ) -> list[GridPos]:
        """Return both flank candidates in preference order."""
        (x, y), (dx, dy) = target.position, target.direction
        lead_x = x + dx * AI.FLANK_LEAD_STEPS
        lead_y = y + dy * AI.FLANK_LEAD_STEPS
        offset = AI.FLANK_OFFSET
        if dx != 0:
            raw = [(lead_x, lead_y + offset), (lead_x, lead_y - offset)]
        else:
            raw = [(lead_x + offset, lead_y), (lead_x - offset, lead_y)]
        return [wrap(px, py, width, height) for px, py in raw]

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        if not target.is_moving:
            return Vote.abstain()

        world = controller.world
        for point in self.flank_points(target, world.width, world.height):
            if point in walls:
                continue
            direction = self._step_toward(controller, walls, point, others)
            if direction is None:
                continue
            strength = _intercept_strength(controller.agent.position, point)
            return Vote(direction, strength * self.priority)

        return Vote.abstain()


class BlockEscapeRoute(Rule):
    """Cover one of the target's open exits.

    Exits already claimed by another pursuer's committed next cell are left
    to that pursuer. Other pursuers' current cells are only routed around,
    not treated as claims.
    """

    rule_id = "block_escape"
    display_name = "BlockEscape"

    def __init__(self, priority: float = 2.2) -> None:
        super().__init__(priority)

    def choose_exit(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> GridPos | None:
        """Return the first unclaimed exit, or None if blocking is pointless."""
        world = controller.world
        exits = [
            cell
            for _direction, cell in open_neighbors(
                target.position, walls, world.width, world.height
            )
        ]
        if len(exits) < 2:
            return None

        me = controller.agent.agent_id
        claimed = {o.destination for o in others if o.agent_id != me}
        for cell in exits:
            if cell not in claimed:
                return cell
        return None

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        exit_cell = self.choose_exit(controller, walls, target, others)
        if exit_cell is None:
            return Vote.abstain()

        direction = self._step_toward(controller, walls, exit_cell, others)
        if direction is None:
            return Vote.abstain()

        strength = _intercept_strength(controller.agent.position, exit_cell)
        return Vote(direction, strength * self.priority)
