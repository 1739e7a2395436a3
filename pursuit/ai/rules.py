"""Rule base class and vote type.

A Rule is one behaviour of a pursuer: chase what it sees, explore, patrol,
cut off the target's exits, keep away from the other pursuers. Every
decision tick the agent's controller asks each rule for a Vote - a
direction and how strongly the rule wants it - and adds the votes up per
direction.

Rules keep private memory across ticks (last sighting, visited cells,
patrol progress). A rule instance belongs to exactly one agent; difficulty
tiers build fresh instances for every agent on every tier switch.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pursuit.grid import occupied_cells
from pursuit.types import Direction, GridPos
from pursuit.util.pathfinding import next_step_toward

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState

    from .controller import AgentDecisionController


@dataclass(frozen=True, slots=True)
class Vote:
    """A rule's proposed direction and its strength.

    A vote with no direction or zero strength is an abstention.
    """

    direction: Direction | None
    strength: float = 0.0

    @classmethod
    def abstain(cls) -> Vote:
        return cls(None, 0.0)

    @property
    def is_cast(self) -> bool:
        return self.direction is not None and self.strength > 0.0


class Rule(abc.ABC):
    """Base class for pursuer behaviours.

    Attributes:
        priority: Base weight of this rule's votes. Must be positive.
        enabled: Disabled rules are skipped by the controller.
    """

    rule_id: ClassVar[str]
    display_name: ClassVar[str]

    def __init__(self, priority: float = 1.0, enabled: bool = True) -> None:
        if priority <= 0:
            msg = f"{self.__class__.__name__} priority must be positive"
            raise ValueError(msg)
        self.priority = priority
        self.enabled = enabled

    @abc.abstractmethod
    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        """Return this rule's vote for the controller's agent.

        Args:
            controller: The deciding agent's controller. Gives access to the
                agent and to the shared world context.
            walls: Impassable cells.
            target: The pursued entity's cell and movement vector.
            others: Every pursuer on the board; the deciding agent may be
                among them and is ignored.
        """
        ...

    def _step_toward(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        goal: GridPos,
        others: Sequence[PursuerAgent],
    ) -> Direction | None:
        """First step toward ``goal``, routing around other agents' cells."""
        agent = controller.agent
        world = controller.world
        avoid = occupied_cells(others, agent.agent_id)
        return next_step_toward(
            agent.position, goal, walls, avoid, world.width, world.height
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(priority={self.priority})"
