"""Agent, target and world state handed to the decision engine.

The host game owns movement and animation. Each tick it refreshes these
records with the grid cells it has settled on, and the engine reads them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pursuit.types import ZERO, AgentId, Direction, GridPos, Millis

if TYPE_CHECKING:
    from pursuit.ai.intel import SharedIntelligence


@dataclass(slots=True)
class PursuerAgent:
    """One pursuing agent as seen by the engine.

    Attributes:
        agent_id: Slot index of the agent. Also selects the rule set the
            difficulty tier assigns to it.
        position: The cell the agent currently occupies.
        next_position: The cell the agent has committed to moving into.
            Equal to ``position`` while the agent is not moving. Read it
            through ``destination``, which also covers a cleared ``None``.
        name: Display name for debug summaries.
    """

    agent_id: AgentId
    position: GridPos
    next_position: GridPos | None = None
    name: str = ""

    def __post_init__(self) -> None:
        if self.next_position is None:
            self.next_position = self.position
        if not self.name:
            self.name = f"Ghost {self.agent_id + 1}"

    @property
    def destination(self) -> GridPos:
        """The committed next cell, or the current cell when none is set."""
        return self.position if self.next_position is None else self.next_position

    def commit(self, cell: GridPos) -> None:
        """Record the cell the host has started moving this agent into."""
        self.next_position = cell

    def arrive(self) -> None:
        """Mark the committed move as finished."""
        self.position = self.destination


@dataclass(frozen=True, slots=True)
class TargetState:
    """The pursued entity's cell and current movement vector."""

    position: GridPos
    direction: Direction = ZERO

    @property
    def is_moving(self) -> bool:
        return self.direction != ZERO


@dataclass(slots=True)
class WorldContext:
    """Process-wide context shared by every controller of a simulation.

    Attributes:
        width: Grid width; x coordinates wrap modulo this.
        height: Grid height; y coordinates wrap modulo this.
        intel: The shared sighting blackboard.
        clock: Callable returning the current monotonic time in ms.
    """

    width: int
    height: int
    intel: SharedIntelligence
    clock: Callable[[], Millis]

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            msg = f"grid dimensions must be positive, got {self.width}x{self.height}"
            raise ValueError(msg)

    def now(self) -> Millis:
        return self.clock()
