"""Per-agent decision timing for a whole pack of pursuers.

Hosts call ``update`` once per frame with the elapsed time. Each agent
re-decides at most once per ``DECISION_DELAY_MS`` and keeps its previous
direction in between. A controller that raises is logged and replaced by
the agent's first move not into a wall, and the agent retries on the next
update. The host loop never sees an engine fault.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from collections.abc import Set as AbstractSet
from typing import TYPE_CHECKING

from pursuit import config
from pursuit.grid import open_neighbors
from pursuit.types import ZERO, AgentId, Direction, GridPos
from pursuit.util.metrics import MostRecentNVar

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState, WorldContext
    from pursuit.util.rng import RNG

    from .controller import AgentDecisionController
    from .difficulty import DifficultyConfiguration

logger = logging.getLogger(__name__)


class DecisionScheduler:
    """Owns the controllers of every agent and paces their decisions.

    Attributes:
        agents: The pursuers, in slot order.
        world: Shared world context handed to every controller.
        configuration: The difficulty configuration last applied.
        controllers: One controller per agent, rebuilt by ``apply``.
        last_decisions: Most recent direction per agent id.
        decision_stats: Rolling latency of single decisions, in ms.
    """

    def __init__(
        self,
        agents: Sequence[PursuerAgent],
        world: WorldContext,
        configuration: DifficultyConfiguration,
        *,
        decision_delay_ms: float = config.DECISION_DELAY_MS,
        rng: RNG | None = None,
    ) -> None:
        if decision_delay_ms < 0:
            msg = "decision_delay_ms must be non-negative"
            raise ValueError(msg)
        self.agents: list[PursuerAgent] = list(agents)
        self.world = world
        self.decision_delay_ms = decision_delay_ms
        self._rng = rng
        self.decision_stats = MostRecentNVar(config.DECISION_STATS_SAMPLES)

        self.configuration = configuration
        self.controllers: list[AgentDecisionController] = []
        self.last_decisions: dict[AgentId, Direction] = {}
        self._timers: dict[AgentId, float] = {}
        self.apply(configuration)

    def apply(self, configuration: DifficultyConfiguration) -> None:
        """Rebuild every controller from the configuration's current tier.

        Timers are primed so the next ``update`` decides for every agent.
        """
        self.configuration = configuration
        self.controllers = configuration.build_controllers(
            self.agents, self.world, rng=self._rng
        )
        self._timers = {
            agent.agent_id: self.decision_delay_ms for agent in self.agents
        }
        self.last_decisions = {agent.agent_id: ZERO for agent in self.agents}
        logger.debug(
            "Applied tier %s to %d agents",
            configuration.current_tier.name,
            len(self.agents),
        )

    def update(
        self,
        dt_ms: float,
        walls: AbstractSet[GridPos],
        target: TargetState,
    ) -> dict[AgentId, Direction]:
        """Advance the decision timers and re-decide where they expired.

        Returns:
            The current direction of every agent, keyed by agent id.
        """
        for controller in self.controllers:
            agent_id = controller.agent.agent_id
            elapsed = self._timers[agent_id] + dt_ms
            if elapsed < self.decision_delay_ms:
                self._timers[agent_id] = elapsed
                continue

            direction = self._decide(controller, walls, target)
            if direction is None:
                # Timer stays expired so the next update retries.
                self._timers[agent_id] = elapsed
                direction = self._first_open_move(controller, walls)
            else:
                self._timers[agent_id] = 0.0
            self.last_decisions[agent_id] = direction

        return dict(self.last_decisions)

    def _decide(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
    ) -> Direction | None:
        """Run one decision, or return ``None`` if the controller raised."""
        start = time.perf_counter()
        try:
            return controller.decide(walls, target, self.agents)
        except Exception:
            logger.exception(
                "%s failed to decide; taking first open move", controller.agent.name
            )
            return None
        finally:
            self.decision_stats.record((time.perf_counter() - start) * 1000.0)

    def _first_open_move(
        self, controller: AgentDecisionController, walls: AbstractSet[GridPos]
    ) -> Direction:
        """First direction not into a wall. Other agents are not considered."""
        world = controller.world
        options = open_neighbors(
            controller.agent.position, walls, world.width, world.height
        )
        return options[0][0] if options else ZERO

    def describe_agents(self) -> list[str]:
        """One rule summary line per agent, for debug overlays."""
        return [controller.describe() for controller in self.controllers]
