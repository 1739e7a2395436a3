"""
AgentDecisionController: one pursuer's vote-counting brain.

Every decision tick the controller polls its rules in their configured
order, sums the strength of the votes cast for each direction, and returns
the direction with the largest total. A tie goes to the direction that
received its first vote earliest. If no rule votes at all, the agent takes
a random open move; if there is none, it stays put.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pursuit.grid import legal_directions
from pursuit.types import ZERO, Direction, GridPos
from pursuit.util import rng

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState, WorldContext
    from pursuit.util.rng import RNG

    from .rules import Rule

_rng = rng.get("ai.fallback")


@dataclass(slots=True)
class RuleVote:
    """Debug snapshot of one rule's vote in the latest decision."""

    display_name: str
    direction: Direction | None
    strength: float


class AgentDecisionController:
    """Aggregates an ordered, fixed list of rules into one direction.

    The rule list never changes after construction. Switching difficulty
    builds a new controller instead.

    Attributes:
        agent: The pursuer this controller decides for.
        world: Shared world context (grid size, blackboard, clock).
        rules: The rules, in evaluation order.
        last_tally: Per-rule votes from the most recent ``decide`` call.
    """

    def __init__(
        self,
        agent: PursuerAgent,
        world: WorldContext,
        rules: Iterable[Rule],
        *,
        rng: RNG | None = None,
    ) -> None:
        self.agent = agent
        self.world = world
        self.rules: tuple[Rule, ...] = tuple(rules)
        self._rng = rng if rng is not None else _rng
        self.last_tally: list[RuleVote] = []

    def decide(
        self,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Direction:
        """Return the agent's next direction, or ``ZERO`` to stay put."""
        totals: dict[Direction, float] = {}
        tally: list[RuleVote] = []

        for rule in self.rules:
            if not rule.enabled:
                continue
            vote = rule.evaluate(self, walls, target, others)
            tally.append(RuleVote(rule.display_name, vote.direction, vote.strength))
            if vote.is_cast:
                assert vote.direction is not None
                totals[vote.direction] = totals.get(vote.direction, 0.0) + vote.strength

        self.last_tally = tally

        if totals:
            best_direction = ZERO
            best_total = -1.0
            # dicts keep insertion order; strict ">" keeps the earliest on ties
            for direction, total in totals.items():
                if total > best_total:
                    best_direction, best_total = direction, total
            return best_direction

        return self.random_legal_direction(walls, others)

    def random_legal_direction(
        self, walls: AbstractSet[GridPos], others: Sequence[PursuerAgent]
    ) -> Direction:
        """Uniformly random open move, or ``ZERO`` when boxed in."""
        options = self.legal_directions(walls, others)
        if not options:
            return ZERO
        return self._rng.choice(options)

    def legal_directions(
        self, walls: AbstractSet[GridPos], others: Sequence[PursuerAgent]
    ) -> list[Direction]:
        return legal_directions(
            self.agent, walls, others, self.world.width, self.world.height
        )

    def rule_names(self) -> list[str]:
        return [rule.display_name for rule in self.rules]

    def describe(self) -> str:
        """One-line summary, e.g. ``"Ghost 1: EnhancedVision, Wander"``."""
        return f"{self.agent.name}: {', '.join(self.rule_names())}"
