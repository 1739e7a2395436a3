from __future__ import annotations

from collections.abc import Iterable, Sequence
from collections.abc import Set as AbstractSet
from random import Random
from typing import TypeVar

from pursuit.agents import PursuerAgent, TargetState, WorldContext
from pursuit.ai.controller import AgentDecisionController
from pursuit.ai.intel import SharedIntelligence
from pursuit.ai.rules import Rule, Vote
from pursuit.types import AgentId, Direction, GridPos
from pursuit.util.clock import ManualClock

T = TypeVar("T")


class FixedRNG(Random):
    """Random stand-in that always returns preset values.

    ``random()`` returns ``value``; ``choice()`` returns ``seq[index]``.
    """

    def __init__(self, value: float = 0.0, index: int = 0) -> None:
        super().__init__(0)
        self.value = value
        self.index = index

    def random(self) -> float:
        return self.value

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.index]


class FixedVoteRule(Rule):
    """Rule that always casts the same vote."""

    rule_id = "fixed_vote"
    display_name = "FixedVote"

    def __init__(self, direction: Direction | None, strength: float) -> None:
        super().__init__(1.0)
        self.vote = Vote(direction, strength)
        self.calls = 0

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        self.calls += 1
        return self.vote


def walls_from_ascii(rows: Sequence[str]) -> tuple[set[GridPos], int, int]:
    """Parse a text map where ``#`` marks a wall.

    Returns:
        ``(walls, width, height)``.
    """
    walls = {
        (x, y)
        for y, row in enumerate(rows)
        for x, char in enumerate(row)
        if char == "#"
    }
    return walls, len(rows[0]), len(rows)


def make_world(
    width: int = 20,
    height: int = 20,
    *,
    clock: ManualClock | None = None,
    intel: SharedIntelligence | None = None,
) -> WorldContext:
    """World context with a manual clock and a fresh blackboard."""
    return WorldContext(
        width,
        height,
        intel if intel is not None else SharedIntelligence(),
        clock if clock is not None else ManualClock(),
    )


def make_agent(
    agent_id: int = 0,
    position: GridPos = (5, 5),
    next_position: GridPos | None = None,
) -> PursuerAgent:
    agent = PursuerAgent(AgentId(agent_id), position)
    if next_position is not None:
        agent.commit(next_position)
    return agent


def make_controller(
    rules: Iterable[Rule] = (),
    *,
    agent: PursuerAgent | None = None,
    world: WorldContext | None = None,
    rng: Random | None = None,
) -> AgentDecisionController:
    return AgentDecisionController(
        agent if agent is not None else make_agent(),
        world if world is not None else make_world(),
        rules,
        rng=rng,
    )
