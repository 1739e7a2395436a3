"""Difficulty tiers: which rules each pursuer slot runs.

A tier stores rule *recipes* (``RuleSpec``), not rule instances. Every call
to ``DifficultyConfiguration.build_controllers`` turns the recipes into
fresh rules, so switching tiers - or re-applying the same one - wipes all
detection memory, exploration history and patrol progress.

Recipes are validated when controllers are built. A slot whose recipe
cannot be built (unknown kind, bad arguments) falls back to the default
single-rule set and a warning is logged; nothing malformed reaches the
per-tick decision path.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

from pursuit import config

from .behaviors import (
    AvoidOtherGhostsRule,
    BlockEscapeRoute,
    EnhancedVisionRule,
    FlankPacmanRule,
    IntelligentWanderRule,
    PredictPacmanRule,
    SmartPatrolRule,
    WanderRule,
)
from .controller import AgentDecisionController

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, WorldContext
    from pursuit.util.rng import RNG

    from .rules import Rule

logger = logging.getLogger(__name__)

RULE_TYPES: dict[str, type[Rule]] = {
    cls.rule_id: cls
    for cls in (
        EnhancedVisionRule,
        IntelligentWanderRule,
        SmartPatrolRule,
        PredictPacmanRule,
        FlankPacmanRule,
        AvoidOtherGhostsRule,
        BlockEscapeRoute,
        WanderRule,
    )
}

# Player-facing summary of each behaviour. Kinds missing here are left out
# of the summary.
RULE_DESCRIPTIONS: dict[str, str] = {
    "enhanced_vision": "Limited sight & memory",
    "predict_pacman": "Movement prediction",
    "flank_pacman": "Flanking maneuvers",
    "avoid_others": "Ghost separation",
    "smart_patrol": "Adaptive patrol",
    "block_escape": "Exit blocking",
    "intelligent_wander": "Smart exploration",
    "wander": "Random movement",
}

_DEFAULT_WANDER_PRIORITY = 1.0


@dataclass(frozen=True, slots=True)
class RuleSpec:
    """Recipe for one rule: its kind plus constructor arguments."""

    kind: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def build(self) -> Rule:
        """Instantiate a fresh rule.

        Raises:
            KeyError: ``kind`` is not a known rule type.
            TypeError: ``params`` do not match the rule's constructor.
            ValueError: The rule rejected a parameter value.
        """
        return RULE_TYPES[self.kind](**self.params)


def spec(kind: str, **params: Any) -> RuleSpec:
    """Shorthand for ``RuleSpec(kind, params)``."""
    return RuleSpec(kind, params)


RuleSet: TypeAlias = tuple[RuleSpec, ...]


def _build_rule(rule_spec: object) -> Rule:
    if not isinstance(rule_spec, RuleSpec):
        msg = f"expected a RuleSpec, got {type(rule_spec).__name__}"
        raise TypeError(msg)
    return rule_spec.build()


@dataclass(frozen=True, slots=True)
class DifficultyTier:
    """A named assignment of rule sets to pursuer slots.

    Attributes:
        name: Short tier name, e.g. "Expert".
        description: One-line explanation for the player.
        rule_sets: Rule recipes per slot; slot *i* uses ``rule_sets[i]``.
    """

    name: str
    description: str
    rule_sets: tuple[RuleSet, ...]

    def rule_kinds(self) -> list[str]:
        """Distinct rule kinds in order of first appearance."""
        seen: dict[str, None] = {}
        for rule_set in self.rule_sets:
            for rule_spec in rule_set:
                if isinstance(rule_spec, RuleSpec):
                    seen.setdefault(rule_spec.kind, None)
        return list(seen)


def default_rule_set() -> list[Rule]:
    """Rules for a slot the tier does not cover, or whose recipe is broken."""
    return [IntelligentWanderRule(_DEFAULT_WANDER_PRIORITY)]


class DifficultyConfiguration:
    """Ordered difficulty tiers with a cursor on the active one.

    The cursor always satisfies ``0 <= current_index < len(tiers)``.
    Navigation methods return ``False`` and leave the cursor alone when the
    move is not possible.
    """

    def __init__(
        self,
        tiers: Sequence[DifficultyTier] | None = None,
        current_index: int = config.DEFAULT_TIER_INDEX,
    ) -> None:
        self.tiers: tuple[DifficultyTier, ...] = tuple(
            tiers if tiers is not None else default_tiers()
        )
        if not self.tiers:
            msg = "DifficultyConfiguration requires at least one tier"
            raise ValueError(msg)
        if not 0 <= current_index < len(self.tiers):
            msg = f"tier index {current_index} out of range"
            raise ValueError(msg)
        self._current_index = current_index

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_tier(self) -> DifficultyTier:
        return self.tiers[self._current_index]

    def advance(self) -> bool:
        """Move to the next harder tier, if there is one."""
        return self.select(self._current_index + 1)

    def retreat(self) -> bool:
        """Move to the next easier tier, if there is one."""
        return self.select(self._current_index - 1)

    def select(self, index: int) -> bool:
        """Jump to tier ``index``. Out-of-range indices are rejected."""
        if not 0 <= index < len(self.tiers):
            logger.debug("Ignoring out-of-range tier index %d", index)
            return False
        if index != self._current_index:
            logger.debug(
                "Difficulty %s -> %s",
                self.current_tier.name,
                self.tiers[index].name,
            )
        self._current_index = index
        return True

    def build_rules(self, slot: int) -> list[Rule]:
        """Fresh rule instances for pursuer slot ``slot`` in the current tier."""
        rule_sets = self.current_tier.rule_sets
        if slot >= len(rule_sets):
            return default_rule_set()

        try:
            rules = [_build_rule(rule_spec) for rule_spec in rule_sets[slot]]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Tier %r slot %d has an unusable rule set (%s); using default",
                self.current_tier.name,
                slot,
                exc,
            )
            return default_rule_set()

        return rules or default_rule_set()

    def build_controllers(
        self,
        agents: Sequence[PursuerAgent],
        world: WorldContext,
        *,
        rng: RNG | None = None,
    ) -> list[AgentDecisionController]:
        """Create one new controller per agent from the current tier.

        Previously built controllers and their rules' memory are not reused.
        """
        return [
            AgentDecisionController(agent, world, self.build_rules(slot), rng=rng)
            for slot, agent in enumerate(agents)
        ]

    def describe_active_rules(self) -> str:
        """Comma-separated list of behaviours active in the current tier."""
        return ", ".join(
            RULE_DESCRIPTIONS[kind]
            for kind in self.current_tier.rule_kinds()
            if kind in RULE_DESCRIPTIONS
        )


# ---------------------------------------------------------------------------
# Stock tiers
# ---------------------------------------------------------------------------


def _vision(sight: float, sound: float, memory_ms: float, priority: float) -> RuleSpec:
    return spec(
        "enhanced_vision",
        sight_radius=sight,
        sound_radius=sound,
        memory_duration_ms=memory_ms,
        priority=priority,
    )


def _explore(priority: float) -> RuleSpec:
    return spec("intelligent_wander", priority=priority)


def _separate(min_distance: float, priority: float) -> RuleSpec:
    return spec("avoid_others", min_distance=min_distance, priority=priority)


def _patrol(waypoints: tuple[tuple[int, int], ...], priority: float) -> RuleSpec:
    return spec("smart_patrol", waypoints=waypoints, priority=priority)


def _predict(steps: int, priority: float) -> RuleSpec:
    return spec("predict_pacman", steps=steps, priority=priority)


def _flank(priority: float) -> RuleSpec:
    return spec("flank_pacman", priority=priority)


def _block(priority: float) -> RuleSpec:
    return spec("block_escape", priority=priority)


def default_tiers() -> list[DifficultyTier]:
    """The four stock tiers, from Beginner to Expert.

    Waypoints assume the stock 24x20 maze.
    """
    return [
        DifficultyTier(
            "Beginner",
            "Short sight, no memory, simple patrol",
            (
                (_vision(2, 1, 500, 2.0), _explore(1.2), _separate(3, 1.0)),
                (
                    _patrol(((5, 5), (18, 5), (18, 15), (5, 15)), 1.5),
                    _explore(1.0),
                    _separate(3, 1.0),
                ),
                (_explore(1.5), _separate(2, 0.8)),
                (spec("wander", priority=1.0),),
            ),
        ),
        DifficultyTier(
            "Intermediate",
            "Medium sight, short memory, sound detection",
            (
                (_vision(4, 2, 1500, 3.0), _explore(1.0), _separate(2, 1.2)),
                (
                    _patrol(((3, 3), (20, 3), (20, 16), (3, 16)), 2.0),
                    _vision(3, 2, 1000, 2.5),
                    _explore(1.0),
                    _separate(2, 1.2),
                ),
                (_vision(3, 1, 1000, 2.0), _explore(1.2), _separate(2, 1.0)),
                (_explore(1.2), _vision(2, 1, 500, 1.5), _separate(3, 0.8)),
            ),
        ),
        DifficultyTier(
            "Advanced",
            "Good sight, memory, basic coordination, prediction",
            (
                (
                    _vision(6, 3, 3000, 3.5),
                    _predict(2, 2.5),
                    _explore(1.0),
                    _separate(1, 0.75),
                ),
                (
                    _vision(5, 2, 2500, 3.0),
                    _flank(2.8),
                    _patrol(((2, 2), (21, 2), (21, 17), (2, 17)), 1.5),
                    _explore(1.0),
                    _separate(1, 0.6),
                ),
                (
                    _vision(5, 2, 2000, 2.8),
                    _block(2.5),
                    _explore(1.0),
                    _separate(1, 0.5),
                ),
                (
                    _vision(4, 2, 2000, 2.5),
                    _predict(1, 2.0),
                    _patrol(((12, 6), (12, 12)), 1.8),
                    _explore(1.0),
                ),
            ),
        ),
        DifficultyTier(
            "Expert",
            "Excellent sight, long memory, full coordination, advanced tactics",
            (
                (
                    _vision(8, 4, 5000, 4.0),
                    _predict(3, 3.5),
                    _flank(3.0),
                    _block(2.5),
                    _explore(1.0),
                ),
                (
                    _vision(7, 5, 4500, 3.8),
                    _flank(3.5),
                    _block(3.2),
                    _predict(2, 2.8),
                    _explore(1.0),
                ),
                (
                    _vision(7, 4, 4000, 3.5),
                    _block(3.8),
                    _predict(4, 3.0),
                    _flank(2.5),
                    _explore(1.0),
                ),
                (
                    _vision(6, 3, 3500, 3.2),
                    _predict(3, 3.0),
                    _flank(2.8),
                    _block(2.5),
                    _patrol(((12, 6), (12, 12), (6, 9), (18, 9)), 2.0),
                    _explore(1.0),
                ),
            ),
        ),
    ]
