"""Rule-voting decision engine for pursuing agents.

Each pursuer owns an ``AgentDecisionController`` holding an ordered list of
``Rule`` objects. Rules vote for a direction; the controller adds the votes
up and picks the strongest. ``DifficultyConfiguration`` decides which rules
each pursuer runs, and ``DecisionScheduler`` paces decisions for a whole
pack of pursuers.
"""

from .controller import AgentDecisionController, RuleVote
from .difficulty import DifficultyConfiguration, DifficultyTier, RuleSpec, spec
from .intel import SharedIntelligence, Sighting
from .perception import Detection, DetectionMethod
from .rules import Rule, Vote
from .scheduler import DecisionScheduler

__all__ = [
    "AgentDecisionController",
    "DecisionScheduler",
    "Detection",
    "DetectionMethod",
    "DifficultyConfiguration",
    "DifficultyTier",
    "Rule",
    "RuleSpec",
    "RuleVote",
    "Sighting",
    "SharedIntelligence",
    "Vote",
    "spec",
]
