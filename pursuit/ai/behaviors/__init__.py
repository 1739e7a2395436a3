"""Concrete pursuer rules.

Each module groups closely related behaviours; every class here is a
``Rule`` and can be placed in a difficulty tier's rule set.
"""

from .patrol import SmartPatrolRule
from .separation import AvoidOtherGhostsRule
from .tactics import BlockEscapeRoute, FlankPacmanRule, PredictPacmanRule
from .vision import EnhancedVisionRule
from .wander import IntelligentWanderRule, WanderRule

__all__ = [
    "AvoidOtherGhostsRule",
    "BlockEscapeRoute",
    "EnhancedVisionRule",
    "FlankPacmanRule",
    "IntelligentWanderRule",
    "PredictPacmanRule",
    "SmartPatrolRule",
    "WanderRule",
]
