"""Perception checks for pursuers.

Answers "can this pursuer sense the target right now, and how sure is it?"
without deciding what to do about it - that stays in the rules.

Two direct senses exist:

- Sight: within the sight radius (Euclidean) and an unobstructed Bresenham
  line between the two cells.
- Sound: within the sound radius while the target is moving. Walls do not
  block sound.
"""

from __future__ import annotations

from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from enum import Enum

from pursuit.agents import TargetState
from pursuit.constants.ai import AIConstants as AI
from pursuit.grid import distance, has_line_of_sight
from pursuit.types import GridPos


class DetectionMethod(Enum):
    """How a pursuer learned where the target is."""

    SIGHT = "sight"
    SOUND = "sound"
    NETWORK = "network"
    MEMORY = "memory"

    @property
    def multiplier(self) -> float:
        """Vote-strength multiplier. First-hand senses count for more."""
        return _METHOD_MULTIPLIERS[self]

    @property
    def is_direct(self) -> bool:
        """True for senses that produce a fresh, first-hand fix."""
        return self in (DetectionMethod.SIGHT, DetectionMethod.SOUND)


_METHOD_MULTIPLIERS: dict[DetectionMethod, float] = {
    DetectionMethod.SIGHT: AI.SIGHT_MULTIPLIER,
    DetectionMethod.SOUND: AI.SOUND_MULTIPLIER,
    DetectionMethod.NETWORK: AI.NETWORK_MULTIPLIER,
    DetectionMethod.MEMORY: AI.MEMORY_MULTIPLIER,
}


@dataclass(frozen=True, slots=True)
class Detection:
    """A resolved belief about the target's position.

    Attributes:
        position: Believed target cell.
        confidence: Strength of the belief. Not clamped for sound, which can
            exceed 1.0 at very close range.
        method: How the belief was formed.
    """

    position: GridPos
    confidence: float
    method: DetectionMethod


def sense_by_sight(
    observer: GridPos,
    target: TargetState,
    walls: AbstractSet[GridPos],
    sight_radius: float,
) -> Detection | None:
    """Detect the target by line of sight."""
    dist = distance(observer, target.position)
    if dist > sight_radius:
        return None
    if not has_line_of_sight(walls, observer, target.position):
        return None
    confidence = min(1.0, sight_radius / (dist + AI.DISTANCE_EPSILON))
    return Detection(target.position, confidence, DetectionMethod.SIGHT)


def sense_by_sound(
    observer: GridPos, target: TargetState, sound_radius: float
) -> Detection | None:
    """Detect a moving target by the noise it makes."""
    if not target.is_moving:
        return None
    dist = distance(observer, target.position)
    if dist > sound_radius:
        return None
    confidence = (
        AI.SOUND_CONFIDENCE_SCALE * sound_radius / (dist + AI.DISTANCE_EPSILON)
    )
    return Detection(target.position, confidence, DetectionMethod.SOUND)
