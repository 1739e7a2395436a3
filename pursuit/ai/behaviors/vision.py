"""Vision behavior: chase the target by sight, sound, radio or memory.

Detection is tried in a fixed order and the first success wins:

1. Sight   - in range with a clear Bresenham line.
2. Sound   - in hearing range while the target is moving.
3. Network - a teammate's shared sighting, if still confident enough.
4. Memory  - this pursuer's own last sight/sound fix, fading over time.

A fresh sight or sound fix is remembered and broadcast to the team.
"""

from __future__ import annotations

from collections.abc import Sequence
from collections.abc import Set as AbstractSet
from typing import TYPE_CHECKING

from pursuit.ai.perception import (
    Detection,
    DetectionMethod,
    sense_by_sight,
    sense_by_sound,
)
from pursuit.ai.rules import Rule, Vote
from pursuit.constants.ai import AIConstants as AI
from pursuit.types import GridPos, Millis

if TYPE_CHECKING:
    from pursuit.agents import PursuerAgent, TargetState
    from pursuit.ai.controller import AgentDecisionController


class EnhancedVisionRule(Rule):
    """Pursue the target using every information channel available.

    Attributes:
        sight_radius: Maximum distance at which the target can be seen.
        sound_radius: Maximum distance at which a moving target is heard.
        memory_duration_ms: How long a sight/sound fix stays usable.
        last_detection: The detection behind the most recent vote, or
            ``None`` if the rule abstained. Debug aid only.
    """

    rule_id = "enhanced_vision"
    display_name = "EnhancedVision"

    def __init__(
        self,
        sight_radius: float = 5,
        sound_radius: float = 2,
        memory_duration_ms: float = 2000,
        priority: float = 3.0,
    ) -> None:
        super().__init__(priority)
        if sight_radius < 0 or sound_radius < 0:
            msg = "sight_radius and sound_radius must be non-negative"
            raise ValueError(msg)
        if memory_duration_ms <= 0:
            msg = "memory_duration_ms must be positive"
            raise ValueError(msg)
        self.sight_radius = sight_radius
        self.sound_radius = sound_radius
        self.memory_duration_ms = memory_duration_ms

        self._last_known_position: GridPos | None = None
        self._last_seen_ms: Millis = Millis(0.0)
        self.last_detection: Detection | None = None

    def detect(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
    ) -> Detection | None:
        """Resolve the target's position through the first channel that works.

        Side effects: a sight or sound fix refreshes this rule's memory and
        is published to the shared blackboard.
        """
        world = controller.world
        observer = controller.agent.position
        now = world.now()

        detection = sense_by_sight(observer, target, walls, self.sight_radius)
        if detection is None:
            detection = sense_by_sound(observer, target, self.sound_radius)
        if detection is None:
            shared = world.intel.query(observer, now)
            if shared is not None and shared[1] > AI.NETWORK_ACCEPT_THRESHOLD:
                detection = Detection(
                    shared[0],
                    shared[1] * AI.NETWORK_CONFIDENCE_SCALE,
                    DetectionMethod.NETWORK,
                )
        if detection is None and self._last_known_position is not None:
            age = now - self._last_seen_ms
            if age < self.memory_duration_ms:
                detection = Detection(
                    self._last_known_position,
                    AI.MEMORY_CONFIDENCE_SCALE
                    * (1.0 - age / self.memory_duration_ms),
                    DetectionMethod.MEMORY,
                )

        if detection is not None and detection.method.is_direct:
            self._last_known_position = detection.position
            self._last_seen_ms = now
            world.intel.report(
                observer, detection.position, now, detection.confidence
            )

        return detection

    def evaluate(
        self,
        controller: AgentDecisionController,
        walls: AbstractSet[GridPos],
        target: TargetState,
        others: Sequence[PursuerAgent],
    ) -> Vote:
        self.last_detection = None
        detection = self.detect(controller, walls, target)
        if detection is None or detection.confidence < AI.MIN_DETECTION_CONFIDENCE:
            return Vote.abstain()

        direction = self._step_toward(controller, walls, detection.position, others)
        if direction is None:
            return Vote.abstain()

        self.last_detection = detection
        strength = detection.confidence * self.priority * detection.method.multiplier
        return Vote(direction, strength)

