"""Shared sighting blackboard.

Pursuers that see or hear the target publish the sighting here; others
within radio range can pick it up with a confidence that fades with the
sighting's age and with the distance to whoever reported it.

The blackboard holds exactly one record. A new report overwrites the old
one; there is no merging and no history.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from pursuit.constants.ai import AIConstants as AI
from pursuit.grid import distance
from pursuit.types import GridPos, Millis

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Sighting:
    """The most recent published sighting.

    Attributes:
        position: Where the target was detected.
        timestamp: Clock reading (ms) when it was detected.
        confidence: Reporter's detection confidence.
        reporter_position: Where the reporting agent stood.
    """

    position: GridPos
    timestamp: Millis
    confidence: float
    reporter_position: GridPos


class SharedIntelligence:
    """Single-slot, last-writer-wins sighting store.

    Reads and writes are guarded by a lock so a host that evaluates agents
    on several threads sees whole records only.
    """

    def __init__(
        self,
        communication_range: float = AI.NETWORK_COMMUNICATION_RANGE,
        memory_ms: float = AI.NETWORK_MEMORY_MS,
    ) -> None:
        if communication_range <= 0:
            msg = "communication_range must be positive"
            raise ValueError(msg)
        if memory_ms <= 0:
            msg = "memory_ms must be positive"
            raise ValueError(msg)
        self.communication_range = communication_range
        self.memory_ms = memory_ms
        self._record: Sighting | None = None
        self._lock = threading.Lock()

    @property
    def latest(self) -> Sighting | None:
        """The stored record, regardless of age."""
        with self._lock:
            return self._record

    def report(
        self,
        reporter_pos: GridPos,
        target_pos: GridPos,
        timestamp: Millis,
        confidence: float = 1.0,
    ) -> None:
        """Replace the stored sighting."""
        record = Sighting(
            position=target_pos,
            timestamp=timestamp,
            confidence=confidence,
            reporter_position=reporter_pos,
        )
        with self._lock:
            self._record = record
        logger.debug(
            "Sighting at %s shared from %s (confidence %.2f)",
            target_pos,
            reporter_pos,
            confidence,
        )

    def query(
        self, observer_pos: GridPos, now: Millis
    ) -> tuple[GridPos, float] | None:
        """Return the shared target position and its decayed confidence.

        Returns:
            ``(position, confidence)``, or ``None`` when nothing was shared,
            the sighting is ``memory_ms`` old or older, or the observer is
            farther than ``communication_range`` from the reporter.
        """
        with self._lock:
            record = self._record

        if record is None:
            return None

        age = max(0.0, now - record.timestamp)
        if age >= self.memory_ms:
            return None

        separation = distance(observer_pos, record.reporter_position)
        if separation > self.communication_range:
            return None

        confidence = (
            record.confidence
            * (1.0 - age / self.memory_ms)
            * (1.0 - separation / self.communication_range)
        )
        return record.position, max(0.0, confidence)

    def clear(self) -> None:
        """Forget the stored sighting."""
        with self._lock:
            self._record = None
