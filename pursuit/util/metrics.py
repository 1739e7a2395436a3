"""Rolling statistics for engine timings."""

import abc

import numpy as np


class StatsVar(abc.ABC):
    """Abstract base class for tracking statistics of a variable over time."""

    @abc.abstractmethod
    def record(self, value: float) -> None:
        """Record a new sample value."""

    @property
    @abc.abstractmethod
    def sample_count(self) -> int: ...

    @abc.abstractmethod
    def _get_valid_samples(self) -> np.ndarray:
        """Get the valid samples as a numpy array."""

    @property
    def mean(self) -> float:
        valid = self._get_valid_samples()
        if len(valid) == 0:
            return 0.0
        return float(np.mean(valid))

    @property
    def p50(self) -> float:
        """Get the 50th percentile (median) value."""
        return self.get_percentiles()[0]

    @property
    def p95(self) -> float:
        return self.get_percentiles()[1]

    @property
    def p99(self) -> float:
        return self.get_percentiles()[2]

    def get_percentiles(self) -> tuple[float, float, float]:
        """Return (p50, p95, p99) as a tuple of floats."""
        valid = self._get_valid_samples()
        if len(valid) == 0:
            return (0.0, 0.0, 0.0)

        p50, p95, p99 = np.percentile(valid, [50, 95, 99])
        return (float(p50), float(p95), float(p99))

    def get_percentiles_string(self) -> str:
        p50, p95, p99 = self.get_percentiles()
        return f"p50={p50:.2f} p95={p95:.2f} p99={p99:.2f}"


class MostRecentNVar(StatsVar):
    """Track statistics for the most recent N samples in a ring buffer."""

    def __init__(self, num_samples: int = 1000) -> None:
        if num_samples <= 0:
            msg = "num_samples must be positive"
            raise ValueError(msg)
        self.num_samples = num_samples
        self.samples = np.zeros(num_samples, dtype=np.float32)
        self.count = 0
        self.write_index = 0

    def record(self, value: float) -> None:
        self.samples[self.write_index] = value
        self.write_index = (self.write_index + 1) % self.num_samples
        self.count += 1

    def _get_valid_samples(self) -> np.ndarray:
        if self.count <= self.num_samples:
            return self.samples[: self.count]

        # Wrapped: restore chronological order
        return np.concatenate(
            [self.samples[self.write_index :], self.samples[: self.write_index]]
        )

    @property
    def sample_count(self) -> int:
        return min(self.count, self.num_samples)
