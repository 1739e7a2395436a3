"""Deterministic random number generation with isolated streams.

Every consumer of randomness (exploration, fallback moves, random wander)
draws from its own named stream derived from one master seed, so:

1. A run is reproducible from the same master seed.
2. One rule consuming more random numbers does not shift another rule's
   sequence.

Usage:
    # At simulation startup
    from pursuit.util import rng
    rng.init(config.RANDOM_SEED)

    # In any module - cache the stream reference
    _rng = rng.get("ai.wander")

    def coin_flip() -> bool:
        return _rng.random() < 0.5

Rules and controllers also accept an explicit ``rng`` argument. Anything
with ``random()`` and ``choice()`` works there, which is how tests pin
down random choices.

Domain naming convention (hierarchical):
    - "ai.wander", "ai.explore", "ai.fallback"
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from pursuit.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """Proxy that delegates to the current RNG for a domain.

    Callers may cache the proxy; it keeps working after ``rng.reset()``
    because the underlying Random is looked up on every call.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng().random()

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)


# Type alias for functions that accept either Random or RNGStream.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out isolated RNG streams keyed by domain name."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    def get(self, domain: str) -> RNGStream:
        """Return the cacheable stream proxy for ``domain``."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): str hashes are salted per process.
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reset all streams with a new master seed.

        Existing RNGStream proxies remain valid and pick up the new streams.
        """
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize (or re-seed) the process-wide RNG provider."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get an RNG stream for the named domain.

    Auto-initializes an unseeded provider on first use. Call ``init()`` at
    startup for reproducible runs.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reset all RNG streams with a new master seed."""
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
