from __future__ import annotations

from collections.abc import Iterator

import pytest

from pursuit import config
from pursuit.util import rng


@pytest.fixture(autouse=True)
def seeded_rng() -> Iterator[None]:
    """Re-seed every random stream so each test starts from the same state."""
    rng.init(config.RANDOM_SEED)
    yield
    rng.init(config.RANDOM_SEED)
