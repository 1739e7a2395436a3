"""
Configuration constants.

Centralizes runtime settings for hosts embedding the decision engine.
Tuning numbers for the rules themselves live in ``pursuit.constants.ai``.
"""

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = None
RANDOM_SEED = "burrito1"

# =============================================================================
# DECISION TIMING
# =============================================================================

# Minimum time between two decisions of the same agent. Between decisions
# the agent keeps its last committed direction.
DECISION_DELAY_MS = 200.0

# Samples kept for the rolling decision-latency statistics.
DECISION_STATS_SAMPLES = 256

# =============================================================================
# DIFFICULTY
# =============================================================================

# Tier selected when a DifficultyConfiguration is created with defaults.
DEFAULT_TIER_INDEX = 0
