"""Constants for pursuer decision-making."""


class AIConstants:
    """Tuning values shared by the rules, the blackboard and the pathfinder."""

    # --- Pathfinding ---
    # Breadth-first search gives up on any route longer than this many steps.
    MAX_PATH_LENGTH = 15

    # --- Shared intelligence ---
    NETWORK_MEMORY_MS = 3000.0
    NETWORK_COMMUNICATION_RANGE = 4.0
    # Shared sightings below this confidence are ignored by the vision rule.
    NETWORK_ACCEPT_THRESHOLD = 0.2
    NETWORK_CONFIDENCE_SCALE = 0.85

    # --- Detection ---
    # Added to distances before dividing so point-blank contact stays finite.
    DISTANCE_EPSILON = 0.1
    SOUND_CONFIDENCE_SCALE = 0.6
    MEMORY_CONFIDENCE_SCALE = 0.3
    MIN_DETECTION_CONFIDENCE = 0.1

    # Vote multipliers by detection method.
    SIGHT_MULTIPLIER = 1.2
    SOUND_MULTIPLIER = 1.0
    NETWORK_MULTIPLIER = 0.8
    MEMORY_MULTIPLIER = 0.6

    # --- Exploration ---
    WANDER_POSITION_HISTORY = 8
    WANDER_DIRECTION_HISTORY = 4
    WANDER_REVISIT_PENALTY = 0.3
    WANDER_REVERSE_PENALTY = 0.4
    WANDER_NEW_CELL_BONUS = 0.3
    WANDER_STALE_CELL_BONUS = 0.2
    WANDER_STALE_AFTER_MS = 10000.0
    WANDER_BEST_CHOICE_CHANCE = 0.67

    # --- Patrol ---
    PATROL_DECAY_PER_LAP = 0.1
    PATROL_MIN_PRIORITY = 0.5

    # --- Tactics ---
    PREDICT_STRENGTH_NUMERATOR = 10.0
    FLANK_LEAD_STEPS = 3
    FLANK_OFFSET = 2
    INTERCEPT_STRENGTH_NUMERATOR = 5.0
