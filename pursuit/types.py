from __future__ import annotations

from typing import Literal, NewType, TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

GridCoord: TypeAlias = int  # Always integer cell position

# Cell on the wrap-around maze grid. Example: (5, 3) = column 5, row 3.
GridPos: TypeAlias = tuple[GridCoord, GridCoord]

# Directions - discrete grid steps
UnitStep: TypeAlias = Literal[-1, 0, 1]
Direction: TypeAlias = tuple[UnitStep, UnitStep]  # Example: (-1, 0) = step left

# The zero vector means "stay put". It is never a member of DIRECTIONS.
ZERO: Direction = (0, 0)

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)

# Fixed expansion order. Breadth-first search, legal-move enumeration and
# exit enumeration all iterate in this order, which makes tie-breaks
# deterministic.
DIRECTIONS: tuple[Direction, ...] = (UP, DOWN, LEFT, RIGHT)

# =============================================================================
# TIME-RELATED TYPES
# =============================================================================

# Monotonic wall-clock reading in milliseconds.
Millis = NewType("Millis", float)

# =============================================================================
# GAME-RELATED TYPES
# =============================================================================

# Stable identifier for a pursuing agent. Slot index in the host's agent list.
AgentId = NewType("AgentId", int)

# Random seed for deterministic runs.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed: TypeAlias = int | str | None


def opposite(direction: Direction) -> Direction:
    """Return the direction pointing the other way."""
    return (-direction[0], -direction[1])  # type: ignore[return-value]
