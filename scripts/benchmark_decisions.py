#!/usr/bin/env python3
"""Benchmark decision latency for every stock difficulty tier.

Runs a headless chase on a random maze with four pursuers and a randomly
walking target, then prints the per-decision latency percentiles collected
by the scheduler.

Usage:
    uv run python scripts/benchmark_decisions.py
"""

# ruff: noqa: E402  # Allow path setup before importing project modules

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np

# Add the project root to Python path so running as a script works.
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from pursuit import config
from pursuit.agents import PursuerAgent, TargetState, WorldContext
from pursuit.ai import DecisionScheduler, DifficultyConfiguration, SharedIntelligence
from pursuit.grid import open_neighbors, step
from pursuit.types import DIRECTIONS, ZERO, AgentId, GridPos
from pursuit.util import rng
from pursuit.util.clock import ManualClock

WIDTH, HEIGHT = 24, 20
FRAME_MS = 50.0
FRAMES = 2000

# ---------------------------------------------------------------------------
# Maze
# ---------------------------------------------------------------------------


def _make_maze(seed: int, wall_fraction: float = 0.25) -> set[GridPos]:
    """Random scattered walls. Spawn cells are always kept open."""
    gen = np.random.default_rng(seed)
    mask = gen.random((WIDTH, HEIGHT)) < wall_fraction
    walls = {(int(x), int(y)) for x, y in zip(*np.nonzero(mask), strict=True)}
    for cell in _spawn_cells() + [(WIDTH // 2, HEIGHT // 2)]:
        walls.discard(cell)
    return walls


def _spawn_cells() -> list[GridPos]:
    return [(1, 1), (WIDTH - 2, 1), (1, HEIGHT - 2), (WIDTH - 2, HEIGHT - 2)]


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


def _run_tier(index: int, walls: set[GridPos], seed: int) -> DecisionScheduler:
    rng.init(config.RANDOM_SEED)
    gen = np.random.default_rng(seed)
    clock = ManualClock()
    world = WorldContext(WIDTH, HEIGHT, SharedIntelligence(), clock)
    agents = [
        PursuerAgent(AgentId(i), cell) for i, cell in enumerate(_spawn_cells())
    ]
    configuration = DifficultyConfiguration(current_index=index)
    scheduler = DecisionScheduler(agents, world, configuration)

    target = TargetState((WIDTH // 2, HEIGHT // 2))
    for _ in range(FRAMES):
        clock.advance(FRAME_MS)

        exits = open_neighbors(target.position, walls, WIDTH, HEIGHT)
        if exits:
            heading, cell = exits[int(gen.integers(len(exits)))]
            target = TargetState(cell, heading)
        else:
            target = TargetState(target.position, ZERO)

        decisions = scheduler.update(FRAME_MS, walls, target)
        for agent in agents:
            direction = decisions[agent.agent_id]
            if direction not in DIRECTIONS:
                continue
            cell = step(agent.position, direction, WIDTH, HEIGHT)
            if cell in walls:
                continue
            agent.commit(cell)
            agent.arrive()

    return scheduler


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main() -> None:
    walls = _make_maze(seed=42)
    tiers = DifficultyConfiguration().tiers

    print(f"Decision latency, {WIDTH}x{HEIGHT} maze, {FRAMES} frames per tier")
    print("=" * 78)
    print(f"{'Tier':<16} {'decisions':>10} {'mean':>9}  percentiles (ms)")
    print("-" * 78)

    for index, tier in enumerate(tiers):
        scheduler = _run_tier(index, walls, seed=index)
        stats = scheduler.decision_stats
        print(
            f"{tier.name:<16} {stats.sample_count:>10} {stats.mean:>8.3f}  "
            f"{stats.get_percentiles_string()}"
        )

    print("-" * 78)
    print("Only the most recent samples are kept for each tier.")


if __name__ == "__main__":
    main()
