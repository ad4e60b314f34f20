"""Performance benchmarking for the path search."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from snake_pathfinder.config import SearchConfig
from snake_pathfinder.scenario import ScenarioModel
from snake_pathfinder.search import search_path

logger = logging.getLogger(__name__)

# 10x10 board where the snake has cut off its own tail corner; the target
# is the tail cell, reachable only by coiling out of the trap.
TRAPPED_SCENARIO = ScenarioModel(
    width=10,
    height=10,
    body=[
        (0, 0), (0, 1), (1, 1), (2, 1), (2, 2), (1, 2), (0, 2),
        (0, 3), (1, 3), (2, 3), (3, 3), (4, 3), (5, 3), (6, 3), (7, 3),
        (8, 3), (9, 3),
        (9, 4), (8, 4), (7, 4), (6, 4), (5, 4), (4, 4), (3, 4), (2, 4),
        (1, 4), (0, 4),
    ],
    target=(0, 0),
)


@dataclass
class BenchmarkResult:
    """Results from repeated searches on one scenario."""

    repeats: int
    found: bool
    path_length: int
    opened: int
    explored: int
    wall_time_seconds: float
    searches_per_second: float
    explored_per_second: float

    def summary(self) -> str:
        outcome = f"{self.path_length} move(s)" if self.found else "no path"
        return (
            f"Benchmark: {self.repeats} search(es), {outcome}, "
            f"opened {self.opened}, explored {self.explored} | "
            f"{self.wall_time_seconds:.3f}s total, "
            f"{self.searches_per_second:.2f} searches/s, "
            f"{self.explored_per_second:.0f} states/s"
        )


def benchmark_search(
    scenario: ScenarioModel | None = None,
    *,
    repeats: int = 3,
    config: SearchConfig | None = None,
) -> BenchmarkResult:
    """Time :func:`~snake_pathfinder.search.search_path` on *scenario* over *repeats* runs.

    Counters come from the last run; the search is deterministic, so every
    run reports the same values.
    """
    if repeats < 1:
        raise ValueError("repeats must be at least 1.")
    if scenario is None:
        scenario = TRAPPED_SCENARIO
    snake, (tx, ty) = scenario.build()

    start = time.perf_counter()
    for _ in range(repeats):
        result = search_path(snake, tx, ty, config=config)
    elapsed = time.perf_counter() - start

    explored = result.explored
    bench = BenchmarkResult(
        repeats=repeats,
        found=result.found,
        path_length=len(result),
        opened=result.opened,
        explored=explored,
        wall_time_seconds=elapsed,
        searches_per_second=repeats / max(elapsed, 1e-9),
        explored_per_second=explored * repeats / max(elapsed, 1e-9),
    )
    logger.info(bench.summary())
    return bench
