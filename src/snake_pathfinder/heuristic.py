"""Time-aware distance map computed backwards from the target."""

from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING

import numpy as np

from snake_pathfinder.snake import DIRECTIONS

if TYPE_CHECKING:
    from snake_pathfinder.snake import Snake

logger = logging.getLogger(__name__)


def generate_heuristic(snake: Snake, target_x: int, target_y: int) -> np.ndarray:
    """Estimate, for every cell, the number of moves between it and the target.

    Runs Dijkstra outwards from the target. A neighbour offered distance
    ``d + 1`` is raised to its free-at-depth value when the body still
    covers it at that point, so a cell is never claimed before the snake
    has left it. The result can exceed the true grid distance and is
    therefore not admissible; the search accepts that in exchange for far
    fewer expansions.

    Returns a flat ``int64`` array indexed by ``x + y * width``. Cells that
    cannot be reached keep the value 0.
    """
    board = snake.board
    if not board.in_bounds(target_x, target_y):
        raise ValueError(
            f"Target {(target_x, target_y)} lies outside the board.",
        )

    width = board.width
    occupancy = snake.occupancy
    heuristic = np.zeros(board.size, dtype=np.int64)
    seen = np.zeros(board.size, dtype=bool)

    queue: list[tuple[int, int, int]] = [(0, target_x, target_y)]
    while queue:
        dist, x, y = heapq.heappop(queue)
        index = x + y * width
        if seen[index]:
            continue
        seen[index] = True
        heuristic[index] = dist

        for direction in DIRECTIONS:
            nx, ny = direction.apply(x, y)
            if not board.in_bounds(nx, ny) or seen[nx + ny * width]:
                continue
            cost = dist + 1
            free_at = occupancy.get((nx, ny), 0)
            if free_at > cost:
                cost = free_at
            heapq.heappush(queue, (cost, nx, ny))

    logger.debug(
        "Heuristic for target %s: max %d over %d cells.",
        (target_x, target_y), int(heuristic.max()), board.size,
    )
    return heuristic
