"""Target placement for the demo driver."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_pathfinder.board import Board
    from snake_pathfinder.snake import Cell, Snake

logger = logging.getLogger(__name__)


class TargetSpawner:
    """Picks target cells that are not covered by the snake.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        board: Board,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.board = board
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: Cell | None = None

    def free_cells(self, snake: Snake) -> np.ndarray:
        """Flat indices of every cell the body does not cover."""
        covered = np.zeros(self.board.size, dtype=bool)
        for x, y in snake.body:
            covered[self.board.index(x, y)] = True
        return np.flatnonzero(~covered)

    def spawn(self, snake: Snake) -> Cell | None:
        """Place a new target on a free cell, or return ``None`` if full."""
        free = self.free_cells(snake)
        if free.size == 0:
            logger.warning("No free cells available for a target.")
            self.position = None
            return None
        index = int(self.rng.choice(free))
        self.position = (index % self.board.width, index // self.board.width)
        return self.position

    def to_dict(self) -> dict:
        """Serialize target state to a dictionary."""
        return {
            "position": list(self.position) if self.position else None,
        }
