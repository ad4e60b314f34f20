"""Headless "infinite snake" driver built on repeated searches."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np

from snake_pathfinder.board import Board
from snake_pathfinder.config import DemoConfig
from snake_pathfinder.search import SearchResult, find_path
from snake_pathfinder.snake import Cell, Snake
from snake_pathfinder.targets import TargetSpawner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Round:
    """One target chased by the driver.

    ``snake`` is the snake *before* the search, so a renderer can replay
    ``result.moves`` from it while the next round is being searched.
    """

    number: int
    snake: Snake
    target: Cell
    result: SearchResult | None
    elapsed_seconds: float

    @property
    def found(self) -> bool:
        return self.result is not None

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "target": list(self.target),
            "moves": self.result.to_string() if self.result else None,
            "opened": self.result.opened if self.result else None,
            "explored": self.result.explored if self.result else None,
            "elapsed_seconds": self.elapsed_seconds,
        }


class SnakeDriver:
    """Chases targets one after another until stuck or out of rounds.

    Each round places a target on a free cell, searches for a path to it
    from the current snake, walks the path and grows the snake. Rounds
    share no mutable state with the searches they start.
    """

    def __init__(self, config: DemoConfig | None = None) -> None:
        self.config = config if config is not None else DemoConfig()
        self.board = Board(self.config.width, self.config.height)
        self.rng = np.random.default_rng(self.config.seed)

        # Start along the bottom row, heading right.
        body = [(x, 0) for x in range(self.config.initial_length)]
        self.snake = Snake(self.board, body)
        self.targets = TargetSpawner(self.board, rng=self.rng)

        self.rounds = 0
        self.score = 0
        self.game_over = False
        self._executor: ThreadPoolExecutor | None = None

    def next_round(self) -> Round | None:
        """Play a single round. Returns ``None`` once the game is over."""
        if self.game_over:
            return None

        target = self.targets.spawn(self.snake)
        if target is None:
            self._end("board is full")
            return None

        start = time.perf_counter()
        result = find_path(self.snake, *target, config=self.config.search)
        elapsed = time.perf_counter() - start

        self.rounds += 1
        played = Round(self.rounds, self.snake, target, result, elapsed)

        if result is None:
            self._end(f"no path to {target}")
            return played

        self.snake = self.snake.advanced(
            result.moves, grow=self.config.growth_per_target,
        )
        self.score += 1
        logger.debug(
            "Round %d: target %s in %.3fs, %s",
            self.rounds, target, elapsed, result.summary(),
        )
        if self.rounds >= self.config.max_rounds:
            self._end("round limit reached")
        return played

    def play(self) -> Iterator[Round]:
        """Yield rounds until the game is over."""
        while (played := self.next_round()) is not None:
            yield played
            if self.game_over:
                return

    def prefetch(self) -> Future[Round | None]:
        """Run :meth:`next_round` on a background worker.

        Only one worker exists, so prefetched rounds run in order. Do not
        call :meth:`next_round` directly while a prefetch is pending.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="snake-search",
            )
        return self._executor.submit(self.next_round)

    def close(self) -> None:
        """Shut down the background worker, if one was started."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> SnakeDriver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_state(self) -> dict:
        """Return the full, serializable driver state."""
        return {
            "rounds": self.rounds,
            "score": self.score,
            "game_over": self.game_over,
            "board": self.board.to_dict(),
            "snake": self.snake.to_dict(),
            "target": self.targets.to_dict(),
        }

    def _end(self, reason: str) -> None:
        self.game_over = True
        logger.info(
            "Game over after %d round(s) with score %d: %s.",
            self.rounds, self.score, reason,
        )
