"""Plain-text rendering of a snake on its board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np

from snake_pathfinder.snake import Cell, Direction, Snake

EMPTY = "."
BODY = "#"
HEAD = "@"
TARGET = "*"


def render(snake: Snake, target: Cell | None = None) -> str:
    """Draw the board as text, one line per row, highest ``y`` first."""
    board = snake.board
    canvas = np.full((board.height, board.width), EMPTY, dtype="<U1")
    if target is not None:
        canvas[target[1], target[0]] = TARGET
    for x, y in snake.body:
        canvas[y, x] = BODY
    hx, hy = snake.head
    canvas[hy, hx] = HEAD
    # Row 0 is the bottom of a Cartesian board.
    return "\n".join("".join(row) for row in canvas[::-1])


def animate(
    snake: Snake,
    moves: Iterable[Direction],
    target: Cell | None = None,
) -> Iterator[str]:
    """Yield one rendered frame per move of *moves*."""
    for move in moves:
        snake = snake.advanced([move])
        yield render(snake, target)
