"""Time-expanded best-first search for a snake avoiding its own body.

A search state is a head position *and* the number of moves taken to get
there. The same cell reached at two different depths is two different
states, because the body covers different cells at each depth. States
are never merged and no closed set is kept.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from snake_pathfinder.config import SearchConfig
from snake_pathfinder.heuristic import generate_heuristic
from snake_pathfinder.snake import DIRECTIONS, Direction, moves_to_string

if TYPE_CHECKING:
    from snake_pathfinder.snake import Snake

logger = logging.getLogger(__name__)


class PathState:
    """A hypothetical head position after ``depth + 1`` moves.

    The first move from the real head has depth 0. ``cost`` is the
    accumulated path cost and ``parent`` links back towards the root, so
    the explored states form a tree owned by a single search call.
    """

    __slots__ = ("x", "y", "depth", "cost", "direction", "parent")

    def __init__(
        self,
        x: int,
        y: int,
        depth: int,
        cost: int,
        direction: Direction,
        parent: PathState | None = None,
    ) -> None:
        self.x = x
        self.y = y
        self.depth = depth
        self.cost = cost
        self.direction = direction
        self.parent = parent

    @property
    def position(self) -> tuple[int, int]:
        return self.x, self.y

    def moves(self) -> list[Direction]:
        """Walk the parent chain back to the root and return the moves in order."""
        moves: list[Direction] = []
        state: PathState | None = self
        while state is not None:
            moves.append(state.direction)
            state = state.parent
        moves.reverse()
        return moves

    def __repr__(self) -> str:
        return (
            f"PathState(x={self.x}, y={self.y}, depth={self.depth}, "
            f"cost={self.cost})"
        )


@dataclass(frozen=True)
class SearchResult:
    """Moves found by :func:`search_path` plus diagnostic counters.

    ``opened`` counts states pushed onto the open set and ``explored``
    counts states popped from it. A failed search has ``found=False``,
    no moves, and still carries both counters.
    """

    moves: tuple[Direction, ...]
    opened: int
    explored: int
    found: bool = True

    def __len__(self) -> int:
        return len(self.moves)

    def to_string(self) -> str:
        return moves_to_string(self.moves)

    def summary(self) -> str:
        outcome = f"Path of {len(self.moves)} move(s)" if self.found else "No path"
        return (
            f"{outcome} | "
            f"opened {self.opened}, explored {self.explored}"
        )


def is_occupied(
    snake: Snake,
    state: PathState | None,
    x: int,
    y: int,
    depth: int,
) -> bool:
    """Check whether ``(x, y)`` is covered by the body at move *depth*.

    The initial body is looked up in the snake's free-at-depth table. The
    part of the body laid down by the candidate path itself is found by
    walking back from *state* over the positions that are still within
    ``trail_length`` moves of *depth*. ``state=None`` means no moves have
    been made yet.
    """
    if snake.free_at(x, y) > depth:
        return True

    limit = depth - snake.trail_length
    piece = state
    while piece is not None and piece.depth > limit:
        if piece.x == x and piece.y == y:
            return True
        piece = piece.parent
    return False


def is_legal(
    snake: Snake,
    state: PathState | None,
    x: int,
    y: int,
    depth: int,
) -> bool:
    """A cell may be entered at *depth* if it is on the board and free."""
    if not snake.board.in_bounds(x, y):
        return False
    return not is_occupied(snake, state, x, y, depth)


def _is_hugging(
    snake: Snake,
    state: PathState,
    direction: Direction,
    depth: int,
) -> bool:
    # Exactly one blocked side across the axis of movement.
    x, y = state.x, state.y
    if direction.is_horizontal:
        first = not is_legal(snake, state, x - 1, y, depth)
        second = not is_legal(snake, state, x + 1, y, depth)
    elif direction in (Direction.UP, Direction.DOWN):
        first = not is_legal(snake, state, x, y - 1, depth)
        second = not is_legal(snake, state, x, y + 1, depth)
    else:
        raise ValueError(f"Invalid direction: {direction!r}")
    return first != second


def search_path(
    snake: Snake,
    target_x: int,
    target_y: int,
    config: SearchConfig | None = None,
) -> SearchResult:
    """Search for a move sequence that takes the head to ``(target_x, target_y)``.

    States are expanded in order of ``cost + heuristic * scale``. Moves
    that keep the snake pressed against a wall or its own body on exactly
    one side are one point cheaper, which favours tidy coils among paths
    of equal estimated length. Equal priorities are popped in insertion
    order.

    The result is not guaranteed to be the shortest path. When the open
    set runs dry (or the ``max_explored`` budget is spent) without reaching
    the target, the result has ``found=False`` and no moves.
    """
    if config is None:
        config = SearchConfig()
    board = snake.board
    if not board.in_bounds(target_x, target_y):
        raise ValueError(
            f"Target {(target_x, target_y)} lies outside the board.",
        )

    width = board.width
    scale = config.scale
    heuristic = generate_heuristic(snake, target_x, target_y).tolist()

    open_set: list[tuple[int, int, PathState]] = []
    counter = itertools.count()
    opened = 0
    explored = 0

    # Seed with the moves available to the real head; there is no path yet.
    # Seeds carry no cost, so ``h * scale`` orders them exactly as raw ``h``.
    head_x, head_y = snake.head
    for direction in DIRECTIONS:
        if not snake.is_move_legal(direction):
            continue
        x, y = direction.apply(head_x, head_y)
        state = PathState(x, y, 0, 0, direction)
        priority = heuristic[x + y * width] * scale
        heapq.heappush(open_set, (priority, next(counter), state))
        opened += 1

    while open_set:
        _, _, current = heapq.heappop(open_set)
        explored += 1

        if current.x == target_x and current.y == target_y:
            result = SearchResult(tuple(current.moves()), opened, explored)
            logger.debug("Reached %s: %s", (target_x, target_y), result.summary())
            return result

        if config.max_explored is not None and explored >= config.max_explored:
            logger.warning(
                "Search for %s stopped after exploring %d states.",
                (target_x, target_y), explored,
            )
            return SearchResult((), opened, explored, found=False)

        depth = current.depth + 1
        for direction in DIRECTIONS:
            x, y = direction.apply(current.x, current.y)
            if not is_legal(snake, current, x, y, depth):
                continue

            cost = current.cost + scale
            if not _is_hugging(snake, current, direction, depth):
                cost += config.non_hug_cost

            child = PathState(x, y, depth, cost, direction, current)
            priority = cost + heuristic[x + y * width] * scale
            heapq.heappush(open_set, (priority, next(counter), child))
            opened += 1

    logger.info(
        "No path to %s (opened %d, explored %d).",
        (target_x, target_y), opened, explored,
    )
    return SearchResult((), opened, explored, found=False)


def find_path(
    snake: Snake,
    target_x: int,
    target_y: int,
    config: SearchConfig | None = None,
) -> SearchResult | None:
    """Like :func:`search_path`, but returns ``None`` when no path is found."""
    result = search_path(snake, target_x, target_y, config=config)
    return result if result.found else None
