"""Snake body geometry and time-aware occupancy."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from snake_pathfinder.board import Board

Cell = tuple[int, int]


class SnakeConstructionError(ValueError):
    """Raised when a snake body cannot exist on its board."""


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``UP`` is ``+y``: the grid is Cartesian, not screen-row ordered.
    """

    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def code(self) -> str:
        """Single-letter code used for compact move strings."""
        return self.name[0]

    @property
    def is_horizontal(self) -> bool:
        return self.value[1] == 0

    def apply(self, x: int, y: int) -> Cell:
        """Return the cell one step from ``(x, y)`` in this direction."""
        dx, dy = self.value
        return x + dx, y + dy

    @classmethod
    def between(cls, start: Cell, end: Cell) -> Direction:
        """Direction of the unit step from *start* to *end*."""
        delta = (end[0] - start[0], end[1] - start[1])
        try:
            return _BY_DELTA[delta]
        except KeyError:
            raise ValueError(
                f"Cells {start} and {end} are not one cardinal step apart.",
            ) from None

    @classmethod
    def from_code(cls, code: str) -> Direction:
        """Parse a single-letter code (``U``, ``D``, ``L`` or ``R``)."""
        try:
            return _BY_CODE[code.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction code {code!r}.") from None


_BY_DELTA: dict[Cell, Direction] = {d.value: d for d in Direction}
_BY_CODE: dict[str, Direction] = {d.code: d for d in Direction}

# Fixed expansion order shared by the seeding and expansion steps.
DIRECTIONS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def moves_to_string(moves: Iterable[Direction]) -> str:
    """Encode moves as a string such as ``"RRUL"``."""
    return "".join(move.code for move in moves)


def moves_from_string(text: str) -> list[Direction]:
    """Decode a move string produced by :func:`moves_to_string`."""
    return [Direction.from_code(ch) for ch in text if not ch.isspace()]


class Snake:
    """Immutable snapshot of a snake on a board.

    The body is stored **tail first**: ``body[0]`` is the tail and
    ``body[-1]`` is the head. The segment ``k`` steps from the tail frees
    its cell at depth ``k``; depth 0 is the first move, on which the tail
    vacates as the head advances.

    ``pending_growth`` counts moves during which the tail stays put
    (after eating). Every cell then frees that many moves later.
    """

    def __init__(
        self,
        board: Board,
        body: Sequence[Cell],
        pending_growth: int = 0,
    ) -> None:
        if not body:
            raise SnakeConstructionError(
                "Snake must have at least one body segment.",
            )
        if pending_growth < 0:
            raise SnakeConstructionError("pending_growth must be >= 0.")

        cells = tuple((int(x), int(y)) for x, y in body)
        for x, y in cells:
            if not board.in_bounds(x, y):
                raise SnakeConstructionError(
                    f"Body segment {(x, y)} lies outside the board.",
                )

        path: list[Direction] = []
        for prev, cur in zip(cells, cells[1:]):
            try:
                path.append(Direction.between(prev, cur))
            except ValueError as exc:
                raise SnakeConstructionError(
                    f"Consecutive segments are not connected: {exc}",
                ) from exc

        occupancy: dict[Cell, int] = {}
        for k, cell in enumerate(cells):
            if cell in occupancy:
                raise SnakeConstructionError(
                    f"Body intersects itself at {cell}.",
                )
            occupancy[cell] = k + pending_growth

        self.board = board
        self.pending_growth = pending_growth
        self._body = cells
        self._path = tuple(path)
        self._occupancy = MappingProxyType(occupancy)

    @classmethod
    def from_path(
        cls,
        board: Board,
        start: Cell,
        path: Iterable[Direction],
        pending_growth: int = 0,
    ) -> Snake:
        """Build a snake from its tail cell and the moves walked to the head."""
        x, y = start
        if not board.in_bounds(x, y):
            raise SnakeConstructionError(
                f"Start position {start} lies outside the board.",
            )
        body = [(x, y)]
        for direction in path:
            x, y = direction.apply(x, y)
            if not board.in_bounds(x, y):
                raise SnakeConstructionError(
                    f"Initial path leaves the board at {(x, y)}.",
                )
            body.append((x, y))
        return cls(board, body, pending_growth=pending_growth)

    @property
    def body(self) -> tuple[Cell, ...]:
        return self._body

    @property
    def path(self) -> tuple[Direction, ...]:
        """The ``size - 1`` moves leading from the tail to the head."""
        return self._path

    @property
    def occupancy(self) -> Mapping[Cell, int]:
        """Read-only mapping of body cell to the depth it becomes free."""
        return self._occupancy

    @property
    def size(self) -> int:
        return len(self._body)

    @property
    def trail_length(self) -> int:
        """Number of most recent head positions that are still body."""
        return len(self._body) + self.pending_growth

    @property
    def head(self) -> Cell:
        return self._body[-1]

    @property
    def tail(self) -> Cell:
        return self._body[0]

    def free_at(self, x: int, y: int) -> int:
        """Depth at which ``(x, y)`` is free; 0 for cells off the body."""
        return self._occupancy.get((x, y), 0)

    def is_move_legal(self, direction: Direction) -> bool:
        """Check a first move from the real head against the real body."""
        x, y = direction.apply(*self.head)
        if not self.board.in_bounds(x, y):
            return False
        return self.free_at(x, y) <= 0

    def advanced(self, moves: Iterable[Direction], grow: int = 0) -> Snake:
        """Return the snake after walking *moves*, then growing *grow* segments.

        Growth is deferred: the tail stays in place for the next *grow*
        moves. Raises ``ValueError`` if the walk leaves the board or hits
        the body.
        """
        if grow < 0:
            raise ValueError("grow must be >= 0.")
        body: deque[Cell] = deque(self._body)
        pending = self.pending_growth
        occupied = set(body)
        for step, move in enumerate(moves):
            x, y = move.apply(*body[-1])
            if not self.board.in_bounds(x, y):
                raise ValueError(f"Move {step} leaves the board at {(x, y)}.")
            if pending > 0:
                pending -= 1
            else:
                occupied.discard(body.popleft())
            if (x, y) in occupied:
                raise ValueError(f"Move {step} runs into the body at {(x, y)}.")
            body.append((x, y))
            occupied.add((x, y))
        return Snake(self.board, list(body), pending_growth=pending + grow)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snake):
            return NotImplemented
        return (
            self.board == other.board
            and self._body == other._body
            and self.pending_growth == other.pending_growth
        )

    def __hash__(self) -> int:
        return hash((self.board, self._body, self.pending_growth))

    def __repr__(self) -> str:
        return (
            f"Snake(size={self.size}, head={self.head}, "
            f"pending_growth={self.pending_growth})"
        )

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(cell) for cell in self._body],
            "path": moves_to_string(self._path),
            "pending_growth": self.pending_growth,
        }


def build_snake(board: Board, body: Sequence[Cell]) -> Snake:
    """Validate *body* (tail first, head last) and build a :class:`Snake`."""
    return Snake(board, body)
