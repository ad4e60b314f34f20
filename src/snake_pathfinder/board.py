"""Fixed-size board geometry for the pathfinder."""

from __future__ import annotations

from collections.abc import Iterator


class Board:
    """Immutable width x height rectangle.

    Coordinates are Cartesian ``(x, y)`` with ``y`` growing upwards.
    Cells are flattened row by row, so ``index(x, y) == x + y * width``.
    """

    __slots__ = ("_width", "_height")

    def __init__(self, width: int, height: int) -> None:
        if width < 2:
            raise ValueError("Board width must be at least 2.")
        if height < 2:
            raise ValueError("Board height must be at least 2.")
        self._width = width
        self._height = height

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self._width * self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the board."""
        return 0 <= x < self._width and 0 <= y < self._height

    def index(self, x: int, y: int) -> int:
        """Flat index of a cell."""
        return x + y * self._width

    def cells(self) -> Iterator[tuple[int, int]]:
        """Iterate over every cell, row by row from ``y == 0``."""
        for y in range(self._height):
            for x in range(self._width):
                yield x, y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self._width, self._height) == (other._width, other._height)

    def __hash__(self) -> int:
        return hash((self._width, self._height))

    def __repr__(self) -> str:
        return f"Board(width={self._width}, height={self._height})"

    def to_dict(self) -> dict:
        """Serialize board geometry to a dictionary."""
        return {"width": self._width, "height": self._height}
