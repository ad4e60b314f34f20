"""Pydantic schemas for search scenarios read from and written to JSON."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from snake_pathfinder.board import Board
from snake_pathfinder.search import SearchResult
from snake_pathfinder.snake import Cell, Snake


class ScenarioModel(BaseModel):
    """A board, a snake body (tail first) and a target cell."""

    width: int = Field(ge=2)
    height: int = Field(ge=2)
    body: list[tuple[int, int]] = Field(min_length=1)
    target: tuple[int, int]
    pending_growth: int = Field(default=0, ge=0)

    @classmethod
    def from_file(cls, path: str | Path) -> ScenarioModel:
        return cls.model_validate_json(Path(path).read_text())

    def build(self) -> tuple[Snake, Cell]:
        """Construct the snake and check the target against the board.

        Raises ``ValueError`` (including
        :class:`~snake_pathfinder.snake.SnakeConstructionError`) for
        bodies or targets that cannot exist on the board.
        """
        board = Board(self.width, self.height)
        snake = Snake(board, self.body, pending_growth=self.pending_growth)
        if not board.in_bounds(*self.target):
            raise ValueError(f"Target {self.target} lies outside the board.")
        return snake, self.target


class PathResponse(BaseModel):
    """Serializable outcome of a single search."""

    found: bool
    moves: str | None = None
    length: int | None = None
    opened: int = 0
    explored: int = 0

    @classmethod
    def from_result(cls, result: SearchResult | None) -> PathResponse:
        if result is None:
            return cls(found=False)
        if not result.found:
            return cls(
                found=False, opened=result.opened, explored=result.explored,
            )
        return cls(
            found=True,
            moves=result.to_string(),
            length=len(result),
            opened=result.opened,
            explored=result.explored,
        )
