"""Snake Pathfinder — time-aware path search for a self-avoiding snake."""

from snake_pathfinder.board import Board
from snake_pathfinder.config import DemoConfig, SearchConfig
from snake_pathfinder.engine import Round, SnakeDriver
from snake_pathfinder.heuristic import generate_heuristic
from snake_pathfinder.search import (
    PathState,
    SearchResult,
    find_path,
    is_legal,
    is_occupied,
    search_path,
)
from snake_pathfinder.snake import (
    Direction,
    Snake,
    SnakeConstructionError,
    build_snake,
)

__all__ = [
    "Board",
    "DemoConfig",
    "Direction",
    "PathState",
    "Round",
    "SearchConfig",
    "SearchResult",
    "Snake",
    "SnakeConstructionError",
    "SnakeDriver",
    "build_snake",
    "find_path",
    "generate_heuristic",
    "is_legal",
    "is_occupied",
    "search_path",
]
