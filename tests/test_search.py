"""Tests for the time-expanded path search."""

from collections import deque

import pytest

from snake_pathfinder.benchmark import TRAPPED_SCENARIO
from snake_pathfinder.board import Board
from snake_pathfinder.config import SearchConfig
from snake_pathfinder.search import (
    PathState,
    SearchResult,
    _is_hugging,
    find_path,
    is_legal,
    is_occupied,
    search_path,
)
from snake_pathfinder.snake import Direction, Snake, build_snake


def simulate(snake, moves):
    """Replay *moves* one tick at a time and return the final head.

    Asserts that the head stays on the board and never lands on a cell
    the body still covers at that moment.
    """
    board = snake.board
    body = deque(snake.body)
    pending = snake.pending_growth
    for move in moves:
        dx, dy = move.value
        hx, hy = body[-1]
        nxt = (hx + dx, hy + dy)
        assert board.in_bounds(*nxt), f"left the board at {nxt}"
        if pending > 0:
            pending -= 1
        else:
            body.popleft()
        assert nxt not in body, f"ran into the body at {nxt}"
        body.append(nxt)
    return body[-1]


class TestPathState:
    def test_moves_walks_parents(self):
        root = PathState(1, 0, 0, 0, Direction.RIGHT)
        mid = PathState(1, 1, 1, 5, Direction.UP, root)
        leaf = PathState(0, 1, 2, 9, Direction.LEFT, mid)
        assert leaf.moves() == [Direction.RIGHT, Direction.UP, Direction.LEFT]
        assert leaf.position == (0, 1)
        assert root.moves() == [Direction.RIGHT]


class TestOccupancy:
    def setup_method(self):
        self.snake = build_snake(Board(4, 4), [(0, 0), (1, 0)])
        # UP, RIGHT, UP from the head at (1, 0).
        self.s0 = PathState(1, 1, 0, 0, Direction.UP)
        self.s1 = PathState(2, 1, 1, 0, Direction.RIGHT, self.s0)
        self.s2 = PathState(2, 2, 2, 0, Direction.UP, self.s1)

    def test_static_body(self):
        assert is_occupied(self.snake, None, 1, 0, 0)
        assert not is_occupied(self.snake, None, 0, 0, 0)
        assert not is_occupied(self.snake, None, 1, 0, 1)

    def test_own_trail_blocks_until_tail_passes(self):
        # (1, 1) was entered at depth 0 and is still body at depth 1.
        assert is_occupied(self.snake, self.s0, 1, 1, 1)
        # Two moves later the tail has moved past it.
        assert not is_occupied(self.snake, self.s1, 1, 1, 2)

    def test_same_cell_differs_by_depth(self):
        # A position-only closed set would wrongly treat these alike.
        assert is_occupied(self.snake, self.s0, 1, 1, 1)
        assert not is_occupied(self.snake, self.s2, 1, 1, 3)

    def test_legal_checks_bounds(self):
        assert not is_legal(self.snake, self.s2, 2, 4, 3)
        assert is_legal(self.snake, self.s2, 2, 3, 3)


class TestHugging:
    def setup_method(self):
        # Free-at-depth: (2,2)->0, (2,1)->1, (1,1)->2.
        self.snake = build_snake(Board(3, 3), [(2, 2), (2, 1), (1, 1)])

    def test_one_blocked_side_hugs(self):
        state = PathState(0, 0, 0, 0, Direction.DOWN)
        assert _is_hugging(self.snake, state, Direction.RIGHT, 1)

    def test_no_blocked_side(self):
        state = PathState(0, 1, 0, 0, Direction.LEFT)
        assert not _is_hugging(self.snake, state, Direction.UP, 1)

    def test_two_blocked_sides(self):
        # Wall below, body above.
        state = PathState(1, 0, 0, 0, Direction.DOWN)
        assert not _is_hugging(self.snake, state, Direction.UP, 1)


class TestFindPathScenarios:
    def test_column_snake_to_corner(self):
        board = Board(3, 3)
        snake = build_snake(board, [(0, 0), (0, 1), (0, 2)])
        result = find_path(snake, 1, 0)
        assert result is not None
        assert len(result) >= 1
        assert result.moves[0] in (Direction.RIGHT, Direction.DOWN)
        assert simulate(snake, result.moves) == (1, 0)

    def test_column_snake_exact_result(self):
        snake = build_snake(Board(3, 3), [(0, 0), (0, 1), (0, 2)])
        result = find_path(snake, 1, 0)
        assert result == SearchResult(
            (Direction.RIGHT, Direction.DOWN, Direction.DOWN), 6, 3,
        )
        assert result.to_string() == "RDD"

    def test_waits_for_body_to_vacate_target(self):
        board = Board(3, 3)
        snake = build_snake(board, [(0, 0), (1, 0), (2, 0)])
        free_at = snake.free_at(1, 0)
        assert free_at == 1
        result = find_path(snake, 1, 0)
        assert result is not None
        # The last move lands at depth len - 1.
        assert len(result) - 1 >= free_at
        assert simulate(snake, result.moves) == (1, 0)

    def test_target_on_tail(self):
        snake = build_snake(Board(3, 3), [(0, 0), (1, 0), (2, 0)])
        result = find_path(snake, 0, 0)
        assert result is not None
        assert simulate(snake, result.moves) == (0, 0)

    @pytest.mark.parametrize("target", [(1, 0), (0, 1), (1, 1)])
    def test_single_segment_on_smallest_board(self, target):
        snake = build_snake(Board(2, 2), [(0, 0)])
        result = find_path(snake, *target)
        assert result is not None
        assert simulate(snake, result.moves) == target

    def test_return_to_own_head_cell(self):
        # The head's cell is revisited once the body has moved off it.
        snake = build_snake(Board(2, 2), [(0, 0), (0, 1), (1, 1)])
        result = find_path(snake, 1, 1)
        assert result is not None
        assert len(result) - 1 >= snake.free_at(1, 1)
        assert simulate(snake, result.moves) == (1, 1)

    def test_pending_growth_is_respected(self):
        board = Board(3, 3)
        snake = Snake(board, [(0, 0), (1, 0), (2, 0)], pending_growth=2)
        result = find_path(snake, 0, 0)
        assert result is not None
        assert len(result) - 1 >= snake.free_at(0, 0)
        assert simulate(snake, result.moves) == (0, 0)

    def test_target_out_of_bounds(self):
        snake = build_snake(Board(3, 3), [(0, 0)])
        with pytest.raises(ValueError, match="outside the board"):
            find_path(snake, -1, 0)


class TestFindPathNotFound:
    def test_no_legal_first_move(self):
        # The head in the corner is boxed in by its own neck and body.
        body = [(2, 2), (2, 1), (2, 0), (1, 0), (1, 1), (0, 1), (0, 0)]
        snake = build_snake(Board(3, 3), body)
        assert find_path(snake, 0, 2) is None

    def test_dead_end_exhausts_open_set(self):
        body = [(0, 2), (1, 2), (2, 2), (2, 1), (1, 1), (0, 1), (0, 0)]
        snake = build_snake(Board(3, 3), body)
        assert find_path(snake, 0, 2) is None

    def test_explore_budget(self):
        snake = build_snake(Board(6, 6), [(0, 0), (1, 0), (2, 0)])
        config = SearchConfig(max_explored=1)
        assert find_path(snake, 5, 5, config=config) is None
        assert find_path(snake, 5, 5) is not None

    def test_failed_search_keeps_counters(self):
        body = [(0, 2), (1, 2), (2, 2), (2, 1), (1, 1), (0, 1), (0, 0)]
        snake = build_snake(Board(3, 3), body)
        result = search_path(snake, 0, 2)
        assert not result.found
        assert result.moves == ()
        assert len(result) == 0
        # Seed (1, 0), then (2, 0), then nothing is legal.
        assert result.opened == 2
        assert result.explored == 2
        assert result.summary().startswith("No path")

    def test_spent_budget_keeps_counters(self):
        snake = build_snake(Board(6, 6), [(0, 0), (1, 0), (2, 0)])
        result = search_path(snake, 5, 5, config=SearchConfig(max_explored=1))
        assert not result.found
        assert result.explored == 1
        assert result.opened > 0


class TestFindPathProperties:
    def test_deterministic(self):
        board = Board(6, 6)
        body = [
            (0, 0), (1, 0), (2, 0), (3, 0), (3, 1), (2, 1), (1, 1),
            (1, 2), (2, 2), (3, 2),
        ]
        snake = build_snake(board, body)
        first = find_path(snake, 0, 1)
        second = find_path(snake, 0, 1)
        assert first is not None
        assert first == second
        assert simulate(snake, first.moves) == (0, 1)

    def test_every_free_cell_reachable_on_open_board(self):
        board = Board(5, 5)
        snake = build_snake(board, [(0, 0), (1, 0), (2, 0), (2, 1)])
        for x, y in board.cells():
            if (x, y) in snake.occupancy:
                continue
            result = find_path(snake, x, y)
            assert result is not None, (x, y)
            assert simulate(snake, result.moves) == (x, y)

    def test_counters(self):
        snake = build_snake(Board(5, 5), [(0, 0), (1, 0)])
        result = find_path(snake, 4, 4)
        assert result is not None
        assert result.explored >= len(result)
        assert result.opened >= result.explored
        assert "opened" in result.summary()

    def test_self_trapped_snake_coils_out(self):
        snake, (tx, ty) = TRAPPED_SCENARIO.build()
        result = find_path(snake, tx, ty)
        assert result is not None
        assert len(result) - 1 >= snake.free_at(tx, ty)
        assert simulate(snake, result.moves) == (tx, ty)
