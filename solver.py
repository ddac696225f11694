"""Backtracking Sudoku solver with a minimum-remaining-values variant."""
from __future__ import annotations

import logging
import numbers
import time
from typing import List, Optional, Sequence, Tuple

Grid = List[List[int]]

BOARD_SIZE = 9
BOX_SIZE = 3
EMPTY = 0
DIGITS = range(1, BOARD_SIZE + 1)
NO_CELL = (-1, -1, 0)

log = logging.getLogger(__name__)


class InvalidGridError(ValueError):
    """Raised when a board is not a 9x9 grid of integers in 0-9."""


def is_valid(board: Grid, row: int, col: int, value: int) -> bool:
    """Return True if ``value`` may be placed at (row, col).

    The target cell is assumed to be empty. Coordinates are not checked.
    """
    for i in range(BOARD_SIZE):
        if board[row][i] == value or board[i][col] == value:
            return False
    start_row = BOX_SIZE * (row // BOX_SIZE)
    start_col = BOX_SIZE * (col // BOX_SIZE)
    for r in range(start_row, start_row + BOX_SIZE):
        for c in range(start_col, start_col + BOX_SIZE):
            if board[r][c] == value:
                return False
    return True


def solve_board(board: Grid, row: int = 0, col: int = 0) -> bool:
    """Fill ``board`` in place, visiting cells in row-major order."""
    if row == BOARD_SIZE:
        return True
    if col == BOARD_SIZE:
        return solve_board(board, row + 1, 0)
    if board[row][col] != EMPTY:
        return solve_board(board, row, col + 1)

    for value in DIGITS:
        if is_valid(board, row, col, value):
            board[row][col] = value
            if solve_board(board, row, col + 1):
                return True
            board[row][col] = EMPTY
    return False


def find_next_cell(board: Grid) -> Tuple[int, int, int]:
    """Return ``(row, col, options)`` for the empty cell with the fewest candidates.

    Ties go to the first cell in row-major order. A cell with a single
    candidate is returned as soon as it is seen. ``NO_CELL`` means the board
    has no empty cells left.
    """
    best: Optional[Tuple[int, int, int]] = None
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            if board[row][col] != EMPTY:
                continue
            options = sum(1 for value in DIGITS if is_valid(board, row, col, value))
            if best is None or options < best[2]:
                best = (row, col, options)
                if options == 1:
                    return best
    return best if best is not None else NO_CELL


def solve_board_efficient(board: Grid) -> bool:
    """Fill ``board`` in place, always branching on the most constrained cell."""
    row, col, _ = find_next_cell(board)
    if row == -1 and col == -1:
        return True

    for value in DIGITS:
        if is_valid(board, row, col, value):
            board[row][col] = value
            if solve_board_efficient(board):
                return True
            board[row][col] = EMPTY
    return False


def validate_grid(board: Sequence[Sequence[int]]) -> None:
    if len(board) != BOARD_SIZE:
        raise InvalidGridError(f"Expected {BOARD_SIZE} rows, got {len(board)}")
    for row_idx, row in enumerate(board):
        if len(row) != BOARD_SIZE:
            raise InvalidGridError(f"Row {row_idx} has {len(row)} cells, expected {BOARD_SIZE}")
        for col_idx, value in enumerate(row):
            if not isinstance(value, numbers.Integral) or not EMPTY <= value <= BOARD_SIZE:
                raise InvalidGridError(f"Invalid value {value!r} at ({row_idx}, {col_idx})")


def is_consistent(board: Sequence[Sequence[int]]) -> bool:
    """Return False if any row, column or block repeats a non-zero digit."""
    for row in range(BOARD_SIZE):
        seen: set[int] = set()
        for value in board[row]:
            if value == EMPTY:
                continue
            if value in seen:
                return False
            seen.add(value)

    for col in range(BOARD_SIZE):
        seen = set()
        for row in range(BOARD_SIZE):
            value = board[row][col]
            if value == EMPTY:
                continue
            if value in seen:
                return False
            seen.add(value)

    for start_row in range(0, BOARD_SIZE, BOX_SIZE):
        for start_col in range(0, BOARD_SIZE, BOX_SIZE):
            seen = set()
            for r in range(start_row, start_row + BOX_SIZE):
                for c in range(start_col, start_col + BOX_SIZE):
                    value = board[r][c]
                    if value == EMPTY:
                        continue
                    if value in seen:
                        return False
                    seen.add(value)
    return True


def is_solved(board: Sequence[Sequence[int]]) -> bool:
    """Return True if every row, column and block holds 1-9 exactly once."""
    full = set(DIGITS)
    for i in range(BOARD_SIZE):
        if {board[i][c] for c in range(BOARD_SIZE)} != full:
            return False
        if {board[r][i] for r in range(BOARD_SIZE)} != full:
            return False
    for start_row in range(0, BOARD_SIZE, BOX_SIZE):
        for start_col in range(0, BOARD_SIZE, BOX_SIZE):
            block = {
                board[r][c]
                for r in range(start_row, start_row + BOX_SIZE)
                for c in range(start_col, start_col + BOX_SIZE)
            }
            if block != full:
                return False
    return True


def solve(board: Grid, efficient: bool = False) -> bool:
    """Solve ``board`` in place with the plain or the MRV strategy.

    Raises InvalidGridError for a malformed board. Conflicting givens make
    the board unsolvable, so False is returned without searching.
    """
    validate_grid(board)
    if not is_consistent(board):
        return False
    if efficient:
        return solve_board_efficient(board)
    return solve_board(board, 0, 0)


class SudokuSolver:
    """Solves a copy of the board and records how the last attempt went."""

    def __init__(self, efficient: bool = True) -> None:
        self.efficient = efficient
        self.last_status: str = "idle"
        self.last_elapsed: float = 0.0

    def _reset_state(self) -> None:
        self.last_status = "idle"
        self.last_elapsed = 0.0

    def solve_board(self, board: Sequence[Sequence[int]]) -> Optional[Grid]:
        self._reset_state()
        validate_grid(board)
        working: Grid = [[int(value) for value in row] for row in board]
        if not is_consistent(working):
            self.last_status = "invalid"
            log.warning("Board has conflicting givens")
            return None

        strategy = "mrv" if self.efficient else "row-major"
        log.debug("Solving with %s backtracking", strategy)
        started = time.perf_counter()
        solved = solve_board_efficient(working) if self.efficient else solve_board(working)
        self.last_elapsed = time.perf_counter() - started

        if solved:
            self.last_status = "solved"
            log.info("Solved with %s backtracking in %.3fs", strategy, self.last_elapsed)
            return working
        self.last_status = "unsolved"
        log.warning("No solution found after %.3fs", self.last_elapsed)
        return None
