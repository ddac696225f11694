import pytest

PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def to_grid(text):
    return [[int(ch) for ch in text[i : i + 9]] for i in range(0, 81, 9)]


@pytest.fixture
def puzzle():
    return to_grid(PUZZLE)


@pytest.fixture
def solution():
    return to_grid(SOLUTION)


@pytest.fixture
def empty_board():
    return [[0] * 9 for _ in range(9)]


@pytest.fixture
def dead_end_board():
    """Solved grid with (0, 0) and (8, 8) cleared and 9 duplicated in row 8.

    (0, 0) has a single candidate, (8, 8) has none.
    """
    board = to_grid(SOLUTION)
    board[0][0] = 0
    board[8][8] = 0
    board[8][7] = 9
    return board


@pytest.fixture
def boxed_in_board():
    """Consistent board whose (0, 0) cell has no candidates."""
    board = [[0] * 9 for _ in range(9)]
    board[0][1:] = [1, 2, 3, 4, 5, 6, 7, 8]
    board[8][0] = 9
    return board
