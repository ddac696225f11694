"""Utility helpers for reading, printing and rendering Sudoku boards."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import cv2
import numpy as np
from matplotlib import colormaps

from solver import BOARD_SIZE, BOX_SIZE, EMPTY, Grid, InvalidGridError

# Digit colours for filled-in cells, converted from matplotlib RGB to OpenCV BGR
_DIGIT_COLORS = (colormaps["Greens"](np.linspace(0.55, 0.95, BOARD_SIZE + 1))[:, 2::-1] * 255).astype("uint8")
_GIVEN_COLOR = (0, 0, 0)
_LINE_COLOR = (40, 40, 40)
_BACKGROUND = 255
_EMPTY_CHARS = "0."
_GIVEN_CHARS = "123456789"
_IGNORED_CHARS = "|-+"
_BLOCK_SEPARATOR = "------+-------+------"

PathLike = Union[str, Path]


def parse_board(text: str) -> Grid:
    """Parse an 81-cell board written with digits, ``0`` or ``.`` for blanks.

    Whitespace and the ``| - +`` box-drawing characters are skipped, so both
    the compact one-line form and the output of ``format_board`` are accepted.
    """
    cells: List[int] = []
    for char in text:
        if char.isspace() or char in _IGNORED_CHARS:
            continue
        if char in _EMPTY_CHARS:
            cells.append(EMPTY)
        elif char in _GIVEN_CHARS:
            cells.append(int(char))
        else:
            raise InvalidGridError(f"Unexpected character {char!r} in board text")

    expected = BOARD_SIZE * BOARD_SIZE
    if len(cells) != expected:
        raise InvalidGridError(f"Board text has {len(cells)} cells, expected {expected}")
    return [cells[i : i + BOARD_SIZE] for i in range(0, expected, BOARD_SIZE)]


def load_board(path: PathLike) -> Grid:
    board_path = Path(path)
    if not board_path.is_file():
        raise FileNotFoundError(f"Unable to read board at {board_path}")
    return parse_board(board_path.read_text())


def _cell_char(value: int) -> str:
    return "." if value == EMPTY else str(value)


def board_to_string(board: Sequence[Sequence[int]]) -> str:
    return "".join(_cell_char(value) for row in board for value in row)


def format_board(board: Sequence[Sequence[int]]) -> str:
    """Render the board as text with separators between the 3x3 blocks."""
    lines: List[str] = []
    for row in range(BOARD_SIZE):
        if row and row % BOX_SIZE == 0:
            lines.append(_BLOCK_SEPARATOR)
        groups = []
        for start in range(0, BOARD_SIZE, BOX_SIZE):
            groups.append(" ".join(_cell_char(board[row][col]) for col in range(start, start + BOX_SIZE)))
        lines.append(" | ".join(groups))
    return "\n".join(lines)


def to_array(board: Sequence[Sequence[int]]) -> np.ndarray:
    return np.array(board, dtype="uint8").reshape(BOARD_SIZE, BOARD_SIZE)


def render_board(
    board: Sequence[Sequence[int]],
    givens: Optional[Sequence[Sequence[int]]] = None,
    cell_size: int = 50,
) -> np.ndarray:
    """Draw the board as a BGR image.

    Digits that are non-zero in ``givens`` are drawn in black, the rest in a
    green shade picked per digit. Without ``givens`` every digit counts as given.
    """
    values = to_array(board)
    side = cell_size * BOARD_SIZE
    image = np.full((side + 1, side + 1, 3), _BACKGROUND, dtype="uint8")

    for i in range(BOARD_SIZE + 1):
        offset = i * cell_size
        thickness = 3 if i % BOX_SIZE == 0 else 1
        cv2.line(image, (offset, 0), (offset, side), _LINE_COLOR, thickness)
        cv2.line(image, (0, offset), (side, offset), _LINE_COLOR, thickness)

    scale = cell_size / 55.0
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            value = int(values[row, col])
            if value == EMPTY:
                continue
            if givens is None or givens[row][col] != EMPTY:
                color: Tuple[int, ...] = _GIVEN_COLOR
            else:
                color = tuple(int(channel) for channel in _DIGIT_COLORS[value])
            text = str(value)
            text_size, _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, 2)
            text_x = int(col * cell_size + (cell_size - text_size[0]) / 2)
            text_y = int(row * cell_size + (cell_size + text_size[1]) / 2)
            cv2.putText(
                image,
                text,
                (text_x, text_y),
                cv2.FONT_HERSHEY_SIMPLEX,
                scale,
                color,
                2,
                cv2.LINE_AA,
            )
    return image


def save_board_image(path: PathLike, image: np.ndarray) -> None:
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(target), image):
        raise OSError(f"Unable to write image to {target}")
