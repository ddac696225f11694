import numpy as np
import pytest

from conftest import PUZZLE, SOLUTION
from solver import InvalidGridError
from utils import (
    board_to_string,
    format_board,
    load_board,
    parse_board,
    render_board,
    save_board_image,
    to_array,
)


def test_parse_compact_text(puzzle):
    assert parse_board(PUZZLE) == puzzle
    assert parse_board(PUZZLE.replace("0", ".")) == puzzle


def test_parse_ignores_layout_characters(puzzle):
    assert parse_board(format_board(puzzle)) == puzzle
    rows = "\n".join(PUZZLE[i : i + 9] for i in range(0, 81, 9))
    assert parse_board(rows + "\n") == puzzle


@pytest.mark.parametrize("text", [PUZZLE[:-1], PUZZLE + "1", PUZZLE[:-1] + "x", ""])
def test_parse_rejects_bad_text(text):
    with pytest.raises(InvalidGridError):
        parse_board(text)


def test_load_board(tmp_path, puzzle):
    path = tmp_path / "puzzle.txt"
    path.write_text(format_board(puzzle))
    assert load_board(path) == puzzle
    assert load_board(str(path)) == puzzle


def test_load_board_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="missing.txt"):
        load_board(tmp_path / "missing.txt")


def test_board_to_string(puzzle, solution):
    assert board_to_string(solution) == SOLUTION
    assert board_to_string(puzzle) == PUZZLE.replace("0", ".")


def test_format_board(puzzle):
    lines = format_board(puzzle).splitlines()
    assert len(lines) == 11
    assert lines[0] == "5 3 . | . 7 . | . . ."
    assert lines[3] == lines[7] == "------+-------+------"
    assert all(len(line) == 21 for line in lines)


def test_to_array(puzzle):
    array = to_array(puzzle)
    assert array.shape == (9, 9)
    assert array.dtype == np.uint8
    assert array[0, 0] == 5
    assert array[0, 2] == 0


def _green_pixels(region):
    region = region.astype(int)
    # OpenCV images are BGR
    return int(np.count_nonzero(region[..., 1] - region[..., 2] > 30))


def test_render_board_shape(solution):
    image = render_board(solution, cell_size=40)
    assert image.shape == (361, 361, 3)
    assert image.dtype == np.uint8


def test_render_board_colours_filled_digits(puzzle, solution):
    image = render_board(solution, givens=puzzle)
    given_cell = image[5:45, 5:45]
    filled_cell = image[5:45, 105:145]
    assert given_cell.min() < 128
    assert _green_pixels(given_cell) == 0
    assert _green_pixels(filled_cell) > 0


def test_render_board_without_givens_is_monochrome(solution):
    image = render_board(solution)
    assert _green_pixels(image) == 0


def test_render_board_leaves_empty_cells_blank(puzzle):
    image = render_board(puzzle)
    assert (image[5:45, 105:145] == 255).all()


def test_save_board_image(tmp_path, solution):
    path = tmp_path / "out" / "board.png"
    save_board_image(path, render_board(solution))
    assert path.is_file()
    assert path.stat().st_size > 0
