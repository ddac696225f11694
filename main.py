"""Command-line Sudoku solver."""
from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Dict, List, Optional, Sequence

from solver import Grid, InvalidGridError, SudokuSolver, solve
from utils import format_board, load_board, parse_board, render_board, save_board_image

EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_INVALID = 2
STRATEGIES = {"plain": False, "mrv": True}

log = logging.getLogger(__name__)


def compare_strategies(board: Grid) -> Dict[str, Dict[str, object]]:
    """Run both strategies on separate copies and collect timings and results."""
    results: Dict[str, Dict[str, object]] = {}
    for name, efficient in STRATEGIES.items():
        working = [list(row) for row in board]
        started = time.perf_counter()
        solved = solve(working, efficient=efficient)
        results[name] = {
            "solved": solved,
            "elapsed": time.perf_counter() - started,
            "board": working if solved else None,
        }
    return results


def run(
    puzzle: Optional[str] = None,
    file_path: Optional[str] = None,
    efficient: bool = False,
    compare: bool = False,
    render_path: Optional[str] = None,
) -> int:
    try:
        board = load_board(file_path) if file_path else parse_board(puzzle or "")
    except (InvalidGridError, OSError) as exc:
        log.error("%s", exc)
        return EXIT_INVALID

    print(format_board(board))
    print()

    if compare:
        results = compare_strategies(board)
        for name, result in results.items():
            status = "solved" if result["solved"] else "unsolved"
            print(f"{name:>5}: {status} in {result['elapsed']:.4f}s")
        boards = [result["board"] for result in results.values()]
        print("strategies agree" if boards[0] == boards[1] else "strategies found different solutions")
        print()

    solver = SudokuSolver(efficient=efficient)
    solution = solver.solve_board(board)
    if solution is None:
        print(f"No solution ({solver.last_status})")
        return EXIT_UNSOLVED

    print(format_board(solution))

    if render_path:
        try:
            save_board_image(render_path, render_board(solution, givens=board))
        except OSError as exc:
            log.error("%s", exc)
            return EXIT_INVALID
        log.info("Wrote solution image to %s", render_path)
    return EXIT_SOLVED


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sudoku solver using backtracking search")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "puzzle",
        nargs="?",
        default=None,
        help="81-character puzzle, digits for givens and 0 or . for blanks",
    )
    source.add_argument("--file", type=str, default=None, help="Path to a text file holding the puzzle")
    parser.add_argument(
        "--efficient",
        action="store_true",
        help="Pick the most constrained cell first instead of row-major order",
    )
    parser.add_argument("--compare", action="store_true", help="Time both strategies before solving")
    parser.add_argument("--render", type=str, default=None, help="Write a PNG of the solved board")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run(
        args.puzzle,
        args.file,
        efficient=args.efficient,
        compare=args.compare,
        render_path=args.render,
    )


if __name__ == "__main__":
    sys.exit(main())
