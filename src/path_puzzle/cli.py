from __future__ import annotations

import argparse
import logging
import random

from .generator import PuzzleGenerator
from .graph import find_solution
from .grid import Difficulty, Puzzle, available_cell_count, cell_id, parse_cell_id
from .scorer import CompletionResult
from .session import PathSession, SessionState


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed) if args.seed is not None else None
    generator = PuzzleGenerator(rng=rng, require_connected=True)
    puzzle = generator.generate(args.size, args.difficulty)
    session = PathSession(puzzle)

    print("Path Puzzle")
    print("Draw one line through every open cell, meeting the numbers in order.\n")
    print("Enter a cell as ROW-COL (for example 0-2) to start or extend the line.")
    print("Commands: undo, clear, hint, solve, quit.\n")

    while session.state is not SessionState.COMPLETED:
        print(render_board(puzzle, session.path))
        print(f"Efficiency estimate: {session.current_efficiency()}%")

        entry = input("> ").strip().lower()
        if entry == "quit":
            print("Exiting game.")
            return
        handle_command(session, entry)

    print(render_board(puzzle, session.path))
    result = session.completion_result()
    if result is not None:
        print(format_result(result))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play a waypoint path puzzle in the terminal.",
    )
    parser.add_argument(
        "--size", type=int, default=5,
        help="Grid size, clamped to the supported range (default: 5)",
    )
    parser.add_argument(
        "--difficulty", choices=[d.value for d in Difficulty],
        default=Difficulty.EASY.value,
        help="Difficulty tier (default: easy)",
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for reproducible puzzles",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log engine activity at debug level",
    )
    return parser.parse_args(argv)


def handle_command(session: PathSession, entry: str) -> None:
    if not entry:
        return
    if entry == "undo":
        if not session.undo():
            print("Nothing to undo.")
        return
    if entry == "clear":
        session.clear()
        return
    if entry == "hint":
        hint = session.next_waypoint_hint()
        if hint is None:
            print("All numbers visited; fill the remaining cells.")
        else:
            print(f"Next number is at {hint}.")
        return
    if entry == "solve":
        solution = find_solution(session.puzzle)
        if solution is None:
            print("No solution found.")
        else:
            print("Solution: " + " ".join(solution))
        return

    try:
        row, col = parse_cell_id(entry)
    except ValueError as exc:
        print(f"Input error: {exc}")
        return

    target = cell_id(row, col)
    moved = session.start(target) if session.state is SessionState.EMPTY else session.extend(target)
    if not moved:
        options = ", ".join(session.available_next_cells()) or "none"
        print(f"Cannot move to {target}. Open moves: {options}")
    elif (
        len(session.path) == available_cell_count(session.puzzle)
        and session.state is SessionState.IN_PROGRESS
    ):
        print("Every cell is filled but the numbers are out of order. Try undo.")


def render_board(puzzle: Puzzle, path: tuple[str, ...]) -> str:
    """Plain-text board: numbers for waypoints, # for obstacles, * for the line."""
    on_path = set(path)
    tip = path[-1] if path else None
    header = "    " + " ".join(f"{col:>2}" for col in range(puzzle.grid_size))
    lines = [header]
    for row in range(puzzle.grid_size):
        marks: list[str] = []
        for col in range(puzzle.grid_size):
            current = cell_id(row, col)
            number = puzzle.waypoint_at(current)
            if puzzle.is_obstacle(current):
                mark = "#"
            elif number is not None:
                mark = str(number)
            elif current == tip:
                mark = "@"
            elif current in on_path:
                mark = "*"
            else:
                mark = "."
            marks.append(f"{mark:>2}")
        lines.append(f"{row:>2}  " + " ".join(marks))
    return "\n".join(lines)


def format_result(result: CompletionResult) -> str:
    lines = [
        "Puzzle solved." if result.is_valid else "Puzzle not solved.",
        f"Time: {result.completion_time_seconds}s",
        f"Moves: {result.move_count}",
        f"Efficiency: {result.efficiency_percent}%",
        f"Stars: {result.stars}",
    ]
    for error in result.errors:
        lines.append(f"- {error}")
    return "\n".join(lines)


if __name__ == "__main__":
    main()
