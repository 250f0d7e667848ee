from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .grid import Puzzle, adjacent, available_cell_count, ordered_waypoints


class Violation(str, Enum):
    OBSTACLE_HIT = "obstacle hit"
    INVALID_PATH = "invalid path"
    WRONG_ORDER = "wrong order"
    INCOMPLETE_PATH = "incomplete path"
    TIME_EXCEEDED = "time exceeded"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationReport:
    is_valid: bool
    violations: tuple[Violation, ...]
    messages: tuple[str, ...]


def validate(path: Sequence[str], puzzle: Puzzle) -> ValidationReport:
    """Check a finished path against every rule and report all that fail.

    Rules are evaluated in a fixed order (length, obstacles, continuity,
    waypoint order, waypoint coverage) and none of them short-circuits the
    others, so a replayed path gets the full list of problems.
    """
    violations: list[Violation] = []
    messages: list[str] = []

    def record(violation: Violation, message: str) -> None:
        if violation not in violations:
            violations.append(violation)
        messages.append(message)

    expected = available_cell_count(puzzle)
    if len(path) != expected:
        record(
            Violation.INCOMPLETE_PATH,
            f"Expected {expected} cells, got {len(path)}.",
        )

    hits = [cell for cell in path if puzzle.is_obstacle(cell)]
    if hits:
        record(
            Violation.OBSTACLE_HIT,
            f"Path goes through obstacles: {', '.join(hits)}.",
        )

    seen: set[str] = set()
    for index, cell in enumerate(path):
        if not puzzle.contains(cell):
            record(
                Violation.INVALID_PATH,
                f"Cell {cell!r} at position {index} is not on the grid.",
            )
        elif cell in seen:
            record(
                Violation.INVALID_PATH,
                f"Cell {cell} at position {index} is visited twice.",
            )
        seen.add(cell)

        if index > 0 and not adjacent(path[index - 1], cell):
            record(
                Violation.INVALID_PATH,
                f"Cells {path[index - 1]} and {cell} are not connected.",
            )

    waypoint_order = ordered_waypoints(puzzle)
    consumed = 0
    for cell in path:
        number = puzzle.waypoint_at(cell)
        if number is None:
            continue
        if consumed >= len(waypoint_order) or cell != waypoint_order[consumed]:
            expected_next = (
                puzzle.waypoints[waypoint_order[consumed]]
                if consumed < len(waypoint_order)
                else None
            )
            record(
                Violation.WRONG_ORDER,
                f"Waypoint {number} reached while waiting for {expected_next}.",
            )
            break
        consumed += 1

    if consumed != len(waypoint_order):
        record(
            Violation.INCOMPLETE_PATH,
            f"Visited {consumed} of {len(waypoint_order)} waypoints in order.",
        )

    return ValidationReport(
        is_valid=not violations,
        violations=tuple(violations),
        messages=tuple(messages),
    )


def is_valid_path(path: Sequence[str], puzzle: Puzzle) -> bool:
    return validate(path, puzzle).is_valid
