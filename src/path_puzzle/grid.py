from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    waypoint: int | None = None
    is_obstacle: bool = False

    @property
    def cell_id(self) -> str:
        return cell_id(self.row, self.col)


@dataclass(frozen=True)
class Puzzle:
    puzzle_id: str
    grid_size: int
    waypoints: Mapping[str, int] = field(hash=False)
    obstacles: frozenset[str]
    difficulty: Difficulty
    cells: tuple[Cell, ...] = field(default=tuple(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "waypoints", MappingProxyType(dict(self.waypoints)))
        object.__setattr__(self, "obstacles", frozenset(self.obstacles))
        if not self.cells:
            object.__setattr__(self, "cells", build_cells(self))

    @property
    def waypoint_count(self) -> int:
        return len(self.waypoints)

    def is_obstacle(self, cell: str) -> bool:
        return cell in self.obstacles

    def waypoint_at(self, cell: str) -> int | None:
        return self.waypoints.get(cell)

    def contains(self, cell: str) -> bool:
        coords = canonical_coords(cell)
        return coords is not None and in_bounds(*coords, self.grid_size)


def build_cells(puzzle: Puzzle) -> tuple[Cell, ...]:
    size = puzzle.grid_size
    return tuple(
        Cell(
            row=row,
            col=col,
            waypoint=puzzle.waypoints.get(cell_id(row, col)),
            is_obstacle=cell_id(row, col) in puzzle.obstacles,
        )
        for row in range(size)
        for col in range(size)
    )


def cell_id(row: int, col: int) -> str:
    return f"{row}-{col}"


def parse_cell_id(text: str) -> tuple[int, int]:
    """Parse `row-col` (or `row col`) into a coordinate pair."""
    coords = try_parse_cell_id(text.strip().replace(" ", "-"))
    if coords is None:
        raise ValueError("Cell must use format ROW-COL, for example 0-2.")
    return coords


def try_parse_cell_id(text: str) -> tuple[int, int] | None:
    row_text, sep, col_text = text.partition("-")
    if not sep or not _is_number(row_text) or not _is_number(col_text):
        return None
    return int(row_text), int(col_text)


def canonical_coords(text: str) -> tuple[int, int] | None:
    """Coordinates of `text` only when it is written exactly as `cell_id` writes it."""
    coords = try_parse_cell_id(text)
    if coords is None or cell_id(*coords) != text:
        return None
    return coords


def _is_number(text: str) -> bool:
    return text.isascii() and text.isdecimal()


def in_bounds(row: int, col: int, grid_size: int) -> bool:
    return 0 <= row < grid_size and 0 <= col < grid_size


def adjacent(a: str, b: str) -> bool:
    """True when two cells share an edge (Manhattan distance 1)."""
    first = canonical_coords(a)
    second = canonical_coords(b)
    if first is None or second is None:
        return False
    return abs(first[0] - second[0]) + abs(first[1] - second[1]) == 1


def cell_at(puzzle: Puzzle, row: int, col: int) -> Cell | None:
    if not in_bounds(row, col, puzzle.grid_size):
        return None
    return puzzle.cells[row * puzzle.grid_size + col]


def available_cell_count(puzzle: Puzzle) -> int:
    return puzzle.grid_size * puzzle.grid_size - len(puzzle.obstacles)


def free_cells(puzzle: Puzzle) -> list[str]:
    return [cell.cell_id for cell in puzzle.cells if not cell.is_obstacle]


def neighbors(puzzle: Puzzle, cell: str) -> list[str]:
    """Free cells orthogonally adjacent to `cell`, in up/down/left/right order."""
    coords = canonical_coords(cell)
    if coords is None:
        return []
    row, col = coords
    result: list[str] = []
    for d_row, d_col in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        n_row, n_col = row + d_row, col + d_col
        if not in_bounds(n_row, n_col, puzzle.grid_size):
            continue
        candidate = cell_id(n_row, n_col)
        if candidate not in puzzle.obstacles:
            result.append(candidate)
    return result


def ordered_waypoints(puzzle: Puzzle) -> list[str]:
    return sorted(puzzle.waypoints, key=puzzle.waypoints.__getitem__)


def make_puzzle(
    grid_size: int,
    waypoints: dict[str, int],
    obstacles: frozenset[str] | set[str] | tuple[str, ...] = frozenset(),
    difficulty: Difficulty | str = Difficulty.EASY,
    puzzle_id: str = "custom",
) -> Puzzle:
    """Assemble a puzzle by hand, e.g. for fixed layouts or replays.

    Raises ValueError when the layout breaks the board rules: cells off the
    grid, a cell that is both waypoint and obstacle, or waypoint numbers that
    are not exactly 1..K.
    """
    blocked = frozenset(obstacles)
    for cell in list(waypoints) + sorted(blocked):
        coords = canonical_coords(cell)
        if coords is None or not in_bounds(*coords, grid_size):
            raise ValueError(f"Cell {cell!r} is not on a {grid_size}x{grid_size} grid.")

    overlap = sorted(set(waypoints) & blocked)
    if overlap:
        raise ValueError(f"Cells cannot be both waypoint and obstacle: {', '.join(overlap)}.")

    if sorted(waypoints.values()) != list(range(1, len(waypoints) + 1)):
        raise ValueError("Waypoint numbers must run from 1 without gaps or repeats.")

    return Puzzle(
        puzzle_id=puzzle_id,
        grid_size=grid_size,
        waypoints=dict(waypoints),
        obstacles=blocked,
        difficulty=Difficulty(difficulty),
    )
