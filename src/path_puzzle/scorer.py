from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .config import DEFAULT_CONFIG, EngineConfig
from .grid import Puzzle, available_cell_count
from .validator import Violation, validate


@dataclass(frozen=True)
class CompletionResult:
    is_valid: bool
    completion_time_seconds: int
    move_count: int
    efficiency_percent: int
    stars: int
    errors: tuple[Violation, ...]
    time_bonus_seconds: int = 0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def efficiency(puzzle: Puzzle, move_count: int) -> int:
    if move_count <= 0:
        return 0
    return min(100, round_half_up(available_cell_count(puzzle) / move_count * 100))


def star_rating(
    is_valid: bool,
    efficiency_percent: int,
    time_bonus: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    if not is_valid:
        return 0
    if (
        efficiency_percent >= config.three_star_efficiency
        and time_bonus > config.three_star_time_bonus
    ):
        return 3
    if (
        efficiency_percent >= config.two_star_efficiency
        and time_bonus > config.two_star_time_bonus
    ):
        return 2
    return 1


def score(
    path: Sequence[str],
    puzzle: Puzzle,
    elapsed_ms: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> CompletionResult:
    """Validate `path` and grade it.

    Efficiency is `available cells / moves`, so any valid path scores 100 and
    stars effectively depend on time alone. Running over the time ceiling is
    reported as an error but does not make the path invalid.
    """
    report = validate(path, puzzle)
    completion_time = int(max(0.0, elapsed_ms) // 1000)

    errors = list(report.violations)
    if completion_time > config.max_completion_time:
        errors.append(Violation.TIME_EXCEEDED)

    move_count = len(path)
    efficiency_percent = efficiency(puzzle, move_count)
    time_bonus = max(0, config.optimal_completion_time - completion_time)

    return CompletionResult(
        is_valid=report.is_valid,
        completion_time_seconds=completion_time,
        move_count=move_count,
        efficiency_percent=efficiency_percent,
        stars=star_rating(report.is_valid, efficiency_percent, time_bonus, config),
        errors=tuple(errors),
        time_bonus_seconds=time_bonus,
    )


def score_since(
    path: Sequence[str],
    puzzle: Puzzle,
    started_at: float,
    now: float,
    config: EngineConfig = DEFAULT_CONFIG,
) -> CompletionResult:
    """Score using two clock readings in seconds."""
    return score(path, puzzle, (now - started_at) * 1000, config)
