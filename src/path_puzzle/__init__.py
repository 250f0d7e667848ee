"""Waypoint path puzzle engine: generation, drawing sessions, validation, scoring."""

from .config import DEFAULT_CONFIG, EngineConfig, load_config
from .generator import PackSpec, PuzzleGenerator, PuzzlePack, generate_puzzle
from .grid import Cell, Difficulty, Puzzle, adjacent, available_cell_count, cell_at, cell_id
from .scorer import CompletionResult, score
from .session import PathSession, SessionSnapshot, SessionState, create_session
from .validator import ValidationReport, Violation, validate

__all__ = [
    "DEFAULT_CONFIG",
    "Cell",
    "CompletionResult",
    "Difficulty",
    "EngineConfig",
    "PackSpec",
    "PathSession",
    "Puzzle",
    "PuzzleGenerator",
    "PuzzlePack",
    "SessionSnapshot",
    "SessionState",
    "ValidationReport",
    "Violation",
    "adjacent",
    "available_cell_count",
    "cell_at",
    "cell_id",
    "create_session",
    "generate_puzzle",
    "load_config",
    "score",
    "validate",
]
