from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .config import DEFAULT_CONFIG, EngineConfig
from .grid import Puzzle, adjacent, available_cell_count, free_cells, neighbors, ordered_waypoints
from .scorer import CompletionResult, round_half_up, score
from .validator import is_valid_path

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    EMPTY = "empty"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class SessionSnapshot:
    state: SessionState
    path: tuple[str, ...]


Observer = Callable[[SessionSnapshot], None]


class PathSession:
    """One player's attempt at one puzzle.

    Not safe for concurrent use; callers serialize access. Every successful
    mutation is announced to subscribers with a snapshot of the new state.
    An observer that raises is logged and skipped.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        config: EngineConfig = DEFAULT_CONFIG,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.puzzle = puzzle
        self.config = config
        self._clock = clock
        self._path: list[str] = []
        self._visited: set[str] = set()
        self._state = SessionState.EMPTY
        self._started_at: float | None = None
        self._observers: list[Observer] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def path(self) -> tuple[str, ...]:
        return tuple(self._path)

    def is_completed(self) -> bool:
        return self._state is SessionState.COMPLETED

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def start(self, cell: str) -> bool:
        if self._state is not SessionState.EMPTY:
            return False
        if not self.puzzle.contains(cell) or self.puzzle.is_obstacle(cell):
            return False

        self._path = [cell]
        self._visited = {cell}
        self._started_at = self._clock()
        self._transition(SessionState.IN_PROGRESS)
        self._check_completion()
        self._notify()
        return True

    def extend(self, cell: str) -> bool:
        if self._state is not SessionState.IN_PROGRESS:
            return False
        if not self.puzzle.contains(cell) or self.puzzle.is_obstacle(cell):
            return False
        if cell in self._visited or not adjacent(self._path[-1], cell):
            return False

        self._path.append(cell)
        self._visited.add(cell)
        self._check_completion()
        self._notify()
        return True

    def undo(self) -> bool:
        if not self._path or self._state is SessionState.COMPLETED:
            return False

        removed = self._path.pop()
        self._visited.discard(removed)
        if not self._path:
            self._transition(SessionState.EMPTY)
        self._notify()
        return True

    def clear(self) -> bool:
        changed = bool(self._path)
        self._path = []
        self._visited = set()
        self._transition(SessionState.EMPTY)
        if changed:
            self._notify()
        return True

    def reset(self) -> bool:
        self._started_at = None
        self._path = []
        self._visited = set()
        self._transition(SessionState.EMPTY)
        self._notify()
        return True

    def available_next_cells(self) -> list[str]:
        if self._state is SessionState.COMPLETED:
            return []
        if not self._path:
            return free_cells(self.puzzle)
        return [n for n in neighbors(self.puzzle, self._path[-1]) if n not in self._visited]

    def next_waypoint_hint(self) -> str | None:
        for waypoint in ordered_waypoints(self.puzzle):
            if waypoint not in self._visited:
                return waypoint
        return None

    def current_efficiency(self) -> int:
        """Live estimate for display only; final grading happens in `score`."""
        if not self._path:
            return 0
        available = available_cell_count(self.puzzle)
        return round_half_up(available / max(len(self._path), available) * 100)

    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        return (self._clock() - self._started_at) * 1000

    def play_time_seconds(self) -> int:
        return int(self.elapsed_ms() // 1000)

    def completion_result(self) -> CompletionResult | None:
        if self._state is not SessionState.COMPLETED:
            return None
        return score(self._path, self.puzzle, self.elapsed_ms(), self.config)

    def _check_completion(self) -> None:
        if len(self._path) != available_cell_count(self.puzzle):
            return
        if is_valid_path(self._path, self.puzzle):
            self._transition(SessionState.COMPLETED)
        else:
            logger.debug("Full path on %s failed validation", self.puzzle.puzzle_id)

    def _transition(self, state: SessionState) -> None:
        if state is not self._state:
            logger.debug("Session %s: %s -> %s", self.puzzle.puzzle_id, self._state.value, state.value)
            self._state = state

    def _notify(self) -> None:
        snapshot = SessionSnapshot(state=self._state, path=tuple(self._path))
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception:
                logger.exception("Session observer %r failed", observer)


def create_session(
    puzzle: Puzzle,
    config: EngineConfig = DEFAULT_CONFIG,
    clock: Callable[[], float] = time.monotonic,
) -> PathSession:
    return PathSession(puzzle, config=config, clock=clock)
