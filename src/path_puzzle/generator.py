"""Random puzzle layouts for a requested grid size and difficulty tier.

Generation is best-effort: waypoints and obstacles are placed by rejection
sampling with a bounded number of attempts, and a placement that keeps
colliding is skipped instead of failing the whole puzzle. Nothing here
proves the result is solvable; `require_connected` only rejects obstacle
layouts that split the free cells apart.
"""

from __future__ import annotations

import itertools
import logging
import math
import random
import time
from dataclasses import dataclass

from .config import DEFAULT_CONFIG, EngineConfig
from .graph import layout_connected
from .grid import Difficulty, Puzzle, cell_id

logger = logging.getLogger(__name__)

TIERS = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD, Difficulty.EXPERT)


@dataclass(frozen=True)
class PackSpec:
    pack_id: str
    name: str
    description: str
    level: int
    puzzle_count: int
    required_level: int = 0


@dataclass(frozen=True)
class PuzzlePack:
    spec: PackSpec
    puzzles: tuple[Puzzle, ...]

    @property
    def pack_id(self) -> str:
        return self.spec.pack_id


class PuzzleGenerator:
    def __init__(
        self,
        config: EngineConfig = DEFAULT_CONFIG,
        rng: random.Random | None = None,
        require_connected: bool = False,
    ) -> None:
        self.config = config
        self.rng = rng if rng is not None else random.Random()
        self.require_connected = require_connected
        self._counter = itertools.count(1)

    def generate(
        self, grid_size: int, difficulty: Difficulty | str = Difficulty.EASY
    ) -> Puzzle:
        tier = Difficulty(difficulty)
        size = self.config.clamp_grid_size(grid_size)

        waypoint_target = min(size, self.config.max_numbered_cells)
        positions = self._waypoint_positions(size, waypoint_target)
        waypoints = {pos: index + 1 for index, pos in enumerate(positions)}

        obstacle_target = self.obstacle_budget(size, tier)
        obstacles = self._obstacle_positions(size, positions, obstacle_target)

        if self.require_connected:
            rerolls = 0
            while rerolls < self.config.max_generation_attempts and not layout_connected(
                size, obstacles
            ):
                rerolls += 1
                obstacles = self._obstacle_positions(size, positions, obstacle_target)
            if rerolls:
                logger.debug("Re-rolled obstacles %d times for connectivity", rerolls)

        return Puzzle(
            puzzle_id=self._next_id(size, tier),
            grid_size=size,
            waypoints=waypoints,
            obstacles=frozenset(obstacles),
            difficulty=tier,
        )

    def obstacle_budget(self, grid_size: int, difficulty: Difficulty | str) -> int:
        max_obstacles = math.floor(grid_size * grid_size * self.config.max_obstacle_fraction)
        return math.floor(max_obstacles * self.config.obstacle_multiplier(Difficulty(difficulty)))

    def generate_for_level(self, level: int, count: int = 5) -> list[Puzzle]:
        """Puzzles whose size and tier both grow with the player's level."""
        grid_size = min(
            self.config.min_grid_size + level // 2, self.config.max_grid_size
        )
        tier = TIERS[min(level // 3, len(TIERS) - 1)]
        return [self.generate(grid_size, tier) for _ in range(count)]

    def generate_pack(self, spec: PackSpec) -> PuzzlePack:
        return PuzzlePack(
            spec=spec,
            puzzles=tuple(self.generate_for_level(spec.level, spec.puzzle_count)),
        )

    def _waypoint_positions(self, size: int, count: int) -> list[str]:
        last = size - 1
        corners = [cell_id(0, 0), cell_id(0, last), cell_id(last, 0), cell_id(last, last)]
        positions = [self.rng.choice(corners)]
        used = set(positions)

        for _ in range(1, count):
            candidate = self._sample_free(size, used)
            if candidate is None:
                continue
            positions.append(candidate)
            used.add(candidate)

        if len(positions) < count:
            logger.debug(
                "Placed %d of %d waypoints on %dx%d grid",
                len(positions), count, size, size,
            )
        return positions

    def _obstacle_positions(self, size: int, reserved: list[str], count: int) -> list[str]:
        obstacles: list[str] = []
        used = set(reserved)

        for _ in range(count):
            candidate = self._sample_free(size, used)
            if candidate is None:
                continue
            obstacles.append(candidate)
            used.add(candidate)

        if len(obstacles) < count:
            logger.debug(
                "Placed %d of %d obstacles on %dx%d grid",
                len(obstacles), count, size, size,
            )
        return obstacles

    def _sample_free(self, size: int, used: set[str]) -> str | None:
        for _ in range(self.config.max_generation_attempts):
            candidate = cell_id(self.rng.randrange(size), self.rng.randrange(size))
            if candidate not in used:
                return candidate
        return None

    def _next_id(self, size: int, tier: Difficulty) -> str:
        stamp = int(time.time() * 1000)
        return f"puzzle-{size}x{size}-{tier.value}-{stamp}-{next(self._counter)}"


def default_pack_specs() -> tuple[PackSpec, ...]:
    return (
        PackSpec(
            pack_id="starter",
            name="Starter Pack",
            description="Perfect for beginners",
            level=1,
            puzzle_count=10,
        ),
        PackSpec(
            pack_id="challenge",
            name="Challenge Pack",
            description="Test your skills",
            level=3,
            puzzle_count=8,
            required_level=3,
        ),
        PackSpec(
            pack_id="expert",
            name="Expert Pack",
            description="For puzzle masters",
            level=5,
            puzzle_count=6,
            required_level=5,
        ),
    )


def generate_puzzle(
    grid_size: int,
    difficulty: Difficulty | str = Difficulty.EASY,
    rng: random.Random | None = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Puzzle:
    return PuzzleGenerator(config=config, rng=rng).generate(grid_size, difficulty)
