"""Fixed-tick snake simulation: movement, collisions, scoring and power-ups."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Union
import logging
import random
import time

from .particles import ParticlePool
from .powerups import PowerUp, PowerUpSpawner
from .settings import GameSettings
from .utils import FOOD_COLOR, POWERUP_COLOR, Cell, Direction, in_grid, random_empty_cell, step

logger = logging.getLogger(__name__)


class CrashCause(str, Enum):
    """Why a run ended."""

    WALL = "wall"
    SELF = "self"


@dataclass(frozen=True, slots=True)
class ScoreChanged:
    score: int


@dataclass(frozen=True, slots=True)
class Continued:
    """Plain move, nothing captured."""


@dataclass(frozen=True, slots=True)
class FoodCaptured:
    points: int
    score: int
    combo: int


@dataclass(frozen=True, slots=True)
class PowerUpCaptured:
    points: int
    score: int


@dataclass(frozen=True, slots=True)
class GameOver:
    final_score: int
    cause: CrashCause


TickOutcome = Union[Continued, FoodCaptured, PowerUpCaptured, GameOver]


@dataclass(slots=True)
class Combo:
    """Consecutive-capture streak; opacity only drives the on-screen label."""

    count: int
    last_capture_ms: float
    anchor: Cell
    opacity: float = 1.0


def _monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


class SnakeEngine:
    """Owns the snake, food, power-up, combo, score and tick interval.

    tick() is the only mutation path during play and reports what happened as
    a TickOutcome value. A crash is a terminal outcome, never an exception.
    """

    def __init__(
        self,
        settings: GameSettings,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
        particles: ParticlePool | None = None,
    ) -> None:
        self.settings = settings
        self.rng = rng or random.Random()
        self.clock = clock or _monotonic_ms
        self.particles = particles or ParticlePool(settings.particles.pool_size, rng=self.rng)
        self.spawner = PowerUpSpawner(settings.powerups, settings.snake.grid_size)

        self.snake: list[Cell] = []
        self.food: Cell = (0, 0)
        self.power_up: PowerUp | None = None
        self.combo: Combo | None = None
        self.score = 0
        self.direction = Direction.RIGHT
        self.next_direction = Direction.RIGHT
        self.tick_interval_ms = settings.snake.initial_interval_ms
        self.last_tick_ms = 0.0
        self._game_over: GameOver | None = None
        self.reset()

    @property
    def grid_size(self) -> int:
        return self.settings.snake.grid_size

    @property
    def is_over(self) -> bool:
        return self._game_over is not None

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def reset(self, now: float | None = None) -> ScoreChanged:
        """Start a fresh run: horizontal snake at the origin heading right."""
        cfg = self.settings.snake
        ox, oy = cfg.origin
        self.snake = [(ox - i, oy) for i in range(cfg.initial_length)]
        self.direction = Direction.RIGHT
        self.next_direction = Direction.RIGHT
        self.food = random_empty_cell(self.snake, self.grid_size, self.rng)
        self.power_up = None
        self.combo = None
        self.score = 0
        self.tick_interval_ms = cfg.initial_interval_ms
        self.last_tick_ms = self.clock() if now is None else now
        self._game_over = None
        self.particles.clear()
        return ScoreChanged(0)

    def set_pending_direction(self, direction: Direction) -> bool:
        """Queue a heading for the next tick; a reversal is silently dropped."""
        if direction.is_reverse_of(self.direction):
            return False
        self.next_direction = direction
        return True

    def is_due(self, now: float) -> bool:
        return now - self.last_tick_ms >= self.tick_interval_ms

    def tick(self, now: float | None = None) -> TickOutcome:
        """Advance the snake one cell."""
        if self._game_over is not None:
            return self._game_over
        now = self.clock() if now is None else now

        self.direction = self.next_direction
        new_head = step(self.snake[0], self.direction)

        if not in_grid(new_head, self.grid_size):
            return self._finish(CrashCause.WALL)
        if new_head in self.snake:
            return self._finish(CrashCause.SELF)

        self.snake.insert(0, new_head)

        outcome: TickOutcome
        if new_head == self.food:
            outcome = self._capture_food(new_head, now)
        elif self.power_up is not None and new_head == self.power_up.cell:
            outcome = self._capture_power_up(new_head)
        else:
            self.snake.pop()
            outcome = Continued()

        if self.power_up is not None and self.power_up.is_expired(now):
            self.power_up = None
        return outcome

    def _capture_food(self, head: Cell, now: float) -> FoodCaptured:
        cfg = self.settings.snake
        points = cfg.food_points
        combo = self.combo
        if combo is not None and now - combo.last_capture_ms <= cfg.combo_window_ms:
            combo.count += 1
            combo.last_capture_ms = now
            combo.anchor = head
            combo.opacity = 1.0
            points += combo.count * cfg.combo_bonus
        else:
            combo = Combo(count=1, last_capture_ms=now, anchor=head)
            self.combo = combo

        self.score += points
        self.particles.emit_burst(self.food, FOOD_COLOR, self.settings.particles.burst_count)

        blocked = list(self.snake)
        if self.power_up is not None:
            blocked.append(self.power_up.cell)
        self.food = random_empty_cell(blocked, self.grid_size, self.rng)

        if self.tick_interval_ms > cfg.min_interval_ms:
            self.tick_interval_ms = max(cfg.min_interval_ms, self.tick_interval_ms - cfg.speed_step_ms)

        spawned = self.spawner.maybe_spawn(
            self.score, self.power_up, [*self.snake, self.food], now, self.rng
        )
        if spawned is not None:
            self.power_up = spawned
        return FoodCaptured(points=points, score=self.score, combo=combo.count)

    def _capture_power_up(self, head: Cell) -> PowerUpCaptured:
        cfg = self.settings.powerups
        self.score += cfg.bonus_points
        self.particles.emit_burst(head, POWERUP_COLOR, self.settings.particles.burst_count)

        # length before the head was prepended
        length_before = len(self.snake) - 1
        floor = self.settings.snake.initial_length
        target = min(length_before, max(floor, length_before - cfg.shrink_cells))
        del self.snake[target:]

        self.tick_interval_ms += cfg.slowdown_ms
        self.power_up = None
        return PowerUpCaptured(points=cfg.bonus_points, score=self.score)

    def _finish(self, cause: CrashCause) -> GameOver:
        self._game_over = GameOver(final_score=self.score, cause=cause)
        logger.info("Run ended by %s collision with score %d", cause.value, self.score)
        return self._game_over
