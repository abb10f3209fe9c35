from __future__ import annotations

import random

from neonslither.engine import (
    Combo,
    Continued,
    CrashCause,
    FoodCaptured,
    GameOver,
    PowerUpCaptured,
    ScoreChanged,
    SnakeEngine,
)
from neonslither.powerups import PowerUp
from neonslither.settings import GameSettings
from neonslither.utils import Direction


def _engine(settings: GameSettings | None = None) -> SnakeEngine:
    settings = settings or GameSettings()
    settings.powerups.probability = 0.0
    return SnakeEngine(settings, rng=random.Random(7), clock=lambda: 0.0)


def test_reset_builds_horizontal_snake_and_free_food() -> None:
    engine = _engine()
    engine.score = 70
    assert engine.reset(now=123.0) == ScoreChanged(0)
    assert engine.snake == [(5, 10), (4, 10), (3, 10)]
    assert engine.food not in engine.snake
    assert engine.score == 0
    assert engine.power_up is None and engine.combo is None
    assert engine.tick_interval_ms == 140
    assert engine.last_tick_ms == 123.0


def test_plain_move_keeps_length() -> None:
    engine = _engine()
    engine.food = (0, 0)
    outcome = engine.tick(now=0)
    assert outcome == Continued()
    assert engine.snake == [(6, 10), (5, 10), (4, 10)]


def test_food_capture_grows_by_one_and_relocates_food() -> None:
    engine = _engine()
    engine.food = (6, 10)
    outcome = engine.tick(now=0)
    assert outcome == FoodCaptured(points=10, score=10, combo=1)
    assert len(engine.snake) == 4
    assert engine.food not in engine.snake
    assert engine.particles.active_count == engine.settings.particles.burst_count


def test_combo_window_scenario_totals_forty() -> None:
    engine = _engine()
    engine.food = (6, 10)
    assert engine.tick(now=0).points == 10
    engine.food = (7, 10)
    second = engine.tick(now=1000)
    assert second == FoodCaptured(points=20, score=30, combo=2)
    engine.food = (8, 10)
    third = engine.tick(now=5000)
    assert third == FoodCaptured(points=10, score=40, combo=1)
    assert engine.score == 40


def test_combo_gap_equal_to_window_still_counts() -> None:
    engine = _engine()
    engine.food = (6, 10)
    assert engine.tick(now=0) == FoodCaptured(points=10, score=10, combo=1)
    engine.food = (7, 10)
    assert engine.tick(now=3000) == FoodCaptured(points=20, score=30, combo=2)


def test_combo_gap_past_window_resets() -> None:
    engine = _engine()
    engine.food = (6, 10)
    engine.tick(now=0)
    engine.food = (7, 10)
    assert engine.tick(now=3001) == FoodCaptured(points=10, score=20, combo=1)
    assert engine.combo.count == 1


def test_combo_anchor_follows_latest_capture() -> None:
    engine = _engine()
    engine.combo = Combo(count=1, last_capture_ms=0, anchor=(1, 1), opacity=0.2)
    engine.food = (6, 10)
    engine.tick(now=500)
    assert engine.combo.anchor == (6, 10)
    assert engine.combo.opacity == 1.0


def test_tick_interval_shrinks_to_floor() -> None:
    settings = GameSettings()
    settings.snake.min_interval_ms = 130
    engine = _engine(settings)
    intervals = []
    for x in range(6, 11):
        engine.food = (x, 10)
        engine.tick(now=x * 10_000)
        intervals.append(engine.tick_interval_ms)
    assert intervals == [137, 134, 131, 130, 130]


def test_wall_collision_reports_game_over_without_mutation() -> None:
    engine = _engine()
    engine.snake = [(19, 4), (18, 4), (17, 4)]
    engine.score = 30
    outcome = engine.tick(now=0)
    assert outcome == GameOver(final_score=30, cause=CrashCause.WALL)
    assert engine.snake == [(19, 4), (18, 4), (17, 4)]
    assert engine.is_over
    assert engine.tick(now=10) is outcome


def test_self_collision_is_terminal() -> None:
    engine = _engine()
    engine.snake = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
    engine.direction = Direction.DOWN
    engine.next_direction = Direction.DOWN
    outcome = engine.tick(now=0)
    assert isinstance(outcome, GameOver)
    assert outcome.cause == CrashCause.SELF
    assert outcome.final_score == 0


def test_reverse_direction_is_dropped() -> None:
    engine = _engine()
    assert engine.set_pending_direction(Direction.LEFT) is False
    assert engine.next_direction == Direction.RIGHT
    assert engine.set_pending_direction(Direction.UP) is True
    engine.food = (0, 0)
    engine.tick(now=0)
    assert engine.head == (5, 9)


def test_power_up_capture_shrinks_and_slows() -> None:
    engine = _engine()
    engine.snake = [(x, 5) for x in range(10, 2, -1)]
    engine.food = (0, 0)
    engine.power_up = PowerUp(cell=(11, 5), expires_at_ms=10_000)
    outcome = engine.tick(now=0)
    assert outcome == PowerUpCaptured(points=50, score=50)
    assert len(engine.snake) == 5
    assert engine.head == (11, 5)
    assert engine.tick_interval_ms == 160
    assert engine.power_up is None


def test_power_up_shrink_is_floored_at_initial_length() -> None:
    engine = _engine()
    engine.snake = [(6, 5), (5, 5), (4, 5), (3, 5)]
    engine.food = (0, 0)
    engine.power_up = PowerUp(cell=(7, 5), expires_at_ms=10_000)
    engine.tick(now=0)
    assert len(engine.snake) == 3

    engine.power_up = PowerUp(cell=(8, 5), expires_at_ms=10_000)
    engine.tick(now=1)
    assert len(engine.snake) == 3


def test_power_up_slowdown_is_not_clamped() -> None:
    engine = _engine()
    engine.food = (0, 0)
    engine.tick_interval_ms = engine.settings.snake.initial_interval_ms
    engine.power_up = PowerUp(cell=(6, 10), expires_at_ms=10_000)
    engine.tick(now=0)
    assert engine.tick_interval_ms > engine.settings.snake.initial_interval_ms


def test_power_up_expires_without_visit() -> None:
    engine = _engine()
    engine.food = (0, 0)
    engine.power_up = PowerUp(cell=(0, 19), expires_at_ms=100)
    engine.tick(now=50)
    assert engine.power_up is not None
    engine.tick(now=150)
    assert engine.power_up is None


def test_power_up_spawns_on_exact_milestone_only() -> None:
    settings = GameSettings()
    engine = SnakeEngine(settings, rng=random.Random(2), clock=lambda: 0.0)
    settings.powerups.probability = 1.0

    engine.score = 95
    engine.food = (6, 10)
    engine.tick(now=0)
    assert engine.score == 105
    assert engine.power_up is None

    engine.score = 90
    engine.combo = None
    engine.food = (7, 10)
    engine.tick(now=10_000)
    assert engine.score == 100
    assert engine.power_up is not None
    assert engine.power_up.cell not in engine.snake
    assert engine.power_up.cell != engine.food
    assert engine.power_up.expires_at_ms == 10_000 + settings.powerups.lifetime_ms


def test_is_due_uses_tick_interval() -> None:
    engine = _engine()
    engine.last_tick_ms = 1000
    assert not engine.is_due(1100)
    assert engine.is_due(1140)
