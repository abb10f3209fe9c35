"""Settings persistence and runtime configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Callable
import logging
import pygame

from .utils import DEFAULT_GRID_SIZE, FPS, SETTINGS_FILE, Direction, load_json, save_json

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SnakeSettings:
    """Board, speed and scoring tunables."""

    grid_size: int = DEFAULT_GRID_SIZE
    initial_interval_ms: float = 140.0
    min_interval_ms: float = 45.0
    speed_step_ms: float = 3.0
    initial_length: int = 3
    origin: tuple[int, int] = (5, 10)
    food_points: int = 10
    combo_bonus: int = 5
    combo_window_ms: float = 3000.0


@dataclass(slots=True)
class PowerUpSettings:
    """Spawn and effect tunables for the bonus cell."""

    lifetime_ms: float = 5000.0
    score_milestone: int = 100
    probability: float = 0.8
    bonus_points: int = 50
    shrink_cells: int = 3
    slowdown_ms: float = 20.0


@dataclass(slots=True)
class ParticleSettings:
    """Particle pool sizing."""

    pool_size: int = 100
    burst_count: int = 15
    fade_per_frame: float = 0.02


@dataclass(slots=True)
class DisplaySettings:
    """Display-related options."""

    fullscreen: bool = False
    show_grid: bool = True
    board_pixels: int = 720
    fps: int = FPS


@dataclass(slots=True)
class ControlScheme:
    """Key bindings for the four headings."""

    up: int
    down: int
    left: int
    right: int


@dataclass(slots=True)
class GameSettings:
    """Persistent settings for the game."""

    player_name: str = "PILOT"
    master_volume: float = 0.8
    music_volume: float = 0.6
    sfx_volume: float = 0.8
    pause_key: int = pygame.K_SPACE
    snake: SnakeSettings = field(default_factory=SnakeSettings)
    powerups: PowerUpSettings = field(default_factory=PowerUpSettings)
    particles: ParticleSettings = field(default_factory=ParticleSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    primary_controls: ControlScheme = field(
        default_factory=lambda: ControlScheme(
            up=pygame.K_UP,
            down=pygame.K_DOWN,
            left=pygame.K_LEFT,
            right=pygame.K_RIGHT,
        )
    )
    secondary_controls: ControlScheme = field(
        default_factory=lambda: ControlScheme(
            up=pygame.K_w,
            down=pygame.K_s,
            left=pygame.K_a,
            right=pygame.K_d,
        )
    )


def build_key_map(settings: GameSettings) -> dict[int, Direction]:
    """Map every bound key code to the heading it requests."""
    mapping: dict[int, Direction] = {}
    for scheme in (settings.secondary_controls, settings.primary_controls):
        mapping[scheme.up] = Direction.UP
        mapping[scheme.down] = Direction.DOWN
        mapping[scheme.left] = Direction.LEFT
        mapping[scheme.right] = Direction.RIGHT
    return mapping


def fit_start(snake: SnakeSettings) -> None:
    """Clamp the starting body so every segment and the first step stay on the board."""
    n = snake.grid_size
    snake.initial_length = min(snake.initial_length, max(1, n // 2))
    length = snake.initial_length
    ox, oy = snake.origin
    if ox - (length - 1) >= 0 and ox < n - 1 and 0 <= oy < n:
        return
    fitted = (min(n - 1, n // 4 + length - 1), n // 2)
    logger.warning("Origin %s does not fit a %dx%d board, using %s", snake.origin, n, n, fitted)
    snake.origin = fitted


def _cell(value: Any) -> tuple[int, int]:
    x, y = value
    return (int(x), int(y))


def _flag(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {value!r}")
    return value


def _read(section: dict[str, Any], key: str, default: Any, cast: Callable[[Any], Any]) -> Any:
    if key not in section:
        return default
    try:
        return cast(section[key])
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed setting %s=%r", key, section[key])
        return default


class SettingsManager:
    """Load, save, and mutate game settings."""

    def __init__(self, path: Path = SETTINGS_FILE) -> None:
        self.path = path
        self.settings = self.load()

    def load(self) -> GameSettings:
        """Load game settings from disk; malformed values keep their defaults."""
        raw = self._section(load_json(self.path, {}))
        settings = GameSettings()

        settings.player_name = _read(raw, "player_name", settings.player_name, str)
        settings.master_volume = _read(raw, "master_volume", settings.master_volume, float)
        settings.music_volume = _read(raw, "music_volume", settings.music_volume, float)
        settings.sfx_volume = _read(raw, "sfx_volume", settings.sfx_volume, float)
        settings.pause_key = _read(raw, "pause_key", settings.pause_key, int)

        snake = self._section(raw.get("snake"))
        s = settings.snake
        s.grid_size = max(4, _read(snake, "grid_size", s.grid_size, int))
        s.initial_interval_ms = _read(snake, "initial_interval_ms", s.initial_interval_ms, float)
        s.min_interval_ms = _read(snake, "min_interval_ms", s.min_interval_ms, float)
        s.speed_step_ms = _read(snake, "speed_step_ms", s.speed_step_ms, float)
        s.initial_length = max(1, _read(snake, "initial_length", s.initial_length, int))
        s.origin = _read(snake, "origin", s.origin, _cell)
        s.food_points = _read(snake, "food_points", s.food_points, int)
        s.combo_bonus = _read(snake, "combo_bonus", s.combo_bonus, int)
        s.combo_window_ms = _read(snake, "combo_window_ms", s.combo_window_ms, float)
        fit_start(s)

        powerups = self._section(raw.get("powerups"))
        p = settings.powerups
        p.lifetime_ms = _read(powerups, "lifetime_ms", p.lifetime_ms, float)
        p.score_milestone = max(1, _read(powerups, "score_milestone", p.score_milestone, int))
        p.probability = _read(powerups, "probability", p.probability, float)
        p.bonus_points = _read(powerups, "bonus_points", p.bonus_points, int)
        p.shrink_cells = _read(powerups, "shrink_cells", p.shrink_cells, int)
        p.slowdown_ms = _read(powerups, "slowdown_ms", p.slowdown_ms, float)

        particles = self._section(raw.get("particles"))
        pt = settings.particles
        pt.pool_size = max(0, _read(particles, "pool_size", pt.pool_size, int))
        pt.burst_count = _read(particles, "burst_count", pt.burst_count, int)
        pt.fade_per_frame = _read(particles, "fade_per_frame", pt.fade_per_frame, float)

        display = self._section(raw.get("display"))
        d = settings.display
        d.fullscreen = _read(display, "fullscreen", d.fullscreen, _flag)
        d.show_grid = _read(display, "show_grid", d.show_grid, _flag)
        d.board_pixels = _read(display, "board_pixels", d.board_pixels, int)
        d.fps = _read(display, "fps", d.fps, int)

        settings.primary_controls = self._load_controls(
            self._section(raw.get("primary_controls")), settings.primary_controls
        )
        settings.secondary_controls = self._load_controls(
            self._section(raw.get("secondary_controls")), settings.secondary_controls
        )
        return settings

    @staticmethod
    def _section(value: Any) -> dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @staticmethod
    def _load_controls(payload: dict[str, Any], defaults: ControlScheme) -> ControlScheme:
        return ControlScheme(
            up=_read(payload, "up", defaults.up, int),
            down=_read(payload, "down", defaults.down, int),
            left=_read(payload, "left", defaults.left, int),
            right=_read(payload, "right", defaults.right, int),
        )

    def save(self) -> None:
        """Persist settings to disk."""
        save_json(self.path, asdict(self.settings))

    def set_player_name(self, name: str) -> None:
        """Update the leaderboard name and persist settings."""
        self.settings.player_name = name
        self.save()
