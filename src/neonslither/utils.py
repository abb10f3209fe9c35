"""Shared constants, grid helpers and persistence utilities for Neon Slither."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Tuple
import json
import logging
import random

logger = logging.getLogger(__name__)

SCREEN_WIDTH = 960
SCREEN_HEIGHT = 800
FPS = 60
DEFAULT_GRID_SIZE = 20

BG_COLOR = (5, 5, 5)
GRID_COLOR = (17, 17, 17)
TEXT_COLOR = (220, 238, 255)
SHADOW_COLOR = (15, 24, 45)

SNAKE_HEAD = (0, 242, 255)
SNAKE_BODY = (0, 168, 255)
FOOD_COLOR = (255, 0, 255)
POWERUP_COLOR = (255, 255, 0)
ACCENT = (0, 242, 255)
PINK = (255, 0, 170)

Cell = Tuple[int, int]

DATA_DIR = Path(".neonslither")
SETTINGS_FILE = DATA_DIR / "settings.json"
SCORES_FILE = DATA_DIR / "scores.json"


class Direction(Enum):
    """Cardinal headings; the value is the (dx, dy) grid offset."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        if self is Direction.UP:
            return Direction.DOWN
        if self is Direction.DOWN:
            return Direction.UP
        if self is Direction.LEFT:
            return Direction.RIGHT
        return Direction.LEFT

    def is_reverse_of(self, other: "Direction") -> bool:
        return self.opposite is other


def ensure_data_dirs() -> None:
    """Create the data directory for save files."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


def step(cell: Cell, direction: Direction) -> Cell:
    """Return the neighbouring cell one step in direction."""
    dx, dy = direction.value
    return (cell[0] + dx, cell[1] + dy)


def in_grid(cell: Cell, grid_size: int) -> bool:
    """Check if a cell lies inside the N x N board."""
    x, y = cell
    return 0 <= x < grid_size and 0 <= y < grid_size


def random_empty_cell(
    occupied: Iterable[Cell],
    grid_size: int,
    rng: random.Random | None = None,
    max_attempts: int = 400,
) -> Cell:
    """Return a random cell not present in occupied.

    Random probing is bounded by max_attempts. When it runs out the board is
    scanned row by row for the first free cell, and only a completely full
    board falls back to the centre cell.
    """
    rng = rng or random
    occupied_set = set(occupied)
    for _ in range(max_attempts):
        candidate = (rng.randrange(grid_size), rng.randrange(grid_size))
        if candidate not in occupied_set:
            return candidate

    logger.warning(
        "Random placement exhausted %d attempts (%d/%d cells occupied)",
        max_attempts,
        len(occupied_set),
        grid_size * grid_size,
    )
    for y in range(grid_size):
        for x in range(grid_size):
            if (x, y) not in occupied_set:
                return (x, y)

    logger.warning("Grid is full, falling back to the centre cell")
    return (grid_size // 2, grid_size // 2)


def load_json(path: Path, default: Any) -> Any:
    """Load JSON data, returning default when missing or malformed."""
    if not path.exists():
        return default
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return default


def save_json(path: Path, payload: Any) -> None:
    """Save JSON data with deterministic formatting."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=True)
