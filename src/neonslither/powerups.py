"""Power-up definition and milestone spawning rule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
import logging
import random

from .settings import PowerUpSettings
from .utils import Cell, random_empty_cell

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PowerUp:
    """Collectible bonus cell with an absolute expiry time."""

    cell: Cell
    expires_at_ms: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at_ms

    def remaining_fraction(self, now: float, lifetime_ms: float) -> float:
        """Share of the lifetime still left, used for the expiry flash."""
        if lifetime_ms <= 0:
            return 0.0
        return max(0.0, (self.expires_at_ms - now) / lifetime_ms)


@dataclass(slots=True)
class PowerUpSpawner:
    """Decides when a power-up appears after a food capture."""

    settings: PowerUpSettings
    grid_size: int

    def should_spawn(self, score: int, live: PowerUp | None, rng: random.Random) -> bool:
        """Exact score milestones only; a capture that overshoots one skips it."""
        if live is not None:
            return False
        if score % self.settings.score_milestone != 0:
            return False
        return rng.random() < self.settings.probability

    def maybe_spawn(
        self,
        score: int,
        live: PowerUp | None,
        occupied: Iterable[Cell],
        now: float,
        rng: random.Random,
    ) -> PowerUp | None:
        """Return a fresh power-up, or None when the milestone rule declines."""
        if not self.should_spawn(score, live, rng):
            return None
        cell = random_empty_cell(occupied, self.grid_size, rng)
        logger.debug("Power-up spawned at %s (score %d)", cell, score)
        return PowerUp(cell=cell, expires_at_ms=now + self.settings.lifetime_ms)
