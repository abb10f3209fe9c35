"""Fixed-capacity particle pool for capture bursts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator
import random

from .utils import Cell

VELOCITY_SCALE = 0.02


@dataclass(slots=True)
class Particle:
    """One reusable particle slot; coordinates are in grid cells."""

    index: int
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    life: float = 0.0
    color: tuple[int, int, int] = (255, 255, 255)
    size: float = 2.0
    active: bool = False


class ParticlePool:
    """Owns every particle slot, allocated once up front.

    Free slots are tracked on an index stack so acquire and release are O(1).
    When every slot is busy, acquire returns None and the request is dropped.
    """

    def __init__(self, capacity: int, rng: random.Random | None = None) -> None:
        self.capacity = capacity
        self.rng = rng or random.Random()
        self._slots = [Particle(index=i) for i in range(capacity)]
        self._free = list(range(capacity - 1, -1, -1))

    @property
    def active_count(self) -> int:
        return self.capacity - len(self._free)

    def acquire(self) -> Particle | None:
        """Return an inactive slot marked active, or None when exhausted."""
        if not self._free:
            return None
        particle = self._slots[self._free.pop()]
        particle.active = True
        return particle

    def release(self, particle: Particle) -> None:
        """Return a slot to the pool."""
        if not particle.active:
            return
        particle.active = False
        particle.life = 0.0
        self._free.append(particle.index)

    def active_slots(self) -> Iterator[Particle]:
        """Yield currently active particles."""
        return (particle for particle in self._slots if particle.active)

    def clear(self) -> None:
        """Release every active slot."""
        for particle in self._slots:
            self.release(particle)

    def emit_burst(self, cell: Cell, color: tuple[int, int, int], count: int) -> int:
        """Spawn up to count particles centred on cell; returns how many fit."""
        emitted = 0
        for _ in range(count):
            particle = self.acquire()
            if particle is None:
                break
            particle.x = float(cell[0])
            particle.y = float(cell[1])
            particle.vx = (self.rng.random() - 0.5) * 8
            particle.vy = (self.rng.random() - 0.5) * 8
            particle.life = 1.0
            particle.color = color
            particle.size = self.rng.random() * 4 + 2
            emitted += 1
        return emitted

    def update(self, fade: float) -> None:
        """Advance every live particle one frame and retire the spent ones."""
        for particle in self._slots:
            if not particle.active:
                continue
            particle.x += particle.vx * VELOCITY_SCALE
            particle.y += particle.vy * VELOCITY_SCALE
            particle.life -= fade
            if particle.life <= 0:
                self.release(particle)
