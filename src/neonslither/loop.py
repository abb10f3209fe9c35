"""Per-frame driver that decouples the tick rate from the render rate."""

from __future__ import annotations

from typing import Protocol
import pygame

from .engine import SnakeEngine, TickOutcome


class BoardPainter(Protocol):
    def draw(self, surface: pygame.Surface, engine: SnakeEngine, now: float) -> None: ...


class FrameLoop:
    """Ticks the engine when its interval has elapsed, then always draws."""

    def __init__(self, engine: SnakeEngine, renderer: BoardPainter) -> None:
        self.engine = engine
        self.renderer = renderer

    def advance(self, surface: pygame.Surface, now: float, active: bool) -> TickOutcome | None:
        outcome: TickOutcome | None = None
        if active and self.engine.is_due(now):
            outcome = self.engine.tick(now)
            self.engine.last_tick_ms = now
        self.renderer.draw(surface, self.engine, now)
        return outcome
