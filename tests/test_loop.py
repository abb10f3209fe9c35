from __future__ import annotations

import random

import pygame

from neonslither.engine import Continued, SnakeEngine
from neonslither.loop import FrameLoop
from neonslither.render import Renderer
from neonslither.settings import GameSettings


class RecordingRenderer:
    def __init__(self) -> None:
        self.frames: list[float] = []

    def draw(self, surface, engine, now: float) -> None:
        self.frames.append(now)


def _loop() -> tuple[FrameLoop, SnakeEngine, RecordingRenderer]:
    settings = GameSettings()
    settings.powerups.probability = 0.0
    engine = SnakeEngine(settings, rng=random.Random(4), clock=lambda: 0.0)
    engine.food = (0, 0)
    renderer = RecordingRenderer()
    return FrameLoop(engine, renderer), engine, renderer


def test_frame_ticks_only_when_interval_elapsed() -> None:
    loop, engine, renderer = _loop()
    surface = pygame.Surface((40, 40))

    assert loop.advance(surface, 100, active=True) is None
    assert engine.head == (5, 10)

    assert loop.advance(surface, 140, active=True) == Continued()
    assert engine.head == (6, 10)
    assert engine.last_tick_ms == 140

    assert loop.advance(surface, 200, active=True) is None
    assert renderer.frames == [100, 140, 200]


def test_inactive_session_still_renders() -> None:
    loop, engine, renderer = _loop()
    surface = pygame.Surface((40, 40))
    assert loop.advance(surface, 10_000, active=False) is None
    assert engine.head == (5, 10)
    assert renderer.frames == [10_000]


def test_renderer_advances_particles_and_fades_combo() -> None:
    pygame.font.init()
    loop, engine, _ = _loop()
    settings = engine.settings
    renderer = Renderer(settings, pygame.font.Font(None, 16))
    engine.food = (6, 10)
    engine.tick(now=0)
    assert engine.combo is not None
    before = [(p.x, p.y, p.life) for p in engine.particles.active_slots()]

    surface = pygame.Surface((200, 200))
    renderer.draw(surface, engine, now=16)

    after = [(p.x, p.y, p.life) for p in engine.particles.active_slots()]
    assert before != after
    assert all(life < 1.0 for _, _, life in after)
    assert engine.combo.opacity < 1.0
