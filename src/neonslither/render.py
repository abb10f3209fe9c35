"""Board rendering: grid, particles, food, power-up, snake and combo label."""

from __future__ import annotations

import math
import pygame

from .engine import SnakeEngine
from .settings import GameSettings
from .utils import (
    ACCENT,
    BG_COLOR,
    FOOD_COLOR,
    GRID_COLOR,
    POWERUP_COLOR,
    SNAKE_BODY,
    SNAKE_HEAD,
    Cell,
    Direction,
)

COMBO_FADE_PER_FRAME = 0.01
EXPIRY_FLASH_FRACTION = 0.2


class Renderer:
    """Paints the engine state onto a square board every frame.

    Drawing also advances the particle pool and fades the combo label, so
    both keep moving between simulation ticks.
    """

    def __init__(self, settings: GameSettings, font: pygame.font.Font) -> None:
        self.settings = settings
        self.font = font

    def draw(self, surface: pygame.Surface, engine: SnakeEngine, now: float) -> None:
        size = min(surface.get_width(), surface.get_height())
        tile = size / engine.grid_size

        surface.fill(BG_COLOR)
        if self.settings.display.show_grid:
            self._draw_grid(surface, engine.grid_size, tile, size)

        layer = pygame.Surface((size, size), pygame.SRCALPHA)
        self._draw_particles(layer, engine, tile)
        self._draw_food(layer, engine.food, tile, now)
        if engine.power_up is not None:
            remaining = engine.power_up.remaining_fraction(now, self.settings.powerups.lifetime_ms)
            self._draw_power_up(layer, engine.power_up.cell, tile, remaining, now)
        self._draw_snake(layer, engine.snake, engine.direction, tile)
        surface.blit(layer, (0, 0))

        self._draw_combo(surface, engine, tile)

    @staticmethod
    def _draw_grid(surface: pygame.Surface, count: int, tile: float, size: int) -> None:
        for i in range(count + 1):
            offset = round(i * tile)
            pygame.draw.line(surface, GRID_COLOR, (offset, 0), (offset, size), 1)
            pygame.draw.line(surface, GRID_COLOR, (0, offset), (size, offset), 1)

    def _draw_particles(self, layer: pygame.Surface, engine: SnakeEngine, tile: float) -> None:
        pool = engine.particles
        for particle in pool.active_slots():
            alpha = int(255 * max(0.0, min(1.0, particle.life)))
            cx = particle.x * tile + tile / 2
            cy = particle.y * tile + tile / 2
            rect = pygame.Rect(0, 0, max(1, round(particle.size)), max(1, round(particle.size)))
            rect.center = (round(cx), round(cy))
            pygame.draw.rect(layer, (*particle.color, alpha), rect)
        pool.update(self.settings.particles.fade_per_frame)

    def _draw_food(self, layer: pygame.Surface, food: Cell, tile: float, now: float) -> None:
        wave = math.sin(now / 150)
        center = (round(food[0] * tile + tile / 2), round(food[1] * tile + tile / 2))
        radius = max(1, round(tile / 3 * (0.8 + wave * 0.2)))
        glow = max(radius + 1, round(radius + 4 + wave * 3))
        pygame.draw.circle(layer, (*FOOD_COLOR, 60), center, glow)
        pygame.draw.circle(layer, (*FOOD_COLOR, 255), center, radius)

    @staticmethod
    def _draw_power_up(
        layer: pygame.Surface, cell: Cell, tile: float, remaining: float, now: float
    ) -> None:
        if remaining > EXPIRY_FLASH_FRACTION:
            alpha = 255
        else:
            alpha = 255 if math.sin(now / 50) > 0 else 77
        center = (round(cell[0] * tile + tile / 2), round(cell[1] * tile + tile / 2))
        radius = max(1, round(tile / 2.5))
        pygame.draw.circle(layer, (*POWERUP_COLOR, alpha // 4), center, radius + 5)
        pygame.draw.circle(layer, (*POWERUP_COLOR, alpha), center, radius)

    def _draw_snake(
        self, layer: pygame.Surface, snake: list[Cell], heading: Direction, tile: float
    ) -> None:
        for idx in range(len(snake) - 1, -1, -1):
            cell = snake[idx]
            is_head = idx == 0
            color = SNAKE_HEAD if is_head else SNAKE_BODY
            padding = 1 if is_head else 3
            rect = pygame.Rect(
                round(cell[0] * tile + padding),
                round(cell[1] * tile + padding),
                max(1, round(tile - padding * 2)),
                max(1, round(tile - padding * 2)),
            )
            glow = rect.inflate(6 if is_head else 2, 6 if is_head else 2)
            pygame.draw.rect(layer, (*color, 70 if is_head else 35), glow, border_radius=10)
            pygame.draw.rect(layer, (*color, 255), rect, border_radius=8 if is_head else 4)
            if is_head:
                self._draw_eyes(layer, cell, heading, tile)

    @staticmethod
    def _draw_eyes(layer: pygame.Surface, cell: Cell, heading: Direction, tile: float) -> None:
        eye = 2
        offset = tile / 4
        cx = cell[0] * tile + tile / 2 - eye / 2
        cy = cell[1] * tile + tile / 2 - eye / 2
        if heading in (Direction.LEFT, Direction.RIGHT):
            spots = ((cx, cell[1] * tile + offset), (cx, cell[1] * tile + tile - offset - eye))
        else:
            spots = ((cell[0] * tile + offset, cy), (cell[0] * tile + tile - offset - eye, cy))
        for x, y in spots:
            pygame.draw.rect(layer, (0, 0, 0, 255), pygame.Rect(round(x), round(y), eye, eye))

    def _draw_combo(self, surface: pygame.Surface, engine: SnakeEngine, tile: float) -> None:
        combo = engine.combo
        if combo is None or combo.opacity <= 0:
            return
        text = self.font.render(f"COMBO x{combo.count}", True, ACCENT)
        text.set_alpha(int(255 * combo.opacity))
        center_x = combo.anchor[0] * tile + tile / 2
        bottom = (combo.anchor[1] - 1) * tile
        surface.blit(text, (round(center_x - text.get_width() / 2), round(bottom - text.get_height())))
        combo.opacity = max(0.0, combo.opacity - COMBO_FADE_PER_FRAME)
