"""Menu panels drawn over the board."""

from __future__ import annotations

from dataclasses import dataclass
import pygame

from .utils import ACCENT, SHADOW_COLOR, TEXT_COLOR


@dataclass(slots=True)
class MenuItem:
    """Single selectable menu row."""

    label: str
    action: str


class Menu:
    """Vertical keyboard-driven menu with a title and an optional caption."""

    def __init__(
        self,
        title: str,
        items: list[MenuItem],
        accent: tuple[int, int, int] = ACCENT,
    ) -> None:
        self.title = title
        self.items = items
        self.accent = accent
        self.selected_index = 0

    def move(self, delta: int) -> None:
        """Move menu selection by delta."""
        self.selected_index = (self.selected_index + delta) % len(self.items)

    def current_action(self) -> str:
        """Return selected action key."""
        return self.items[self.selected_index].action

    def render(
        self,
        surface: pygame.Surface,
        title_font: pygame.font.Font,
        body_font: pygame.font.Font,
        caption: str = "",
        headline: str = "",
    ) -> None:
        """Draw a dimmed panel with title, optional headline, caption and items."""
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 190))
        surface.blit(overlay, (0, 0))

        center_x = surface.get_width() // 2
        title = title_font.render(self.title, True, self.accent)
        title_shadow = title_font.render(self.title, True, SHADOW_COLOR)
        surface.blit(title_shadow, (center_x - title.get_width() // 2 + 3, 113))
        surface.blit(title, (center_x - title.get_width() // 2, 110))

        y = 110 + title.get_height() + 24
        if headline:
            line = title_font.render(headline, True, TEXT_COLOR)
            surface.blit(line, (center_x - line.get_width() // 2, y))
            y += line.get_height() + 16
        if caption:
            line = body_font.render(f'"{caption}"', True, TEXT_COLOR)
            surface.blit(line, (center_x - line.get_width() // 2, y))
            y += line.get_height() + 16

        start_y = max(y + 30, 300)
        for idx, item in enumerate(self.items):
            selected = idx == self.selected_index
            color = self.accent if selected else TEXT_COLOR
            prefix = "> " if selected else "  "
            line = body_font.render(f"{prefix}{item.label}", True, color)
            surface.blit(line, (center_x - line.get_width() // 2, start_y + idx * 42))
