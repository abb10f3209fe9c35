"""pygame shell: window, input, HUD, menus and the frame loop."""

from __future__ import annotations

from concurrent.futures import Executor
from pathlib import Path
import logging
import pygame

from .audio import AudioManager, SoundCue
from .engine import FoodCaptured, PowerUpCaptured, SnakeEngine
from .flavor import FlavorTextService
from .leaderboard import LeaderboardStore
from .loop import FrameLoop
from .menu import Menu, MenuItem
from .render import Renderer
from .session import GameState, SessionController
from .settings import GameSettings, SettingsManager, build_key_map
from .utils import (
    ACCENT,
    BG_COLOR,
    PINK,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SHADOW_COLOR,
    TEXT_COLOR,
    ensure_data_dirs,
)

logger = logging.getLogger(__name__)

MENU_UP_KEYS = (pygame.K_UP, pygame.K_w)
MENU_DOWN_KEYS = (pygame.K_DOWN, pygame.K_s)
CONFIRM_KEYS = (pygame.K_RETURN, pygame.K_SPACE)
HUD_HEIGHT = 70


class NeonSlitherGame:
    """Owns the window and wires input, session, engine and renderer together."""

    def __init__(
        self,
        root: Path,
        settings_manager: SettingsManager | None = None,
        leaderboard: LeaderboardStore | None = None,
        flavor: FlavorTextService | None = None,
        executor: Executor | None = None,
    ) -> None:
        pygame.init()
        pygame.font.init()
        ensure_data_dirs()

        self.root = root
        self.settings_manager = settings_manager or SettingsManager()
        self.settings: GameSettings = self.settings_manager.settings

        flags = pygame.FULLSCREEN if self.settings.display.fullscreen else 0
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), flags)
        pygame.display.set_caption("Neon Slither")
        self.clock = pygame.time.Clock()

        self.title_font = pygame.font.SysFont("consolas", 52, bold=True)
        self.body_font = pygame.font.SysFont("consolas", 22, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 18)
        self.combo_font = pygame.font.SysFont("consolas", 16, bold=True)

        board_px = self.settings.display.board_pixels
        self.board = pygame.Surface((board_px, board_px))
        self.key_map = build_key_map(self.settings)

        self.engine = SnakeEngine(self.settings, clock=pygame.time.get_ticks)
        self.renderer = Renderer(self.settings, self.combo_font)
        self.loop = FrameLoop(self.engine, self.renderer)
        self.session = SessionController(
            self.engine,
            leaderboard or LeaderboardStore(),
            flavor or FlavorTextService(),
            self.settings,
            executor=executor,
        )
        self.session.on_game_over(self._on_game_over)

        self.audio = AudioManager(self.root)
        self.audio.load_assets()
        self.audio.set_volumes(
            self.settings.master_volume,
            self.settings.music_volume,
            self.settings.sfx_volume,
        )
        self.audio.play_music()

        self.start_menu = Menu(
            title="NEON SLITHER",
            items=[
                MenuItem("Initialize", "start"),
                MenuItem("High Scores", "scores"),
                MenuItem("Exit", "exit"),
            ],
        )
        self.game_over_menu = Menu(
            title="CORE RUPTURE",
            items=[
                MenuItem("Re-link", "start"),
                MenuItem("High Scores", "scores"),
                MenuItem("Main Menu", "menu"),
            ],
            accent=PINK,
        )
        self.pause_menu = Menu(
            title="PAUSED",
            items=[
                MenuItem("Resume", "resume"),
                MenuItem("Restart", "start"),
                MenuItem("Quit to Menu", "menu"),
            ],
        )
        self.show_scores = False
        logger.info(
            "Board %dx%d cells at %dpx, audio %s",
            self.settings.snake.grid_size,
            self.settings.snake.grid_size,
            board_px,
            "on" if self.audio.enabled else "off",
        )

    def run(self) -> None:
        """Main event/update/render loop."""
        running = True
        while running:
            self.clock.tick(self.settings.display.fps)
            running = self._handle_events()
            if not running:
                break
            self.frame()
            pygame.display.flip()

        self.session.shutdown()
        pygame.quit()

    def frame(self, now: float | None = None) -> None:
        """Advance the simulation if due, collect background results, redraw."""
        now = pygame.time.get_ticks() if now is None else now
        active = self.session.state == GameState.PLAYING
        outcome = self.loop.advance(self.board, now, active)
        if isinstance(outcome, FoodCaptured):
            self.audio.play(SoundCue.EAT)
        elif isinstance(outcome, PowerUpCaptured):
            self.audio.play(SoundCue.POWERUP)
        self.session.handle(outcome)
        self.session.poll()
        self._render()

    def _on_game_over(self, final_score: int) -> None:
        self.audio.play(SoundCue.CRASH)
        self.engine.particles.emit_burst(self.engine.head, PINK, self.settings.particles.burst_count * 2)
        self.game_over_menu.selected_index = 0

    def _handle_events(self) -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue

            if self.show_scores:
                if event.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE, *CONFIRM_KEYS):
                    self.show_scores = False
                continue

            state = self.session.state
            if state == GameState.PLAYING and event.key in self.key_map:
                self.session.steer(self.key_map[event.key])
            elif state in (GameState.PLAYING, GameState.PAUSED) and event.key in (
                self.settings.pause_key,
                pygame.K_ESCAPE,
            ):
                self.session.toggle_pause(pygame.time.get_ticks())
                self.pause_menu.selected_index = 0
            elif state == GameState.PAUSED:
                self._handle_menu_input(self.pause_menu, event.key)
            elif state == GameState.START:
                if event.key == pygame.K_ESCAPE:
                    return False
                self._handle_menu_input(self.start_menu, event.key)
            elif state == GameState.GAME_OVER:
                self._handle_menu_input(self.game_over_menu, event.key)
        return True

    def _handle_menu_input(self, menu: Menu, key: int) -> None:
        if key in MENU_UP_KEYS:
            menu.move(-1)
            self.audio.play(SoundCue.MENU)
            return
        if key in MENU_DOWN_KEYS:
            menu.move(1)
            self.audio.play(SoundCue.MENU)
            return
        if key not in CONFIRM_KEYS:
            return

        action = menu.current_action()
        self.audio.play(SoundCue.MENU)
        if action == "start":
            self.session.start(pygame.time.get_ticks())
        elif action == "resume":
            self.session.resume()
        elif action == "scores":
            self.session.refresh_leaderboard()
            self.show_scores = True
        elif action == "menu":
            self.session.return_to_menu()
            self.start_menu.selected_index = 0
        elif action == "exit":
            pygame.event.post(pygame.event.Event(pygame.QUIT))

    def _render(self) -> None:
        self.screen.fill(BG_COLOR)
        board_x = (SCREEN_WIDTH - self.board.get_width()) // 2
        board_y = HUD_HEIGHT + (SCREEN_HEIGHT - HUD_HEIGHT - self.board.get_height()) // 2
        pygame.draw.rect(
            self.screen,
            ACCENT,
            self.board.get_rect(topleft=(board_x, board_y)).inflate(8, 8),
            width=2,
            border_radius=12,
        )
        self.screen.blit(self.board, (board_x, board_y))
        self._render_hud()

        state = self.session.state
        if self.show_scores:
            self._render_scores()
        elif state == GameState.START:
            self.start_menu.render(
                self.screen, self.title_font, self.body_font, caption=self.session.flavor_text
            )
        elif state == GameState.PAUSED:
            self.pause_menu.render(self.screen, self.title_font, self.body_font)
        elif state == GameState.GAME_OVER:
            caption = "Analyzing neural patterns..." if self.session.flavor_pending else self.session.flavor_text
            self.game_over_menu.render(
                self.screen,
                self.title_font,
                self.body_font,
                caption=caption,
                headline=str(self.session.final_score or 0),
            )

    def _render_hud(self) -> None:
        score = self.body_font.render(f"GRID_SCORE {self.session.score}", True, ACCENT)
        best = self.body_font.render(f"MAX_EFFICIENCY {self.session.high_score}", True, TEXT_COLOR)
        shadow = self.body_font.render(f"GRID_SCORE {self.session.score}", True, SHADOW_COLOR)
        self.screen.blit(shadow, (26, 24))
        self.screen.blit(score, (24, 22))
        self.screen.blit(best, (SCREEN_WIDTH - best.get_width() - 24, 22))

    def _render_scores(self) -> None:
        overlay = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 215))
        self.screen.blit(overlay, (0, 0))

        title = self.title_font.render("HIGH SCORES", True, ACCENT)
        self.screen.blit(title, (SCREEN_WIDTH // 2 - title.get_width() // 2, 90))
        if not self.session.entries:
            empty = self.body_font.render("No runs recorded yet", True, TEXT_COLOR)
            self.screen.blit(empty, (SCREEN_WIDTH // 2 - empty.get_width() // 2, 200))
        for idx, entry in enumerate(self.session.entries):
            line = f"{idx + 1:>2}. {entry.name:<15} {entry.score:>6}"
            text = self.body_font.render(line, True, TEXT_COLOR)
            self.screen.blit(text, (SCREEN_WIDTH // 2 - text.get_width() // 2, 190 + idx * 36))

        prompt = self.small_font.render("Enter / Esc to return", True, TEXT_COLOR)
        self.screen.blit(prompt, (SCREEN_WIDTH // 2 - prompt.get_width() // 2, SCREEN_HEIGHT - 50))
