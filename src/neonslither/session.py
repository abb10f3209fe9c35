"""Session lifecycle: start/pause/game-over, score submission and flavor text."""

from __future__ import annotations

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable
import logging
import time

from .engine import Continued, FoodCaptured, GameOver, PowerUpCaptured, SnakeEngine, TickOutcome
from .flavor import FlavorKind, FlavorTextService, fallback_text
from .leaderboard import LeaderboardEntry, LeaderboardStore, validate_score
from .settings import GameSettings
from .utils import Direction

logger = logging.getLogger(__name__)

LOADING_TEXT = "Accessing System..."


class GameState(Enum):
    """Finite states for menus and gameplay."""

    START = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


class JobKind(Enum):
    SCORE = auto()
    FLAVOR = auto()


@dataclass(slots=True)
class PendingJob:
    """A background request awaiting collection by poll()."""

    kind: JobKind
    session_id: int
    future: Future
    flavor: FlavorKind | None = None
    score: int | None = None


class SessionController:
    """Orchestrates one run at a time around a SnakeEngine.

    Persistence and flavor requests go to an executor and are collected once
    per frame by poll(); nothing here blocks the frame loop.
    """

    def __init__(
        self,
        engine: SnakeEngine,
        leaderboard: LeaderboardStore,
        flavor: FlavorTextService,
        settings: GameSettings,
        executor: Executor | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.engine = engine
        self.leaderboard = leaderboard
        self.flavor = flavor
        self.settings = settings
        self.executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="neonslither-io")
        self.clock = clock or time.monotonic

        self.state = GameState.START
        self.session_id = 0
        self.started_at = 0.0
        self.score = 0
        self.final_score: int | None = None
        self.flavor_text = LOADING_TEXT
        self.entries: list[LeaderboardEntry] = []
        self.high_score = 0

        self._submitted: set[int] = set()
        self._pending: list[PendingJob] = []
        self._game_over_listeners: list[Callable[[int], None]] = []

        self.refresh_leaderboard()
        self.request_flavor(FlavorKind.INTRO)

    @property
    def flavor_pending(self) -> bool:
        return any(
            job.kind == JobKind.FLAVOR and job.session_id == self.session_id for job in self._pending
        )

    def on_game_over(self, listener: Callable[[int], None]) -> None:
        """Register a callback fired once per session with the final score."""
        self._game_over_listeners.append(listener)

    def start(self, now_ms: float | None = None) -> None:
        """Begin a new run with a fresh snake and a zero score."""
        self.session_id += 1
        self.score = self.engine.reset(now_ms).score
        self.final_score = None
        self.started_at = self.clock()
        self.state = GameState.PLAYING
        logger.info("Session %d started", self.session_id)

    def pause(self) -> None:
        if self.state == GameState.PLAYING:
            self.state = GameState.PAUSED

    def resume(self, now_ms: float | None = None) -> None:
        if self.state != GameState.PAUSED:
            return
        self.engine.last_tick_ms = self.engine.clock() if now_ms is None else now_ms
        self.state = GameState.PLAYING

    def toggle_pause(self, now_ms: float | None = None) -> None:
        if self.state == GameState.PLAYING:
            self.pause()
        elif self.state == GameState.PAUSED:
            self.resume(now_ms)

    def return_to_menu(self) -> None:
        """Leave a paused or finished run for the start screen."""
        if self.state in (GameState.PAUSED, GameState.GAME_OVER):
            self.state = GameState.START

    def steer(self, direction: Direction) -> bool:
        """Forward a decoded direction intent to the engine while playing."""
        if self.state != GameState.PLAYING:
            return False
        return self.engine.set_pending_direction(direction)

    def handle(self, outcome: TickOutcome | None) -> None:
        """Apply the result of one engine tick."""
        if outcome is None or isinstance(outcome, Continued):
            return
        if isinstance(outcome, (FoodCaptured, PowerUpCaptured)):
            self.score = outcome.score
        elif isinstance(outcome, GameOver):
            self._finish(outcome.final_score)
        else:
            raise TypeError(f"Unhandled tick outcome: {outcome!r}")

    def _finish(self, final_score: int) -> None:
        if self.state != GameState.PLAYING:
            return
        self.state = GameState.GAME_OVER
        self.final_score = final_score
        self.score = final_score
        self.high_score = max(self.high_score, final_score)
        elapsed = self.clock() - self.started_at
        logger.info("Session %d over: score %d after %.1fs", self.session_id, final_score, elapsed)

        for listener in self._game_over_listeners:
            listener(final_score)
        self.submit_score(final_score, elapsed)
        self.request_flavor(FlavorKind.OUTRO, final_score)

    def submit_score(self, score: int, elapsed_seconds: float) -> bool:
        """Queue a leaderboard write; at most one per session."""
        if self.session_id in self._submitted:
            return False
        self._submitted.add(self.session_id)
        if not validate_score(score, elapsed_seconds):
            logger.warning("Rejected implausible score %d over %.1fs", score, elapsed_seconds)
            return False
        future = self.executor.submit(self.leaderboard.save_score, self.settings.player_name, score)
        self._pending.append(PendingJob(JobKind.SCORE, self.session_id, future, score=score))
        return True

    def request_flavor(self, kind: FlavorKind, score: int | None = None) -> None:
        future = self.executor.submit(self.flavor.fetch, kind, score)
        self._pending.append(PendingJob(JobKind.FLAVOR, self.session_id, future, flavor=kind, score=score))

    def refresh_leaderboard(self) -> None:
        self.entries = self.leaderboard.get_scores()
        if self.entries:
            self.high_score = max(self.high_score, self.entries[0].score)

    def poll(self) -> None:
        """Collect finished background jobs; call once per frame."""
        waiting: list[PendingJob] = []
        for job in self._pending:
            if not job.future.done():
                waiting.append(job)
                continue
            try:
                result: Any = job.future.result()
            except Exception:
                logger.exception("Background %s job failed", job.kind.name.lower())
                result = None

            if job.kind == JobKind.SCORE:
                if result:
                    self.refresh_leaderboard()
            elif job.kind == JobKind.FLAVOR:
                if job.session_id != self.session_id:
                    logger.debug("Dropping stale flavor text from session %d", job.session_id)
                    continue
                if result is None and job.flavor is not None:
                    result = fallback_text(job.flavor, job.score)
                self.flavor_text = result
        self._pending = waiting

    def shutdown(self) -> None:
        """Stop accepting background work; in-flight requests may still finish."""
        self.executor.shutdown(wait=False)
