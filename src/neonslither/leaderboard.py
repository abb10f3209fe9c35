"""High-score persistence with name sanitising and a plausibility check."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
import logging
import re
import time

from .utils import SCORES_FILE, load_json, save_json

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 15
MAX_ENTRIES = 10
MAX_POINTS_PER_SECOND = 10

_ANGLE_BRACKETS = re.compile(r"[<>]")


@dataclass(slots=True)
class LeaderboardEntry:
    """One stored run."""

    name: str
    score: int
    timestamp: int


def sanitize_name(name: str, max_length: int = MAX_NAME_LENGTH) -> str:
    """Strip angle brackets and surrounding whitespace, then cap the length."""
    return _ANGLE_BRACKETS.sub("", name).strip()[:max_length]


def validate_score(score: int, elapsed_seconds: float) -> bool:
    """Reject scores that imply an implausible points-per-second rate."""
    return score >= 0 and score / (elapsed_seconds + 1) < MAX_POINTS_PER_SECOND


class LeaderboardStore:
    """Top-N scores kept in a JSON file, highest first."""

    def __init__(self, path: Path = SCORES_FILE, max_entries: int = MAX_ENTRIES) -> None:
        self.path = path
        self.max_entries = max_entries

    def get_scores(self) -> list[LeaderboardEntry]:
        """Return stored entries; a missing or corrupt file yields an empty list."""
        raw = load_json(self.path, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed leaderboard at %s", self.path)
            return []
        entries: list[LeaderboardEntry] = []
        for row in raw:
            try:
                entries.append(
                    LeaderboardEntry(
                        name=str(row["name"]),
                        score=int(row["score"]),
                        timestamp=int(row.get("timestamp", 0)),
                    )
                )
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed leaderboard row: %r", row)
        entries.sort(key=lambda entry: entry.score, reverse=True)
        return entries

    def save_score(self, name: str, score: int) -> bool:
        """Insert a run and keep only the best entries; False on write failure."""
        clean = sanitize_name(name)
        entries = self.get_scores()
        entries.append(LeaderboardEntry(name=clean, score=int(score), timestamp=int(time.time() * 1000)))
        entries.sort(key=lambda entry: entry.score, reverse=True)
        try:
            save_json(self.path, [asdict(entry) for entry in entries[: self.max_entries]])
        except OSError as exc:
            logger.warning("Failed to write leaderboard %s: %s", self.path, exc)
            return False
        logger.info("Saved score %d for %s", score, clean)
        return True

    def best_score(self) -> int:
        entries = self.get_scores()
        return entries[0].score if entries else 0
