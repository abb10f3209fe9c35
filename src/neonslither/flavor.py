"""Short generated quips for the start and game-over screens."""

from __future__ import annotations

from enum import Enum
from typing import Any
import logging
import os

import anthropic

logger = logging.getLogger(__name__)

DEFAULT_MODEL = os.environ.get("NEON_SLITHER_FLAVOR_MODEL", "claude-3-5-haiku-latest")
INTRO_FALLBACK = "Navigate the grid. Consume the data."


class FlavorKind(str, Enum):
    """Which screen the line is for."""

    INTRO = "intro"
    OUTRO = "outro"


def build_prompt(kind: FlavorKind, score: int | None = None) -> str:
    if kind == FlavorKind.INTRO:
        return (
            "Generate a short, cool 1-sentence message for a snake game pilot entering the "
            "'Neon Grid'. Keep it under 12 words and use snake-like or grid-based terminology."
        )
    return (
        "Generate a short, snarky 1-sentence commentary for a player who just crashed their "
        f"snake with a score of {score}. Be witty and mention their length or the grid. "
        "Under 18 words."
    )


def fallback_text(kind: FlavorKind, score: int | None = None, failed: bool = True) -> str:
    """Fixed line used whenever the generator is unavailable or returns nothing."""
    if kind == FlavorKind.INTRO:
        return INTRO_FALLBACK
    if failed:
        return f"Final Score: {score}. Try again."
    return f"Score: {score}. You tangled yourself up."


class FlavorTextService:
    """Wraps the Anthropic client; fetch() never raises."""

    def __init__(
        self,
        client: Any | None = None,
        model: str = DEFAULT_MODEL,
        timeout: float = 8.0,
        max_tokens: int = 60,
    ) -> None:
        self._client = client
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens

    def _resolve_client(self) -> Any | None:
        if self._client is None and os.environ.get("ANTHROPIC_API_KEY"):
            self._client = anthropic.Anthropic(timeout=self.timeout, max_retries=1)
        return self._client

    def fetch(self, kind: FlavorKind, score: int | None = None) -> str:
        client = self._resolve_client()
        if client is None:
            logger.debug("No flavor-text client configured, using fallback")
            return fallback_text(kind, score)

        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=0.9,
                messages=[{"role": "user", "content": build_prompt(kind, score)}],
            )
        except anthropic.AnthropicError as exc:
            logger.warning("Flavor text request failed: %s", exc)
            return fallback_text(kind, score)

        text = "".join(
            getattr(block, "text", "") for block in response.content if getattr(block, "type", None) == "text"
        ).strip()
        return text or fallback_text(kind, score, failed=False)
