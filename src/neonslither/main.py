"""Executable entrypoint for Neon Slither."""

from __future__ import annotations

from pathlib import Path
import logging
import os

from .game import NeonSlitherGame


def configure_logging() -> None:
    """Route library logs to stderr; NEON_SLITHER_LOG_LEVEL overrides INFO."""
    level = os.environ.get("NEON_SLITHER_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main() -> None:
    """Launch the game."""
    configure_logging()
    root = Path(__file__).resolve().parents[2]
    NeonSlitherGame(root=root).run()


if __name__ == "__main__":
    main()
