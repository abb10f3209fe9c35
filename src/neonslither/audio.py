"""Sound cue playback with graceful fallback when the mixer or assets are absent."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
import logging
import pygame

logger = logging.getLogger(__name__)


class SoundCue(str, Enum):
    """Named gameplay sound effects."""

    EAT = "eat"
    POWERUP = "powerup"
    CRASH = "crash"
    MENU = "menu"


MUSIC_FILE = Path("assets") / "music" / "theme.ogg"


class AudioManager:
    """Loads cues from assets/sounds/<cue>.wav; every call is a no-op when muted."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.enabled = False
        self.sounds: dict[SoundCue, pygame.mixer.Sound] = {}
        try:
            pygame.mixer.init()
            self.enabled = True
        except pygame.error as exc:
            logger.info("Audio disabled: %s", exc)

    def load_assets(self) -> None:
        if not self.enabled:
            return
        for cue in SoundCue:
            path = self.root / "assets" / "sounds" / f"{cue.value}.wav"
            if not path.exists():
                continue
            try:
                self.sounds[cue] = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                logger.warning("Could not load %s: %s", path, exc)

    def set_volumes(self, master: float, music: float, sfx: float) -> None:
        if not self.enabled:
            return
        pygame.mixer.music.set_volume(master * music)
        for sound in self.sounds.values():
            sound.set_volume(master * sfx)

    def play_music(self) -> None:
        """Loop the theme if one ships with the game."""
        if not self.enabled:
            return
        path = self.root / MUSIC_FILE
        if not path.exists():
            return
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.play(-1)
        except pygame.error as exc:
            logger.warning("Could not play %s: %s", path, exc)

    def play(self, cue: SoundCue) -> None:
        sound = self.sounds.get(cue)
        if sound is not None:
            sound.play()
