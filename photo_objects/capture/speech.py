from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import shlex
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import edge_tts

logger = logging.getLogger(__name__)


def _default_player() -> str:
    if sys.platform == "darwin":
        return "afplay"
    return "ffplay -nodisp -autoexit -loglevel quiet"


@dataclass
class SpeechConfig:
    voice: str = "en-US-AriaNeural"
    player: Optional[str] = None
    cache_dir: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "SpeechConfig":
        cache_dir = os.getenv("TTS_CACHE_DIR")
        return cls(
            voice=os.getenv("TTS_VOICE", "en-US-AriaNeural"),
            # TTS_PLAYER="" synthesizes without playing.
            player=os.getenv("TTS_PLAYER", _default_player()),
            cache_dir=Path(cache_dir) if cache_dir else None,
        )


class EdgeSpeech:
    """
    Speech provider backed by Microsoft Edge TTS.

    Each phrase is synthesized to an mp3 (cached by voice and text) and then played
    with an external command; speak() returns once playback has finished.
    """

    def __init__(self, config: Optional[SpeechConfig] = None):
        self.config = config or SpeechConfig()
        self.cache_dir = self.config.cache_dir or Path(tempfile.mkdtemp(prefix="photo-objects-tts-"))
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_env(cls) -> "EdgeSpeech":
        return cls(SpeechConfig.from_env())

    def _audio_path(self, text: str) -> Path:
        key = hashlib.md5(f"{self.config.voice}:{text}".encode("utf-8")).hexdigest()
        return self.cache_dir / f"{key}.mp3"

    async def synthesize(self, text: str) -> Path:
        audio_file = self._audio_path(text)
        if not audio_file.exists():
            communicate = edge_tts.Communicate(text, self.config.voice)
            await communicate.save(str(audio_file))
            logger.debug("Synthesized %r to %s", text, audio_file)
        return audio_file

    async def speak(self, text: str) -> None:
        audio_file = await self.synthesize(text)
        if not self.config.player:
            return
        await self._play(shlex.split(self.config.player), audio_file)

    async def _play(self, command: Sequence[str], audio_file: Path) -> None:
        process = await asyncio.create_subprocess_exec(
            *command,
            str(audio_file),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        returncode = await process.wait()
        if returncode != 0:
            raise RuntimeError(f"Audio player {command[0]!r} exited with code {returncode}")
