"""Synthesised sound cues for guesses and level completion."""

from __future__ import annotations

import logging
import math
import struct
import tempfile
import wave
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, QUrl
from PySide6.QtMultimedia import QSoundEffect

from brain_train.core.engine import GameEvent

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# (start_hz, end_hz, seconds, peak gain)
Segment = Tuple[float, float, float, float]

CUES: Dict[GameEvent, Sequence[Segment]] = {
    GameEvent.CORRECT_GUESS: [(800.0, 1200.0, 0.2, 0.3)],
    GameEvent.WRONG_GUESS: [(200.0, 100.0, 0.15, 0.2)],
    GameEvent.LEVEL_COMPLETE: [
        (523.25, 523.25, 0.15, 0.3),
        (659.25, 659.25, 0.15, 0.3),
        (783.99, 783.99, 0.3, 0.3),
    ],
}


def render_cue(segments: Sequence[Segment], sample_rate: int = SAMPLE_RATE) -> bytes:
    """Render exponential frequency sweeps with a decaying envelope as 16-bit PCM."""
    frames = bytearray()
    for start_hz, end_hz, seconds, gain in segments:
        count = max(1, int(seconds * sample_rate))
        phase = 0.0
        for i in range(count):
            t = i / count
            freq = start_hz * (end_hz / start_hz) ** t
            phase += 2.0 * math.pi * freq / sample_rate
            envelope = gain * (0.01 / gain) ** t if gain > 0.01 else gain
            frames += struct.pack("<h", int(32767 * envelope * math.sin(phase)))
    return bytes(frames)


def write_wav(path: Path, pcm: bytes, sample_rate: int = SAMPLE_RATE) -> None:
    with wave.open(str(path), "wb") as out:
        out.setnchannels(1)
        out.setsampwidth(2)
        out.setframerate(sample_rate)
        out.writeframes(pcm)


class TonePlayer(QObject):
    """Plays a cue for each audio-bearing ``GameEvent``; silent if audio is unavailable."""

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._effects: Dict[GameEvent, QSoundEffect] = {}
        self._tmp = tempfile.TemporaryDirectory(prefix="brain-train-")
        for event, segments in CUES.items():
            path = Path(self._tmp.name) / f"{event.value}.wav"
            try:
                write_wav(path, render_cue(segments))
            except OSError as e:
                logger.warning("Could not write sound cue %s: %s", path, e)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(0.8)
            self._effects[event] = effect

    def on_event(self, event: GameEvent) -> None:
        effect = self._effects.get(event)
        if effect is not None:
            effect.play()

    def close(self) -> None:
        self._effects.clear()
        self._tmp.cleanup()
