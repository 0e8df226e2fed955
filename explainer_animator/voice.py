from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np

from .config import DEFAULT_SAMPLE_RATE
from .timeline import NarrationSegment, Timeline

if TYPE_CHECKING:
    from .facade import Facade


logger = logging.getLogger(__name__)


class AudioFormatError(ValueError):
    pass


@dataclass
class AudioClip:
    """Interleaved float32 PCM in [-1, 1] plus its format."""

    samples: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    duration: float = 0.0
    sample_rate: int = DEFAULT_SAMPLE_RATE
    channels: int = 1

    @classmethod
    def silence(cls, duration: float, sample_rate: int = DEFAULT_SAMPLE_RATE) -> AudioClip:
        num_samples = int(duration * sample_rate)
        return cls(np.zeros(num_samples, dtype=np.float32), duration, sample_rate, 1)

    def _check_format(self, other: AudioClip) -> None:
        if other.sample_rate != self.sample_rate:
            raise AudioFormatError(f"sample rate mismatch: expected {self.sample_rate}, got {other.sample_rate}")
        if other.channels != self.channels:
            raise AudioFormatError(f"channel count mismatch: expected {self.channels}, got {other.channels}")

    def append(self, other: AudioClip) -> None:
        self._check_format(other)
        self.samples = np.concatenate([self.samples, other.samples.astype(np.float32)])
        self.duration = len(self.samples) / float(self.sample_rate * self.channels)

    @classmethod
    def concat(cls, clips: Sequence[AudioClip], sample_rate: int, channels: int = 1) -> AudioClip:
        result = cls(np.zeros(0, dtype=np.float32), 0.0, sample_rate, channels)
        for clip in clips:
            result.append(clip)
        return result


class VoiceBackend(ABC):
    name: str = "voice"

    @abstractmethod
    def synthesize(self, text: str) -> AudioClip:  # pragma: no cover - interface
        raise NotImplementedError


class WordRateBackend(VoiceBackend):
    """Offline stand-in for a TTS engine.

    Produces ``seconds_per_word`` of a constant signal per word, which keeps
    durations deterministic and makes narration audibly distinct from silence
    in an assembled track.
    """

    name = "word-rate"

    def __init__(
        self,
        seconds_per_word: float = 0.3,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        signal_value: float = 0.42,
    ) -> None:
        if seconds_per_word <= 0:
            raise ValueError("seconds_per_word must be positive")
        self.seconds_per_word = seconds_per_word
        self.sample_rate = sample_rate
        self.signal_value = signal_value

    def synthesize(self, text: str) -> AudioClip:
        words = max(len(text.split()), 1)
        duration = words * self.seconds_per_word
        num_samples = int(duration * self.sample_rate)
        samples = np.full(num_samples, self.signal_value, dtype=np.float32)
        return AudioClip(samples, duration, self.sample_rate, 1)


def synthesize_narrations(facade: Facade, backend: VoiceBackend) -> List[AudioClip]:
    return [backend.synthesize(text) for text in facade.narration_texts()]


def resolve_with_backend(facade: Facade, backend: Optional[VoiceBackend] = None) -> List[AudioClip]:
    """Synthesize every narration and feed the real durations back into the scene."""
    backend = backend or facade.current_voice
    if backend is None:
        raise ValueError("No voice backend configured for this scene")
    clips = synthesize_narrations(facade, backend)
    facade.resolve_narration_durations([clip.duration for clip in clips])
    logger.info("Synthesized %d narrations with %s", len(clips), backend.name)
    return clips


def assemble_audio_track(
    timeline: Timeline,
    sample_rate: int = DEFAULT_SAMPLE_RATE,
    clips: Optional[Sequence[AudioClip]] = None,
) -> AudioClip:
    """Lay narration clips at their segment positions, silence everywhere else.

    Segment boundaries are rounded from cumulative start times, so the track
    length always matches the timeline's total duration. A clip shorter than its narration segment is padded with silence and a longer
    one is truncated. Without ``clips`` the whole track is silent.
    """
    clips = list(clips or [])
    for clip in clips:
        if clip.sample_rate != sample_rate:
            raise AudioFormatError(f"sample rate mismatch: expected {sample_rate}, got {clip.sample_rate}")
        if clip.channels != 1:
            raise AudioFormatError(f"channel count mismatch: expected 1, got {clip.channels}")

    samples = np.zeros(int(round(timeline.total_duration() * sample_rate)), dtype=np.float32)
    narration_index = 0
    start = 0.0
    for segment in timeline.segments:
        end = start + segment.duration
        if isinstance(segment, NarrationSegment):
            if narration_index < len(clips):
                first, last = int(round(start * sample_rate)), int(round(end * sample_rate))
                source = clips[narration_index].samples[: last - first]
                samples[first : first + len(source)] = source
            narration_index += 1
        start = end

    return AudioClip(samples, len(samples) / float(sample_rate), sample_rate, 1)
