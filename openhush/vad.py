"""Voice activity detection: configuration and streaming speech segmentation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

log = logging.getLogger(__name__)


class VadError(Exception):
    """Raised when a voice activity detector fails to load or run."""


@dataclass(frozen=True)
class VadResult:
    """Result of VAD analysis for one audio chunk."""

    probability: float
    is_speech: bool


@dataclass
class VadConfig:
    """Settings for voice activity detection."""

    enabled: bool = False
    threshold: float = 0.5
    min_silence_ms: int = 700
    min_speech_ms: int = 250
    speech_pad_ms: int = 30


@dataclass(frozen=True)
class SpeechSegment:
    """A stretch of speech, in sample positions."""

    start: int
    end: int
    avg_probability: float


@dataclass
class VadState:
    """Tracks speech/silence transitions and emits completed speech segments."""

    config: VadConfig
    sample_rate: int
    _probabilities: list[float] = field(default_factory=list, init=False, repr=False)
    _in_speech: bool = field(default=False, init=False)
    _speech_start: int | None = field(default=None, init=False)
    _silence_samples: int = field(default=0, init=False)
    _total_samples: int = field(default=0, init=False)

    def __init__(self, config: VadConfig, sample_rate: int) -> None:
        self.config = config
        self.sample_rate = sample_rate
        self._probabilities = []
        self._in_speech = False
        self._speech_start = None
        self._silence_samples = 0
        self._total_samples = 0

    def _ms_to_samples(self, ms: int) -> int:
        return int(ms / 1000.0 * self.sample_rate)

    def update(self, result: VadResult, chunk_samples: int) -> SpeechSegment | None:
        """Feed one chunk's result; return a segment if speech just ended."""
        self._probabilities.append(result.probability)
        prev_total = self._total_samples
        self._total_samples += chunk_samples

        min_silence = self._ms_to_samples(self.config.min_silence_ms)
        min_speech = self._ms_to_samples(self.config.min_speech_ms)

        if result.is_speech:
            self._silence_samples = 0
            if not self._in_speech:
                self._in_speech = True
                self._speech_start = prev_total
                log.debug(
                    "Speech started at sample %d (prob: %.2f)",
                    prev_total,
                    result.probability,
                )
            return None

        self._silence_samples += chunk_samples
        if not (self._in_speech and self._silence_samples >= min_silence):
            return None

        self._in_speech = False
        start = self._speech_start if self._speech_start is not None else 0
        self._speech_start = None
        end = prev_total
        length = end - start

        if length >= min_speech:
            probs = self._probabilities
            avg = sum(probs) / len(probs) if probs else 0.0
            self._probabilities = []
            log.debug(
                "Speech ended: %d - %d (%d samples, avg prob: %.2f)",
                start,
                end,
                length,
                avg,
            )
            return SpeechSegment(start=start, end=end, avg_probability=avg)

        log.debug("Speech too short: %d samples (min: %d)", length, min_speech)
        self._probabilities = []
        return None

    def is_speech(self) -> bool:
        """Whether speech is currently being detected."""
        return self._in_speech

    def speech_start(self) -> int | None:
        """Sample position where the current speech started, if in speech."""
        return self._speech_start

    def reset(self) -> None:
        """Forget all state, ready for a new recording."""
        self._probabilities = []
        self._in_speech = False
        self._speech_start = None
        self._silence_samples = 0
        self._total_samples = 0