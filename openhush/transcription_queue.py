"""Transcription queue bookkeeping: pending jobs, backpressure and ordered output."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

log = logging.getLogger(__name__)

ChunkKey = tuple[int, int]

_DEDUP_MAX_WORDS = 10
_SUFFIX_BYTES = 50
_MIN_SUFFIX_SOURCE_BYTES = 10


class BackpressureStrategy(Enum):
    """What to do when the pending queue is full."""

    DROP_OLDEST = "drop_oldest"
    DROP_NEWEST = "drop_newest"
    WARN = "warn"


@dataclass
class TranscriptionJob:
    """A chunk of audio waiting to be transcribed."""

    buffer: Any
    sequence_id: int
    chunk_id: int
    is_final: bool


@dataclass(frozen=True)
class TranscriptionResult:
    """Text produced for one chunk of one recording."""

    text: str
    sequence_id: int
    chunk_id: int
    is_final: bool


@dataclass(frozen=True)
class QueueStats:
    """Snapshot of the queue depth."""

    pending_count: int
    waiting_count: int


def _tail(text: str, limit: int) -> str:
    """The last ``limit`` UTF-8 bytes of ``text``, trimmed to whole characters."""
    encoded = text.encode("utf-8")
    return encoded[max(0, len(encoded) - limit):].decode("utf-8", errors="ignore")


class TranscriptionTracker:
    """Tracks pending and completed transcriptions and decides what to output.

    In streaming mode every completed chunk is released immediately, with
    words that repeat the end of the previous output removed. In ordered mode
    results are released strictly in recording order.
    """

    def __init__(self, streaming: bool = True) -> None:
        self._pending: set[ChunkKey] = set()
        self._completed: dict[ChunkKey, TranscriptionResult] = {}
        self._next_output_id = 0
        self._streaming = streaming
        self._last_text_suffix = ""

    @classmethod
    def ordered(cls) -> TranscriptionTracker:
        """A tracker that outputs results in sequence order only."""
        return cls(streaming=False)

    def pending(self) -> frozenset[ChunkKey]:
        """Keys of the chunks currently being transcribed."""
        return frozenset(self._pending)

    def add_pending(
        self,
        sequence_id: int,
        chunk_id: int,
        max_pending: int = 10,
        high_water_mark: int = 8,
        strategy: BackpressureStrategy = BackpressureStrategy.WARN,
    ) -> bool:
        """Register a job; return False if backpressure rejected it.

        ``max_pending`` of 0 means unlimited.
        """
        count = len(self._pending)

        if max_pending > 0 and count >= max_pending:
            if strategy is BackpressureStrategy.DROP_OLDEST:
                if self._pending:
                    oldest = min(self._pending)
                    self._pending.discard(oldest)
                    log.warning(
                        "Backpressure: dropped oldest job (seq %d.%d) to accept (seq %d.%d)",
                        oldest[0],
                        oldest[1],
                        sequence_id,
                        chunk_id,
                    )
            elif strategy is BackpressureStrategy.DROP_NEWEST:
                log.warning(
                    "Backpressure: rejecting job (seq %d.%d) - queue full (%d/%d)",
                    sequence_id,
                    chunk_id,
                    count,
                    max_pending,
                )
                return False
            else:
                log.warning(
                    "Queue at capacity (%d/%d) but accepting job anyway",
                    count,
                    max_pending,
                )
        elif high_water_mark > 0 and count >= high_water_mark:
            log.warning(
                "Queue depth %d approaching limit %d - transcription falling behind",
                count,
                max_pending,
            )

        self._pending.add((sequence_id, chunk_id))
        log.debug(
            "Added pending transcription (seq %d.%d), queue depth: %d",
            sequence_id,
            chunk_id,
            len(self._pending),
        )
        return True

    def stats(self) -> QueueStats:
        """Current queue statistics."""
        return QueueStats(
            pending_count=len(self._pending), waiting_count=len(self._completed)
        )

    def add_result(self, result: TranscriptionResult) -> None:
        """Record a finished transcription."""
        key = (result.sequence_id, result.chunk_id)
        self._pending.discard(key)
        self._completed[key] = result
        log.debug(
            "Added result (seq %d.%d), %d pending, %d waiting",
            key[0],
            key[1],
            len(self._pending),
            len(self._completed),
        )

    def take_ready(self) -> list[TranscriptionResult]:
        """Remove and return the results that may be output now."""
        if self._streaming:
            return self._take_ready_streaming()
        return self._take_ready_ordered()

    def _take_ready_streaming(self) -> list[TranscriptionResult]:
        completed, self._completed = self._completed, {}
        ready = []
        for key in sorted(completed):
            result = completed[key]
            if self._last_text_suffix and result.text:
                result = replace(result, text=self._deduplicate(result.text))
            if len(result.text.encode("utf-8")) > _MIN_SUFFIX_SOURCE_BYTES:
                self._last_text_suffix = _tail(result.text, _SUFFIX_BYTES)
            ready.append(result)
        return ready

    def _take_ready_ordered(self) -> list[TranscriptionResult]:
        ready = []
        while (result := self._completed.pop((self._next_output_id, 0), None)) is not None:
            ready.append(result)
            self._next_output_id += 1
        return ready

    def _deduplicate(self, text: str) -> str:
        """Drop leading words of ``text`` that repeat the end of the last output."""
        words = text.split()
        if not words:
            return text

        skip = 0
        for count in range(1, min(len(words), _DEDUP_MAX_WORDS) + 1):
            if " ".join(words[:count]) in self._last_text_suffix:
                skip = count

        if skip == 0:
            return text
        log.debug("Deduplicating: skipping %d words", skip)
        return " ".join(words[skip:])

    def reset_dedup(self) -> None:
        """Forget the previous output; call when a new recording starts."""
        self._last_text_suffix = ""

    def is_empty(self) -> bool:
        """Whether nothing is pending or waiting for output."""
        return not self._pending and not self._completed

    def pending_count(self) -> int:
        """Number of jobs being transcribed."""
        return len(self._pending)

    def waiting_count(self) -> int:
        """Number of finished results not yet output."""
        return len(self._completed)