import pytest

from openhush.transcription_queue import (
    BackpressureStrategy,
    QueueStats,
    TranscriptionJob,
    TranscriptionResult,
    TranscriptionTracker,
)


def result(seq, chunk, text, is_final):
    return TranscriptionResult(text=text, sequence_id=seq, chunk_id=chunk, is_final=is_final)


def test_streaming_mode_outputs_immediately():
    tracker = TranscriptionTracker()
    tracker.add_pending(0, 0)
    tracker.add_pending(0, 1)

    tracker.add_result(result(0, 1, "world", True))
    ready = tracker.take_ready()
    assert len(ready) == 1
    assert ready[0].text == "world"

    tracker.add_result(result(0, 0, "hello", False))
    ready = tracker.take_ready()
    assert len(ready) == 1
    assert ready[0].text == "hello"


def test_ordered_mode_waits():
    tracker = TranscriptionTracker.ordered()
    tracker.add_pending(0, 0)
    tracker.add_pending(1, 0)

    tracker.add_result(result(1, 0, "second", True))
    assert tracker.take_ready() == []

    tracker.add_result(result(0, 0, "first", True))
    ready = tracker.take_ready()
    assert [r.text for r in ready] == ["first", "second"]


def test_deduplication():
    tracker = TranscriptionTracker()
    tracker.add_pending(0, 0)
    tracker.add_result(result(0, 0, "hello world this is a test", False))
    ready = tracker.take_ready()
    assert ready[0].text == "hello world this is a test"

    tracker.add_pending(0, 1)
    tracker.add_result(result(0, 1, "is a test and more words", True))
    ready = tracker.take_ready()
    assert ready[0].text == "and more words"


def test_reset_dedup_disables_overlap_removal():
    tracker = TranscriptionTracker()
    tracker.add_result(result(0, 0, "hello world this is a test", False))
    tracker.take_ready()
    tracker.reset_dedup()

    tracker.add_result(result(1, 0, "is a test and more words", True))
    assert tracker.take_ready()[0].text == "is a test and more words"


def test_short_text_does_not_set_suffix():
    tracker = TranscriptionTracker()
    tracker.add_result(result(0, 0, "hi", False))
    tracker.take_ready()
    tracker.add_result(result(0, 1, "hi there", True))
    assert tracker.take_ready()[0].text == "hi there"


def test_streaming_sorts_results_by_key():
    tracker = TranscriptionTracker()
    tracker.add_result(result(1, 0, "c", False))
    tracker.add_result(result(0, 1, "b", False))
    tracker.add_result(result(0, 0, "a", False))
    assert [r.text for r in tracker.take_ready()] == ["a", "b", "c"]
    assert tracker.waiting_count() == 0


def test_empty_tracker():
    tracker = TranscriptionTracker()
    assert tracker.is_empty()
    assert tracker.pending_count() == 0
    assert tracker.waiting_count() == 0


def test_pending_count():
    tracker = TranscriptionTracker()
    tracker.add_pending(0, 0)
    tracker.add_pending(0, 1)
    assert tracker.pending_count() == 2

    tracker.add_result(result(0, 0, "test", False))
    assert tracker.pending_count() == 1
    assert tracker.waiting_count() == 1
    assert not tracker.is_empty()


def test_backpressure_drop_newest():
    tracker = TranscriptionTracker()
    strategy = BackpressureStrategy.DROP_NEWEST
    assert tracker.add_pending(0, 0, 3, 2, strategy)
    assert tracker.add_pending(0, 1, 3, 2, strategy)
    assert tracker.add_pending(0, 2, 3, 2, strategy)

    assert not tracker.add_pending(0, 3, 3, 2, strategy)
    assert tracker.pending_count() == 3
    assert (0, 3) not in tracker.pending()


def test_backpressure_drop_oldest():
    tracker = TranscriptionTracker()
    strategy = BackpressureStrategy.DROP_OLDEST
    assert tracker.add_pending(0, 0, 3, 2, strategy)
    assert tracker.add_pending(0, 1, 3, 2, strategy)
    assert tracker.add_pending(0, 2, 3, 2, strategy)

    assert tracker.add_pending(0, 3, 3, 2, strategy)
    assert tracker.pending_count() == 3
    assert (0, 0) not in tracker.pending()
    assert (0, 3) in tracker.pending()


def test_backpressure_warn_accepts():
    tracker = TranscriptionTracker()
    strategy = BackpressureStrategy.WARN
    assert tracker.add_pending(0, 0, 3, 2, strategy)
    assert tracker.add_pending(0, 1, 3, 2, strategy)
    assert tracker.add_pending(0, 2, 3, 2, strategy)

    assert tracker.add_pending(0, 3, 3, 2, strategy)
    assert tracker.pending_count() == 4


@pytest.mark.parametrize("strategy", list(BackpressureStrategy))
def test_zero_max_pending_is_unlimited(strategy):
    tracker = TranscriptionTracker()
    accepted = [tracker.add_pending(0, i, 0, 0, strategy) for i in range(25)]
    assert all(accepted)
    assert tracker.pending_count() == 25


def test_queue_stats():
    tracker = TranscriptionTracker()
    tracker.add_pending(0, 0)
    tracker.add_pending(0, 1)
    tracker.add_result(result(0, 0, "test", False))

    assert tracker.stats() == QueueStats(pending_count=1, waiting_count=1)


def test_job_holds_its_fields():
    job = TranscriptionJob(buffer=[0.0, 0.1], sequence_id=4, chunk_id=2, is_final=True)
    assert (job.sequence_id, job.chunk_id, job.is_final) == (4, 2, True)
    assert job.buffer == [0.0, 0.1]