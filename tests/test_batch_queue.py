"""Tests for the batching queue flush semantics."""

import pytest
from loguru import logger
from pydantic import ValidationError

from batched_analytics.queuer import BatchConfig, BatchQueue


def make_queue(flush_at=None, isolate_callbacks=True):
    return BatchQueue(BatchConfig(flush_at=flush_at, flush_interval_ms=0, isolate_callbacks=isolate_callbacks))


def test_threshold_flush_fires_every_callback_once():
    """The N-th enqueue flushes all N events."""
    n = 4
    queue = make_queue(flush_at=n)
    calls = []
    sizes_seen = []

    def callback_for(i):
        def callback():
            calls.append(i)
            sizes_seen.append(queue.size())

        return callback

    for i in range(n - 1):
        queue.enqueue({"event": f"e{i}"}, callback_for(i))

    assert queue.size() == n - 1
    assert calls == []

    queue.enqueue({"event": f"e{n - 1}"}, callback_for(n - 1))

    assert calls == list(range(n))
    assert sizes_seen == [0] * n
    assert queue.size() == 0
    logger.info("✓ Threshold flush invoked every callback exactly once")


def test_flush_at_one_invokes_callback_before_enqueue_returns():
    queue = make_queue(flush_at=1)
    calls = []

    for i in range(3):
        queue.enqueue({"event": i}, lambda i=i: calls.append(i))
        assert calls == list(range(i + 1))
        assert queue.is_empty()


def test_flush_on_empty_queue_is_noop():
    queue = make_queue(flush_at=3)

    assert queue.flush() == 0
    assert queue.size() == 0
    assert queue.get_stats()["total_flushes"] == 0


def test_manual_flush_preserves_insertion_order():
    queue = make_queue()
    calls = []

    for name in ["a", "b", "c", "d"]:
        queue.enqueue({"event": name}, lambda name=name: calls.append(name))

    assert queue.pending() == [{"event": "a"}, {"event": "b"}, {"event": "c"}, {"event": "d"}]
    assert queue.flush() == 4
    assert calls == ["a", "b", "c", "d"]
    assert queue.pending() == []


def test_enqueue_during_flush_waits_for_next_flush():
    """An event enqueued by a callback is not part of the running flush."""
    queue = make_queue()
    calls = []

    def on_a():
        calls.append("a")
        queue.enqueue({"event": "c"}, lambda: calls.append("c"))

    queue.enqueue({"event": "a"}, on_a)
    queue.enqueue({"event": "b"}, lambda: calls.append("b"))

    assert queue.flush() == 2
    assert calls == ["a", "b"]
    assert queue.size() == 1
    assert queue.pending() == [{"event": "c"}]

    queue.flush()
    assert calls == ["a", "b", "c"]
    assert queue.size() == 0


def test_unbounded_queue_never_flushes_on_size():
    queue = make_queue(flush_at=None)
    calls = []

    for i in range(500):
        queue.enqueue(i, lambda: calls.append(1))

    assert calls == []
    assert queue.size() == 500


def test_missing_callback_defaults_to_noop():
    queue = make_queue(flush_at=2)

    queue.enqueue({"event": "a"})
    queue.enqueue({"event": "b"})

    assert queue.size() == 0
    assert queue.get_stats()["total_flushed"] == 2


def test_failing_callback_does_not_suppress_siblings():
    queue = make_queue()
    calls = []
    errors = []
    handler_id = logger.add(lambda msg: errors.append(msg), level="ERROR")

    def explode():
        raise RuntimeError("callback failed")

    try:
        queue.enqueue("a", lambda: calls.append("a"))
        queue.enqueue("b", explode)
        queue.enqueue("c", lambda: calls.append("c"))

        assert queue.flush() == 3
    finally:
        logger.remove(handler_id)

    assert calls == ["a", "c"]
    assert queue.size() == 0
    assert queue.get_stats()["total_callback_errors"] == 1
    assert len(errors) == 1
    assert "callback failed" in errors[0]


def test_failing_callback_propagates_without_isolation():
    queue = make_queue(isolate_callbacks=False)
    calls = []

    def explode():
        raise RuntimeError("callback failed")

    queue.enqueue("a", lambda: calls.append("a"))
    queue.enqueue("b", explode)
    queue.enqueue("c", lambda: calls.append("c"))

    with pytest.raises(RuntimeError, match="callback failed"):
        queue.flush()

    # The rest of that pass is dropped, the queue itself is already drained
    assert calls == ["a"]
    assert queue.size() == 0
    assert queue.get_stats()["total_flushed"] == 2


def test_stats_track_enqueues_and_flushes():
    queue = make_queue(flush_at=2)

    for i in range(5):
        queue.enqueue(i)

    stats = queue.get_stats()
    assert stats["current_size"] == 1
    assert stats["total_enqueued"] == 5
    assert stats["total_flushed"] == 4
    assert stats["total_flushes"] == 2
    assert stats["config"]["flush_at"] == 2


@pytest.mark.parametrize("flush_at", [0, -1])
def test_flush_threshold_below_one_is_rejected(flush_at):
    with pytest.raises(ValidationError):
        BatchConfig(flush_at=flush_at)


def test_negative_interval_is_rejected():
    with pytest.raises(ValidationError):
        BatchConfig(flush_interval_ms=-5)


def test_config_is_immutable():
    config = BatchConfig(flush_at=3)

    with pytest.raises(ValidationError):
        config.flush_at = 10
