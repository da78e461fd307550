"""
Partial consumption leaves producers blocked on their full single-slot
buffer. These tests pin that behaviour down, and show that `cancel()` and
the context-manager form release the blocked tasks.
"""
import itertools
import time

import pytest

from stroom import Conduit, Config, get_config, integer_range, nothing, set_config, values
from tests.helpers.threads import wait_until


@pytest.fixture
def fast_polling():
    previous = get_config()
    set_config(Config({"conduit": {"poll_interval": 0.01, "daemon": True}}))
    yield
    set_config(previous)


def naturals(out):
    for i in itertools.count():
        out.put(i)


def test_partial_take_leaves_every_stage_blocked(fast_polling):
    source = Conduit(naturals)
    doubled = source.map(lambda x: x * 2)
    evens = doubled.filter(lambda x: x % 4 == 0)

    assert evens.take(2) == [0, 4]
    time.sleep(0.1)

    # Nobody drains `evens` any more: each task stays parked on its full slot.
    assert source.running
    assert doubled.running
    assert evens.running
    assert not evens.exhausted

    evens.cancel()
    assert wait_until(lambda: not (source.running or doubled.running or evens.running))


def test_blocked_producer_does_not_advance(fast_polling):
    produced = []

    def counting(out):
        for i in range(1000):
            produced.append(i)
            out.put(i)

    conduit = Conduit(counting)
    assert conduit.take(1) == [0]
    time.sleep(0.1)
    snapshot = len(produced)
    time.sleep(0.1)

    # One value sits in the slot, one is waiting to be put.
    assert len(produced) == snapshot
    assert snapshot <= 3
    conduit.cancel()
    assert conduit.join(timeout=1.0)


def test_context_manager_cancels_on_exit(fast_polling):
    with Conduit(naturals).map(lambda x: x + 1) as conduit:
        assert conduit.take(3) == [1, 2, 3]

    assert conduit.cancelled
    assert conduit.upstream.cancelled
    assert conduit.join(timeout=1.0)
    assert conduit.upstream.join(timeout=1.0)


def test_cancel_closes_the_conduit_for_readers(fast_polling):
    conduit = Conduit(naturals)
    assert conduit.first() == 0
    conduit.cancel()
    conduit.join(timeout=1.0)

    # The value already buffered may still be read, then the conduit ends.
    rest = conduit.take_all()
    assert len(rest) <= 1
    assert conduit.exhausted
    assert conduit.first() is nothing


def test_cancel_releases_stage_waiting_on_slow_upstream(fast_polling):
    def slow(out):
        for i in range(100):
            time.sleep(0.05)
            out.put(i)

    source = Conduit(slow)
    stage = source.map(lambda x: x)
    assert stage.first() == 0

    stage.cancel()
    assert wait_until(lambda: not source.running and not stage.running)


def test_fully_drained_conduit_is_unaffected_by_cancel(fast_polling):
    with integer_range(0, 5).map(lambda x: x * 3) as conduit:
        assert conduit.take_all() == [0, 3, 6, 9, 12]
    assert conduit.exhausted


def test_cancel_is_idempotent(fast_polling):
    conduit = values(1, 2, 3)
    conduit.cancel()
    conduit.cancel()
    assert conduit.cancelled
    assert conduit.join(timeout=1.0)


def test_writer_reports_cancellation(fast_polling):
    seen = []

    def watchful(out):
        out.put("first")
        while not out.cancelled:
            time.sleep(0.01)
        seen.append("stopped")

    conduit = Conduit(watchful)
    assert conduit.first() == "first"
    conduit.cancel()
    assert conduit.join(timeout=1.0)
    assert seen == ["stopped"]


def test_failure_after_cancellation_ends_the_conduit_quietly(fast_polling):
    def produce(out):
        out.put("buffered")
        while not out.cancelled:
            time.sleep(0.01)
        raise RuntimeError("too late")

    conduit = Conduit(produce)
    assert wait_until(lambda: conduit.metrics["items_out"] == 1)
    conduit.cancel()
    assert conduit.join(timeout=1.0)

    assert conduit.take_all() == ["buffered"]
    assert conduit.exhausted
    assert conduit.metrics["errors"] == 1
