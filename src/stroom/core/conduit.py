"""
This module defines the `Conduit` class, a single-producer, single-slot queue
of values filled by its own task.

A conduit is created from a task function. The task runs on its own thread and
receives a `Writer`; every value it puts becomes the next element of the
conduit. When the task returns, or raises, the conduit is closed exactly once.
Stages (`map`, `filter`) are conduits whose task reads another conduit.
Terminal operations (`take`, `first`, `drop`, `reduce`, ...) read on the
caller's thread and never spawn tasks.

Because the buffer holds a single value, a producer blocks as soon as nobody
drains its conduit. A conduit abandoned before its producer finished therefore
leaves the producer thread, and every stage upstream of it, blocked for the
rest of the process. Call `cancel()`, or use the conduit as a context manager,
to release them:

.. code-block:: python

    with integer_range(0, 1_000_000).map(slow) as squares:
        head = squares.take(3)
"""
from __future__ import annotations

import itertools
import queue
import threading
from typing import Any, Callable, Iterator, List, Optional, TYPE_CHECKING

from ..config import get_config
from .errors import ConduitClosedError
from .log import get_logger

if TYPE_CHECKING:
    from ..maybe import Maybe


_CLOSED = object()
_counter = itertools.count()


class _Failure:
    """Carries an exception raised by a task to the reader."""

    __slots__ = ("error",)

    def __init__(self, error: BaseException):
        self.error = error


class Cancelled(Exception):
    """Raised inside a task when its conduit has been cancelled."""

    pass


class Writer:
    """The write-only handle a task uses to fill its conduit."""

    __slots__ = ("_conduit",)

    def __init__(self, conduit: "Conduit"):
        self._conduit = conduit

    def put(self, value: Any) -> None:
        """Writes `value`, blocking while the slot is full.

        Raises:
            Cancelled: If the conduit is cancelled while waiting.
            ConduitClosedError: If the conduit has already been closed.
        """
        self._conduit._write(value)

    __call__ = put

    @property
    def cancelled(self) -> bool:
        return self._conduit.cancelled


class Conduit:
    """A stream of values produced by one task and consumed by one reader.

    Attributes:
        name: The name of the conduit, used for logging.
        upstream: The conduit this one reads from, if it is a stage.
        metrics: Counters maintained by the writer ('items_out', 'errors').
    """

    def __init__(
        self,
        task: Callable[[Writer], Any],
        *,
        name: Optional[str] = None,
        upstream: Optional["Conduit"] = None,
    ):
        """Starts `task` on a new thread.

        Args:
            task: A function receiving a `Writer`. It is called exactly once.
            name: A custom name for the conduit.
            upstream: For stages, the conduit the task reads from.
        """
        if not callable(task):
            raise TypeError(f"Conduit task must be callable, not {type(task).__name__}")

        config = get_config()
        self.name = name or f"{getattr(task, '__name__', 'conduit')}-{next(_counter)}"
        self.upstream = upstream
        self.logger = get_logger("stroom.conduit").bind(conduit=self.name)
        self.metrics = {"items_out": 0, "errors": 0}

        self._queue: queue.Queue[Any] = queue.Queue(maxsize=1)
        self._cancel_event = threading.Event()
        self._poll_interval = float(config.get("conduit.poll_interval", 0.05))
        self._closed = False
        self._exhausted = False

        self._thread = threading.Thread(
            target=self._run,
            args=(task,),
            name=f"stroom-{self.name}",
            daemon=bool(config.get("conduit.daemon", True)),
        )
        self._thread.start()

    def __repr__(self) -> str:
        return f"Conduit(name='{self.name}')"

    # --- Producer side ---

    def _run(self, task: Callable[[Writer], Any]) -> None:
        self.logger.debug("task_started")
        writer = Writer(self)
        try:
            task(writer)
        except Cancelled:
            self.logger.debug("task_cancelled", items_out=self.metrics["items_out"])
        except Exception as e:
            self.metrics["errors"] += 1
            self.logger.error("task_failed", error=str(e), error_type=type(e).__name__)
            if not self._forward(_Failure(e)):
                self.logger.warning("failure_dropped", error_type=type(e).__name__)
        else:
            self.logger.debug("task_finished", items_out=self.metrics["items_out"])
        finally:
            self._close()

    def _write(self, value: Any) -> None:
        if self._closed:
            raise ConduitClosedError(self.name)
        self._put(value)
        self.metrics["items_out"] += 1

    def _put(self, item: Any) -> None:
        # Block on the full slot, waking up periodically to look for cancellation.
        while True:
            if self._cancel_event.is_set():
                raise Cancelled(self.name)
            try:
                self._queue.put(item, timeout=self._poll_interval)
                return
            except queue.Full:
                continue

    def _forward(self, item: Any) -> bool:
        # After cancellation the reader detects the closed task by itself.
        try:
            self._put(item)
        except Cancelled:
            return False
        return True

    def _close(self) -> None:
        self._closed = True
        self._forward(_CLOSED)

    # --- Consumer side ---

    def _next(self) -> Any:
        """Reads the next value, or returns `_CLOSED` at end-of-sequence.

        Once the close marker has been read, every further call returns
        `_CLOSED` immediately.
        """
        if self._exhausted:
            return _CLOSED
        while True:
            # `_closed` is set after the last value is queued, so a closed
            # task with an empty slot has nothing more to deliver.
            closed = self._closed
            try:
                item = self._queue.get(timeout=self._poll_interval)
                break
            except queue.Empty:
                if closed and self._queue.empty():
                    self._exhausted = True
                    return _CLOSED
        if item is _CLOSED:
            self._exhausted = True
            return _CLOSED
        if isinstance(item, _Failure):
            # The task has stopped; only the close marker follows.
            self._exhausted = True
            raise item.error
        return item

    def __iter__(self) -> Iterator[Any]:
        while True:
            item = self._next()
            if item is _CLOSED:
                return
            yield item

    @property
    def exhausted(self) -> bool:
        """True once end-of-sequence has been read."""
        return self._exhausted

    # --- Stages ---

    def map(self, *transforms: Callable[[Any], Any]) -> "Conduit":
        """Applies `transforms` left-to-right to every value.

        ``conduit.map(f, g)`` yields ``g(f(x))`` for every ``x``. All transforms
        run in a single new task.

        Raises:
            AdapterError: If a transform cannot be used as a map function.
        """
        from ..components.map import map_values

        return map_values(self, *transforms)

    def filter(self, predicate: Callable[[Any], Any]) -> "Conduit":
        """Keeps the values for which `predicate` holds.

        Raises:
            AdapterError: If `predicate` cannot be used as a filter function.
        """
        from ..components.filter import filter_

        return filter_(self, predicate)

    # --- Terminal operations ---

    def take_all(self) -> List[Any]:
        """Reads every remaining value. An exhausted conduit gives `[]`."""
        return list(self)

    def take(self, n: int) -> List[Any]:
        """Reads up to `n` values, fewer if the conduit closes first.

        For ``n <= 0`` nothing is read.
        """
        values: List[Any] = []
        if n <= 0:
            return values
        for value in self:
            values.append(value)
            if len(values) >= n:
                break
        return values

    def first(self) -> Any:
        """Reads the next value, or returns `nothing` if the conduit is exhausted."""
        item = self._next()
        if item is _CLOSED:
            from ..maybe import nothing

            return nothing
        return item

    def first_maybe(self) -> "Maybe":
        """Like `first`, but always wraps the result in a `Maybe`."""
        from ..maybe import just, nothing

        item = self._next()
        if item is _CLOSED:
            return nothing
        return just(item)

    def drop(self, n: int) -> "Conduit":
        """Discards up to `n` values and returns this conduit.

        Stops early, without blocking, if the conduit closes.
        """
        for _ in range(n):
            if self._next() is _CLOSED:
                break
        return self

    def drop_all(self) -> None:
        """Reads and discards every remaining value."""
        while self._next() is not _CLOSED:
            pass

    def reduce(self, combiner: Callable[[Any, Any], Any], seed: Any) -> Any:
        """Folds the remaining values as ``seed = combiner(value, seed)``.

        Raises:
            AdapterError: If `combiner` cannot be used as a reduce function.
        """
        from ..components.reduce import reduce_

        return reduce_(self, combiner, seed)

    # --- Lifecycle ---

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def running(self) -> bool:
        """True while the task thread is alive."""
        return self._thread.is_alive()

    def cancel(self) -> None:
        """Asks this conduit's task and every task upstream of it to stop.

        A task blocked on a full slot gives up within the configured poll
        interval; its conduit is then closed. Values already buffered can
        still be read. Cancellation only takes effect when a task writes, so
        a task blocked on anything else keeps running.

        An exception raised by a task after cancellation cannot reach the
        reader. It is logged as `task_failed` and `failure_dropped`, and
        readers see a normal end-of-sequence after any buffered value.
        """
        conduit: Optional[Conduit] = self
        while conduit is not None:
            if not conduit._cancel_event.is_set():
                conduit._cancel_event.set()
                conduit.logger.debug("conduit_cancelled")
            conduit = conduit.upstream

    def join(self, timeout: Optional[float] = None) -> bool:
        """Waits for the task thread to end. Returns True if it did."""
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def __enter__(self) -> "Conduit":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()
