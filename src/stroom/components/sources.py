"""
Source generators: conduits filled from literal values, integer ranges or an
existing iterable. Each runs as one task and closes its conduit when done.
"""
from __future__ import annotations

from collections.abc import Iterable as IterableABC
from typing import Any, Iterable, Optional

from ..core.conduit import Conduit, Writer
from ..core.errors import SourceError


def values(*vs: Any) -> Conduit:
    """Creates a conduit holding `vs`, in order."""

    def _values(out: Writer) -> None:
        for v in vs:
            out.put(v)

    return Conduit(_values, name="values")


def integer_range(start: int, end: int, step: Optional[int] = None) -> Conduit:
    """Creates a conduit of the integers from `start` up to, not including, `end`.

    When `step` is omitted it is 1 if ``end >= start`` and -1 otherwise, so
    ``integer_range(0, -4)`` yields 0, -1, -2, -3. A step pointing away from
    `end` yields nothing.

    Raises:
        SourceError: If an argument is not an integer, or `step` is 0.
    """
    for arg in (start, end) if step is None else (start, end, step):
        if isinstance(arg, bool) or not isinstance(arg, int):
            raise SourceError(
                f"integer_range() arguments must be integers, not {type(arg).__name__}"
            )
    if step is None:
        step = 1 if end >= start else -1
    if step == 0:
        raise SourceError("integer_range() step must not be zero")

    def _integer_range(out: Writer) -> None:
        for i in range(start, end, step):
            out.put(i)

    return Conduit(_integer_range, name="integer_range")


def from_sequence(seq: Iterable[Any]) -> Conduit:
    """Creates a conduit holding the elements of `seq`.

    Any iterable is accepted except text and bytes, which are read with
    `from_text_lines` or `from_text_words`. Iteration happens on the
    conduit's task, so a lazy iterable is consumed lazily.

    Raises:
        SourceError: If `seq` is not an iterable.
    """
    if isinstance(seq, (str, bytes, bytearray)) or not isinstance(seq, IterableABC):
        raise SourceError(
            f"from_sequence() requires a non-text iterable, not {type(seq).__name__}"
        )

    def _from_sequence(out: Writer) -> None:
        for v in seq:
            out.put(v)

    return Conduit(_from_sequence, name="from_sequence")
