"""
This module provides the `filter_` stage, which is used to selectively
keep or discard values from a conduit based on a condition.
"""
from __future__ import annotations

from typing import Any, Callable

from ..core.conduit import Conduit, Writer
from ..typing.adapters import FilterFunc


def filter_(upstream: Conduit, condition: Callable[[Any], Any]) -> Conduit:
    """
    Creates a stage that forwards the values for which `condition` holds.

    Values failing the condition are dropped; nothing takes their place.

    Args:
        upstream: The conduit to read from.
        condition: A predicate, wrapped in a `FilterFunc`.

    Returns:
        A new conduit carrying the kept values.
    """
    predicate = FilterFunc.wrap(condition)

    def _filter_func(out: Writer) -> None:
        for value in upstream:
            if predicate(value):
                out.put(value)

    return Conduit(_filter_func, name=f"filter:{predicate.name}", upstream=upstream)
