"""
This module provides the `map_values` stage, which applies a 1-to-1
transformation to each value of a conduit.
"""
from __future__ import annotations

from typing import Any, Callable

from ..core.conduit import Conduit, Writer
from ..typing.adapters import MapFunc


def map_values(upstream: Conduit, *transforms: Callable[[Any], Any]) -> Conduit:
    """
    Creates a stage that applies `transforms`, left to right, to each value.

    Every transform is wrapped in a `MapFunc` before the stage starts, so an
    unusable transform fails here rather than in the stage's thread. A single
    task runs regardless of the number of transforms.

    Args:
        upstream: The conduit to read from.
        transforms: The functions to apply.

    Returns:
        A new conduit carrying the transformed values.
    """
    funcs = [MapFunc.wrap(f) for f in transforms]

    def _map_func(out: Writer) -> None:
        for value in upstream:
            for f in funcs:
                value = f(value)
            out.put(value)

    # Try to get a good name for the stage from the functions themselves
    names = [f.name for f in funcs if f.name != "<lambda>"]
    name = "map" if not names else "map:" + ",".join(names)
    return Conduit(_map_func, name=name, upstream=upstream)
