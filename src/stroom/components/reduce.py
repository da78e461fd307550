"""
This module provides `reduce_`, the terminal fold over a conduit.
"""
from __future__ import annotations

from typing import Any, Callable

from ..core.conduit import Conduit
from ..typing.adapters import ReduceFunc


def reduce_(conduit: Conduit, combiner: Callable[[Any, Any], Any], seed: Any) -> Any:
    """
    Folds every remaining value of `conduit` into `seed`.

    The combiner is called as ``combiner(value, accumulator)``, new value
    first, in arrival order. Unlike `functools.reduce`, whose callback takes
    the accumulator first, the argument order matters for non-commutative
    combiners.

    Args:
        conduit: The conduit to drain.
        combiner: A two-argument function, wrapped in a `ReduceFunc`.
        seed: The initial accumulator.

    Returns:
        The final accumulator, or `seed` if the conduit is empty.
    """
    func = ReduceFunc.wrap(combiner)
    result = seed
    for value in conduit:
        result = func(value, result)
    return result
