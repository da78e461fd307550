# stroom.typing
# This package contains the dynamic function adapters and the runtime type
# inspection they rely on.

from .adapters import (
    FuncAdapter,
    MapFunc,
    FilterFunc,
    ReduceFunc,
    curry,
    flip,
    flip_curry,
    negate,
)
from .inference import CallableShape, infer_shape

__all__ = [
    "FuncAdapter",
    "MapFunc",
    "FilterFunc",
    "ReduceFunc",
    "curry",
    "flip",
    "flip_curry",
    "negate",
    "CallableShape",
    "infer_shape",
]
