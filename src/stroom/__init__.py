from .core.conduit import Conduit, Writer, Cancelled
from .core.errors import (
    StroomError,
    AdapterError,
    SourceError,
    ConduitClosedError,
    ContractViolation,
    Outcome,
    attempt,
)
from .config import Config, load_config, get_config, set_config
from .maybe import Maybe, Just, Nothing, just, nothing
from .typing.adapters import (
    FuncAdapter,
    MapFunc,
    FilterFunc,
    ReduceFunc,
    curry,
    flip,
    flip_curry,
    negate,
)

from .components.io import from_text_lines, from_text_words
from .components.sources import values, integer_range, from_sequence

__all__ = [
    "Conduit",
    "Writer",
    "Cancelled",
    "StroomError",
    "AdapterError",
    "SourceError",
    "ConduitClosedError",
    "ContractViolation",
    "Outcome",
    "attempt",
    "Config",
    "load_config",
    "get_config",
    "set_config",
    "Maybe",
    "Just",
    "Nothing",
    "just",
    "nothing",
    "FuncAdapter",
    "MapFunc",
    "FilterFunc",
    "ReduceFunc",
    "curry",
    "flip",
    "flip_curry",
    "negate",
    "values",
    "integer_range",
    "from_sequence",
    "from_text_lines",
    "from_text_words",
]

__version__ = "0.1.0"
