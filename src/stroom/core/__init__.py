# stroom.core
# This package contains the core classes of stroom: the Conduit, its writer
# handle and the error types.

from .conduit import Conduit, Writer, Cancelled
from .errors import (
    StroomError,
    AdapterError,
    SourceError,
    ConduitClosedError,
    ContractViolation,
    Outcome,
    attempt,
)

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
]
