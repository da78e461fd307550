from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Optional


class StroomError(Exception):
    """Base class for all exceptions raised by the stroom package."""

    pass


class AdapterError(StroomError, TypeError):
    """Raised when a callable cannot be wrapped as a map, filter or reduce function."""

    def __init__(self, kind: str, func: Any, message: str):
        self.kind = kind
        self.func = func
        self.message = message
        name = getattr(func, "__name__", repr(func))
        super().__init__(f"Cannot use '{name}' as a {kind} function: {message}")


class SourceError(StroomError, TypeError):
    """Raised when a source generator is given input it cannot enumerate."""

    pass


class ConduitClosedError(StroomError):
    """Raised when a value is written to a conduit that has already been closed."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Conduit '{name}' is closed; no further values can be written")


class ContractViolation(StroomError, TypeError):
    """Raised in strict mode when an adapter is called with a value of the wrong type."""

    pass


@dataclass(frozen=True)
class Outcome:
    """
    The result of a fallible construction.

    Attributes:
        ok (bool): True if construction succeeded.
        value (Any): The constructed object, or None on failure.
        reason (Optional[str]): Why construction failed.
        error (Optional[StroomError]): The original error, kept for `unwrap`.
    """

    ok: bool
    value: Any = None
    reason: Optional[str] = None
    error: Optional[StroomError] = None

    def unwrap(self) -> Any:
        if not self.ok:
            raise self.error
        return self.value


def attempt(factory: Callable[..., Any], *args: Any, **kwargs: Any) -> Outcome:
    """
    Runs an adapter or source constructor and reports the result as an `Outcome`
    instead of raising.

    Example:
        >>> def shout(s: str) -> str:
        ...     return s.upper()
        >>> result = attempt(FilterFunc, shout)
        >>> result.ok
        False
    """
    try:
        return Outcome(ok=True, value=factory(*args, **kwargs))
    except StroomError as e:
        return Outcome(ok=False, reason=str(e), error=e)
