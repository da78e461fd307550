"""
An optional-value container.

A `Maybe` is either `nothing`, a single shared instance, or `Just(value)`
holding exactly one value that is never None. Transforms are applied through
the same `MapFunc` adapter that conduit stages use.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable

from .typing.adapters import MapFunc


class Maybe(ABC):
    """Base class of `Just` and `Nothing`. Use `just()` and `nothing` to build one."""

    __slots__ = ()

    @property
    @abstractmethod
    def is_present(self) -> bool:
        ...

    @abstractmethod
    def map(self, transform: Callable[[Any], Any]) -> "Maybe":
        ...

    @abstractmethod
    def join(self) -> "Maybe":
        ...

    @abstractmethod
    def get(self, default: Any = None) -> Any:
        ...

    def __bool__(self) -> bool:
        return self.is_present


class Nothing(Maybe):
    """The absent value. There is only ever one instance, `nothing`."""

    __slots__ = ()
    _instance = None

    def __new__(cls) -> "Nothing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def is_present(self) -> bool:
        return False

    def map(self, transform: Callable[[Any], Any]) -> "Maybe":
        return self

    def join(self) -> "Maybe":
        return self

    def get(self, default: Any = None) -> Any:
        return default

    def __reduce__(self):
        return (Nothing, ())

    def __str__(self) -> str:
        return "Nothing"

    def __repr__(self) -> str:
        return "nothing"


nothing = Nothing()


class Just(Maybe):
    """A present value."""

    __slots__ = ("_value",)

    def __new__(cls, value: Any) -> Maybe:
        if value is None:
            return nothing
        self = super().__new__(cls)
        object.__setattr__(self, "_value", value)
        return self

    @property
    def value(self) -> Any:
        return self._value

    @property
    def is_present(self) -> bool:
        return True

    def map(self, transform: Callable[[Any], Any]) -> Maybe:
        return just(MapFunc.wrap(transform)(self._value))

    def join(self) -> Maybe:
        if isinstance(self._value, Maybe):
            return self._value
        return self

    def get(self, default: Any = None) -> Any:
        return self._value

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError("Just is immutable")

    def __reduce__(self):
        return (Just, (self._value,))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Just):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash((Just, self._value))

    def __str__(self) -> str:
        return f"Just {self._value}"

    def __repr__(self) -> str:
        return f"just({self._value!r})"


def just(value: Any) -> Maybe:
    """Wraps `value`; `just(None)` is `nothing`."""
    return Just(value)
