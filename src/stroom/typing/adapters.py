"""
Dynamic function adapters.

An adapter wraps an arbitrary callable so it can be used uniformly as a map
transform, a filter predicate or a reduce combiner. The callable's shape
(arity, parameter and return annotations) is inspected once, when the adapter
is built, and rejected there if it cannot work in that role. Calling an
adapter afterwards is a plain late-bound call.

Example:
    .. code-block:: python

        import operator

        inc = curry(operator.add, 1)            # awaits one more argument
        conduit.map(inc, lambda x: x * 2)
        conduit.filter(negate(is_even))
        conduit.reduce(flip(operator.sub), 0)
"""
from __future__ import annotations

import functools
from typing import Any, Callable, Optional

from typeguard import TypeCheckError, check_type

from ..config import get_config
from ..core.errors import AdapterError, ContractViolation
from .checker import are_types_compatible, is_boolean
from .inference import CallableShape, infer_shape


class FuncAdapter:
    """A callable with its shape cached at construction.

    Attributes:
        func: The object that was wrapped.
        name: A readable name, used in errors and logs.
        shape: The inferred `CallableShape`.
        strict: If True, arguments are checked against the recorded
            annotations on every call.
    """

    kind = "function"

    __slots__ = ("func", "name", "shape", "strict", "_call", "_frozen")

    def __init__(
        self,
        func: Callable[..., Any],
        *,
        name: Optional[str] = None,
        shape: Optional[CallableShape] = None,
        strict: Optional[bool] = None,
    ):
        if not callable(func):
            raise AdapterError(self.kind, func, "object is not callable")

        if isinstance(func, FuncAdapter):
            call = func._call
            shape = shape or func.shape
            name = name or func.name
            strict = func.strict if strict is None else strict
        else:
            call = func

        self.func = func
        self.name = name or _callable_name(func)
        self.shape = shape or infer_shape(func)
        if strict is None:
            strict = bool(get_config().get("adapters.strict", False))
        self.strict = strict
        self._call = call
        self._validate()
        self._frozen = True

    @classmethod
    def wrap(cls, func: Callable[..., Any], **kwargs: Any) -> "FuncAdapter":
        """Returns `func` unchanged if it already is this kind of adapter."""
        if type(func) is cls:
            return func
        return cls(func, **kwargs)

    def _validate(self) -> None:
        pass

    @property
    def arity(self) -> Optional[int]:
        """The number of positional arguments, or None if it cannot be inspected."""
        if not self.shape.inspectable:
            return None
        return self.shape.positional

    @property
    def output_type(self) -> Any:
        return self.shape.output_type

    def __call__(self, *args: Any) -> Any:
        if self.strict:
            self._check_arguments(args)
        return self._call(*args)

    def _check_arguments(self, args) -> None:
        for index, value in enumerate(args):
            expected = self.shape.input_type(index)
            if expected is Any:
                continue
            try:
                check_type(value, expected)
            except TypeCheckError as e:
                raise ContractViolation(
                    f"Argument {index} of {self.kind} function '{self.name}': {e}"
                ) from e

    def __setattr__(self, key: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, key, value)

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', arity={self.arity})"


class MapFunc(FuncAdapter):
    """A unary transform: one value in, one value out."""

    kind = "map"
    __slots__ = ()

    def _validate(self) -> None:
        if not self.shape.accepts(1):
            raise AdapterError(self.kind, self.func, "it must accept exactly one argument")


class FilterFunc(FuncAdapter):
    """A unary predicate.

    A return annotation, when present, must be `bool`. Un-annotated callables
    (lambdas, most builtins) are accepted and their result is read by
    truthiness.
    """

    kind = "filter"
    __slots__ = ()

    def _validate(self) -> None:
        if not self.shape.accepts(1):
            raise AdapterError(self.kind, self.func, "it must accept exactly one argument")
        output_type = self.shape.output_type
        if output_type is not Any and not is_boolean(output_type):
            raise AdapterError(
                self.kind, self.func, f"it must return bool, not {output_type!r}"
            )

    def __call__(self, value: Any) -> bool:
        return bool(super().__call__(value))


class ReduceFunc(FuncAdapter):
    """A binary combiner called as ``combiner(value, accumulator)``.

    The return annotation must be compatible with the accumulator's, so the
    result of one step can be fed into the next.
    """

    kind = "reduce"
    __slots__ = ()

    def _validate(self) -> None:
        shape = self.shape
        if not shape.inspectable:
            return
        if shape.variadic or shape.positional != 2 or shape.required > 2:
            raise AdapterError(self.kind, self.func, "it must take exactly two arguments")
        accumulator = shape.input_type(1)
        if not are_types_compatible(shape.output_type, accumulator):
            raise AdapterError(
                self.kind,
                self.func,
                f"its return type {shape.output_type!r} does not match "
                f"its accumulator type {accumulator!r}",
            )


def _callable_name(func: Any) -> str:
    name = getattr(func, "__name__", None)
    if name is None and isinstance(func, functools.partial):
        name = _callable_name(func.func)
    return name or type(func).__name__


def _as_adapter(func: Callable[..., Any], kind: str) -> FuncAdapter:
    if isinstance(func, FuncAdapter):
        return func
    if not callable(func):
        raise AdapterError(kind, func, "object is not callable")
    return FuncAdapter(func)


def curry(func: Callable[..., Any], *args: Any) -> FuncAdapter:
    """
    Partially applies the leading arguments of `func`.

    The result is a `FuncAdapter` awaiting the remaining arguments; it is
    validated again when used as a map, filter or reduce function.

    Example:
        >>> add_one = curry(operator.add, 1)
        >>> add_one(2)
        3
    """
    adapter = _as_adapter(func, "curry")
    shape = adapter.shape
    n = len(args)
    if shape.inspectable and not shape.variadic and n > shape.positional:
        raise AdapterError(
            "curry",
            adapter.func,
            f"cannot apply {n} arguments to a function of {shape.positional}",
        )

    new_shape = CallableShape(
        input_types=shape.input_types[n:],
        output_type=shape.output_type,
        positional=max(shape.positional - n, 0),
        required=max(shape.required - n, 0),
        variadic=shape.variadic,
        inspectable=shape.inspectable,
    )
    return FuncAdapter(
        functools.partial(adapter._call, *args),
        name=f"curry({adapter.name})",
        shape=new_shape,
        strict=adapter.strict,
    )


def flip(func: Callable[..., Any]) -> FuncAdapter:
    """
    Swaps the first two arguments of `func`.

    Example:
        >>> flip(operator.sub)(1, 10)
        9
    """
    adapter = _as_adapter(func, "flip")
    shape = adapter.shape
    if shape.inspectable and not shape.variadic and shape.positional < 2:
        raise AdapterError("flip", adapter.func, "it must take at least two arguments")

    call = adapter._call

    def flipped(a, b, *rest):
        return call(b, a, *rest)

    input_types = shape.input_types
    if len(input_types) >= 2:
        input_types = (input_types[1], input_types[0]) + input_types[2:]

    new_shape = CallableShape(
        input_types=input_types,
        output_type=shape.output_type,
        positional=max(shape.positional, 2),
        required=max(shape.required, 2),
        variadic=shape.variadic,
        inspectable=shape.inspectable,
    )
    return FuncAdapter(
        flipped, name=f"flip({adapter.name})", shape=new_shape, strict=adapter.strict
    )


def flip_curry(func: Callable[..., Any], *args: Any) -> FuncAdapter:
    """
    Flips `func`, then curries the given arguments.

    Example:
        >>> minus_one = flip_curry(operator.sub, 1)
        >>> minus_one(10)
        9
    """
    return curry(flip(func), *args)


def negate(predicate: Callable[[Any], Any]) -> FilterFunc:
    """Returns a predicate that holds exactly when `predicate` does not."""
    adapter = FilterFunc.wrap(predicate)

    def negated(value):
        return not adapter(value)

    return FilterFunc(
        negated,
        name=f"not({adapter.name})",
        shape=CallableShape(
            input_types=adapter.shape.input_types[:1],
            output_type=bool,
            positional=1,
            required=1,
            variadic=False,
        ),
        strict=False,
    )
