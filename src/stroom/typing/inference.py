import builtins
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, get_type_hints


@dataclass(frozen=True)
class CallableShape:
    """
    What can be learned about a callable without calling it.

    Attributes:
        input_types: The annotations of the positional parameters, `Any` where missing.
        output_type: The return annotation, `Any` where missing.
        positional: The number of positional parameters.
        required: How many of those have no default.
        variadic: True if the callable takes `*args`.
        inspectable: False if no signature could be obtained (some builtins).
    """

    input_types: Tuple[Any, ...]
    output_type: Any
    positional: int
    required: int
    variadic: bool
    inspectable: bool = True

    def accepts(self, count: int) -> bool:
        """True if the callable can be called with `count` positional arguments."""
        if not self.inspectable:
            return True
        if count < self.required:
            return False
        return self.variadic or count <= self.positional

    def input_type(self, index: int) -> Any:
        if index < len(self.input_types):
            return self.input_types[index]
        return Any


UNKNOWN_SHAPE = CallableShape((), Any, 0, 0, True, inspectable=False)


def infer_shape(func: Callable[..., Any]) -> CallableShape:
    """
    Infers parameter and return types from a callable's hints.
    If hints are not present, they default to `Any`.
    """
    hints = {}
    try:
        # We use include_extras=True to handle Annotated types if they are used.
        hints = get_type_hints(func, include_extras=True)
    except Exception:
        # Forward references that can't be resolved, or callables such as
        # builtins and partials that don't carry hints.
        hints = {}

    try:
        sig = inspect.signature(func)
    except (ValueError, TypeError):
        return UNKNOWN_SHAPE

    input_types = []
    required = 0
    variadic = False
    for name, param in sig.parameters.items():
        if param.kind == param.VAR_POSITIONAL:
            variadic = True
            continue
        if param.kind not in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            continue
        input_types.append(_annotation(hints.get(name), param.annotation))
        if param.default is param.empty:
            required += 1

    output_type = _annotation(hints.get("return"), sig.return_annotation)

    return CallableShape(
        input_types=tuple(input_types),
        output_type=output_type,
        positional=len(input_types),
        required=required,
        variadic=variadic,
    )


def _annotation(hint: Optional[Any], raw: Any) -> Any:
    if hint is not None:
        return hint
    # If the resolved hint is not found, fall back to the raw annotation.
    if raw is inspect.Signature.empty or raw is inspect.Parameter.empty:
        return Any
    if raw is None:
        return type(None)
    if isinstance(raw, str):
        # Unresolved forward reference; builtin names are still recognised.
        return getattr(builtins, raw, raw)
    return raw
