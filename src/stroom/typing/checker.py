from typing import Any, Literal, Type, Union, get_args, get_origin


def are_types_compatible(output_type: Type[Any], input_type: Type[Any]) -> bool:
    """
    Checks if a value annotated as `output_type` may be passed where
    `input_type` is expected. Handles `Any`, `Union`, `Optional` and
    parameterised generics.
    """
    if input_type is Any or output_type is Any:
        return True

    origin_out = get_origin(output_type)
    origin_in = get_origin(input_type)
    args_out = get_args(output_type)
    args_in = get_args(input_type)

    if origin_out is Union:
        return all(are_types_compatible(arg, input_type) for arg in args_out)
    if origin_in is Union:
        return any(are_types_compatible(output_type, arg) for arg in args_in)

    if origin_in and origin_out:
        try:
            if not issubclass(origin_out, origin_in):
                return False
        except TypeError:
            return output_type == input_type
        if args_in and args_out and len(args_in) == len(args_out):
            return all(
                are_types_compatible(a_out, a_in)
                for a_out, a_in in zip(args_out, args_in)
            )
        return True

    try:
        return issubclass(origin_out or output_type, origin_in or input_type)
    except TypeError:
        return output_type == input_type


def is_boolean(type_hint: Type[Any]) -> bool:
    """True if `type_hint` is `bool` or a literal of booleans."""
    if type_hint is bool:
        return True
    if get_origin(type_hint) is Literal:
        return all(isinstance(arg, bool) for arg in get_args(type_hint))
    return False
