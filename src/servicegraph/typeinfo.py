"""
Type helpers for generic matching and display of service types.
"""

from __future__ import annotations

import inspect
from typing import Any, get_args, get_origin


def is_open_generic(tp: Any) -> bool:
    """Check if a type is a generic class used without binding its type parameters."""
    return inspect.isclass(tp) and bool(getattr(tp, "__parameters__", ()))


def is_closed_generic(tp: Any) -> bool:
    """Check if a type is a parameterised generic alias such as ``Logger[Foo]``."""
    return get_origin(tp) is not None and bool(get_args(tp))


def generic_definition(tp: Any) -> Any | None:
    """Get the generic class a parameterised alias was created from."""
    if not is_closed_generic(tp):
        return None
    return get_origin(tp)


def matches_generically(parameter_type: Any, service_type: Any) -> bool:
    """
    Check if a requested type is satisfied by a registered service type.

    Matches either exactly, or when ``service_type`` is an open generic
    definition and ``parameter_type`` is a closed instantiation of it:
    ``Logger[Foo]`` matches ``Logger``, ``Logger`` does not match ``Logger[Foo]``.
    """
    if parameter_type == service_type:
        return True

    return is_open_generic(service_type) and generic_definition(parameter_type) is service_type


def concrete_class(tp: Any) -> type | None:
    """Get the class whose constructors describe how ``tp`` is instantiated."""
    if inspect.isclass(tp):
        return tp

    origin = get_origin(tp)
    if inspect.isclass(origin):
        return origin

    return None


def format_type_name(tp: Any) -> str:
    """Format a type for display, rendering generic arguments recursively."""
    if tp is None or tp is type(None):
        return "None"

    args = get_args(tp)
    origin = get_origin(tp)
    if origin is not None and args:
        formatted_args = ", ".join(format_type_name(arg) for arg in args)
        return f"{_short_name(origin)}[{formatted_args}]"

    return _short_name(tp)


def type_namespace(tp: Any) -> str:
    """Get the module a type (or its generic definition) is defined in."""
    target = generic_definition(tp) or tp
    return getattr(target, "__module__", None) or ""


def _short_name(tp: Any) -> str:
    name = getattr(tp, "__name__", None)
    if isinstance(name, str):
        return name
    return str(tp)
