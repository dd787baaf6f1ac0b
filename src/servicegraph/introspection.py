"""
Constructor introspection for service implementation types.

Python classes have a single ``__init__``, so the set of public constructors
of a type is derived as follows:

- ``@typing.overload`` variants of ``__init__`` are separate constructors,
  reported in declaration order
- an ``__init__`` decorated with :func:`private_constructor` is not public
- abstract classes and ``Protocol`` classes cannot be instantiated and have
  no public constructors
- a class that does not define ``__init__`` anywhere in its MRO has one
  constructor without parameters
"""

from __future__ import annotations

import inspect
import logging
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, Union, get_args, get_origin

from .typeinfo import concrete_class

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_PRIVATE_MARKER = "__servicegraph_private__"


def private_constructor(init: F) -> F:
    """Mark an ``__init__`` as not part of the type's public construction API."""
    setattr(init, _PRIVATE_MARKER, True)
    return init


@dataclass(frozen=True)
class ConstructorParameter:
    """A single constructor parameter."""

    name: str
    type_hint: Any
    is_optional: bool = False
    has_default: bool = False

    def __str__(self) -> str:
        type_name = getattr(self.type_hint, "__name__", str(self.type_hint))
        return f"{self.name}: {type_name}"


@dataclass(frozen=True)
class Constructor:
    """An ordered list of the parameters a constructor accepts."""

    parameters: tuple[ConstructorParameter, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def __str__(self) -> str:
        return f"({', '.join(str(p) for p in self.parameters)})"


class ConstructorIntrospector:
    """Discovers the public constructors of a type."""

    @staticmethod
    def public_constructors(tp: Any) -> list[Constructor]:
        """
        Get the public constructors of a type, in declaration order.

        Args:
            tp: A class or a parameterised generic alias of a class

        Returns:
            The constructors, or an empty list when the type cannot be
            instantiated or its signature cannot be inspected
        """
        cls = concrete_class(tp)
        if cls is None:
            return []

        if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            return []

        init = cls.__init__
        if getattr(init, _PRIVATE_MARKER, False):
            return []

        if init is object.__init__:
            return [Constructor()]

        overloads = typing.get_overloads(init) if inspect.isfunction(init) else []
        variants = overloads or [init]

        constructors: list[Constructor] = []
        for variant in variants:
            constructor = ConstructorIntrospector.from_function(variant)
            if constructor is not None:
                constructors.append(constructor)
        return constructors

    @staticmethod
    def from_function(init: Callable[..., Any]) -> Constructor | None:
        """Build a constructor description from an ``__init__`` function."""
        try:
            signature = inspect.signature(init)
        except (TypeError, ValueError) as e:
            logger.debug("Cannot inspect signature of %r: %s", init, e)
            return None

        hints = _resolve_hints(init)
        parameters: list[ConstructorParameter] = []

        for index, param in enumerate(signature.parameters.values()):
            if index == 0 and param.name in ("self", "cls"):
                continue
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            annotation = hints.get(param.name, param.annotation)
            type_hint, is_optional = _unwrap_optional(annotation)
            parameters.append(
                ConstructorParameter(
                    name=param.name,
                    type_hint=type_hint,
                    is_optional=is_optional,
                    has_default=param.default is not inspect.Parameter.empty,
                )
            )

        return Constructor(tuple(parameters))


def _resolve_hints(func: Callable[..., Any]) -> dict[str, Any]:
    """
    Resolve annotations, one at a time when they cannot all be resolved at once.

    An annotation that still fails (typically a name imported only under
    ``TYPE_CHECKING``) stays a string and matches no registration.
    """
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError) as e:
        logger.debug("Cannot resolve all annotations of %r: %s", func, e)

    try:
        annotations = inspect.get_annotations(func)
    except TypeError:
        return {}

    globalns = getattr(func, "__globals__", {})
    hints: dict[str, Any] = {}
    for name, annotation in annotations.items():
        hints[name] = _resolve_annotation(annotation, globalns)
    return hints


def _resolve_annotation(annotation: Any, globalns: dict[str, Any]) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns)
    except (NameError, SyntaxError, TypeError, AttributeError) as e:
        logger.debug("Keeping unresolved annotation %r: %s", annotation, e)
        return annotation


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Turn ``X | None`` into ``(X, True)``; any other annotation is returned as is."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1 and len(get_args(annotation)) == 2:
            return args[0], True
    return annotation, False
