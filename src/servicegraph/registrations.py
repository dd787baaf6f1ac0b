"""
Service registration records as held by a dependency injection container.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .typeinfo import format_type_name

logger = logging.getLogger(__name__)


class Lifetime(Enum):
    """How often the container creates an instance of a service."""

    TRANSIENT = "Transient"
    SCOPED = "Scoped"
    SINGLETON = "Singleton"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class Registration:
    """
    A mapping from a requested service type to a construction strategy.

    At most one of ``implementation_type``, ``implementation_instance`` and
    ``implementation_factory`` is expected to be set. A registration with none
    of them is still valid, it just has no effective implementation type.
    """

    service_type: Any
    lifetime: Lifetime = Lifetime.TRANSIENT
    implementation_type: Any = None
    implementation_instance: Any = None
    implementation_factory: Callable[..., Any] | None = None

    def effective_implementation_type(self) -> Any | None:
        """Get the type that would actually be instantiated for this registration."""
        if self.implementation_type is not None:
            return self.implementation_type

        if self.implementation_instance is not None:
            return type(self.implementation_instance)

        if self.implementation_factory is not None:
            return factory_return_type(self.implementation_factory)

        return None

    def implementation_description(self) -> str:
        """Describe the implementation for display purposes."""
        if self.implementation_type is not None:
            return format_type_name(self.implementation_type)

        if self.implementation_factory is not None:
            return_type = factory_return_type(self.implementation_factory)
            if return_type is not None:
                return format_type_name(return_type)

        if self.implementation_instance is not None:
            return f"Instance of {format_type_name(type(self.implementation_instance))}"

        return "Unknown"

    def __str__(self) -> str:
        return (
            f"{format_type_name(self.service_type)} -> "
            f"{self.implementation_description()} ({self.lifetime})"
        )


def factory_return_type(factory: Callable[..., Any]) -> Any | None:
    """
    Get the declared return type of a factory callable.

    Returns None for unannotated factories (lambdas included), for factories
    annotated to return None, and for annotations that cannot be resolved.
    """
    target = factory if inspect.isroutine(factory) else getattr(factory, "__call__", None)
    if target is None:
        return None

    try:
        return_type = typing.get_type_hints(target).get("return")
    except (NameError, TypeError, AttributeError) as e:
        logger.debug("Cannot resolve return annotation of %r: %s", factory, e)
        return None

    if return_type is None or return_type is type(None):
        return None

    return return_type
