"""
Filtering of service types down to the host application's own code.
"""

from __future__ import annotations

import inspect
from typing import Any

from .typeinfo import type_namespace

_PACKAGE = __name__.partition(".")[0]


class TypeRelevance:
    """Decides whether a type belongs to the application, by module prefix."""

    def __init__(self, prefix: str):
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return self._prefix

    def is_user_type(self, tp: Any) -> bool:
        """Check if a type is defined under the application's top-level package."""
        namespace = type_namespace(tp)
        return bool(namespace) and namespace.startswith(self._prefix)

    @classmethod
    def for_module(cls, module_name: str) -> TypeRelevance:
        """Create a filter for the top-level package of the given module."""
        return cls(module_name.partition(".")[0])

    @classmethod
    def from_caller(cls) -> TypeRelevance:
        """Create a filter for the top-level package of the first caller outside this library."""
        frame = inspect.currentframe()
        try:
            while frame is not None:
                module_name = frame.f_globals.get("__name__", "")
                if module_name and module_name.partition(".")[0] != _PACKAGE:
                    return cls.for_module(module_name)
                frame = frame.f_back
        finally:
            del frame
        return cls("__main__")

    def __repr__(self) -> str:
        return f"TypeRelevance({self._prefix!r})"
