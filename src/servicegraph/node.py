"""
Nodes of the service dependency forest.
"""

from __future__ import annotations

from typing import Any

from .registrations import Lifetime, Registration
from .typeinfo import format_type_name


class ServiceNode:
    """
    One occurrence of a registration in the dependency forest.

    The same registration appears as a distinct node on every path that reaches
    it; the forest owns its nodes, nodes are never shared between paths.
    """

    def __init__(self, registration: Registration):
        self.registration = registration
        self.dependencies: list[ServiceNode] = []

    @property
    def service_type(self) -> Any:
        return self.registration.service_type

    @property
    def lifetime(self) -> Lifetime:
        return self.registration.lifetime

    @property
    def service_type_name(self) -> str:
        return format_type_name(self.registration.service_type)

    def implementation_description(self) -> str:
        return self.registration.implementation_description()

    def walk(self) -> list[ServiceNode]:
        """Get this node and all its descendants, depth-first in child order."""
        result = [self]
        for child in self.dependencies:
            result.extend(child.walk())
        return result

    def __repr__(self) -> str:
        return f"ServiceNode({self.registration}, dependencies={len(self.dependencies)})"
