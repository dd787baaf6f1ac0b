"""
Dependency forest construction from a flat list of registrations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from .introspection import Constructor, ConstructorIntrospector, ConstructorParameter
from .node import ServiceNode
from .registrations import Registration
from .typeinfo import format_type_name, matches_generically

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds a forest of service nodes by examining implementation constructors.

    Every registration yields one root node, in input order. A root whose
    registration names an implementation type gets child nodes for each
    constructor parameter that some registration satisfies, recursively.
    Nothing here raises for odd registries: unresolvable constructors,
    missing implementation types and unmatched parameters all mean "no edge".
    """

    def __init__(self, introspector: type[ConstructorIntrospector] = ConstructorIntrospector):
        self._introspector = introspector

    def build_tree(self, registrations: Iterable[Registration]) -> list[ServiceNode]:
        """
        Build the dependency forest.

        Args:
            registrations: The registry snapshot, in registration order

        Returns:
            One root node per registration, in the same order
        """
        snapshot = tuple(registrations)
        root_nodes: list[ServiceNode] = []

        for registration in snapshot:
            node = ServiceNode(registration)
            root_nodes.append(node)

            if registration.implementation_type is not None:
                self._build_dependencies(node, registration.implementation_type, snapshot, frozenset())

        logger.debug("Built dependency forest with %d roots", len(root_nodes))
        return root_nodes

    def _build_dependencies(
        self,
        parent_node: ServiceNode,
        implementation_type: Any,
        registrations: Sequence[Registration],
        visited_types: frozenset[Any],
    ) -> None:
        """Attach child nodes for the constructor dependencies of an implementation type."""
        # Only ancestors on the current path count, siblings get their own copy
        if implementation_type in visited_types:
            logger.debug("Cycle through %s, not descending", format_type_name(implementation_type))
            return

        path_types = visited_types | {implementation_type}

        constructor = self.select_constructor(implementation_type, registrations)
        if constructor is None:
            return

        for parameter in constructor.parameters:
            dependency = find_matching_registration(registrations, parameter.type_hint)
            if dependency is None:
                logger.debug(
                    "No registration for parameter %s of %s",
                    parameter,
                    format_type_name(implementation_type),
                )
                continue

            child_node = ServiceNode(dependency)
            parent_node.dependencies.append(child_node)

            dependency_type = dependency.effective_implementation_type()
            if dependency_type is not None:
                self._build_dependencies(child_node, dependency_type, registrations, path_types)

    def select_constructor(
        self, implementation_type: Any, registrations: Sequence[Registration]
    ) -> Constructor | None:
        """
        Pick the constructor a container would most likely invoke.

        That is the public constructor with the most parameters that can all be
        resolved, ties going to the one declared first. A parameter is resolved
        by a matching registration or, unlike containers that require every
        parameter to be registered, by its default value.
        """
        constructors = self._introspector.public_constructors(implementation_type)
        # sorted() is stable, so declaration order breaks ties
        for constructor in sorted(constructors, key=lambda c: c.arity, reverse=True):
            if can_resolve_constructor(constructor, registrations):
                logger.debug(
                    "Selected constructor %s for %s", constructor, format_type_name(implementation_type)
                )
                return constructor
        return None


def find_matching_registration(
    registrations: Sequence[Registration], parameter_type: Any
) -> Registration | None:
    """Find the first registration whose service type satisfies the parameter type."""
    for registration in registrations:
        if matches_generically(parameter_type, registration.service_type):
            return registration
    return None


def can_resolve_parameter(parameter: ConstructorParameter, registrations: Sequence[Registration]) -> bool:
    """Check if a parameter is either registered or can fall back to its default."""
    if parameter.has_default:
        return True
    return find_matching_registration(registrations, parameter.type_hint) is not None


def can_resolve_constructor(constructor: Constructor, registrations: Sequence[Registration]) -> bool:
    return all(can_resolve_parameter(p, registrations) for p in constructor.parameters)
