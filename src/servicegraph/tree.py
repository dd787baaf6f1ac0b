"""
DependencyTree - the entry point for analysing a service registry.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .builder import TreeBuilder
from .depth import DependencyChains, DepthAnalyser
from .dot import DotExporter
from .node import ServiceNode
from .registrations import Registration
from .relevance import TypeRelevance
from .usage import DependencyUsageCalculator
from .viewer import TreeViewer


class DependencyTree:
    """
    The dependency forest of a service registry and the reports built on it.

    The forest is built once, from a snapshot of the registrations taken at
    construction time; later changes to the registry are not reflected.

    Example:
        ```python
        tree = DependencyTree(services)
        print(tree.generate_tree_view(only_user_code=True))
        for service_type, count in tree.get_most_used_services(5):
            print(service_type.__name__, count)
        ```
    """

    def __init__(
        self,
        services: Iterable[Registration],
        relevance: TypeRelevance | None = None,
        viewer: TreeViewer | None = None,
    ):
        """
        Build the dependency forest.

        Args:
            services: The registrations to analyse, in registration order
            relevance: Filter deciding which types are the application's own code.
                       Defaults to the top-level package of the calling module.
            viewer: Tree renderer used for text output
        """
        self._relevance = relevance if relevance is not None else TypeRelevance.from_caller()
        self._tree_viewer = viewer if viewer is not None else TreeViewer()
        self._dot_exporter = DotExporter()
        self._depth_analyser = DepthAnalyser(self._tree_viewer)

        self._root_nodes = TreeBuilder().build_tree(services)
        self._usage_calculator = DependencyUsageCalculator(self._root_nodes)

    @property
    def root_nodes(self) -> list[ServiceNode]:
        """Get the root nodes, one per registration, in registration order."""
        return self._root_nodes.copy()

    @property
    def relevance(self) -> TypeRelevance:
        return self._relevance

    def generate_tree_view(self, only_user_code: bool = False) -> str:
        """
        Render the forest as text grouped by namespace.

        Args:
            only_user_code: If true, only roots from the application's own modules are shown
        """
        return self._tree_viewer.generate_tree_view(self._root_nodes, self._filter(only_user_code))

    def get_registration_chains_by_depth(self, min_depth: int, only_user_code: bool = False) -> DependencyChains:
        """
        Get the registrations that start chains of at least ``min_depth`` nodes.

        Args:
            min_depth: Minimum chain length, 1-indexed
            only_user_code: If true, types outside the application are skipped
        """
        return self._depth_analyser.get_registration_chains_by_depth(
            self._root_nodes, min_depth, self._filter(only_user_code)
        )

    def get_most_used_services(self, count: int) -> list[tuple[Any, int]]:
        """Get the services requested by other services the most, most used first."""
        return self._usage_calculator.get_most_used_services(count)

    def get_unused_services(self) -> list[Any]:
        """Get services registered by the application that no other service depends on."""
        return self._usage_calculator.get_unused_services(self._relevance)

    def export_to_dot(self, only_user_code: bool = False) -> str:
        """Export the forest as a Graphviz digraph."""
        return self._dot_exporter.export_to_dot(self._root_nodes, self._filter(only_user_code))

    def _filter(self, only_user_code: bool) -> TypeRelevance | None:
        return self._relevance if only_user_code else None


def get_debug_view(services: Iterable[Registration], only_user_code: bool = False) -> str:
    """Render the dependency tree of a registry in one call."""
    relevance = TypeRelevance.from_caller()
    return DependencyTree(services, relevance).generate_tree_view(only_user_code)
