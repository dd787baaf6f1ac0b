"""
Discovery of long dependency chains.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .node import ServiceNode
from .relevance import TypeRelevance
from .viewer import TreeViewer


@dataclass(frozen=True)
class DependencyChains:
    """Roots of sufficiently deep chains together with their tree view."""

    root_nodes: list[ServiceNode]
    string_representation: str


class DepthAnalyser:
    """Finds registrations that start dependency chains of at least a given depth."""

    def __init__(self, tree_viewer: TreeViewer):
        self._tree_viewer = tree_viewer

    def get_registration_chains_by_depth(
        self,
        root_nodes: Iterable[ServiceNode],
        min_depth: int,
        relevance: TypeRelevance | None = None,
    ) -> DependencyChains:
        """
        Collect roots with a path of at least ``min_depth`` nodes.

        Depth is 1-indexed: a root on its own is a chain of depth 1.
        With ``relevance``, types outside the application are skipped entirely.
        """
        of_interest = list(root_nodes)
        if relevance is not None:
            of_interest = [n for n in of_interest if relevance.is_user_type(n.service_type)]

        deep_chains: list[ServiceNode] = []
        for root in of_interest:
            self._explore_chains(root, [root], min_depth, deep_chains, relevance)

        return DependencyChains(deep_chains, self._tree_viewer.generate_tree_view(deep_chains))

    def _explore_chains(
        self,
        node: ServiceNode,
        current_chain: list[ServiceNode],
        min_depth: int,
        result: list[ServiceNode],
        relevance: TypeRelevance | None,
    ) -> None:
        root = current_chain[0]
        if len(current_chain) >= min_depth and not any(found is root for found in result):
            result.append(root)

        for child in node.dependencies:
            if relevance is not None and not relevance.is_user_type(child.service_type):
                continue
            self._explore_chains(child, current_chain + [child], min_depth, result, relevance)
