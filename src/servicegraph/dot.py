"""
Graphviz DOT export of the dependency forest.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from .node import ServiceNode
from .relevance import TypeRelevance

_UNSAFE_ID_CHARS = re.compile(r"[^0-9A-Za-z_]")


class DotExporter:
    """Exports nodes as a directed graph, one edge per parent and child pair."""

    def export_to_dot(self, nodes: Iterable[ServiceNode], relevance: TypeRelevance | None = None) -> str:
        if relevance is not None:
            nodes = [n for n in nodes if relevance.is_user_type(n.service_type)]

        lines = ["digraph DependencyTree {"]
        for node in nodes:
            self._export_node(node, lines)
        lines.append("}")

        return "\n".join(lines) + "\n"

    def _export_node(self, node: ServiceNode, lines: list[str]) -> None:
        node_id = sanitize_node_name(node.service_type_name)
        label = node.service_type_name.replace('"', '\\"')
        lines.append(f'  {node_id} [label="{label}"];')

        for dependency in node.dependencies:
            lines.append(f"  {node_id} -> {sanitize_node_name(dependency.service_type_name)};")
            self._export_node(dependency, lines)


def sanitize_node_name(name: str) -> str:
    """Turn a formatted type name into a valid DOT identifier."""
    sanitized = _UNSAFE_ID_CHARS.sub("_", name)
    if sanitized[:1].isdigit():
        sanitized = f"_{sanitized}"
    return sanitized
