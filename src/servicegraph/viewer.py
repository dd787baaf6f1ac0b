"""
Text rendering of the dependency forest, grouped by namespace.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from itertools import groupby

from .node import ServiceNode
from .relevance import TypeRelevance
from .typeinfo import type_namespace

SEPARATOR = "-" * 50


class TreeStyle(Enum):
    """How nested dependencies are drawn."""

    INDENT = "indent"
    BOX = "box"


class TreeViewer:
    """
    Renders root nodes and their dependencies as text.

    Example output:
        Namespace: app.services
        --------------------------------------------------
        UserService -> SqlUserService (Scoped)
          Config (Singleton)
    """

    def __init__(self, style: TreeStyle = TreeStyle.INDENT, indent: int = 2):
        self._style = style
        self._indent = indent

    def generate_tree_view(self, nodes: Iterable[ServiceNode], relevance: TypeRelevance | None = None) -> str:
        if relevance is not None:
            nodes = [n for n in nodes if relevance.is_user_type(n.service_type)]

        lines: list[str] = []
        # sorted() keeps registration order within each namespace
        ordered = sorted(nodes, key=lambda n: type_namespace(n.service_type))

        for namespace, group in groupby(ordered, key=lambda n: type_namespace(n.service_type)):
            lines.append(f"Namespace: {namespace}")
            lines.append(SEPARATOR)

            for node in group:
                if self._style is TreeStyle.BOX:
                    lines.append(describe_service(node))
                    self._append_boxed(lines, node.dependencies, "")
                else:
                    self._append_indented(lines, node, 0)

            lines.append("")

        return "".join(f"{line}\n" for line in lines)

    def _append_indented(self, lines: list[str], node: ServiceNode, depth: int) -> None:
        lines.append(f"{' ' * (depth * self._indent)}{describe_service(node)}")
        for child in node.dependencies:
            self._append_indented(lines, child, depth + 1)

    def _append_boxed(self, lines: list[str], children: list[ServiceNode], prefix: str) -> None:
        for index, child in enumerate(children):
            last = index == len(children) - 1
            lines.append(f"{prefix}{'└── ' if last else '├── '}{describe_service(child)}")
            self._append_boxed(lines, child.dependencies, prefix + ("    " if last else "│   "))


def describe_service(node: ServiceNode) -> str:
    """Describe a node as ``Service -> Implementation (Lifetime)``."""
    service = node.service_type_name
    implementation = node.implementation_description()

    if implementation == service:
        return f"{service} ({node.lifetime})"
    return f"{service} -> {implementation} ({node.lifetime})"
