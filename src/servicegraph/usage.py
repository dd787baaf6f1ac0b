"""
Usage statistics over the dependency forest.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cached_property
from typing import Any

from .node import ServiceNode
from .relevance import TypeRelevance


class DependencyUsageCalculator:
    """Counts how often each service type is depended upon across the forest."""

    def __init__(self, root_nodes: Iterable[ServiceNode]):
        self._root_nodes = list(root_nodes)

    @cached_property
    def _usage(self) -> dict[Any, int]:
        usage_count: dict[Any, int] = {}

        for root in self._root_nodes:
            for node in root.walk():
                for dependency in node.dependencies:
                    service_type = dependency.service_type
                    usage_count[service_type] = usage_count.get(service_type, 0) + 1

        return usage_count

    def usage(self) -> dict[Any, int]:
        """Get the dependency count per service type, in first-seen order."""
        return dict(self._usage)

    def get_most_used_services(self, count: int) -> list[tuple[Any, int]]:
        """
        Get the service types other services depend on the most.

        Args:
            count: Maximum number of services to return

        Returns:
            (service_type, usage_count) pairs, most used first

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")

        ranked = sorted(self._usage.items(), key=lambda item: item[1], reverse=True)
        return ranked[:count]

    def get_unused_services(self, relevance: TypeRelevance) -> list[Any]:
        """Get registered user service types that nothing depends on."""
        unused: list[Any] = []
        for root in self._root_nodes:
            service_type = root.service_type
            if service_type in self._usage or service_type in unused:
                continue
            if relevance.is_user_type(service_type):
                unused.append(service_type)
        return unused
