"""
servicegraph - dependency graph reconstruction for service registries.

This library provides:
- A registry DSL producing ordered service registrations
- Constructor introspection with overload-aware constructor selection
- Open-to-closed generic matching of constructor parameters
- A cycle-safe dependency forest builder
- Tree, DOT, usage and chain-depth reports over the forest
"""

from .builder import TreeBuilder
from .collection import ServiceCollection
from .depth import DependencyChains, DepthAnalyser
from .dot import DotExporter
from .introspection import Constructor, ConstructorIntrospector, ConstructorParameter, private_constructor
from .node import ServiceNode
from .registrations import Lifetime, Registration
from .relevance import TypeRelevance
from .tree import DependencyTree, get_debug_view
from .typeinfo import matches_generically
from .usage import DependencyUsageCalculator
from .viewer import TreeStyle, TreeViewer

__all__ = [
    "Constructor",
    "ConstructorIntrospector",
    "ConstructorParameter",
    "DependencyChains",
    "DependencyTree",
    "DependencyUsageCalculator",
    "DepthAnalyser",
    "DotExporter",
    "Lifetime",
    "Registration",
    "ServiceCollection",
    "ServiceNode",
    "TreeBuilder",
    "TreeStyle",
    "TreeViewer",
    "TypeRelevance",
    "get_debug_view",
    "matches_generically",
    "private_constructor",
]
