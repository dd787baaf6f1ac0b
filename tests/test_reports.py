#!/usr/bin/env python3
"""
Unit tests for the reports built on the dependency forest.
"""

import unittest
from collections import OrderedDict

import fakes
from fakes import (
    Bottom,
    Customer,
    ILogger,
    IServiceA,
    IServiceB,
    IServiceC,
    Left,
    Logger,
    Right,
    ServiceA,
    ServiceB,
    ServiceC,
    ServiceD,
    Top,
)

from servicegraph import (
    DependencyTree,
    DotExporter,
    ServiceCollection,
    TreeBuilder,
    TreeStyle,
    TreeViewer,
    TypeRelevance,
    get_debug_view,
)
from servicegraph.dot import sanitize_node_name

USER_CODE = TypeRelevance.for_module(fakes.__name__)
HEADER = f"Namespace: {fakes.__name__}\n" + "-" * 50 + "\n"


def create_test_services():
    services = ServiceCollection()
    services.add_transient(IServiceA, ServiceA)
    services.add_scoped(IServiceB, ServiceB)
    services.add_singleton(IServiceC, ServiceC)
    services.add_transient(ServiceD)
    return services


class TestTreeViewer(unittest.TestCase):
    """Test the text rendering of the forest."""

    def setUp(self):
        self.roots = TreeBuilder().build_tree(create_test_services())

    def test_indented_view(self):
        view = TreeViewer().generate_tree_view(self.roots)

        expected = HEADER + (
            "IServiceA -> ServiceA (Transient)\n"
            "IServiceB -> ServiceB (Scoped)\n"
            "  IServiceA -> ServiceA (Transient)\n"
            "IServiceC -> ServiceC (Singleton)\n"
            "  IServiceA -> ServiceA (Transient)\n"
            "  IServiceB -> ServiceB (Scoped)\n"
            "    IServiceA -> ServiceA (Transient)\n"
            "ServiceD (Transient)\n"
            "  IServiceC -> ServiceC (Singleton)\n"
            "    IServiceA -> ServiceA (Transient)\n"
            "    IServiceB -> ServiceB (Scoped)\n"
            "      IServiceA -> ServiceA (Transient)\n"
            "\n"
        )
        self.assertEqual(view, expected)

    def test_box_view(self):
        view = TreeViewer(style=TreeStyle.BOX).generate_tree_view(self.roots[3:])

        expected = HEADER + (
            "ServiceD (Transient)\n"
            "└── IServiceC -> ServiceC (Singleton)\n"
            "    ├── IServiceA -> ServiceA (Transient)\n"
            "    └── IServiceB -> ServiceB (Scoped)\n"
            "        └── IServiceA -> ServiceA (Transient)\n"
            "\n"
        )
        self.assertEqual(view, expected)

    def test_custom_indent(self):
        view = TreeViewer(indent=4).generate_tree_view(self.roots[1:2])

        self.assertIn("\n    IServiceA -> ServiceA (Transient)\n", view)

    def test_grouped_by_namespace(self):
        """Test that roots are grouped per module, groups sorted by name."""
        services = create_test_services()
        services.add_singleton(OrderedDict, OrderedDict())

        view = TreeViewer().generate_tree_view(TreeBuilder().build_tree(services))

        self.assertTrue(view.startswith("Namespace: collections\n"))
        self.assertIn("OrderedDict -> Instance of OrderedDict (Singleton)\n", view)
        self.assertEqual(view.count("Namespace: "), 2)

    def test_only_user_code(self):
        services = create_test_services()
        services.add_singleton(OrderedDict, OrderedDict())

        view = TreeViewer().generate_tree_view(TreeBuilder().build_tree(services), USER_CODE)

        self.assertNotIn("collections", view)
        self.assertTrue(view.startswith(HEADER))

    def test_generic_names(self):
        services = ServiceCollection()
        services.add_singleton(ILogger[Customer], Logger[Customer])

        view = TreeViewer().generate_tree_view(TreeBuilder().build_tree(services))

        self.assertIn("ILogger[Customer] -> Logger[Customer] (Singleton)\n", view)

    def test_empty(self):
        self.assertEqual(TreeViewer().generate_tree_view([]), "")


class TestDotExporter(unittest.TestCase):
    """Test the Graphviz export."""

    def setUp(self):
        services = ServiceCollection()
        services.add_transient(Bottom)
        services.add_transient(Left)
        services.add_transient(Right)
        services.add_transient(Top)
        self.roots = TreeBuilder().build_tree(services)

    def test_digraph_structure(self):
        dot = DotExporter().export_to_dot(self.roots)

        self.assertTrue(dot.startswith("digraph DependencyTree {\n"))
        self.assertTrue(dot.endswith("}\n"))
        self.assertIn('  Top [label="Top"];\n', dot)

    def test_one_edge_per_parent_child_pair(self):
        dot = DotExporter().export_to_dot(self.roots)

        edges = [line.strip() for line in dot.splitlines() if "->" in line]
        # Left and Right as roots, then Top -> Left -> Bottom and Top -> Right -> Bottom
        self.assertEqual(
            edges,
            [
                "Left -> Bottom;",
                "Right -> Bottom;",
                "Top -> Left;",
                "Left -> Bottom;",
                "Top -> Right;",
                "Right -> Bottom;",
            ],
        )

    def test_only_user_code(self):
        services = ServiceCollection()
        services.add_singleton(OrderedDict, OrderedDict())
        services.add_transient(Bottom)

        dot = DotExporter().export_to_dot(TreeBuilder().build_tree(services), USER_CODE)

        self.assertNotIn("OrderedDict", dot)
        self.assertIn("Bottom", dot)

    def test_sanitize_node_name(self):
        self.assertEqual(sanitize_node_name("ILogger[Customer]"), "ILogger_Customer_")
        self.assertEqual(sanitize_node_name("dict[str, int]"), "dict_str__int_")
        self.assertEqual(sanitize_node_name("3D"), "_3D")


class TestUsage(unittest.TestCase):
    """Test most used and unused services."""

    def setUp(self):
        self.tree = DependencyTree(create_test_services(), USER_CODE)

    def test_most_used_services(self):
        """Test that dependency counts cover every occurrence in the forest."""
        self.assertEqual(
            self.tree.get_most_used_services(3),
            [(IServiceA, 5), (IServiceB, 2), (IServiceC, 1)],
        )

    def test_most_used_services_limited(self):
        self.assertEqual(self.tree.get_most_used_services(1), [(IServiceA, 5)])
        self.assertEqual(self.tree.get_most_used_services(0), [])

    def test_most_used_services_negative_count(self):
        with self.assertRaises(ValueError):
            self.tree.get_most_used_services(-1)

    def test_unused_services(self):
        self.assertEqual(self.tree.get_unused_services(), [ServiceD])

    def test_unused_services_only_user_code(self):
        services = create_test_services()
        services.add_singleton(OrderedDict, OrderedDict())

        tree = DependencyTree(services, USER_CODE)

        self.assertEqual(tree.get_unused_services(), [ServiceD])


class TestDepthAnalyser(unittest.TestCase):
    """Test chain depth filtering."""

    def setUp(self):
        self.tree = DependencyTree(create_test_services(), USER_CODE)

    def test_basic_functionality(self):
        result = self.tree.get_registration_chains_by_depth(2)

        self.assertTrue(result.root_nodes)
        self.assertTrue(result.string_representation.strip())
        self.assertTrue(any(n.service_type is ServiceD for n in result.root_nodes))

    def test_depth_filtering(self):
        """Test the number of roots per minimum depth, 1-indexed."""
        for min_depth, expected in [(0, 4), (1, 4), (2, 3), (3, 2), (4, 1), (5, 0)]:
            with self.subTest(min_depth=min_depth):
                result = self.tree.get_registration_chains_by_depth(min_depth)
                self.assertEqual(len(result.root_nodes), expected)

    def test_roots_collected_once_in_order(self):
        result = self.tree.get_registration_chains_by_depth(3)

        self.assertEqual([n.service_type for n in result.root_nodes], [IServiceC, ServiceD])

    def test_string_representation(self):
        result = self.tree.get_registration_chains_by_depth(4)

        self.assertTrue(result.string_representation.startswith(HEADER + "ServiceD (Transient)\n"))

    def test_only_user_code_skips_other_types(self):
        services = create_test_services()
        services.add_singleton(OrderedDict, OrderedDict())

        tree = DependencyTree(services, USER_CODE)

        all_roots = tree.get_registration_chains_by_depth(1)
        user_roots = tree.get_registration_chains_by_depth(1, only_user_code=True)
        self.assertEqual(len(all_roots.root_nodes), 5)
        self.assertEqual(len(user_roots.root_nodes), 4)


class TestDependencyTree(unittest.TestCase):
    """Test the facade."""

    def test_snapshot_at_construction(self):
        """Test that later registrations do not change the forest."""
        services = create_test_services()
        tree = DependencyTree(services, USER_CODE)

        services.add_transient(Bottom)

        self.assertEqual(len(tree.root_nodes), 4)

    def test_root_nodes_copy(self):
        tree = DependencyTree(create_test_services(), USER_CODE)

        tree.root_nodes.clear()

        self.assertEqual(len(tree.root_nodes), 4)

    def test_views(self):
        tree = DependencyTree(create_test_services(), USER_CODE)

        self.assertIn("ServiceD (Transient)", tree.generate_tree_view(only_user_code=True))
        self.assertIn("ServiceD -> IServiceC;", tree.export_to_dot(only_user_code=True))

    def test_default_relevance_is_the_caller(self):
        tree = DependencyTree(create_test_services())

        self.assertEqual(tree.relevance.prefix, __name__.partition(".")[0])

    def test_custom_viewer(self):
        tree = DependencyTree(create_test_services(), USER_CODE, TreeViewer(style=TreeStyle.BOX))

        self.assertIn("└── IServiceA -> ServiceA (Transient)", tree.generate_tree_view())

    def test_get_debug_view(self):
        view = get_debug_view(create_test_services())

        self.assertIn("IServiceC -> ServiceC (Singleton)\n  IServiceA -> ServiceA (Transient)\n", view)


class TestTypeRelevance(unittest.TestCase):
    """Test the user code filter."""

    def test_prefix_match(self):
        relevance = TypeRelevance("fak")

        self.assertEqual(relevance.is_user_type(ServiceA), fakes.__name__.startswith("fak"))
        self.assertFalse(relevance.is_user_type(OrderedDict))

    def test_for_module(self):
        self.assertEqual(TypeRelevance.for_module("app.services.users").prefix, "app")

    def test_generic_uses_definition_module(self):
        self.assertTrue(USER_CODE.is_user_type(ILogger[Customer]))

    def test_from_caller(self):
        self.assertEqual(TypeRelevance.from_caller().prefix, __name__.partition(".")[0])


if __name__ == "__main__":
    unittest.main()
