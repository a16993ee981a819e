"""Tests for GraphBuilder and graph_from_dict."""
from __future__ import annotations

import pytest

from sprite_graph import GraphBuilder, GraphError, graph_from_dict


class TestGraphBuilder:
    def test_ids_follow_insertion_order(self):
        b = GraphBuilder()
        assert b.node("a", mark="start") == 0
        assert b.node("b") == 1
        assert b.edge(0, 1, "go") == 0
        assert b.edge(1, 0) == 1

    def test_tags_are_stored_as_strings(self):
        b = GraphBuilder()
        b.node("a", mark="start", time=120)
        graph = b.build()
        assert graph.node(0).tags == {"mark": "start", "time": "120"}

    def test_extra_lines_keep_name_first(self):
        b = GraphBuilder()
        b.node("idle", "second line")
        graph = b.build()
        assert graph.node(0).name == "idle"
        assert graph.node(0).lines == ("idle", "second line")

    def test_outputs_and_inputs(self):
        b = GraphBuilder()
        a = b.node("a")
        c = b.node("c")
        e = b.edge(a, c, "go")
        graph = b.build()
        assert graph.node(a).outputs == (e,)
        assert graph.node(c).inputs == (e,)
        assert graph.edge(e).label == "go"

    def test_unlabeled_edge_has_empty_label(self):
        b = GraphBuilder()
        a = b.node("a")
        b.edge(a, a)
        graph = b.build()
        assert graph.edge(0).label == ""

    def test_group_children(self):
        b = GraphBuilder()
        group = b.node("group")
        c1 = b.node("c1", group=group)
        c2 = b.node("c2", group=group)
        graph = b.build()
        assert graph.node(group).children == (c1, c2)
        assert graph.node(c1).group == group

    def test_group_outputs_include_ancestors_nearest_first(self):
        b = GraphBuilder()
        outer = b.node("outer")
        inner = b.node("inner", group=outer)
        leaf = b.node("leaf", group=inner)
        target = b.node("target")
        own = b.edge(leaf, target)
        from_inner = b.edge(inner, target, "a")
        from_outer = b.edge(outer, target, "b")
        graph = b.build()
        assert graph.node(leaf).group_outputs == (own, from_inner, from_outer)
        assert graph.node(inner).group_outputs == (from_inner, from_outer)
        assert graph.node(target).group_outputs == ()

    def test_unknown_group_raises(self):
        b = GraphBuilder()
        with pytest.raises(GraphError):
            b.node("a", group=3)

    def test_edge_to_unknown_node_raises(self):
        b = GraphBuilder()
        b.node("a")
        with pytest.raises(GraphError):
            b.edge(0, 5)

    def test_group_cycle_raises(self):
        b = GraphBuilder()
        a = b.node("a")
        c = b.node("c", group=a)
        b.set_group(a, c)
        with pytest.raises(GraphError):
            b.build()


class TestGraphFromDict:
    def test_basic_document(self):
        graph = graph_from_dict({
            "nodes": [
                {"name": "idle", "tags": {"mark": "start", "time": "100"}},
                {"name": "walking", "tags": {"time": "50"}},
            ],
            "edges": [{"src": "idle", "dst": "walking", "label": "walk"}],
        })
        assert len(graph) == 2
        assert graph.start == 0
        assert graph.find("walking").id == 1
        assert graph.edge_data(0).cmd == "walk"

    def test_forward_group_reference(self):
        graph = graph_from_dict({
            "nodes": [
                {"name": "c1", "group": "g", "tags": {"mark": "start"}},
                {"name": "g"},
            ],
        })
        assert graph.node(0).group == 1
        assert graph.node(1).children == (0,)

    def test_duplicate_names_raise(self):
        with pytest.raises(GraphError, match="Duplicate"):
            graph_from_dict({"nodes": [{"name": "a"}, {"name": "a"}]})

    def test_unknown_edge_reference_raises(self):
        with pytest.raises(GraphError, match="unknown node"):
            graph_from_dict({
                "nodes": [{"name": "a"}],
                "edges": [{"src": "a", "dst": "nope"}],
            })

    def test_missing_nodes_raises(self):
        with pytest.raises(GraphError):
            graph_from_dict({"edges": []})
