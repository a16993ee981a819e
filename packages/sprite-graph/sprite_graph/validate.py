"""Structural checks for state and animation graphs.

The sprite engine assumes the graphs it is handed already pass these
checks; loaders call them before publishing a graph.
"""
from __future__ import annotations

from sprite_graph.graph import Graph
from sprite_graph.types import START_MARK, GraphError, NodeId, is_tag_line

STATE_NODE_TAGS: frozenset[str] = frozenset()
STATE_EDGE_TAGS = frozenset({"facing", "weight", "cmd"})
ANIM_NODE_TAGS = frozenset({"time", "sync", "func", "state"})
ANIM_EDGE_TAGS = frozenset({"facing", "weight", "cmd"})


def validate_graph(
    graph: Graph,
    node_tags: frozenset[str],
    edge_tags: frozenset[str],
) -> None:
    """Checks shared by both kinds of graph.

    * every node is labeled
    * exactly one node is marked as the start node
    * every node is reachable from the start node
    * nodes and edges only carry the given tags
    """
    for node in graph:
        if not node.lines or not node.name or is_tag_line(node.name):
            raise GraphError("contains an unlabeled node")

    start: NodeId | None = None
    for node in graph:
        if node.tag("mark") == START_MARK:
            if start is not None:
                raise GraphError("more than one node is marked as the start node")
            start = node.id
    if start is None:
        raise GraphError("no start node was found")

    used: set[NodeId] = set()
    frontier = [start]
    while frontier:
        node = graph.node(frontier.pop())
        if node.id in used:
            continue
        used.add(node.id)
        if node.group is not None:
            frontier.append(node.group)
        frontier.extend(node.children)
        frontier.extend(graph.edge(e).dst for e in node.outputs)
    if len(used) != len(graph):
        raise GraphError("not all nodes are reachable from the start node")

    for node in graph:
        for tag in node.tags:
            if tag in node_tags or (node.id == start and tag == "mark"):
                continue
            raise GraphError(f"a node has an unknown tag ({tag})")

    for edge in graph.edges:
        for tag in edge.tags:
            if tag not in edge_tags:
                raise GraphError(f"an edge has an unknown tag ({tag})")


def validate_state_graph(graph: Graph) -> None:
    """State graphs additionally require that:

    * every output of the start node is labeled
    * no node has more than one unlabeled output
    * there are no groups
    """
    try:
        validate_graph(graph, STATE_NODE_TAGS, STATE_EDGE_TAGS)
    except GraphError as exc:
        raise GraphError(f"State graph: {exc}") from exc

    for edge in graph.outputs(graph.start):
        if not graph.edge_data(edge.id).cmd:
            raise GraphError("State graph: The start node has an unlabeled output edge")

    for node in graph:
        free = sum(1 for e in node.outputs if not graph.edge_data(e).cmd)
        if free > 1:
            raise GraphError(
                f"State graph: Found more than one unlabeled output edge on node '{node.name}'"
            )

    for node in graph:
        if node.children:
            raise GraphError("State graph: cannot contain groups")


def validate_anim_graph(graph: Graph) -> None:
    try:
        validate_graph(graph, ANIM_NODE_TAGS, ANIM_EDGE_TAGS)
    except GraphError as exc:
        raise GraphError(f"Anim graph: {exc}") from exc
