"""GraphBuilder and the plain-dict graph document format."""
from __future__ import annotations

from typing import Any

from sprite_graph.graph import Graph
from sprite_graph.types import Edge, GraphError, Node, NodeId


class GraphBuilder:
    """Incrementally assembles a Graph.

    Node and edge ids are handed out in insertion order.  Tags are passed as
    keyword arguments and stored as strings::

        b = GraphBuilder()
        idle = b.node("idle", mark="start", time=100)
        walk = b.node("walking", time=50)
        b.edge(idle, walk, "walk", facing=1)
        graph = b.build()
    """

    def __init__(self) -> None:
        self._nodes: list[tuple[tuple[str, ...], dict[str, str], NodeId | None]] = []
        self._edges: list[tuple[NodeId, NodeId, tuple[str, ...], dict[str, str]]] = []

    def node(
        self,
        name: str,
        *extra_lines: str,
        group: NodeId | None = None,
        **tags: Any,
    ) -> NodeId:
        if group is not None and not 0 <= group < len(self._nodes):
            raise GraphError(f"Unknown group id {group} for node {name!r}")
        self._nodes.append(
            ((name, *extra_lines), {k: str(v) for k, v in tags.items()}, group)
        )
        return len(self._nodes) - 1

    def set_group(self, node_id: NodeId, group: NodeId | None) -> None:
        """Move an existing node into *group* (or out of any group)."""
        for ref in (node_id, group):
            if ref is not None and not 0 <= ref < len(self._nodes):
                raise GraphError(f"Unknown node id {ref}")
        lines, tags, _ = self._nodes[node_id]
        self._nodes[node_id] = (lines, tags, group)

    def edge(
        self,
        src: NodeId,
        dst: NodeId,
        label: str = "",
        **tags: Any,
    ) -> int:
        for end in (src, dst):
            if not 0 <= end < len(self._nodes):
                raise GraphError(f"Edge references unknown node id {end}")
        lines = (label,) if label else ()
        self._edges.append((src, dst, lines, {k: str(v) for k, v in tags.items()}))
        return len(self._edges) - 1

    def build(self) -> Graph:
        count = len(self._nodes)
        children: list[list[NodeId]] = [[] for _ in range(count)]
        outputs: list[list[int]] = [[] for _ in range(count)]
        inputs: list[list[int]] = [[] for _ in range(count)]

        for node_id, (_, _, group) in enumerate(self._nodes):
            if group is not None:
                children[group].append(node_id)
        for edge_id, (src, dst, _, _) in enumerate(self._edges):
            outputs[src].append(edge_id)
            inputs[dst].append(edge_id)

        nodes: list[Node] = []
        for node_id, (lines, tags, group) in enumerate(self._nodes):
            group_outputs = list(outputs[node_id])
            seen = {node_id}
            parent = group
            while parent is not None:
                if parent in seen:
                    raise GraphError(f"Group cycle through node {lines[0]!r}")
                seen.add(parent)
                group_outputs.extend(outputs[parent])
                parent = self._nodes[parent][2]
            nodes.append(
                Node(
                    id=node_id,
                    lines=lines,
                    tags=dict(tags),
                    group=group,
                    children=tuple(children[node_id]),
                    outputs=tuple(outputs[node_id]),
                    inputs=tuple(inputs[node_id]),
                    group_outputs=tuple(group_outputs),
                )
            )

        edges = [
            Edge(id=i, src=src, dst=dst, lines=lines, tags=dict(tags))
            for i, (src, dst, lines, tags) in enumerate(self._edges)
        ]
        return Graph(nodes, edges)


def graph_from_dict(data: dict[str, Any]) -> Graph:
    """Build a Graph from a JSON-compatible document.

    Nodes are referenced by name, so names must be unique::

        {
            "nodes": [
                {"name": "idle", "tags": {"mark": "start", "time": "100"}},
                {"name": "walking", "group": "moving", "tags": {"time": "50"}},
                {"name": "moving"}
            ],
            "edges": [
                {"src": "idle", "dst": "walking", "label": "walk"}
            ]
        }

    Groups may be declared after their members.
    """
    try:
        node_docs = list(data["nodes"])
        edge_docs = list(data.get("edges", []))
    except (KeyError, TypeError) as exc:
        raise GraphError(f"Malformed graph document: {exc}") from exc

    ids: dict[str, NodeId] = {}
    for i, doc in enumerate(node_docs):
        name = doc.get("name", "")
        if name in ids:
            raise GraphError(f"Duplicate node name {name!r}")
        ids[name] = i

    def _ref(name: Any, what: str) -> NodeId:
        if name not in ids:
            raise GraphError(f"{what} references unknown node {name!r}")
        return ids[name]

    # Groups may be forward references, so they are wired in a second pass.
    builder = GraphBuilder()
    for doc in node_docs:
        builder.node(doc.get("name", ""), *doc.get("lines", []), **doc.get("tags", {}))
    for i, doc in enumerate(node_docs):
        group = doc.get("group")
        if group is not None:
            builder.set_group(i, _ref(group, f"Node {doc.get('name')!r}"))

    for doc in edge_docs:
        src = _ref(doc.get("src"), "Edge")
        dst = _ref(doc.get("dst"), "Edge")
        builder.edge(src, dst, doc.get("label", ""), **doc.get("tags", {}))
    return builder.build()
