"""Graph - immutable arena of nodes and edges with precomputed tag data."""
from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator, Sequence

from sprite_graph.types import (
    DEFAULT_FRAME_TIME,
    DEFAULT_WEIGHT,
    START_MARK,
    Edge,
    EdgeData,
    EdgeId,
    GraphError,
    Node,
    NodeData,
    NodeId,
)

logger = logging.getLogger(__name__)


class Graph:
    """A directed graph whose nodes may nest inside group nodes.

    Nodes and edges are addressed by their integer id, which is also their
    index.  Instances are read-only once built and may be shared between
    any number of sprites.
    """

    def __init__(self, nodes: Sequence[Node], edges: Sequence[Edge]) -> None:
        self._nodes: tuple[Node, ...] = tuple(nodes)
        self._edges: tuple[Edge, ...] = tuple(edges)
        for i, node in enumerate(self._nodes):
            if node.id != i:
                raise GraphError(f"Node at index {i} has id {node.id}")
        for i, edge in enumerate(self._edges):
            if edge.id != i:
                raise GraphError(f"Edge at index {i} has id {edge.id}")

        self._start: NodeId | None = None
        for node in self._nodes:
            if node.tag("mark") == START_MARK:
                self._start = node.id
                break

        self._by_name: dict[str, NodeId] = {}
        for node in self._nodes:
            self._by_name.setdefault(node.name, node.id)

        self._node_data = tuple(self._derive_node(n) for n in self._nodes)
        self._edge_data = tuple(_derive_edge(e) for e in self._edges)

    # -- Lookup --

    @property
    def start(self) -> NodeId:
        if self._start is None:
            raise GraphError("no start node was found")
        return self._start

    @property
    def has_start(self) -> bool:
        return self._start is not None

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    @property
    def edges(self) -> tuple[Edge, ...]:
        return self._edges

    def node(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def edge(self, edge_id: EdgeId) -> Edge:
        return self._edges[edge_id]

    def find(self, name: str) -> Node | None:
        """Return the first node whose name is *name*, or None."""
        node_id = self._by_name.get(name)
        return None if node_id is None else self._nodes[node_id]

    def node_data(self, node_id: NodeId) -> NodeData:
        return self._node_data[node_id]

    def edge_data(self, edge_id: EdgeId) -> EdgeData:
        return self._edge_data[edge_id]

    def outputs(self, node_id: NodeId) -> list[Edge]:
        return [self._edges[e] for e in self._nodes[node_id].outputs]

    def group_outputs(self, node_id: NodeId) -> list[Edge]:
        return [self._edges[e] for e in self._nodes[node_id].group_outputs]

    def ancestors(self, node_id: NodeId) -> Iterator[NodeId]:
        """Yield the enclosing groups of *node_id*, innermost first."""
        group = self._nodes[node_id].group
        while group is not None:
            yield group
            group = self._nodes[group].group

    # -- Traversal helpers --

    def select_edge(
        self,
        node_id: NodeId,
        cmds: Iterable[str],
        rng: random.Random,
    ) -> Edge | None:
        """Pick one output of *node_id* whose command is in *cmds*.

        The choice is random, weighted by each edge's ``weight``.  Returns
        None when no candidate has positive weight.
        """
        wanted = set(cmds)
        candidates: list[tuple[Edge, float]] = []
        total = 0.0
        for edge in self.outputs(node_id):
            data = self._edge_data[edge.id]
            if data.cmd not in wanted:
                continue
            candidates.append((edge, data.weight))
            total += data.weight
        if total <= 0:
            return None
        pick = rng.random() * total
        running = 0.0
        for edge, weight in candidates:
            running += weight
            if weight > 0 and running >= pick:
                return edge
        return None

    def edge_to(self, a: NodeId, b: NodeId) -> Edge | None:
        """Return the edge leading from *a* (or an ancestor of *a*) to *b*
        (or an ancestor of *b*)."""
        targets = {b, *self.ancestors(b)}
        for edge in self.group_outputs(a):
            if edge.dst in targets:
                return edge
        return None

    def connected_by_group_edge(self, a: NodeId, b: NodeId) -> bool:
        """True if an edge inherited from one of *a*'s groups leads to *b*."""
        for edge in self.group_outputs(a):
            if edge.src != a and edge.dst == b:
                return True
        return False

    # -- Derived data --

    def _derive_node(self, node: Node) -> NodeData:
        time = DEFAULT_FRAME_TIME
        raw = node.tag("time")
        if raw:
            try:
                time = int(float(raw))
            except ValueError:
                logger.warning(
                    "Node %r has unparseable time %r, using %d",
                    node.name, raw, DEFAULT_FRAME_TIME,
                )
        state = node.tag("state")
        if not state:
            for group in self.ancestors(node.id):
                state = self._nodes[group].tag("state")
                if state:
                    break
        return NodeData(time=time, sync_tag=node.tag("sync"), state=state)


def _derive_edge(edge: Edge) -> EdgeData:
    facing = 0
    raw = edge.tag("facing")
    if raw:
        try:
            facing = int(raw)
        except ValueError:
            logger.warning("Edge %d has unparseable facing %r", edge.id, raw)
    weight = DEFAULT_WEIGHT
    raw = edge.tag("weight")
    if raw:
        try:
            weight = float(raw)
        except ValueError:
            logger.warning("Edge %d has unparseable weight %r", edge.id, raw)
    cmd = edge.tag("cmd") or edge.label
    return EdgeData(facing=facing, weight=weight, cmd=cmd)
