"""Command-restricted shortest paths through an animation graph."""
from __future__ import annotations

import heapq
import random
from typing import Callable, Iterable, Sequence

from sprite_graph.graph import Graph
from sprite_graph.types import NodeId

Adjacency = Callable[[int], Iterable[tuple[int, float]]]


def dijkstra(
    adjacent: Adjacency,
    sources: Iterable[int],
    targets: Iterable[int],
) -> tuple[float, list[int]]:
    """Minimum-cost path from any source to any target.

    *adjacent(v)* yields ``(neighbor, cost)`` pairs with non-negative cost.
    Returns ``(cost, path)`` with the path including both ends, or
    ``(inf, [])`` when no target is reachable.  Ties are broken by the
    order in which vertices were first reached.
    """
    goal = set(targets)
    open_set: list[tuple[float, int, int]] = []
    came_from: dict[int, int] = {}
    dist: dict[int, float] = {}
    counter = 0
    for s in sources:
        if s not in dist:
            dist[s] = 0.0
            heapq.heappush(open_set, (0.0, counter, s))
            counter += 1

    closed: set[int] = set()
    while open_set:
        d, _, current = heapq.heappop(open_set)
        if current in closed:
            continue
        closed.add(current)
        if current in goal:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return d, path

        for neighbor, step_cost in adjacent(current):
            tentative = d + step_cost
            if tentative < dist.get(neighbor, float("inf")):
                came_from[neighbor] = current
                dist[neighbor] = tentative
                heapq.heappush(open_set, (tentative, counter, neighbor))
                counter += 1

    return float("inf"), []


def _command_adjacency(graph: Graph, start: NodeId, cmd: str) -> Adjacency:
    # Vertex len(graph) is a stand-in for *start*, so a path that leaves
    # start and comes back to it is not mistaken for an empty path.
    root = len(graph)

    def adjacent(v: int) -> list[tuple[int, float]]:
        node = graph.node(start if v == root else v)
        result: list[tuple[int, float]] = []
        for edge in graph.group_outputs(node.id):
            edge_cmd = graph.edge_data(edge.id).cmd
            if edge_cmd and edge_cmd != cmd:
                continue
            # Leaving the current group can happen without waiting out the frame.
            if node.group is not None and graph.node(edge.dst).group != node.group:
                result.append((edge.dst, 0.0))
            else:
                result.append((edge.dst, 1.0))
        return result

    return adjacent


def find_path(graph: Graph, names: Sequence[str], start: NodeId) -> list[NodeId]:
    """Nodes to visit after *start* to carry out each command in *names*.

    Each name is resolved in turn, starting where the previous one ended.
    The start node itself is not included.  An empty list means at least
    one of the commands cannot be reached.
    """
    node_path: list[NodeId] = []
    current = start
    for name in names:
        ends = [e.dst for e in graph.edges if graph.edge_data(e.id).cmd == name]
        _, path = dijkstra(
            _command_adjacency(graph, current, name), [len(graph)], ends
        )
        if not path:
            return []
        node_path.extend(path[1:])
        current = node_path[-1]
    return node_path


def find_synced_path(
    graph: Graph,
    names: Sequence[str],
    start: NodeId,
    sync_tag: str,
    rng: random.Random,
) -> list[NodeId]:
    """Like find_path, but make sure a node tagged *sync_tag* is on the path.

    If the command path has no such node, free edges are followed from its
    end until one is found.  When none is reachable that way the plain
    command path is returned.
    """
    path = find_path(graph, names, start)
    if not path:
        return path
    if any(graph.node_data(n).sync_tag == sync_tag for n in path):
        return path

    extra: list[NodeId] = []
    visited: set[NodeId] = set()
    tail = path[-1]
    edge = graph.select_edge(tail, [""], rng)
    while tail not in visited and edge is not None:
        visited.add(tail)
        tail = edge.dst
        extra.append(tail)
        if graph.node_data(tail).sync_tag == sync_tag:
            return path + extra
        edge = graph.select_edge(tail, [""], rng)
    return path
