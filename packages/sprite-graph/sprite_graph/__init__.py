"""sprite-graph - State and animation graphs for sprites."""
from __future__ import annotations

from sprite_graph.builder import GraphBuilder, graph_from_dict
from sprite_graph.graph import Graph
from sprite_graph.model import GraphModel
from sprite_graph.pathfind import dijkstra, find_path, find_synced_path
from sprite_graph.types import (
    DEFAULT_FRAME_TIME,
    Edge,
    EdgeData,
    GraphError,
    Node,
    NodeData,
)
from sprite_graph.validate import (
    ANIM_EDGE_TAGS,
    ANIM_NODE_TAGS,
    STATE_EDGE_TAGS,
    STATE_NODE_TAGS,
    validate_anim_graph,
    validate_graph,
    validate_state_graph,
)

__all__ = [
    "ANIM_EDGE_TAGS",
    "ANIM_NODE_TAGS",
    "DEFAULT_FRAME_TIME",
    "Edge",
    "EdgeData",
    "Graph",
    "GraphBuilder",
    "GraphError",
    "GraphModel",
    "Node",
    "NodeData",
    "STATE_EDGE_TAGS",
    "STATE_NODE_TAGS",
    "dijkstra",
    "find_path",
    "find_synced_path",
    "graph_from_dict",
    "validate_anim_graph",
    "validate_graph",
    "validate_state_graph",
]
