"""Node, edge and derived-data types for sprite graphs."""
from __future__ import annotations

from dataclasses import dataclass, field

NodeId = int
EdgeId = int

DEFAULT_FRAME_TIME = 100
DEFAULT_WEIGHT = 1.0

START_MARK = "start"


class GraphError(ValueError):
    """Raised when a graph document or built graph is structurally invalid."""


def is_tag_line(line: str) -> bool:
    """A ``key:value`` line is a tag, anything else is a label."""
    return ":" in line


@dataclass(frozen=True, slots=True)
class Node:
    id: NodeId
    lines: tuple[str, ...]
    tags: dict[str, str] = field(default_factory=dict)
    group: NodeId | None = None
    children: tuple[NodeId, ...] = ()
    outputs: tuple[EdgeId, ...] = ()
    inputs: tuple[EdgeId, ...] = ()
    # Own outputs followed by the outputs of each ancestor group, nearest first.
    group_outputs: tuple[EdgeId, ...] = ()

    @property
    def name(self) -> str:
        return self.lines[0] if self.lines else ""

    def tag(self, key: str) -> str:
        return self.tags.get(key, "")


@dataclass(frozen=True, slots=True)
class Edge:
    id: EdgeId
    src: NodeId
    dst: NodeId
    lines: tuple[str, ...] = ()
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def label(self) -> str:
        if not self.lines or is_tag_line(self.lines[0]):
            return ""
        return self.lines[0]

    def tag(self, key: str) -> str:
        return self.tags.get(key, "")


@dataclass(frozen=True, slots=True)
class NodeData:
    """Per-node values precomputed from tags at build time."""

    time: int = DEFAULT_FRAME_TIME
    sync_tag: str = ""
    state: str = ""


@dataclass(frozen=True, slots=True)
class EdgeData:
    """Per-edge values precomputed from tags at build time.

    ``cmd`` is the command that must be issued to follow the edge; an empty
    string marks a free edge.
    """

    facing: int = 0
    weight: float = DEFAULT_WEIGHT
    cmd: str = ""
