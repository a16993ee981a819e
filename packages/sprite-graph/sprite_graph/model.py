"""GraphModel - the state/anim graph pair shared by every sprite of a kind."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sprite_graph.builder import graph_from_dict
from sprite_graph.graph import Graph
from sprite_graph.types import GraphError
from sprite_graph.validate import validate_anim_graph, validate_state_graph


@dataclass(frozen=True)
class GraphModel:
    """Semantic ``state`` graph plus frame-level ``anim`` graph.

    Node ids of the two graphs are independent of one another.
    """

    state: Graph
    anim: Graph

    def validate(self) -> None:
        """Raise GraphError if either graph is malformed."""
        validate_state_graph(self.state)
        validate_anim_graph(self.anim)

    @classmethod
    def from_dict(cls, data: dict[str, Any], validate: bool = True) -> GraphModel:
        """Build from ``{"state": <graph doc>, "anim": <graph doc>}``."""
        try:
            state_doc = data["state"]
            anim_doc = data["anim"]
        except (KeyError, TypeError) as exc:
            raise GraphError(f"Malformed model document: {exc}") from exc
        model = cls(state=graph_from_dict(state_doc), anim=graph_from_dict(anim_doc))
        if validate:
            model.validate()
        return model
