"""Tests for GraphModel."""
from __future__ import annotations

import pytest

from sprite_graph import GraphError, GraphModel

STATE_DOC = {
    "nodes": [
        {"name": "idle", "tags": {"mark": "start"}},
        {"name": "walking"},
    ],
    "edges": [
        {"src": "idle", "dst": "walking", "label": "walk"},
        {"src": "walking", "dst": "idle", "label": "stop"},
    ],
}

ANIM_DOC = {
    "nodes": [
        {"name": "idle", "tags": {"mark": "start", "time": "100", "state": "idle"}},
        {"name": "walking", "tags": {"time": "50", "state": "walking"}},
    ],
    "edges": [
        {"src": "idle", "dst": "walking", "label": "walk"},
        {"src": "walking", "dst": "walking"},
        {"src": "walking", "dst": "idle", "label": "stop"},
    ],
}


class TestGraphModel:
    def test_from_dict(self):
        model = GraphModel.from_dict({"state": STATE_DOC, "anim": ANIM_DOC})
        assert model.state.node(model.state.start).name == "idle"
        assert model.anim.node_data(1).time == 50

    def test_missing_graph(self):
        with pytest.raises(GraphError, match="Malformed"):
            GraphModel.from_dict({"state": STATE_DOC})

    def test_invalid_state_graph_rejected(self):
        bad_state = dict(STATE_DOC, edges=[{"src": "idle", "dst": "walking"}])
        with pytest.raises(GraphError, match="^State graph: "):
            GraphModel.from_dict({"state": bad_state, "anim": ANIM_DOC})

    def test_invalid_anim_graph_rejected(self):
        bad_anim = dict(ANIM_DOC, edges=[])
        with pytest.raises(GraphError, match="^Anim graph: "):
            GraphModel.from_dict({"state": STATE_DOC, "anim": bad_anim})

    def test_validation_can_be_skipped(self):
        bad_anim = dict(ANIM_DOC, edges=[])
        model = GraphModel.from_dict(
            {"state": STATE_DOC, "anim": bad_anim}, validate=False
        )
        with pytest.raises(GraphError):
            model.validate()
