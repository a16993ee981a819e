"""Tests for the JSON sprite document loader."""
from __future__ import annotations

import copy
import json

import pytest
from sprite_graph import GraphError

from sprite_anim import FrameRect, Manager, SpriteError, json_loader, sprite_from_dict

DOC = {
    "state": {
        "nodes": [{"name": "idle", "tags": {"mark": "start"}}, {"name": "walking"}],
        "edges": [
            {"src": "idle", "dst": "walking", "label": "walk"},
            {"src": "walking", "dst": "idle", "label": "stop"},
        ],
    },
    "anim": {
        "nodes": [
            {"name": "idle", "tags": {"mark": "start", "time": "100", "state": "idle"}},
            {"name": "walking", "tags": {"time": "50", "state": "walking"}},
        ],
        "edges": [
            {"src": "idle", "dst": "walking", "label": "walk"},
            {"src": "walking", "dst": "walking"},
            {"src": "walking", "dst": "idle", "label": "stop"},
        ],
    },
    "facings": [
        {"width": 64, "height": 32, "frames": {"idle": [0, 0, 32, 32], "walking": [32, 0, 64, 32]}},
        {"width": 64, "height": 32, "frames": {"idle": [0, 0, 32, 32]}},
    ],
    "connector": {"width": 16, "height": 16, "frames": {}},
}


class TestSpriteFromDict:
    def test_builds_sheets(self):
        shared = sprite_from_dict("walker", DOC)
        assert shared.path == "walker"
        assert shared.num_facings == 2
        walking = shared.model.anim.find("walking").id
        assert shared.sheets.facing(0).rect(walking) == FrameRect(32, 0, 64, 32)
        assert shared.sheets.facing(1).rect(walking) is None
        assert shared.sheets.connector is not None

    def test_no_facings(self):
        doc = dict(DOC, facings=[])
        with pytest.raises(SpriteError, match="no facings"):
            sprite_from_dict("walker", doc)

    def test_unknown_frame(self):
        doc = copy.deepcopy(DOC)
        doc["facings"][0]["frames"]["jumping"] = [0, 0, 1, 1]
        with pytest.raises(SpriteError, match="jumping"):
            sprite_from_dict("walker", doc)

    def test_bad_rectangle(self):
        doc = copy.deepcopy(DOC)
        doc["facings"][0]["frames"]["idle"] = [0, 0, 1]
        with pytest.raises(SpriteError, match="bad rectangle"):
            sprite_from_dict("walker", doc)

    def test_invalid_graph(self):
        doc = copy.deepcopy(DOC)
        doc["anim"]["edges"] = []
        with pytest.raises(GraphError):
            sprite_from_dict("walker", doc)


class TestJsonLoader:
    def test_directory(self, tmp_path):
        (tmp_path / "sprite.json").write_text(json.dumps(DOC), encoding="utf-8")
        shared = json_loader(str(tmp_path))
        assert shared.path == str(tmp_path)
        assert len(shared.model.anim) == 2

    def test_file(self, tmp_path):
        doc_path = tmp_path / "walker.json"
        doc_path.write_text(json.dumps(DOC), encoding="utf-8")
        assert json_loader(str(doc_path)).num_facings == 2

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            json_loader(str(tmp_path / "nope.json"))

    def test_with_manager(self, tmp_path):
        (tmp_path / "sprite.json").write_text(json.dumps(DOC), encoding="utf-8")
        manager = Manager(json_loader, seed=3)
        sp = manager.load_sprite(str(tmp_path))
        assert sp.command("walk")
        sp.think(100)
        assert sp.anim == "walking"
        assert sp.frame_rect() == FrameRect(32, 0, 64, 32)
