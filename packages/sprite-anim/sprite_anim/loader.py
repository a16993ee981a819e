"""Loader for JSON sprite documents.

A sprite document bundles both graphs with the frame rectangles of every
facing::

    {
        "state": {"nodes": [...], "edges": [...]},
        "anim": {"nodes": [...], "edges": [...]},
        "facings": [
            {"width": 256, "height": 64, "frames": {"idle": [0, 0, 32, 64]}}
        ],
        "connector": {"width": 64, "height": 64, "frames": {}}
    }

Frames are keyed by anim node name.  The path may name the document itself
or a directory holding ``sprite.json``.
"""
from __future__ import annotations

import json
import os
from typing import Any

from sprite_graph import Graph, GraphModel

from sprite_anim.sheets import FrameSheet, SheetSet
from sprite_anim.shared import SharedSpriteData
from sprite_anim.types import FrameRect, SpriteError

DOCUMENT_NAME = "sprite.json"


def sprite_from_dict(path: str, data: dict[str, Any]) -> SharedSpriteData:
    """Build validated shared data from an already-parsed document."""
    model = GraphModel.from_dict(data)
    facing_docs = data.get("facings")
    if not facing_docs:
        raise SpriteError(f"{path}: no facings")
    facings = tuple(_sheet(path, model.anim, doc) for doc in facing_docs)
    connector_doc = data.get("connector")
    connector = None if connector_doc is None else _sheet(path, model.anim, connector_doc)
    return SharedSpriteData(
        path=path, model=model, sheets=SheetSet(facings, connector)
    )


def json_loader(path: str) -> SharedSpriteData:
    """Manager loader reading a sprite document from disk."""
    file_path = path
    if os.path.isdir(path):
        file_path = os.path.join(path, DOCUMENT_NAME)
    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)
    return sprite_from_dict(path, data)


def _sheet(path: str, anim: Graph, doc: dict[str, Any]) -> FrameSheet:
    rects: dict[int, FrameRect] = {}
    for name, coords in doc.get("frames", {}).items():
        node = anim.find(name)
        if node is None:
            raise SpriteError(f"{path}: frame {name!r} is not in the anim graph")
        try:
            x, y, x2, y2 = (int(c) for c in coords)
        except (TypeError, ValueError) as exc:
            raise SpriteError(f"{path}: bad rectangle for frame {name!r}") from exc
        rects[node.id] = FrameRect(x, y, x2, y2)
    return FrameSheet(rects, width=int(doc.get("width", 0)), height=int(doc.get("height", 0)))
