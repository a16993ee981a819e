"""Shared fixtures for sprite-anim tests."""
from __future__ import annotations

import random

import pytest
from sprite_graph import Graph, GraphBuilder, GraphModel

from sprite_anim import FrameRect, FrameSheet, SharedSpriteData, SheetSet, Sprite

FRAME_W = 32
FRAME_H = 48


def frame_sheets(anim: Graph, facings: int = 4, connector: FrameSheet | None = None) -> SheetSet:
    """One sheet per facing, frames laid out left to right by node id."""
    sheets = []
    for f in range(facings):
        rects = {
            n.id: FrameRect(n.id * FRAME_W, f * FRAME_H, (n.id + 1) * FRAME_W, (f + 1) * FRAME_H)
            for n in anim
        }
        sheets.append(FrameSheet(rects, width=len(anim) * FRAME_W, height=facings * FRAME_H))
    return SheetSet(tuple(sheets), connector)


def walker_graphs() -> tuple[Graph, Graph]:
    state = GraphBuilder()
    idle = state.node("idle", mark="start")
    walking = state.node("walking")
    state.edge(idle, walking, "walk")
    state.edge(walking, idle, "stop")
    state.edge(idle, idle, "turn", facing=1)
    # Accepted by the state graph, but the anim graph has no way to play it.
    state.edge(idle, idle, "wave")

    anim = GraphBuilder()
    a_idle = anim.node("idle", mark="start", time=100, state="idle")
    a_walking = anim.node("walking", time=50, state="walking", func="step")
    anim.edge(a_idle, a_walking, "walk")
    anim.edge(a_walking, a_walking)
    anim.edge(a_walking, a_idle, "stop")
    anim.edge(a_idle, a_idle, "turn", facing=1)
    return state.build(), anim.build()


@pytest.fixture
def make_shared():
    def _make(state: Graph, anim: Graph, facings: int = 4, connector: FrameSheet | None = None):
        return SharedSpriteData(
            path="mem://sprite",
            model=GraphModel(state, anim),
            sheets=frame_sheets(anim, facings, connector),
        )
    return _make


@pytest.fixture
def walker(make_shared):
    return make_shared(*walker_graphs())


@pytest.fixture
def sprite(walker):
    return Sprite(walker, rng=random.Random(1))
