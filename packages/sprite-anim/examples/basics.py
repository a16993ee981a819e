"""Walk and stop -- the smallest sprite-anim program.

Demonstrates:
- Building a state graph and an anim graph with GraphBuilder
- Issuing commands that the state graph accepts or rejects
- Advancing a sprite with think() and watching triggers fire

Run: python -m examples.basics
"""

import random

from sprite_graph import GraphBuilder, GraphModel

from sprite_anim import FrameSheet, SharedSpriteData, SheetSet, Sprite


def build_model() -> GraphModel:
    state = GraphBuilder()
    idle = state.node("idle", mark="start")
    walking = state.node("walking")
    state.edge(idle, walking, "walk")
    state.edge(walking, idle, "stop")

    anim = GraphBuilder()
    a_idle = anim.node("idle", mark="start", time=100, state="idle")
    a_walk = anim.node("walking", time=50, state="walking", func="step")
    anim.edge(a_idle, a_walk, "walk")
    anim.edge(a_walk, a_walk)
    anim.edge(a_walk, a_idle, "stop")

    model = GraphModel(state.build(), anim.build())
    model.validate()
    return model


def main() -> None:
    print("=== Walk and Stop ===\n")

    shared = SharedSpriteData("basics", build_model(), SheetSet((FrameSheet(),)))
    sprite = Sprite(shared, rng=random.Random(1))
    sprite.set_trigger(lambda sp, text: print(f"    trigger: {text}"))

    # "stop" has no edge from idle, so it is rejected.
    print(f"  stop accepted? {sprite.command('stop')}")
    print(f"  walk accepted? {sprite.command('walk')}  (state is now {sprite.state})")

    for dt in (30, 70, 120):
        sprite.think(dt)
        print(f"  think({dt:3d}) -> {sprite.anim:8s} togo={sprite.togo}")

    sprite.command("stop")
    sprite.think(60)
    print(f"  after stop    -> {sprite.anim:8s} togo={sprite.togo}")


if __name__ == "__main__":
    main()
