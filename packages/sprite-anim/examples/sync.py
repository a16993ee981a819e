"""Synced commands -- two sprites landing a blow together.

Demonstrates:
- Issuing one command to several sprites with command_sync()
- How the group holds back the sprite with the shorter lead-in
- Driving sprites together with an Animator

Run: python -m examples.sync
"""

import random

from sprite_graph import GraphBuilder, GraphModel

from sprite_anim import AnimConfig, Animator, FrameSheet, SharedSpriteData, SheetSet, Sprite


def fighter(lead_times: list[int]) -> SharedSpriteData:
    state = GraphBuilder()
    stand = state.node("stand", mark="start")
    attacking = state.node("attacking")
    state.edge(stand, attacking, "attack")
    state.edge(attacking, stand)

    anim = GraphBuilder()
    a_stand = anim.node("stand", mark="start", time=lead_times[0], state="stand")
    prev, label = a_stand, "attack"
    for i, t in enumerate(lead_times):
        node = anim.node(f"lead {i}", time=t, state="attacking")
        anim.edge(prev, node, label)
        prev, label = node, ""
    hit = anim.node("hit", time=100, sync="hit", func="hit", state="attacking")
    anim.edge(prev, hit)
    anim.edge(hit, a_stand)

    return SharedSpriteData("sync", GraphModel(state.build(), anim.build()), SheetSet((FrameSheet(),)))


def main() -> None:
    print("=== Synced Attack ===\n")

    animator = Animator(AnimConfig(tick_ms=10))
    slow = Sprite(fighter([50, 70]), rng=random.Random(1))
    quick = Sprite(fighter([40]), rng=random.Random(2))
    for name, sp in (("slow", slow), ("quick", quick)):
        sp.set_trigger(lambda s, text, name=name: print(f"  {name:5s} hits at {animator.elapsed_ms}ms"))
        animator.add(sp)
    animator.step(0)

    group = animator.command_sync([slow, quick], [["attack"], ["attack"]], "hit")
    group.ready()
    print(f"  hold-back: slow={group.eta[slow]}ms quick={group.eta[quick]}ms\n")

    animator.run(15)


if __name__ == "__main__":
    main()
