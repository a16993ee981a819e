"""Commands and the barrier that keeps synced commands in lockstep."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from sprite_anim.types import GroupStateError

if TYPE_CHECKING:
    from sprite_anim.sprite import Sprite

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Command:
    """Edge labels to follow in order, optionally tied to a CommandGroup."""

    names: tuple[str, ...]
    group: CommandGroup | None = None


class CommandGroup:
    """Sprites that must reach the node tagged ``sync_tag`` at the same time.

    Nothing happens until every member has finished its current path and
    has this group's command at the head of its queue.  At that point
    ``ready()`` latches: each member's path is computed once, and so is how
    long it has to hold back (``eta``) so all members reach the sync node
    together.
    """

    def __init__(self, sync_tag: str) -> None:
        self.sync_tag = sync_tag
        self.sprites: list[Sprite] = []
        self.eta: dict[Sprite, int] = {}
        self.paths: dict[Sprite, list[int]] = {}
        self._was_ready = False

    @property
    def was_ready(self) -> bool:
        return self._was_ready

    def ready(self) -> bool:
        """True once all members are lined up.  Stays True after that."""
        if self._was_ready:
            return True
        for sp in self.sprites:
            if sp.path_length() > 0:
                return False
            head = sp.head_command()
            if head is None or head.group is not self:
                return False

        longest = 0
        for sp in self.sprites:
            head = sp.head_command()
            if head is None:
                raise GroupStateError(f"Sync group {self.sync_tag!r} lost a command")
            path = sp.synced_path(head)
            total = self._time_to_sync(sp, path)
            self.paths[sp] = path
            self.eta[sp] = total
            longest = max(longest, total)
        for sp in self.sprites:
            self.eta[sp] = longest - self.eta[sp]
        self._was_ready = True
        logger.debug(
            "Group %r ready: %d sprites, longest lead-in %dms",
            self.sync_tag, len(self.sprites), longest,
        )
        return True

    def _time_to_sync(self, sp: Sprite, path: list[int]) -> int:
        anim = sp.shared.model.anim
        total = 0
        prev = sp.anim_node_id
        for i, node in enumerate(path):
            if anim.node_data(node).sync_tag == self.sync_tag:
                break
            if not anim.connected_by_group_edge(prev, node):
                total += sp.togo if i == 0 else anim.node_data(node).time
            prev = node
        return total

    def countdown(self, sp: Sprite, dt: int) -> int:
        """Charge *dt* against *sp*'s hold-back time and return what is left."""
        if not self._was_ready or sp not in self.eta:
            raise GroupStateError(
                f"Sprite is not a ready member of sync group {self.sync_tag!r}"
            )
        self.eta[sp] -= dt
        return self.eta[sp]

    def take_path(self, sp: Sprite) -> list[int]:
        if sp not in self.paths:
            raise GroupStateError(
                f"No path computed for sprite in sync group {self.sync_tag!r}"
            )
        return self.paths[sp]


def command_sync(
    sprites: Sequence[Sprite],
    cmds: Sequence[Sequence[str]],
    sync_tag: str,
) -> CommandGroup:
    """Issue ``cmds[i]`` to ``sprites[i]`` as one synced group.

    Sprites whose state graph rejects their command are left out of the
    group; the returned group lists the ones that accepted.
    """
    if len(sprites) != len(cmds):
        raise ValueError(
            f"Got {len(sprites)} sprites but {len(cmds)} command lists"
        )
    group = CommandGroup(sync_tag)
    for sp, names in zip(sprites, cmds):
        if sp.enqueue(Command(tuple(names), group)):
            group.sprites.append(sp)
    logger.debug(
        "Sync group %r formed with %d of %d sprites",
        sync_tag, len(group.sprites), len(sprites),
    )
    return group
