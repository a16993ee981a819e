"""Sprite - per-actor position in the shared state and anim graphs."""
from __future__ import annotations

import asyncio
import logging
import random
from collections import deque
from concurrent.futures import Future
from typing import Iterable, Sequence

from sprite_graph import Edge, find_path, find_synced_path

from sprite_anim.config import AnimConfig
from sprite_anim.group import Command
from sprite_anim.shared import SharedSpriteData
from sprite_anim.types import (
    FrameRect,
    SnapshotError,
    SpriteState,
    TriggerFunc,
    ZeroTimeCycleError,
)
from sprite_anim.waiters import WaiterRegistry

logger = logging.getLogger(__name__)


class Sprite:
    """One animated actor.

    The state graph tracks where the sprite *will* be once every accepted
    command has played out; the anim graph tracks the frame being shown
    right now.  Commands are accepted against the state graph immediately
    and then consumed by think(), one path of frames at a time.

    A sprite must be driven by one thread at a time.  Waiters may be added
    from any thread.
    """

    def __init__(
        self,
        shared: SharedSpriteData,
        rng: random.Random | None = None,
        config: AnimConfig | None = None,
    ) -> None:
        self._shared = shared
        self._anim = shared.model.anim
        self._states = shared.model.state
        self._sheets = shared.sheets
        self._rng = rng if rng is not None else random.Random()
        self._config = config if config is not None else AnimConfig()

        self._anim_node = self._anim.start
        self._state_node = self._states.start
        self._trigger: TriggerFunc | None = None

        # Number of think() calls; the first one does one-time setup.
        self._thinks = 0

        self._facing = 0
        # Facing whose sheet is currently loaded.
        self._prev_facing = 0
        # Facing once all pending commands have played out.
        self._state_facing = 0

        # Time left on the current frame, in ms.
        self._togo = 0
        self._path: deque[int] = deque()
        self._pending: deque[Command] = deque()
        self._waiters = WaiterRegistry()

    # -- Queries --

    @property
    def shared(self) -> SharedSpriteData:
        return self._shared

    @property
    def state(self) -> str:
        return self._states.node(self._state_node).name

    @property
    def anim(self) -> str:
        return self._anim.node(self._anim_node).name

    @property
    def anim_state(self) -> str:
        """The ``state`` tag carried by the current frame."""
        return self._anim.node_data(self._anim_node).state

    @property
    def anim_node_id(self) -> int:
        return self._anim_node

    @property
    def state_node_id(self) -> int:
        return self._state_node

    @property
    def facing(self) -> int:
        return self._facing

    @property
    def state_facing(self) -> int:
        return self._state_facing

    @property
    def togo(self) -> int:
        return self._togo

    @property
    def thinks(self) -> int:
        return self._thinks

    def num_pending_cmds(self) -> int:
        return len(self._pending)

    def path_length(self) -> int:
        return len(self._path)

    def head_command(self) -> Command | None:
        return self._pending[0] if self._pending else None

    def idle(self) -> bool:
        return not self._pending and not self._path

    def set_trigger(self, trigger: TriggerFunc | None) -> None:
        self._trigger = trigger

    # -- Frames --

    def frame_rect(self) -> FrameRect | None:
        found = self._sheets.lookup(self._facing, self._anim_node)
        return None if found is None else found[1]

    def dims(self) -> tuple[int, int]:
        rect = self.frame_rect()
        if rect is None:
            return 0, 0
        return rect.width, rect.height

    def tex_coords(self) -> tuple[float, float, float, float] | None:
        """Current frame rectangle normalized to its sheet's size."""
        found = self._sheets.lookup(self._facing, self._anim_node)
        if found is None:
            return None
        sheet, rect = found
        if sheet.width <= 0 or sheet.height <= 0:
            return None
        return (
            rect.x / sheet.width,
            rect.y / sheet.height,
            rect.x2 / sheet.width,
            rect.y2 / sheet.height,
        )

    # -- Commands --

    def command(self, name: str) -> bool:
        """Queue a single command.  Returns False if the state graph has no
        edge for it."""
        return self.enqueue(Command((name,)))

    def command_n(self, names: Sequence[str]) -> bool:
        """Queue several commands that must all be accepted, in order."""
        return self.enqueue(Command(tuple(names)))

    def enqueue(self, cmd: Command) -> bool:
        """Walk the state graph for *cmd* and queue it if every step exists.

        On rejection nothing changes.  Empty names never match, since an
        empty command is what marks a free edge.
        """
        if not cmd.names or not all(cmd.names):
            return False
        node = self._state_node
        edges = []
        for name in cmd.names:
            edge = self._states.select_edge(node, [name], self._rng)
            if edge is None:
                logger.debug("Rejected command %r from state %r", name, self.state)
                return False
            edges.append(edge)
            node = edge.dst

        for edge in edges:
            face = self._states.edge_data(edge.id).facing
            self._state_facing = (self._state_facing + face) % self._sheets.num_facings
        self._state_node = self._settle(node)
        self._pending.append(cmd)
        logger.debug("Accepted command %r, state now %r", cmd.names, self.state)
        return True

    def _settle(self, node: int) -> int:
        """Follow free state-graph edges until none is left."""
        seen = {node}
        edge = self._states.select_edge(node, [""], self._rng)
        while edge is not None:
            node = edge.dst
            if node in seen:
                logger.warning(
                    "Free edges loop back to state %r", self._states.node(node).name
                )
                break
            seen.add(node)
            edge = self._states.select_edge(node, [""], self._rng)
        return node

    def synced_path(self, cmd: Command) -> list[int]:
        sync_tag = cmd.group.sync_tag if cmd.group is not None else ""
        return find_synced_path(
            self._anim, cmd.names, self._anim_node, sync_tag, self._rng
        )

    # -- Think --

    def think(self, dt: int) -> None:
        """Advance the sprite by *dt* milliseconds.

        A large *dt* may cross several frames.  Negative values are
        ignored; zero never moves the sprite.
        """
        if self._thinks == 0:
            self._sheets.facing(self._facing).load()
            self._prev_facing = self._facing
            self._togo = self._anim.node_data(self._anim_node).time
        self._thinks += 1
        if dt < 0:
            return
        if dt > 0:
            self._advance(dt)
        if not self._pending:
            self._waiters.resolve(self.anim_state)

    def _advance(self, dt: int) -> None:
        limit = self._config.max_zero_time_steps
        charged = False
        stalled = 0
        while True:
            if self._pending and not self._path:
                charged = self._start_command(dt, charged)

            # Frames inside a group can be cut short when the group itself
            # has an edge to the next frame.
            if (
                self._path
                and self._anim.node(self._anim_node).group is not None
                and self._anim.connected_by_group_edge(self._anim_node, self._path[0])
            ):
                self._togo = 0

            if self._togo > dt:
                self._togo -= dt
                self._swap_facing_sheets()
                return

            if self._togo == 0:
                stalled += 1
                bound = limit if limit is not None else len(self._anim) + len(self._path) + 1
                if stalled > bound:
                    raise ZeroTimeCycleError(
                        f"Crossed {stalled} zero-time frames in one think at {self.anim!r}"
                    )
            else:
                stalled = 0
            dt -= self._togo
            if not self._step() and self._togo == 0:
                # Parked on a zero-time frame with nowhere to go.
                self._swap_facing_sheets()
                return

    def _start_command(self, dt: int, charged: bool) -> bool:
        """Turn the head command into a path if possible.

        Returns whether a sync group countdown has been charged during the
        current think().
        """
        cmd = self._pending[0]
        group = cmd.group
        if group is None:
            self._pending.popleft()
            path = find_path(self._anim, cmd.names, self._anim_node)
            if not path:
                logger.debug("No anim path for %r from %r, dropped", cmd.names, self.anim)
                return charged
            self._path.extend(path)
            return charged

        if not group.ready():
            return charged
        # The hold-back is charged once per think; the sprite starts on the
        # first think after it has run out.
        if group.eta.get(self, 0) > 0:
            if not charged:
                group.countdown(self, dt)
            return True

        self._pending.popleft()
        path = group.take_path(self)
        if not path:
            logger.debug("No synced path for %r from %r, dropped", cmd.names, self.anim)
            return charged
        self._enter(path[0], self._anim.edge_to(self._anim_node, path[0]))
        self._path.extend(path[1:])
        return charged

    def _step(self) -> bool:
        """Move to the next frame.  Returns False if the sprite stayed put."""
        if self._path:
            node = self._path.popleft()
            self._enter(node, self._anim.edge_to(self._anim_node, node))
            return True
        edge = self._anim.select_edge(self._anim_node, [""], self._rng)
        if edge is None:
            self._enter(self._anim_node, None)
            return False
        self._enter(edge.dst, edge)
        return True

    def _enter(self, node: int, edge: Edge | None) -> None:
        if edge is not None:
            face = self._anim.edge_data(edge.id).facing
            if face:
                self._facing = (self._facing + face) % self._sheets.num_facings
        self._anim_node = node
        func = self._anim.node(node).tag("func")
        if self._trigger is not None and func:
            self._trigger(self, func)
        self._togo = self._anim.node_data(node).time

    def _swap_facing_sheets(self) -> None:
        if self._facing != self._prev_facing:
            self._sheets.facing(self._prev_facing).unload()
            self._sheets.facing(self._facing).load()
            self._prev_facing = self._facing

    # -- Waiting --

    def add_waiter(self, states: Iterable[str]) -> Future[str]:
        """Register interest in reaching any of *states*.

        The returned future resolves, once, with the state reached.  It is
        resolved by whichever thread drives think().
        """
        return self._waiters.add(states)

    def wait(self, states: Iterable[str]) -> str:
        """Block until the sprite reaches one of *states*."""
        return self.add_waiter(states).result()

    async def wait_async(self, states: Iterable[str]) -> str:
        return await asyncio.wrap_future(self.add_waiter(states))

    def num_waiters(self) -> int:
        return self._waiters.pending()

    # -- Snapshot / restore --

    def capture_state(self) -> SpriteState:
        return SpriteState(
            facing=self._facing,
            state_node_id=self._state_node,
            anim_node_id=self._anim_node,
        )

    def restore_state(self, state: SpriteState) -> None:
        """Jump to a previously captured position.

        Pending commands and the queued path are discarded.  Raises
        SnapshotError while waiters are registered, since they could never
        be satisfied reliably after the jump.
        """
        if self._waiters.pending():
            raise SnapshotError("Can't restore sprite state while there are pending waiters")
        if not 0 <= state.facing < self._sheets.num_facings:
            raise SnapshotError(f"Facing {state.facing} out of range")
        if not 0 <= state.anim_node_id < len(self._anim):
            raise SnapshotError(f"Anim node {state.anim_node_id} out of range")
        if not 0 <= state.state_node_id < len(self._states):
            raise SnapshotError(f"State node {state.state_node_id} out of range")

        if self._thinks > 0 and state.facing != self._prev_facing:
            self._sheets.facing(self._prev_facing).unload()
            self._sheets.facing(state.facing).load()
        self._facing = state.facing
        self._prev_facing = state.facing
        self._state_facing = state.facing
        self._anim_node = state.anim_node_id
        self._state_node = state.state_node_id
        if self._thinks > 0:
            self._togo = self._anim.node_data(self._anim_node).time
        self._path.clear()
        self._pending.clear()
