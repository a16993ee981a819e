"""Animator - fixed-step driver that thinks every sprite each tick."""
from __future__ import annotations

import logging
from typing import Callable, Sequence

from sprite_anim.config import AnimConfig
from sprite_anim.group import CommandGroup, command_sync
from sprite_anim.sprite import Sprite

logger = logging.getLogger(__name__)

TickHook = Callable[["Animator", int], None]


class Animator:
    """Steps a set of sprites forward together.

    Synced command groups rely on every member thinking on every tick;
    sprites registered here are all thought, in registration order, on
    each step.
    """

    def __init__(self, config: AnimConfig | None = None) -> None:
        self._config = config if config is not None else AnimConfig()
        self._sprites: list[Sprite] = []
        self._tick_hooks: list[TickHook] = []
        self._tick_number = 0
        self._elapsed_ms = 0

    @property
    def tick_ms(self) -> int:
        return self._config.tick_ms

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def elapsed_ms(self) -> int:
        return self._elapsed_ms

    @property
    def sprites(self) -> tuple[Sprite, ...]:
        return tuple(self._sprites)

    def add(self, sprite: Sprite) -> None:
        if sprite not in self._sprites:
            self._sprites.append(sprite)

    def remove(self, sprite: Sprite) -> None:
        try:
            self._sprites.remove(sprite)
        except ValueError:
            pass

    def on_tick(self, hook: TickHook) -> None:
        """Call ``hook(animator, dt)`` after every sprite has thought."""
        self._tick_hooks.append(hook)

    def command_sync(
        self,
        sprites: Sequence[Sprite],
        cmds: Sequence[Sequence[str]],
        sync_tag: str,
    ) -> CommandGroup:
        """command_sync() that also checks every sprite is driven here."""
        for sp in sprites:
            if sp not in self._sprites:
                logger.warning(
                    "Sprite at %r is synced on %r but not driven by this animator",
                    sp.anim, sync_tag,
                )
        return command_sync(sprites, cmds, sync_tag)

    def step(self, dt: int | None = None) -> None:
        if dt is None:
            dt = self._config.tick_ms
        self._tick_number += 1
        self._elapsed_ms += dt
        for sprite in list(self._sprites):
            sprite.think(dt)
        for hook in self._tick_hooks:
            hook(self, dt)

    def run(self, n: int) -> None:
        for _ in range(n):
            self.step()

    def run_until_idle(self, max_ticks: int) -> bool:
        """Step until every sprite is idle.  Returns False if *max_ticks*
        ran out first."""
        for _ in range(max_ticks):
            if all(sp.idle() for sp in self._sprites):
                return True
            self.step()
        return all(sp.idle() for sp in self._sprites)
