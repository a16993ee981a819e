"""
Sprite Viewer
Interactive demo for sprite-anim: commands, facings, and synced attacks.

Two fighters share one sprite document.  Frames are drawn as boxes sized
from the frame rectangles; the box turns white on the tick a fighter's
strike lands.

Controls:
  1 / 2   Select fighter
  W       Walk
  S       Stop
  T       Turn
  Space   Both fighters attack, synced on the strike
  P       Snapshot the selected fighter
  R       Restore the last snapshot
  Esc     Quit
"""
from __future__ import annotations

import logging
import os
import sys

import pygame

from sprite_anim import AnimConfig, Animator, Manager, SnapshotError, Sprite, json_loader

# --- Configuration ---
WIDTH, HEIGHT = 800, 400
FPS = 60
TICK_MS = 20
TITLE = "sprite-anim Viewer"
SPRITE_PATH = os.path.join(os.path.dirname(__file__), "fighter")
SCALE = 3

BG_COLOR = (24, 26, 32)
TEXT_COLOR = (220, 220, 220)
SELECT_COLOR = (250, 210, 60)
STATE_COLORS = {
    "idle": (80, 140, 220),
    "walking": (90, 190, 110),
    "attacking": (220, 90, 80),
}
FLASH_COLOR = (255, 255, 255)
FACING_ARROWS = ["v", "<", "^", ">"]

logger = logging.getLogger("sprite_viewer")


class ViewerState:
    """Holds the animator, the fighters, and UI bookkeeping."""

    def __init__(self) -> None:
        config = AnimConfig(tick_ms=TICK_MS)
        self.manager = Manager(json_loader, seed=42, config=config)
        self.animator = Animator(config)
        self.fighters: list[Sprite] = []
        self.flash: dict[Sprite, int] = {}
        self.selected = 0
        self.snapshot = None

        for _ in range(2):
            sp = self.manager.load_sprite(SPRITE_PATH)
            sp.set_trigger(self._on_trigger)
            self.animator.add(sp)
            self.fighters.append(sp)

        self.animator.on_tick(self._fade_flash)

    def _on_trigger(self, sprite: Sprite, text: str) -> None:
        if text == "hit":
            self.flash[sprite] = 3
            logger.info(
                "Fighter %d strikes at %dms",
                self.fighters.index(sprite) + 1, self.animator.elapsed_ms,
            )

    def _fade_flash(self, animator: Animator, dt: int) -> None:
        for sp in list(self.flash):
            self.flash[sp] -= 1
            if self.flash[sp] <= 0:
                del self.flash[sp]

    @property
    def current(self) -> Sprite:
        return self.fighters[self.selected]

    def command(self, name: str) -> None:
        if not self.current.command(name):
            logger.info("Fighter %d can't %s from %s", self.selected + 1, name, self.current.state)

    def attack(self) -> None:
        group = self.animator.command_sync(
            self.fighters, [["attack"]] * len(self.fighters), "hit"
        )
        logger.info("Synced attack with %d fighters", len(group.sprites))

    def take_snapshot(self) -> None:
        self.snapshot = self.current.capture_state()
        logger.info("Snapshot: %s", self.snapshot.to_dict())

    def restore_snapshot(self) -> None:
        if self.snapshot is None:
            return
        try:
            self.current.restore_state(self.snapshot)
        except SnapshotError as exc:
            logger.warning("Restore failed: %s", exc)


def draw_fighter(screen, font, state: ViewerState, index: int) -> None:
    sp = state.fighters[index]
    w, h = sp.dims()
    w, h = w * SCALE, h * SCALE
    cx = WIDTH * (index + 1) // (len(state.fighters) + 1)
    base_y = HEIGHT - 120
    rect = pygame.Rect(cx - w // 2, base_y - h, w, h)

    color = FLASH_COLOR if sp in state.flash else STATE_COLORS.get(sp.anim_state, TEXT_COLOR)
    pygame.draw.rect(screen, color, rect)
    if index == state.selected:
        pygame.draw.rect(screen, SELECT_COLOR, rect.inflate(8, 8), 2)

    lines = [
        f"{sp.anim} [{FACING_ARROWS[sp.facing % len(FACING_ARROWS)]}]",
        f"state: {sp.state}",
        f"togo: {sp.togo}ms  cmds: {sp.num_pending_cmds()}",
    ]
    for i, line in enumerate(lines):
        surf = font.render(line, True, TEXT_COLOR)
        screen.blit(surf, (cx - surf.get_width() // 2, base_y + 10 + i * 18))


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    state = ViewerState()

    accumulator = 0
    running = True

    while running:
        accumulator += clock.tick(FPS)

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_1:
                    state.selected = 0
                elif event.key == pygame.K_2:
                    state.selected = 1
                elif event.key == pygame.K_w:
                    state.command("walk")
                elif event.key == pygame.K_s:
                    state.command("stop")
                elif event.key == pygame.K_t:
                    state.command("turn")
                elif event.key == pygame.K_SPACE:
                    state.attack()
                elif event.key == pygame.K_p:
                    state.take_snapshot()
                elif event.key == pygame.K_r:
                    state.restore_snapshot()

        # --- Tick ---
        while accumulator >= TICK_MS:
            state.animator.step()
            accumulator -= TICK_MS

        # --- Render ---
        screen.fill(BG_COLOR)
        for i in range(len(state.fighters)):
            draw_fighter(screen, font, state, i)
        status = font.render(
            f"t={state.animator.elapsed_ms}ms  W walk  S stop  T turn  Space attack  P/R snapshot",
            True,
            TEXT_COLOR,
        )
        screen.blit(status, (10, 10))
        pygame.display.flip()

    state.manager.close()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
