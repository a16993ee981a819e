"""Shared types and errors for the sprite engine."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from sprite_anim.sprite import Sprite


class SpriteError(Exception):
    """Base class for sprite engine errors."""


class SnapshotError(SpriteError):
    """Raised when a SpriteState cannot be decoded or applied."""


class ZeroTimeCycleError(SpriteError):
    """Raised when think() keeps crossing zero-duration frames without
    consuming any time."""


class GroupStateError(SpriteError):
    """Raised when a synced command group finds a member in a state the
    barrier logic never produces."""


@dataclass(frozen=True, slots=True)
class FrameRect:
    x: int
    y: int
    x2: int
    y2: int

    @property
    def width(self) -> int:
        return self.x2 - self.x

    @property
    def height(self) -> int:
        return self.y2 - self.y


@dataclass(frozen=True, slots=True)
class SpriteState:
    """Everything needed to put a sprite back at a particular point.

    Opaque to callers beyond the dict form, which is JSON-compatible and
    round-trips losslessly.
    """

    facing: int
    state_node_id: int
    anim_node_id: int

    def to_dict(self) -> dict[str, int]:
        return {
            "facing": self.facing,
            "state_node_id": self.state_node_id,
            "anim_node_id": self.anim_node_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SpriteState:
        try:
            return cls(
                facing=int(data["facing"]),
                state_node_id=int(data["state_node_id"]),
                anim_node_id=int(data["anim_node_id"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Invalid sprite state: {exc}") from exc


TriggerFunc = Callable[["Sprite", str], None]
"""Called as ``trigger(sprite, text)`` when a node tagged ``func: text`` is entered."""
