"""sprite-anim - Graph-driven sprite animation with synced commands."""
from __future__ import annotations

from sprite_anim.animator import Animator
from sprite_anim.config import AnimConfig
from sprite_anim.group import Command, CommandGroup, command_sync
from sprite_anim.loader import json_loader, sprite_from_dict
from sprite_anim.manager import Manager
from sprite_anim.shared import SharedSpriteData
from sprite_anim.sheets import FrameSheet, Sheet, SheetSet
from sprite_anim.sprite import Sprite
from sprite_anim.types import (
    FrameRect,
    GroupStateError,
    SnapshotError,
    SpriteError,
    SpriteState,
    TriggerFunc,
    ZeroTimeCycleError,
)
from sprite_anim.waiters import WaiterRegistry

__all__ = [
    "AnimConfig",
    "Animator",
    "Command",
    "CommandGroup",
    "FrameRect",
    "FrameSheet",
    "GroupStateError",
    "Manager",
    "SharedSpriteData",
    "Sheet",
    "SheetSet",
    "SnapshotError",
    "Sprite",
    "SpriteError",
    "SpriteState",
    "TriggerFunc",
    "WaiterRegistry",
    "ZeroTimeCycleError",
    "command_sync",
    "json_loader",
    "sprite_from_dict",
]
