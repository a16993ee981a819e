"""Facing-indexed sprite sheet lookup.

Sheets are an external resource (textures, atlases); the engine only needs
to tell them when a facing becomes active or inactive and to ask where a
frame lives.  ``FrameSheet`` is an in-memory implementation that counts
load/unload calls.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Mapping, Protocol, runtime_checkable

from sprite_anim.types import FrameRect


@runtime_checkable
class Sheet(Protocol):
    """Anything that can be activated per facing and map anim node ids to
    frame rectangles."""

    width: int
    height: int

    def load(self) -> None: ...
    def unload(self) -> None: ...
    def rect(self, node_id: int) -> FrameRect | None: ...


class FrameSheet:
    """Frame rectangles keyed by anim node id, with a reference-counted
    loaded flag."""

    def __init__(
        self,
        rects: Mapping[int, FrameRect] | None = None,
        width: int = 0,
        height: int = 0,
    ) -> None:
        self._rects: dict[int, FrameRect] = dict(rects or {})
        self.width = width
        self.height = height
        self._loads = 0
        self._lock = threading.Lock()

    def load(self) -> None:
        with self._lock:
            self._loads += 1

    def unload(self) -> None:
        with self._lock:
            if self._loads > 0:
                self._loads -= 1

    @property
    def load_count(self) -> int:
        return self._loads

    @property
    def loaded(self) -> bool:
        return self._loads > 0

    def rect(self, node_id: int) -> FrameRect | None:
        return self._rects.get(node_id)


@dataclass(frozen=True)
class SheetSet:
    """One sheet per facing, plus an optional connector sheet holding
    frames shared by every facing."""

    facings: tuple[Sheet, ...]
    connector: Sheet | None = None

    def __post_init__(self) -> None:
        if not self.facings:
            raise ValueError("SheetSet needs at least one facing")

    @property
    def num_facings(self) -> int:
        return len(self.facings)

    def facing(self, index: int) -> Sheet:
        return self.facings[index]

    def lookup(self, facing: int, node_id: int) -> tuple[Sheet, FrameRect] | None:
        """Find the sheet and rectangle for a frame; connector first."""
        if self.connector is not None:
            rect = self.connector.rect(node_id)
            if rect is not None:
                return self.connector, rect
        sheet = self.facings[facing]
        rect = sheet.rect(node_id)
        if rect is not None:
            return sheet, rect
        return None
