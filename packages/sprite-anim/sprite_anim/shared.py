"""SharedSpriteData - read-only data shared by all sprites loaded from one path."""
from __future__ import annotations

from dataclasses import dataclass

from sprite_graph import GraphModel

from sprite_anim.sheets import SheetSet


@dataclass(frozen=True, eq=False)
class SharedSpriteData:
    path: str
    model: GraphModel
    sheets: SheetSet

    @property
    def num_facings(self) -> int:
        return self.sheets.num_facings
