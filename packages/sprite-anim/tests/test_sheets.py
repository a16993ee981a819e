"""Tests for sheets and configuration."""
from __future__ import annotations

import pytest

from sprite_anim import AnimConfig, FrameRect, FrameSheet, SheetSet


class TestFrameSheet:
    def test_load_counting(self):
        sheet = FrameSheet()
        sheet.load()
        sheet.load()
        sheet.unload()
        assert sheet.loaded
        assert sheet.load_count == 1
        sheet.unload()
        sheet.unload()
        assert not sheet.loaded
        assert sheet.load_count == 0

    def test_rect(self):
        sheet = FrameSheet({3: FrameRect(1, 2, 11, 22)})
        assert sheet.rect(3).width == 10
        assert sheet.rect(3).height == 20
        assert sheet.rect(4) is None


class TestSheetSet:
    def test_needs_a_facing(self):
        with pytest.raises(ValueError):
            SheetSet(())

    def test_lookup_prefers_connector(self):
        facing = FrameSheet({0: FrameRect(0, 0, 1, 1), 1: FrameRect(1, 0, 2, 1)})
        connector = FrameSheet({1: FrameRect(5, 5, 6, 6)})
        sheets = SheetSet((facing,), connector)
        assert sheets.lookup(0, 0) == (facing, FrameRect(0, 0, 1, 1))
        assert sheets.lookup(0, 1) == (connector, FrameRect(5, 5, 6, 6))
        assert sheets.lookup(0, 2) is None


class TestAnimConfig:
    def test_defaults(self):
        config = AnimConfig()
        assert config.tick_ms == 50
        assert config.max_zero_time_steps is None

    @pytest.mark.parametrize(
        "kwargs",
        [{"tick_ms": 0}, {"tick_ms": -5}, {"max_zero_time_steps": 0}],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            AnimConfig(**kwargs)
