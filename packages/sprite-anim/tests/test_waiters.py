"""
Test suite for waiters.

Tests cover:
- WaiterRegistry bookkeeping
- Resolution from think() once the command queue is empty
- Blocking waits from another thread
- Awaiting from asyncio
"""
from __future__ import annotations

import asyncio
import threading
import time

import pytest

from sprite_anim import WaiterRegistry


class TestWaiterRegistry:
    def test_resolve_matching(self):
        reg = WaiterRegistry()
        fut = reg.add(["walking", "running"])
        assert reg.resolve("running") == 1
        assert fut.result(timeout=0) == "running"
        assert reg.pending() == 0

    def test_non_matching_stays(self):
        reg = WaiterRegistry()
        fut = reg.add(["walking"])
        assert reg.resolve("idle") == 0
        assert not fut.done()
        assert len(reg) == 1

    def test_resolves_once(self):
        reg = WaiterRegistry()
        fut = reg.add(["walking"])
        reg.resolve("walking")
        assert reg.resolve("walking") == 0
        assert fut.result(timeout=0) == "walking"

    def test_empty_states_rejected(self):
        with pytest.raises(ValueError):
            WaiterRegistry().add([])

    def test_cancelled_waiter_dropped(self):
        reg = WaiterRegistry()
        fut = reg.add(["walking"])
        assert fut.cancel()
        assert reg.pending() == 0
        assert reg.resolve("walking") == 0


class TestSpriteWaiters:
    def test_resolved_when_state_reached(self, sprite):
        fut = sprite.add_waiter(["walking"])
        sprite.command("walk")
        sprite.think(30)
        assert not fut.done()
        sprite.think(70)
        assert fut.result(timeout=0) == "walking"
        assert sprite.num_waiters() == 0

    def test_already_in_state(self, sprite):
        fut = sprite.add_waiter(["idle"])
        sprite.think(10)
        assert fut.result(timeout=0) == "idle"

    def test_not_resolved_while_commands_pending(self, sprite):
        fut = sprite.add_waiter(["idle"])
        sprite.command("walk")
        sprite.think(0)
        assert not fut.done()
        assert sprite.num_waiters() == 1

    def test_blocking_wait_from_another_thread(self, sprite):
        result = []
        waiter = threading.Thread(target=lambda: result.append(sprite.wait(["walking"])))
        waiter.start()
        deadline = time.monotonic() + 5
        while sprite.num_waiters() == 0 and time.monotonic() < deadline:
            time.sleep(0.001)

        sprite.command("walk")
        for _ in range(10):
            sprite.think(10)
        waiter.join(timeout=5)
        assert result == ["walking"]

    def test_wait_async(self, sprite):
        async def scenario():
            task = asyncio.ensure_future(sprite.wait_async(["walking"]))
            await asyncio.sleep(0)
            sprite.command("walk")
            for _ in range(10):
                sprite.think(10)
            return await asyncio.wait_for(task, timeout=5)

        assert asyncio.run(scenario()) == "walking"
