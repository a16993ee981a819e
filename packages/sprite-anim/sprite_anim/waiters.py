"""Waiter registry - one-shot futures resolved when a sprite reaches a state."""
from __future__ import annotations

import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, eq=False)
class Waiter:
    states: frozenset[str]
    future: Future[str]


class WaiterRegistry:
    """Thread-safe list of waiters for one sprite.

    Callers add waiters from any thread; the thread driving the sprite's
    think() resolves them.  The lock only covers list mutation, never the
    wait itself or the future callbacks.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._waiters: list[Waiter] = []

    def add(self, states: Iterable[str]) -> Future[str]:
        """Register a waiter for any of *states*.  The future's result is the
        state that was reached."""
        wanted = frozenset(states)
        if not wanted:
            raise ValueError("A waiter needs at least one state")
        future: Future[str] = Future()
        with self._lock:
            self._waiters.append(Waiter(wanted, future))
        return future

    def resolve(self, state: str) -> int:
        """Resolve and remove every waiter interested in *state*.

        Cancelled waiters are dropped along the way.  Returns how many
        waiters were resolved.
        """
        with self._lock:
            matched = [w for w in self._waiters if state in w.states]
            self._waiters = [
                w for w in self._waiters
                if state not in w.states and not w.future.cancelled()
            ]
        resolved = 0
        for waiter in matched:
            if waiter.future.set_running_or_notify_cancel():
                waiter.future.set_result(state)
                resolved += 1
        return resolved

    def pending(self) -> int:
        """Number of registered waiters that can still resolve."""
        with self._lock:
            self._waiters = [w for w in self._waiters if not w.future.cancelled()]
            return len(self._waiters)

    def __len__(self) -> int:
        return self.pending()
