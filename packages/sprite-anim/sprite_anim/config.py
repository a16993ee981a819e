"""Sprite engine configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnimConfig:
    """Immutable tuning for sprites and the Animator driver.

    Attributes:
        tick_ms: Milliseconds of simulated time per Animator step.
        max_zero_time_steps: Consecutive transitions allowed within one
            think() without consuming time before ZeroTimeCycleError is
            raised.  None derives the bound from the anim graph size plus
            the queued path length.
    """

    tick_ms: int = 50
    max_zero_time_steps: int | None = None

    def __post_init__(self) -> None:
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.max_zero_time_steps is not None and self.max_zero_time_steps < 1:
            raise ValueError(
                f"max_zero_time_steps must be >= 1, got {self.max_zero_time_steps}"
            )
