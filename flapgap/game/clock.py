# flapgap/game/clock.py
"""
Time sources and the fixed-timestep accumulator.

Wall-clock timers (tap debounce, countdown, pause offsets) read a `Clock`,
so tests and the headless env can drive time by hand with `ManualClock`.
Physics never reads the clock: it advances in whole `SIM_DT` ticks handed
out by `FixedStepper`.
"""
from __future__ import annotations
import time
from typing import Protocol

from .config import SIM_DT, MAX_FRAME_S


class Clock(Protocol):
    def now_ms(self) -> float: ...


class SystemClock:
    """Monotonic wall clock in milliseconds."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, ms: float) -> float:
        self._now += float(ms)
        return self._now


class FixedStepper:
    """
    Turns variable frame times into a whole number of fixed simulation steps.
    Leftover time is carried to the next frame.
    """

    def __init__(self, step_s: float = SIM_DT, max_frame_s: float = MAX_FRAME_S):
        if step_s <= 0.0:
            raise ValueError(f"step_s must be > 0, got {step_s}")
        if max_frame_s < step_s:
            raise ValueError("max_frame_s must cover at least one step")
        self.step_s = float(step_s)
        self.max_frame_s = float(max_frame_s)
        self._acc = 0.0

    def consume(self, frame_dt_s: float) -> int:
        """Add one frame's elapsed time, return how many steps are due."""
        dt = min(max(0.0, float(frame_dt_s)), self.max_frame_s)
        self._acc += dt
        steps = int(self._acc / self.step_s)
        self._acc -= steps * self.step_s
        # float residue just under one step counts as a full step
        if self.step_s - self._acc < 1e-9:
            steps += 1
            self._acc = 0.0
        return steps

    def reset(self):
        self._acc = 0.0
