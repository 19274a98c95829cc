# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Frame scheduler adapters.

SteppingScheduler advances a synthetic clock in fixed steps, for tests and
headless runs. RealTimeScheduler paces frames against time.monotonic, the
way a browser's animation-frame loop does.
"""
import itertools
import logging
import time
from typing import Any, Callable

from deflector.ports import FrameCallback, FrameScheduler

_log = logging.getLogger(__name__)

DEFAULT_FRAME_MS = 1000.0 / 60.0


class _CallbackQueue:
    """Pending callbacks keyed by handle, fired in request order."""

    def __init__(self) -> None:
        self._pending: dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)

    def schedule(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: Any) -> None:
        self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _fire(self, timestamp_ms: float) -> int:
        # Callbacks requested while firing wait for the next frame.
        due = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback(timestamp_ms)
        return len(due)


class SteppingScheduler(_CallbackQueue, FrameScheduler):
    """Deterministic scheduler driven by explicit step() calls."""

    def __init__(self, start_ms: float = 0.0) -> None:
        super().__init__()
        self._now_ms = start_ms

    @property
    def now_ms(self) -> float:
        return self._now_ms

    def step(self, dt_ms: float = DEFAULT_FRAME_MS) -> int:
        """
        Advance the clock by dt_ms and fire every pending callback.

        Returns:
            Number of callbacks fired.
        """
        if dt_ms < 0:
            raise ValueError(f"dt_ms must be non-negative, got {dt_ms}")
        self._now_ms += dt_ms
        return self._fire(self._now_ms)

    def run_until_idle(
        self, dt_ms: float = DEFAULT_FRAME_MS, max_frames: int = 100_000,
    ) -> int:
        """
        Step until nothing is pending.

        Returns:
            Number of frames stepped.

        Raises:
            RuntimeError: If callbacks are still pending after max_frames.
        """
        frames = 0
        while self.pending:
            if frames >= max_frames:
                raise RuntimeError(
                    f"Animation still running after {max_frames} frames "
                    "(safety iteration limit)"
                )
            self.step(dt_ms)
            frames += 1
        return frames


class RealTimeScheduler(_CallbackQueue, FrameScheduler):
    """Wall-clock scheduler firing pending callbacks at a fixed frame rate."""

    def __init__(
        self,
        frame_rate_hz: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if frame_rate_hz <= 0:
            raise ValueError(f"frame_rate_hz must be positive, got {frame_rate_hz}")
        super().__init__()
        self._interval_s = 1.0 / frame_rate_hz
        self._clock = clock
        self._sleep = sleep

    def run(self, max_seconds: float | None = None) -> int:
        """
        Block, firing frames until nothing is pending or max_seconds elapse.

        Returns:
            Number of frames fired.
        """
        start = self._clock()
        next_frame = start
        frames = 0
        while self.pending:
            now = self._clock()
            if max_seconds is not None and now - start >= max_seconds:
                _log.warning(
                    "Stopping frame loop after %.1f s with %d callback(s) pending",
                    max_seconds, self.pending,
                )
                break
            if now < next_frame:
                self._sleep(next_frame - now)
                now = self._clock()
            next_frame = max(next_frame + self._interval_s, now)
            self._fire(now * 1000.0)
            frames += 1
        return frames
