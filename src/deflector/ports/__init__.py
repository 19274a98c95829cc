# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for frame scheduling.

Adapters implement this to drive the animation from a real clock or from
synthetic time steps.
"""
from typing import Any, Callable, Protocol, runtime_checkable

FrameCallback = Callable[[float], None]


@runtime_checkable
class FrameScheduler(Protocol):
    """Port for requesting animation frames."""

    def schedule(self, callback: FrameCallback) -> Any:
        """
        Request one future call of callback(timestamp_ms).

        Returns:
            Handle accepted by cancel().
        """
        ...

    def cancel(self, handle: Any) -> None:
        """Drop a pending callback; unknown or fired handles are ignored."""
        ...
