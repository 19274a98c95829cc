# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for frame rendering.

Adapters receive a read-only snapshot after every state change and draw
or record it.
"""
from typing import Protocol, runtime_checkable

from deflector.domain.animation import AnimationSnapshot


@runtime_checkable
class FrameRenderer(Protocol):
    """Port for presenting animation snapshots."""

    def render(self, snapshot: AnimationSnapshot) -> None:
        """Present one snapshot. Must not mutate it or call back into the controller."""
        ...
