# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Phase trace renderer.

Records every snapshot it is handed and reports phase changes as text,
which is what a headless run shows instead of a canvas.
"""
from dataclasses import dataclass
from typing import TextIO

from deflector.ports.render import FrameRenderer
from deflector.domain.animation import AnimationSnapshot, Phase


@dataclass(frozen=True)
class PhaseChange:
    frame: int
    phase: Phase
    current_radius: float
    particle_count: int


class PhaseTraceRenderer(FrameRenderer):
    """Collects snapshots and logs each phase change to a text stream."""

    def __init__(self, stream: TextIO | None = None, keep_snapshots: bool = False) -> None:
        self._stream = stream
        self._keep = keep_snapshots
        self.frames = 0
        self.changes: list[PhaseChange] = []
        self.snapshots: list[AnimationSnapshot] = []
        self.last: AnimationSnapshot | None = None

    def render(self, snapshot: AnimationSnapshot) -> None:
        self.frames += 1
        if self._keep:
            self.snapshots.append(snapshot)
        if self.last is None or self.last.phase is not snapshot.phase:
            change = PhaseChange(
                frame=self.frames,
                phase=snapshot.phase,
                current_radius=snapshot.current_radius,
                particle_count=len(snapshot.particles),
            )
            self.changes.append(change)
            if self._stream is not None:
                print(
                    f"[frame {change.frame:4d}] {change.phase.value:<9} "
                    f"radius={change.current_radius:8.3f} "
                    f"particles={change.particle_count} "
                    f"orbit={snapshot.orbit_rings()[0].style}",
                    file=self._stream,
                )
        self.last = snapshot

    def phases(self) -> list[Phase]:
        return [c.phase for c in self.changes]
