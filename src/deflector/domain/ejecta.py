# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ejecta plume particle system.

Particles are held in a fixed-capacity numpy arena: one batch is spawned
at impact, then each tick integrates positions, decays opacity linearly
with age and compacts the surviving rows to the front of the buffer.

No external dependencies beyond numpy.
"""
from dataclasses import dataclass

import numpy as np

EJECTA_COUNTS: tuple[int, ...] = (0, 50, 100, 150)   # indexed by β − 1
EJECTA_LIFETIME_S = 4.0       # scaled seconds until opacity reaches 0
EJECTA_SPREAD_DEG = 40.0      # full cone width around the recoil direction
EJECTA_SPEED_MIN = 1.5
EJECTA_SPEED_RANGE = 2.5
EJECTA_SIZE_MIN = 1.0
EJECTA_SIZE_RANGE = 1.5

# Arena columns
_X, _Y, _VX, _VY, _SIZE, _OPACITY, _AGE = range(7)
_N_COLUMNS = 7


@dataclass(frozen=True)
class EjectaParticle:
    """Read-only view of one ejecta particle."""
    x: float
    y: float
    vx: float
    vy: float
    size: float
    opacity: float
    age: float


def ejecta_count(beta: float) -> int:
    """Number of particles spawned for a β level.

    Step function over the four ordinal levels: 0, 50, 100, 150.

    Raises:
        ValueError: If β does not round to 1..4.
    """
    level = int(round(beta))
    if level < 1 or level > len(EJECTA_COUNTS):
        raise ValueError(f"beta must be in 1..{len(EJECTA_COUNTS)}, got {beta}")
    return EJECTA_COUNTS[level - 1]


class EjectaCloud:
    """Arena of live ejecta particles."""

    def __init__(self, capacity: int = max(EJECTA_COUNTS)) -> None:
        self._buffer = np.zeros((capacity, _N_COLUMNS))
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def capacity(self) -> int:
        return self._buffer.shape[0]

    def clear(self) -> None:
        self._count = 0

    def spawn(
        self,
        beta: float,
        origin: tuple[float, float],
        impact_angle_deg: float,
        rng: np.random.Generator,
    ) -> int:
        """
        Replace the cloud with a fresh batch sized by β.

        Particles leave the impact point along the ejecta recoil
        direction (φ + 180°) with a uniform ±20° spread, in screen
        coordinates where heading 0° points up.

        Args:
            beta: Momentum-enhancement level (1-4).
            origin: Impact point (x, y).
            impact_angle_deg: Impact angle φ (degrees).
            rng: Random generator for spread, speed and size.

        Returns:
            Number of particles spawned.
        """
        n = ejecta_count(beta)
        if n > self.capacity:
            self._buffer = np.zeros((n, _N_COLUMNS))
        self._count = n
        if n == 0:
            return 0

        offsets = (rng.random(n) - 0.5) * EJECTA_SPREAD_DEG
        heading_rad = np.radians(impact_angle_deg + 180.0 + offsets - 90.0)
        speed = EJECTA_SPEED_MIN + rng.random(n) * EJECTA_SPEED_RANGE

        batch = self._buffer[:n]
        batch[:, _X] = origin[0]
        batch[:, _Y] = origin[1]
        batch[:, _VX] = speed * np.cos(heading_rad)
        batch[:, _VY] = speed * np.sin(heading_rad)
        batch[:, _SIZE] = EJECTA_SIZE_MIN + rng.random(n) * EJECTA_SIZE_RANGE
        batch[:, _OPACITY] = 1.0
        batch[:, _AGE] = 0.0
        return n

    def advance(self, dt: float) -> int:
        """
        Integrate every particle by dt and drop the fully faded ones.

        Returns:
            Number of particles removed.
        """
        if self._count == 0:
            return 0
        live = self._buffer[:self._count]
        live[:, _X] += live[:, _VX] * dt
        live[:, _Y] += live[:, _VY] * dt
        live[:, _AGE] += dt
        live[:, _OPACITY] = np.maximum(0.0, 1.0 - live[:, _AGE] / EJECTA_LIFETIME_S)

        keep = live[:, _OPACITY] > 0.0
        survivors = int(np.count_nonzero(keep))
        removed = self._count - survivors
        if removed:
            self._buffer[:survivors] = live[keep]
            self._count = survivors
        return removed

    def particles(self) -> tuple[EjectaParticle, ...]:
        return tuple(
            EjectaParticle(*(float(v) for v in row))
            for row in self._buffer[:self._count]
        )
