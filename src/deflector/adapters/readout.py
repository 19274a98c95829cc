# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Numeric readout formatting for the results panel.

Orbital velocity in km/s, tangential Δv in m/s and Δa/a as a percentage
in exponential notation, plus the deflection direction.
"""
import logging
import math
from dataclasses import dataclass

from deflector.domain.deflection_physics import (
    DeflectionResult,
    deflection_direction,
    visual_radius_to_au,
)

logger = logging.getLogger(__name__)

_NOT_AVAILABLE = "n/a"


@dataclass(frozen=True)
class Readout:
    """Display strings for one DeflectionResult.

    Exponential fields use Python's '.3e' format, which always writes at
    least two exponent digits ('-5.833e-07' rather than '-5.833e-7').
    """
    orbital_velocity_kms: str
    tangential_dv_ms: str
    fractional_sma_change_pct: str
    direction: str
    orbit_radius_au: str


def _fmt(value: float, pattern: str, label: str) -> str:
    if not math.isfinite(value):
        logger.warning("Non-finite %s (%s) in deflection readout", label, value)
        return _NOT_AVAILABLE
    return format(value, pattern)


def format_readout(result: DeflectionResult, orbit_radius_visual: float) -> Readout:
    """Format a deflection result for display."""
    return Readout(
        orbital_velocity_kms=_fmt(result.orbital_velocity_ms / 1000.0, '.2f', 'orbital velocity'),
        tangential_dv_ms=_fmt(result.tangential_dv_ms, '.6f', 'tangential delta-v'),
        fractional_sma_change_pct=_fmt(
            result.fractional_sma_change * 100.0, '.3e', 'delta-a/a',
        ),
        direction=deflection_direction(result).value,
        orbit_radius_au=_fmt(visual_radius_to_au(orbit_radius_visual), '.3e', 'orbit radius'),
    )


def readout_lines(readout: Readout) -> list[str]:
    return [
        f"Orbital velocity v:     {readout.orbital_velocity_kms} km/s",
        f"Tangential delta-v:     {readout.tangential_dv_ms} m/s",
        f"Semi-major axis change: {readout.fractional_sma_change_pct} %",
        f"Deflection:             {readout.direction}",
        f"Initial orbit radius:   {readout.orbit_radius_au} AU",
    ]
