# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Kinetic-impactor deflection physics.

Maps impactor/target parameters to a tangential velocity perturbation and
the resulting (visually exaggerated) orbital radius. Single-impulse,
instantaneous-transfer approximation around a circular heliocentric orbit.

No external dependencies beyond numpy.
"""
from dataclasses import dataclass
from enum import Enum

import numpy as np


@dataclass(frozen=True)
class _DeflectionConstants:
    """Physical constants and visual calibration for the deflection model."""
    G: float = 6.67430e-11                 # m³/(kg·s²)
    M_SUN: float = 1.989e30                # kg, central body
    M_ASTEROID_PROXY: float = 4.3e10       # kg, target mass proxy
    AU_METERS: float = 149.6e9             # m
    VISUAL_DEFLECTION_MULTIPLIER: float = 1e8
    # Calibration: a visual radius of 250 corresponds to 1.5 AU.
    REFERENCE_VISUAL_RADIUS: float = 250.0
    REFERENCE_DISTANCE_AU: float = 1.5
    # Display range on a 600-wide canvas (half-width minus margin).
    MIN_DISPLAY_RADIUS: float = 50.0
    MAX_DISPLAY_RADIUS: float = 290.0

    @property
    def METERS_PER_VISUAL_UNIT(self) -> float:
        return self.REFERENCE_DISTANCE_AU * self.AU_METERS / self.REFERENCE_VISUAL_RADIUS

    @property
    def AU_PER_VISUAL_UNIT(self) -> float:
        return self.REFERENCE_DISTANCE_AU / self.REFERENCE_VISUAL_RADIUS


DeflectionConstants: _DeflectionConstants = _DeflectionConstants()


@dataclass(frozen=True)
class SimulationParameters:
    """User-controlled inputs for one deflection scenario."""
    impactor_mass_kg: float
    impactor_velocity_ms: float
    orbit_radius_visual: float     # a0, visual units
    impact_angle_deg: float        # φ, measured from the tangent direction
    beta: float                    # momentum-enhancement factor, ordinal 1-4
    target_mass_kg: float = DeflectionConstants.M_ASTEROID_PROXY


DART_DEFAULTS = SimulationParameters(
    impactor_mass_kg=500.0,
    impactor_velocity_ms=6100.0,
    orbit_radius_visual=250.0,
    impact_angle_deg=0.0,
    beta=3.0,
)


@dataclass(frozen=True)
class DeflectionResult:
    """Velocity perturbation and orbit change produced by one impact."""
    orbital_velocity_ms: float      # circular heliocentric speed v
    tangential_dv_ms: float         # signed; > 0 raises the orbit
    fractional_sma_change: float    # Δa/a, physical (not exaggerated)
    new_radius_visual: float        # clamped to the display range


class DeflectionDirection(Enum):
    EXPANDING = "expanding"
    CONTRACTING = "contracting"
    NONE = "none"


def visual_radius_to_m(radius_visual: float) -> float:
    """Physical heliocentric distance (m) for a visual radius."""
    return radius_visual * DeflectionConstants.METERS_PER_VISUAL_UNIT


def visual_radius_to_au(radius_visual: float) -> float:
    """Heliocentric distance (AU) for a visual radius."""
    return radius_visual * DeflectionConstants.AU_PER_VISUAL_UNIT


def _cos_deg(angle_deg: float) -> float:
    """Cosine of an angle in degrees, exact on the quadrant axes."""
    phi = angle_deg % 360.0
    if phi == 90.0 or phi == 270.0:
        return 0.0
    if phi == 0.0:
        return 1.0
    if phi == 180.0:
        return -1.0
    return float(np.cos(np.radians(phi)))


def compute_deflection(
    impactor_mass_kg: float,
    impactor_velocity_ms: float,
    target_mass_kg: float,
    orbit_radius_visual: float,
    impact_angle_deg: float,
    beta: float,
) -> DeflectionResult:
    """
    Orbit change from a single kinetic impact.

        v      = sqrt(G·M_sun / r)
        |Δv|   = (m_i·u / M_a)·(2 − β)
        Δv_t   = |Δv|·cos φ
        Δa/a   = 2·Δv_t / v
        a'     = a0·(1 + Δa/a · K_visual), clamped to the display range

    The (2 − β) factor is kept as-is: β = 2 gives no deflection and β > 2
    reverses the sign. A zero (2 − β) or cos φ gives Δv_t = 0 and a' = a0
    even when m_i·u overflows. Inputs are not validated; NaN inputs
    propagate into the result.

    Args:
        impactor_mass_kg: Impactor mass m_i (kg).
        impactor_velocity_ms: Closing velocity u (m/s).
        target_mass_kg: Target mass M_a (kg).
        orbit_radius_visual: Initial orbital radius a0 (visual units).
        impact_angle_deg: Impact angle φ from the tangent (degrees, any real).
        beta: Momentum-enhancement factor.

    Returns:
        DeflectionResult.
    """
    c = DeflectionConstants

    # Degenerate inputs yield inf/nan instead of raising.
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        r_m = np.float64(visual_radius_to_m(orbit_radius_visual))
        v = float(np.sqrt(c.G * c.M_SUN / r_m))

        momentum = np.float64(impactor_mass_kg * impactor_velocity_ms)
        ratio = float(momentum / target_mass_kg)
        beta_factor = 2.0 - beta
        cos_phi = _cos_deg(impact_angle_deg)
        factors = (ratio, beta_factor, cos_phi)
        if (beta_factor == 0.0 or cos_phi == 0.0) and not np.isnan(factors).any():
            # An overflowed momentum ratio times an exact zero would be NaN.
            dv_t = 0.0
        else:
            dv_t = ratio * beta_factor * cos_phi

        da_a = 0.0 if dv_t == 0.0 else float(np.float64(2.0 * dv_t) / v)
        da_a_visual = da_a * c.VISUAL_DEFLECTION_MULTIPLIER

        new_radius = orbit_radius_visual * (1.0 + da_a_visual)
        new_radius = float(np.clip(new_radius, c.MIN_DISPLAY_RADIUS, c.MAX_DISPLAY_RADIUS))

    return DeflectionResult(
        orbital_velocity_ms=v,
        tangential_dv_ms=dv_t,
        fractional_sma_change=da_a,
        new_radius_visual=new_radius,
    )


def deflection_for(params: SimulationParameters) -> DeflectionResult:
    """compute_deflection over a SimulationParameters bundle."""
    return compute_deflection(
        params.impactor_mass_kg,
        params.impactor_velocity_ms,
        params.target_mass_kg,
        params.orbit_radius_visual,
        params.impact_angle_deg,
        params.beta,
    )


def deflection_direction(result: DeflectionResult) -> DeflectionDirection:
    """Whether the impact raises, lowers, or leaves the orbit unchanged."""
    if result.tangential_dv_ms > 0:
        return DeflectionDirection.EXPANDING
    if result.tangential_dv_ms < 0:
        return DeflectionDirection.CONTRACTING
    return DeflectionDirection.NONE
