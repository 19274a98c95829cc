# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Scene geometry for the deflection view.

Screen-space positions and directions a renderer needs to draw the sun,
orbits, target, impactor and reference vectors. Angles follow the screen
convention: 0° points up, 90° points right, y grows downward.

No external dependencies, only stdlib math and dataclasses.
"""
import math
from dataclasses import dataclass

from deflector.domain.deflection_physics import DeflectionDirection


@dataclass(frozen=True)
class _SceneConstants:
    CANVAS_WIDTH: float = 600.0
    CANVAS_HEIGHT: float = 400.0
    TARGET_VISUAL_RADIUS: float = 10.0   # asteroid disc; also the impact distance
    TARGET_ANGLE_DEG: float = 90.0       # impact point sits right of the sun
    VECTOR_LENGTH: float = 40.0
    FLASH_MAX_ALPHA: float = 0.8

    @property
    def CENTER(self) -> tuple[float, float]:
        return self.CANVAS_WIDTH / 2.0, self.CANVAS_HEIGHT / 2.0


SceneConstants: _SceneConstants = _SceneConstants()


@dataclass(frozen=True)
class UnitVectors:
    """Headings (degrees, screen convention) of the impact-frame vectors."""
    tangent_deg: float      # t̂, along-track
    normal_deg: float       # n̂, radial outward
    impactor_deg: float     # ŝ, impactor velocity
    ejecta_deg: float       # ê, ejecta recoil (opposite ŝ)


@dataclass(frozen=True)
class OrbitRing:
    radius: float
    dashed: bool
    style: str      # 'initial' or a DeflectionDirection value


def polar_to_cartesian(
    r: float, theta_deg: float, center_x: float, center_y: float,
) -> tuple[float, float]:
    """Screen position at distance r and heading theta from a center."""
    theta_rad = math.radians(theta_deg - 90.0)
    return (
        center_x + r * math.cos(theta_rad),
        center_y + r * math.sin(theta_rad),
    )


def impact_point(orbit_radius: float) -> tuple[float, float]:
    """Fixed impact location on the initial orbit."""
    cx, cy = SceneConstants.CENTER
    return polar_to_cartesian(orbit_radius, SceneConstants.TARGET_ANGLE_DEG, cx, cy)


def target_position(current_radius: float) -> tuple[float, float]:
    """Asteroid position; moves with the interpolated radius."""
    return impact_point(current_radius)


def unit_vectors(impact_angle_deg: float) -> UnitVectors:
    return UnitVectors(
        tangent_deg=0.0,
        normal_deg=90.0,
        impactor_deg=impact_angle_deg,
        ejecta_deg=impact_angle_deg + 180.0,
    )


def impactor_position(
    distance: float, impact_angle_deg: float, orbit_radius: float,
) -> tuple[float, float]:
    """Impactor position, approaching the impact point against ŝ."""
    ix, iy = impact_point(orbit_radius)
    return polar_to_cartesian(distance, impact_angle_deg + 180.0, ix, iy)


def impact_flash_alpha(distance: float) -> float:
    """Opacity of the impact flash; non-zero once inside the target disc."""
    r = SceneConstants.TARGET_VISUAL_RADIUS
    if distance >= r:
        return 0.0
    return (r - distance) / r * SceneConstants.FLASH_MAX_ALPHA


def orbit_overlay(
    show_final: bool,
    current_radius: float,
    start_radius: float,
    target_radius: float,
) -> tuple[OrbitRing, ...]:
    """
    Orbit rings to draw.

    Before the orbit starts changing only the current orbit is shown.
    Afterwards the target orbit is drawn solid, styled by direction, and
    the initial orbit is drawn dashed.
    """
    if not show_final:
        return (OrbitRing(radius=current_radius, dashed=False, style='initial'),)

    if target_radius > start_radius:
        style = DeflectionDirection.EXPANDING.value
    elif target_radius < start_radius:
        style = DeflectionDirection.CONTRACTING.value
    else:
        style = DeflectionDirection.NONE.value
    return (
        OrbitRing(radius=target_radius, dashed=False, style=style),
        OrbitRing(radius=start_radius, dashed=True, style='initial'),
    )
