# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Deflector

Interactive kinetic-impactor deflection simulator modeled on DART.
Computes the tangential velocity change and orbit change produced by an
impact, and drives a phased impact animation (approach, collision, ejecta
plume, orbit transition) from an injectable frame scheduler.
"""

from deflector.domain.deflection_physics import (
    DART_DEFAULTS,
    DeflectionConstants,
    DeflectionDirection,
    DeflectionResult,
    SimulationParameters,
    compute_deflection,
    deflection_direction,
    deflection_for,
    visual_radius_to_au,
    visual_radius_to_m,
)
from deflector.domain.parameters import (
    PARAMETER_BOUNDS,
    PARAMETER_NAMES,
    ParameterBounds,
    apply_parameter,
    ejecta_intensity_label,
    sanitize_parameter,
    sanitize_parameters,
    speed_label,
)
from deflector.domain.ejecta import (
    EjectaCloud,
    EjectaParticle,
    ejecta_count,
)
from deflector.domain.scene_geometry import (
    OrbitRing,
    SceneConstants,
    UnitVectors,
    impact_flash_alpha,
    impact_point,
    impactor_position,
    orbit_overlay,
    polar_to_cartesian,
    target_position,
    unit_vectors,
)
from deflector.domain.animation import (
    AnimationConfig,
    AnimationSnapshot,
    AnimationState,
    DeflectionAnimation,
    Phase,
    create_deflection_animation,
)

__version__ = "1.0.0"

__all__ = [
    "DART_DEFAULTS",
    "DeflectionConstants",
    "DeflectionDirection",
    "DeflectionResult",
    "SimulationParameters",
    "compute_deflection",
    "deflection_direction",
    "deflection_for",
    "visual_radius_to_au",
    "visual_radius_to_m",
    "PARAMETER_BOUNDS",
    "PARAMETER_NAMES",
    "ParameterBounds",
    "apply_parameter",
    "ejecta_intensity_label",
    "sanitize_parameter",
    "sanitize_parameters",
    "speed_label",
    "EjectaCloud",
    "EjectaParticle",
    "ejecta_count",
    "OrbitRing",
    "SceneConstants",
    "UnitVectors",
    "impact_flash_alpha",
    "impact_point",
    "impactor_position",
    "orbit_overlay",
    "polar_to_cartesian",
    "target_position",
    "unit_vectors",
    "AnimationConfig",
    "AnimationSnapshot",
    "AnimationState",
    "DeflectionAnimation",
    "Phase",
    "create_deflection_animation",
]
