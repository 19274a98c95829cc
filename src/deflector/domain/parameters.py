# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Parameter edit handling.

Validates and clamps user edits before they reach the physics model,
which itself performs no validation.
"""
import logging
import math
from dataclasses import dataclass, replace

from deflector.domain.deflection_physics import (
    DeflectionConstants,
    SimulationParameters,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterBounds:
    """Inclusive slider range for one editable parameter."""
    minimum: float
    maximum: float
    integer: bool = False


PARAMETER_BOUNDS: dict[str, ParameterBounds] = {
    'radius': ParameterBounds(
        DeflectionConstants.MIN_DISPLAY_RADIUS, DeflectionConstants.MAX_DISPLAY_RADIUS,
    ),
    'mass': ParameterBounds(100.0, 1000.0),
    'velocity': ParameterBounds(1000.0, 10000.0),
    'beta': ParameterBounds(1.0, 4.0, integer=True),
    'speed': ParameterBounds(1.0, 10.0),
}

# Edits that change SimulationParameters, keyed to the field they set.
_PARAMETER_FIELDS = {
    'radius': 'orbit_radius_visual',
    'mass': 'impactor_mass_kg',
    'velocity': 'impactor_velocity_ms',
    'angle': 'impact_angle_deg',
    'beta': 'beta',
}

PARAMETER_NAMES: frozenset[str] = frozenset(_PARAMETER_FIELDS) | {'speed'}

_EJECTA_LABELS = ('None', 'Low', 'Medium', 'High')


def sanitize_parameter(name: str, value: float) -> float:
    """
    Validate one parameter edit and bring it into range.

    Angles are normalized into [0, 360); β is rounded to the nearest
    level; everything else is clamped to its slider range.

    Raises:
        ValueError: Unknown parameter name or non-finite value.
    """
    if name not in PARAMETER_NAMES:
        raise ValueError(
            f"Unknown parameter {name!r}; expected one of {sorted(PARAMETER_NAMES)}"
        )
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")

    if name == 'angle':
        return value % 360.0

    bounds = PARAMETER_BOUNDS[name]
    if bounds.integer:
        value = float(round(value))
    clamped = min(max(value, bounds.minimum), bounds.maximum)
    if clamped != value:
        logger.warning(
            "%s=%s outside [%s, %s]; clamped to %s",
            name, value, bounds.minimum, bounds.maximum, clamped,
        )
    return clamped


def apply_parameter(
    params: SimulationParameters, name: str, value: float,
) -> SimulationParameters:
    """Return a copy of params with one sanitized edit applied.

    ``speed`` is an animation setting, not a physics input, and leaves
    params unchanged.
    """
    value = sanitize_parameter(name, value)
    field_name = _PARAMETER_FIELDS.get(name)
    if field_name is None:
        return params
    return replace(params, **{field_name: value})


def sanitize_parameters(params: SimulationParameters) -> SimulationParameters:
    """Apply every editable field of params as an edit.

    Raises:
        ValueError: If any field is non-finite.
    """
    for name, field_name in _PARAMETER_FIELDS.items():
        params = apply_parameter(params, name, getattr(params, field_name))
    return params


def ejecta_intensity_label(beta: float) -> str:
    """Qualitative ejecta label for a β level (1 → 'None' … 4 → 'High')."""
    level = int(round(beta))
    if level < 1 or level > len(_EJECTA_LABELS):
        raise ValueError(f"beta must be in 1..{len(_EJECTA_LABELS)}, got {beta}")
    return _EJECTA_LABELS[level - 1]


def speed_label(speed: float) -> str:
    if speed == 10:
        return 'Fast'
    if speed == 5:
        return 'Normal'
    return 'Slow'
