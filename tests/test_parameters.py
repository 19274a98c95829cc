# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for parameter edit validation and clamping."""
import logging
import math

import pytest

from deflector.domain.deflection_physics import DART_DEFAULTS
from deflector.domain.parameters import (
    PARAMETER_BOUNDS,
    PARAMETER_NAMES,
    ParameterBounds,
    apply_parameter,
    ejecta_intensity_label,
    sanitize_parameter,
    speed_label,
)


# ── ParameterBounds ───────────────────────────────────────────────

class TestParameterBounds:

    def test_frozen(self):
        """ParameterBounds is immutable."""
        b = ParameterBounds(0.0, 1.0)
        with pytest.raises(AttributeError):
            b.minimum = 2.0

    def test_radius_matches_display_range(self):
        """Radius slider spans the display range of the physics model."""
        assert PARAMETER_BOUNDS['radius'].minimum == 50.0
        assert PARAMETER_BOUNDS['radius'].maximum == 290.0

    def test_dart_defaults_within_bounds(self):
        """Every DART default lies inside its slider range."""
        assert 50.0 <= DART_DEFAULTS.orbit_radius_visual <= 290.0
        assert PARAMETER_BOUNDS['mass'].minimum <= DART_DEFAULTS.impactor_mass_kg <= PARAMETER_BOUNDS['mass'].maximum
        assert PARAMETER_BOUNDS['velocity'].minimum <= DART_DEFAULTS.impactor_velocity_ms <= PARAMETER_BOUNDS['velocity'].maximum

    def test_names(self):
        """Editable names cover physics inputs plus animation speed."""
        assert PARAMETER_NAMES == {'radius', 'mass', 'velocity', 'angle', 'beta', 'speed'}


# ── sanitize_parameter ────────────────────────────────────────────

class TestSanitizeParameter:

    def test_in_range_unchanged(self):
        """Values inside the range pass through."""
        assert sanitize_parameter('mass', 640.0) == 640.0

    def test_clamps_high(self):
        """Values above the range clamp to the maximum."""
        assert sanitize_parameter('radius', 1000.0) == 290.0

    def test_clamps_low(self):
        """Values below the range clamp to the minimum."""
        assert sanitize_parameter('velocity', -5.0) == 1000.0

    def test_clamp_logs_warning(self, caplog):
        """Clamping is reported through logging."""
        with caplog.at_level(logging.WARNING, logger='deflector.domain.parameters'):
            sanitize_parameter('speed', 50.0)
        assert any('clamped' in rec.message for rec in caplog.records)

    def test_beta_rounded(self):
        """β snaps to the nearest ordinal level."""
        assert sanitize_parameter('beta', 2.6) == 3.0
        assert sanitize_parameter('beta', 9.0) == 4.0
        assert sanitize_parameter('beta', 0.2) == 1.0

    def test_angle_normalized(self):
        """Angles are wrapped into [0, 360) rather than clamped."""
        assert sanitize_parameter('angle', -30.0) == pytest.approx(330.0)
        assert sanitize_parameter('angle', 720.0) == 0.0

    @pytest.mark.parametrize("bad", [float('nan'), float('inf'), -float('inf')])
    def test_non_finite_rejected(self, bad):
        """Non-finite values never reach the physics model."""
        with pytest.raises(ValueError, match="finite"):
            sanitize_parameter('mass', bad)

    def test_unknown_name_rejected(self):
        """Unknown parameter names are rejected."""
        with pytest.raises(ValueError, match="Unknown parameter"):
            sanitize_parameter('density', 1.0)

    def test_returns_float(self):
        """Integer input is returned as float."""
        value = sanitize_parameter('mass', 500)
        assert isinstance(value, float)


# ── apply_parameter ───────────────────────────────────────────────

class TestApplyParameter:

    def test_updates_field(self):
        """An edit sets the matching SimulationParameters field."""
        p = apply_parameter(DART_DEFAULTS, 'mass', 750.0)
        assert p.impactor_mass_kg == 750.0
        assert p.impactor_velocity_ms == DART_DEFAULTS.impactor_velocity_ms

    def test_input_untouched(self):
        """Edits return a copy."""
        apply_parameter(DART_DEFAULTS, 'beta', 1.0)
        assert DART_DEFAULTS.beta == 3.0

    def test_radius_field(self):
        """radius edits set orbit_radius_visual (clamped)."""
        p = apply_parameter(DART_DEFAULTS, 'radius', 10.0)
        assert p.orbit_radius_visual == 50.0

    def test_speed_leaves_params(self):
        """speed is not a physics input."""
        assert apply_parameter(DART_DEFAULTS, 'speed', 10.0) is DART_DEFAULTS

    def test_non_finite_rejected(self):
        """apply_parameter validates before replacing."""
        with pytest.raises(ValueError):
            apply_parameter(DART_DEFAULTS, 'velocity', math.nan)


# ── Labels ────────────────────────────────────────────────────────

class TestLabels:

    def test_ejecta_labels(self):
        """β levels map to None/Low/Medium/High ejecta."""
        assert [ejecta_intensity_label(b) for b in (1, 2, 3, 4)] == ['None', 'Low', 'Medium', 'High']

    def test_ejecta_label_out_of_range(self):
        """β outside 1-4 has no label."""
        with pytest.raises(ValueError):
            ejecta_intensity_label(5)

    def test_speed_labels(self):
        """Speed 10 is Fast, 5 is Normal, anything else Slow."""
        assert speed_label(10) == 'Fast'
        assert speed_label(5) == 'Normal'
        assert speed_label(2) == 'Slow'
