# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for deflection scene geometry."""
import pytest

from deflector.domain.deflection_physics import DeflectionDirection
from deflector.domain.scene_geometry import (
    OrbitRing,
    SceneConstants,
    impact_flash_alpha,
    impact_point,
    impactor_position,
    orbit_overlay,
    polar_to_cartesian,
    target_position,
    unit_vectors,
)


# ── polar_to_cartesian ────────────────────────────────────────────

class TestPolarToCartesian:

    def test_zero_points_up(self):
        """Heading 0° points up the screen (negative y)."""
        x, y = polar_to_cartesian(10.0, 0.0, 0.0, 0.0)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == pytest.approx(-10.0)

    def test_ninety_points_right(self):
        """Heading 90° points right."""
        x, y = polar_to_cartesian(10.0, 90.0, 0.0, 0.0)
        assert x == pytest.approx(10.0)
        assert y == pytest.approx(0.0, abs=1e-12)

    def test_offset_center(self):
        """Results are relative to the given center."""
        x, y = polar_to_cartesian(5.0, 180.0, 100.0, 50.0)
        assert x == pytest.approx(100.0, abs=1e-12)
        assert y == pytest.approx(55.0)


# ── Scene positions ───────────────────────────────────────────────

class TestScenePositions:

    def test_center(self):
        """The sun sits at the canvas center."""
        assert SceneConstants.CENTER == (300.0, 200.0)

    def test_impact_point_right_of_sun(self):
        """The impact point is on the initial orbit, right of the sun."""
        x, y = impact_point(250.0)
        assert x == pytest.approx(550.0)
        assert y == pytest.approx(200.0)

    def test_target_follows_radius(self):
        """The asteroid position tracks the interpolated radius."""
        x, _ = target_position(100.0)
        assert x == pytest.approx(400.0)

    def test_impactor_approaches_against_s_hat(self):
        """For φ = 0 the impactor comes from below the impact point."""
        x, y = impactor_position(375.0, 0.0, 250.0)
        assert x == pytest.approx(550.0)
        assert y == pytest.approx(575.0)

    def test_impactor_at_zero_distance(self):
        """At zero distance the impactor is at the impact point."""
        assert impactor_position(0.0, 33.0, 250.0) == pytest.approx(impact_point(250.0))


class TestUnitVectors:

    def test_headings(self):
        """t̂ at 0°, n̂ at 90°, ŝ at φ, ê opposite ŝ."""
        v = unit_vectors(30.0)
        assert v.tangent_deg == 0.0
        assert v.normal_deg == 90.0
        assert v.impactor_deg == 30.0
        assert v.ejecta_deg == 210.0


class TestImpactFlash:

    def test_no_flash_outside_target(self):
        """No flash before the impactor reaches the target disc."""
        assert impact_flash_alpha(10.0) == 0.0
        assert impact_flash_alpha(300.0) == 0.0

    def test_flash_grows_inward(self):
        """Flash opacity grows as the impactor penetrates."""
        assert impact_flash_alpha(5.0) == pytest.approx(0.4)
        assert impact_flash_alpha(0.0) == pytest.approx(0.8)


# ── orbit_overlay ─────────────────────────────────────────────────

class TestOrbitOverlay:

    def test_before_transition(self):
        """Only the current orbit is drawn before the orbit changes."""
        rings = orbit_overlay(False, 250.0, 250.0, 104.0)
        assert rings == (OrbitRing(radius=250.0, dashed=False, style='initial'),)

    def test_contracting(self):
        """A smaller target orbit is styled contracting; the old orbit is dashed."""
        final, initial = orbit_overlay(True, 180.0, 250.0, 104.0)
        assert final == OrbitRing(radius=104.0, dashed=False, style='contracting')
        assert initial == OrbitRing(radius=250.0, dashed=True, style='initial')

    def test_expanding(self):
        """A larger target orbit is styled expanding."""
        final, _ = orbit_overlay(True, 260.0, 250.0, 290.0)
        assert final.style == 'expanding'

    def test_unchanged(self):
        """No change uses the same vocabulary as DeflectionDirection."""
        final, _ = orbit_overlay(True, 250.0, 250.0, 250.0)
        assert final.style == DeflectionDirection.NONE.value == 'none'


# ── Package exports ───────────────────────────────────────────────

class TestGeometryExports:

    def test_reexported_from_package(self):
        """Renderer geometry is reachable from the package root."""
        import deflector

        assert deflector.orbit_overlay is orbit_overlay
        assert deflector.impactor_position is impactor_position
        assert deflector.impact_flash_alpha is impact_flash_alpha
        assert deflector.unit_vectors is unit_vectors
        assert deflector.target_position is target_position
