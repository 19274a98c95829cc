# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Impact animation state machine.

Phases run initial → impact → shrinking → complete. Each frame the
controller converts the wall-clock delta into scaled seconds, advances the
impactor, the ejecta cloud and the interpolated orbit radius, and asks the
frame scheduler for the next frame until the ejecta have faded.

Frame scheduling is injected (anything with ``schedule(callback)`` and
``cancel(handle)``), so the machine can be stepped with synthetic time.
"""
import functools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from deflector.domain.deflection_physics import (
    DART_DEFAULTS,
    DeflectionResult,
    SimulationParameters,
    deflection_for,
)
from deflector.domain.ejecta import EjectaCloud, EjectaParticle
from deflector.domain.parameters import (
    apply_parameter,
    sanitize_parameter,
    sanitize_parameters,
)
from deflector.domain.scene_geometry import (
    OrbitRing,
    SceneConstants,
    impact_flash_alpha,
    impact_point,
    impactor_position,
    orbit_overlay,
)

logger = logging.getLogger(__name__)


class Phase(Enum):
    INITIAL = "initial"
    IMPACT = "impact"
    SHRINKING = "shrinking"
    COMPLETE = "complete"


_PHASE_ORDER = (Phase.INITIAL, Phase.IMPACT, Phase.SHRINKING, Phase.COMPLETE)


@dataclass(frozen=True)
class AnimationConfig:
    """Rates and thresholds of the impact animation (visual units, scaled s)."""
    closing_rate: float = 100.0
    impact_distance: float = SceneConstants.TARGET_VISUAL_RADIUS
    impact_snap_distance: float = SceneConstants.TARGET_VISUAL_RADIUS / 2.0
    rebound_distance: float = 25.0
    recoil_rate: float = 20.0
    transition_duration_s: float = 3.0
    approach_start_factor: float = 1.5
    default_speed: float = 5.0


@dataclass
class AnimationState:
    """Mutable per-run state owned by one DeflectionAnimation."""
    start_radius: float
    current_radius: float
    target_radius: float
    impactor_distance: float
    phase: Phase = Phase.INITIAL
    phase_elapsed_s: float = 0.0
    ejecta: EjectaCloud = field(default_factory=EjectaCloud)

    @classmethod
    def at_rest(cls, radius: float, config: AnimationConfig) -> 'AnimationState':
        return cls(
            start_radius=radius,
            current_radius=radius,
            target_radius=radius,
            impactor_distance=config.approach_start_factor * radius,
        )

    def restart(self, radius: float, config: AnimationConfig) -> None:
        """Return to the initial phase around an orbit of the given radius."""
        self.start_radius = radius
        self.current_radius = radius
        self.impactor_distance = config.approach_start_factor * radius
        self.phase = Phase.INITIAL
        self.phase_elapsed_s = 0.0
        self.ejecta.clear()


@dataclass(frozen=True)
class AnimationSnapshot:
    """Read-only view handed to the renderer after each frame."""
    phase: Phase
    impactor_distance: float | None     # only during initial/impact
    current_radius: float
    start_radius: float
    target_radius: float
    particles: tuple[EjectaParticle, ...]
    deflection: DeflectionResult
    parameters: SimulationParameters
    running: bool

    def orbit_rings(self) -> tuple[OrbitRing, ...]:
        """Orbits to draw; the final orbit appears once the radius starts moving."""
        show_final = self.phase in (Phase.SHRINKING, Phase.COMPLETE)
        return orbit_overlay(
            show_final, self.current_radius, self.start_radius, self.target_radius,
        )

    def impactor_xy(self) -> tuple[float, float] | None:
        if self.impactor_distance is None:
            return None
        return impactor_position(
            self.impactor_distance, self.parameters.impact_angle_deg, self.start_radius,
        )

    def flash_alpha(self) -> float:
        if self.impactor_distance is None:
            return 0.0
        return impact_flash_alpha(self.impactor_distance)


class DeflectionAnimation:
    """
    Owns the animation state and drives it from scheduler callbacks.

    Only one frame callback is ever pending. Each cancellation bumps a
    generation counter, and callbacks carrying an older generation are
    ignored, so a stale frame can never mutate a newer run.

    Starting parameters go through the same sanitizing as edits, so β is
    an integer level in 1..4 and non-finite values raise ValueError here
    rather than mid-run.
    """

    def __init__(
        self,
        scheduler: Any,
        renderer: Any | None = None,
        params: SimulationParameters = DART_DEFAULTS,
        config: AnimationConfig = AnimationConfig(),
        rng: np.random.Generator | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._renderer = renderer
        self._params = sanitize_parameters(params)
        self._config = config
        self._rng = rng if rng is not None else np.random.default_rng()
        self._speed = config.default_speed
        self._state = AnimationState.at_rest(self._params.orbit_radius_visual, config)
        self._result = self._recompute()
        self._pending: Any = None
        self._generation = 0
        self._last_timestamp_ms: float | None = None
        self._running = False

    # ── Read access ─────────────────────────────────────────────────

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def parameters(self) -> SimulationParameters:
        return self._params

    @property
    def deflection(self) -> DeflectionResult:
        return self._result

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def is_running(self) -> bool:
        return self._running

    def snapshot(self) -> AnimationSnapshot:
        s = self._state
        approaching = s.phase in (Phase.INITIAL, Phase.IMPACT)
        return AnimationSnapshot(
            phase=s.phase,
            impactor_distance=s.impactor_distance if approaching else None,
            current_radius=s.current_radius,
            start_radius=s.start_radius,
            target_radius=s.target_radius,
            particles=s.ejecta.particles(),
            deflection=self._result,
            parameters=self._params,
            running=self._running,
        )

    # ── User intents ────────────────────────────────────────────────

    def run(self) -> None:
        """Start a fresh impact run with the current parameters."""
        self._cancel_pending()
        self._state.restart(self._params.orbit_radius_visual, self._config)
        self._result = self._recompute()
        self._last_timestamp_ms = None
        self._running = True
        logger.info(
            "Impact run started: a0=%.1f, beta=%s, phi=%.1f deg, target radius %.3f",
            self._params.orbit_radius_visual, self._params.beta,
            self._params.impact_angle_deg, self._state.target_radius,
        )
        self._publish()
        self._request_frame()

    def replay(self) -> None:
        """Run the same scenario again."""
        self.run()

    def reset(self) -> None:
        """Stop any run and restore the DART default scenario."""
        self._cancel_pending()
        self._running = False
        self._params = DART_DEFAULTS
        self._state.restart(self._params.orbit_radius_visual, self._config)
        self._result = self._recompute()
        self._last_timestamp_ms = None
        logger.info("Animation reset to default parameters")
        self._publish()

    def set_parameter(self, name: str, value: float) -> None:
        """
        Apply one parameter edit.

        A radius edit cancels the pending frame and restarts the initial
        phase at the new radius (continuing the loop if a run was in
        progress). Other physics edits recompute the deflection without
        changing phase. ``speed`` only changes the time multiplier.

        Raises:
            ValueError: Unknown parameter or non-finite value.
        """
        if name == 'speed':
            self._speed = sanitize_parameter(name, value)
            return

        self._params = apply_parameter(self._params, name, value)

        if name == 'radius':
            was_running = self._running
            self._cancel_pending()
            self._state.restart(self._params.orbit_radius_visual, self._config)
            self._result = self._recompute()
            self._last_timestamp_ms = None
            if was_running:
                self._request_frame()
        else:
            self._result = self._recompute()
        self._publish()

    # ── Time stepping ───────────────────────────────────────────────

    def tick(self, dt: float) -> bool:
        """
        Advance the animation by dt scaled seconds.

        Returns:
            False once the run is complete and every particle has faded.

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        s = self._state
        cfg = self._config

        if s.phase is Phase.INITIAL:
            s.impactor_distance -= cfg.closing_rate * dt
            if s.impactor_distance <= cfg.impact_distance:
                spawned = s.ejecta.spawn(
                    self._params.beta,
                    impact_point(s.start_radius),
                    self._params.impact_angle_deg,
                    self._rng,
                )
                logger.debug("Spawned %d ejecta particles", spawned)
                s.impactor_distance = cfg.impact_snap_distance
                self._enter(Phase.IMPACT)

        elif s.phase is Phase.IMPACT:
            if s.impactor_distance < cfg.rebound_distance:
                s.impactor_distance += cfg.recoil_rate * dt
            s.ejecta.advance(dt)
            if s.impactor_distance >= cfg.rebound_distance:
                self._enter(Phase.SHRINKING)
                s.phase_elapsed_s = 0.0
                self._result = self._recompute()

        elif s.phase is Phase.SHRINKING:
            s.phase_elapsed_s += dt
            s.ejecta.advance(dt)
            duration = cfg.transition_duration_s
            if s.phase_elapsed_s < duration:
                fraction = s.phase_elapsed_s / duration
                s.current_radius = s.start_radius + (s.target_radius - s.start_radius) * fraction
            else:
                s.current_radius = s.target_radius
                self._enter(Phase.COMPLETE)

        else:
            s.ejecta.advance(dt)
            return len(s.ejecta) > 0

        return True

    def _on_frame(self, generation: int, timestamp_ms: float) -> None:
        if generation != self._generation:
            logger.debug("Ignoring stale frame from generation %d", generation)
            return
        self._pending = None

        if self._last_timestamp_ms is None:
            self._last_timestamp_ms = timestamp_ms
        dt = (timestamp_ms - self._last_timestamp_ms) / 1000.0 * self._speed
        self._last_timestamp_ms = timestamp_ms

        try:
            keep_going = self.tick(dt)
            if not keep_going:
                self._running = False
                logger.info("Impact run finished at radius %.3f", self._state.current_radius)
            self._publish()
        except Exception:
            # Nothing is pending any more, so the run is over.
            self._running = False
            raise
        if keep_going:
            self._request_frame()

    # ── Internals ───────────────────────────────────────────────────

    def _recompute(self) -> DeflectionResult:
        result = deflection_for(self._params)
        self._state.target_radius = result.new_radius_visual
        return result

    def _enter(self, phase: Phase) -> None:
        current = self._state.phase
        if _PHASE_ORDER.index(phase) != _PHASE_ORDER.index(current) + 1:
            raise RuntimeError(f"Illegal phase transition {current.value} -> {phase.value}")
        logger.debug("Phase %s -> %s", current.value, phase.value)
        self._state.phase = phase

    def _request_frame(self) -> None:
        self._running = True
        callback = functools.partial(self._on_frame, self._generation)
        self._pending = self._scheduler.schedule(callback)

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._scheduler.cancel(self._pending)
            self._pending = None

    def _publish(self) -> None:
        if self._renderer is not None:
            self._renderer.render(self.snapshot())


def create_deflection_animation(
    scheduler: Any | None,
    renderer: Any | None = None,
    **kwargs: Any,
) -> DeflectionAnimation | None:
    """
    Build a DeflectionAnimation, or None if no frame scheduler is usable.

    A missing renderer is allowed; snapshots are then only available
    through ``snapshot()``.
    """
    if scheduler is None or not (
        callable(getattr(scheduler, 'schedule', None))
        and callable(getattr(scheduler, 'cancel', None))
    ):
        logger.warning("No usable frame scheduler; deflection animation not initialized")
        return None
    return DeflectionAnimation(scheduler, renderer, **kwargs)
