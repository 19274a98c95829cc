# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for the deflection simulator.

Usage:
    # Deflection readout for the DART defaults
    deflector

    # Custom impact
    deflector --mass 800 --velocity 7500 --beta 4 --angle 30

    # Headless animation with synthetic 60 Hz frames
    deflector --animate

    # Animation paced by the wall clock
    deflector --animate --realtime --speed 10
"""
import argparse
import logging
import sys

import numpy as np

from deflector.domain.deflection_physics import (
    DART_DEFAULTS,
    SimulationParameters,
    deflection_for,
)
from deflector.domain.parameters import (
    apply_parameter,
    ejecta_intensity_label,
    sanitize_parameter,
    speed_label,
)
from deflector.domain.animation import AnimationConfig, DeflectionAnimation
from deflector.adapters.frame_schedulers import (
    DEFAULT_FRAME_MS,
    RealTimeScheduler,
    SteppingScheduler,
)
from deflector.adapters.phase_trace import PhaseTraceRenderer
from deflector.adapters.readout import format_readout, readout_lines

# Flags named after the parameter edit they perform
_EDIT_FLAGS = ('radius', 'mass', 'velocity', 'angle', 'beta')


def build_parameters(args: argparse.Namespace) -> SimulationParameters:
    """DART defaults with every flag the user gave applied as an edit."""
    params = DART_DEFAULTS
    for name in _EDIT_FLAGS:
        value = getattr(args, name)
        if value is not None:
            params = apply_parameter(params, name, value)
    return params


def print_readout(params: SimulationParameters) -> None:
    result = deflection_for(params)
    readout = format_readout(result, params.orbit_radius_visual)
    print(
        f"Impactor {params.impactor_mass_kg:g} kg at {params.impactor_velocity_ms:g} m/s, "
        f"phi={params.impact_angle_deg:g} deg, beta={params.beta:g} "
        f"({ejecta_intensity_label(params.beta)} ejecta)"
    )
    for line in readout_lines(readout):
        print(line)
    print(f"New orbit radius (visual): {result.new_radius_visual:.3f}")


def run_animation(
    params: SimulationParameters,
    speed: float,
    realtime: bool = False,
    frame_ms: float = DEFAULT_FRAME_MS,
    seed: int | None = None,
    max_frames: int = 100_000,
) -> tuple[DeflectionAnimation, PhaseTraceRenderer, int]:
    """
    Run one impact animation to completion without a display.

    Returns:
        (animation, trace, frames): the finished controller, the phase
        trace it rendered to, and the number of frames stepped.
    """
    trace = PhaseTraceRenderer(stream=sys.stdout)
    scheduler = RealTimeScheduler() if realtime else SteppingScheduler()
    animation = DeflectionAnimation(
        scheduler,
        trace,
        params=params,
        config=AnimationConfig(),
        rng=np.random.default_rng(seed),
    )
    animation.set_parameter('speed', speed)
    animation.run()
    if realtime:
        frames = scheduler.run()
    else:
        frames = scheduler.run_until_idle(frame_ms, max_frames=max_frames)
    return animation, trace, frames


def main():
    parser = argparse.ArgumentParser(
        description="Simulate a kinetic-impactor asteroid deflection (DART-like)"
    )
    physics = parser.add_argument_group('impact parameters (defaults: DART)')
    physics.add_argument('--mass', type=float, help="Impactor mass in kg (default: 500)")
    physics.add_argument('--velocity', type=float, help="Closing velocity in m/s (default: 6100)")
    physics.add_argument(
        '--radius', type=float,
        help="Initial orbit radius in visual units, 50-290 (default: 250 = 1.5 AU)",
    )
    physics.add_argument(
        '--angle', type=float,
        help="Impact angle from the orbit tangent in degrees (default: 0)",
    )
    physics.add_argument(
        '--beta', type=float,
        help="Momentum-enhancement level 1-4 (default: 3)",
    )

    anim = parser.add_argument_group('animation')
    anim.add_argument(
        '--animate', action='store_true', default=False,
        help="Run the impact animation headless and print phase changes",
    )
    anim.add_argument(
        '--speed', type=float, default=AnimationConfig().default_speed,
        help="Animation speed multiplier 1-10 (default: 5)",
    )
    anim.add_argument(
        '--realtime', action='store_true', default=False,
        help="Pace frames by the wall clock instead of synthetic steps",
    )
    anim.add_argument(
        '--frame-ms', type=float, default=DEFAULT_FRAME_MS,
        help="Synthetic frame interval in ms (default: 16.67)",
    )
    anim.add_argument('--seed', type=int, help="Seed for the ejecta plume")
    anim.add_argument(
        '--max-frames', type=int, default=100_000,
        help="Abort a synthetic run after this many frames (default: 100000)",
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log state-machine details to stderr",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        params = build_parameters(args)
        print_readout(params)

        if args.animate:
            speed = sanitize_parameter('speed', args.speed)
            print(f"\nAnimating at {speed_label(speed)} speed ({speed:g}x)")
            animation, _, frames = run_animation(
                params,
                speed,
                realtime=args.realtime,
                frame_ms=args.frame_ms,
                seed=args.seed,
                max_frames=args.max_frames,
            )
            print(
                f"Finished after {frames} frames: orbit radius "
                f"{animation.state.start_radius:.3f} -> {animation.state.current_radius:.3f}"
            )
    except (ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nAnimation stopped.")


if __name__ == '__main__':
    main()
