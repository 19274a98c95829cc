# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for frame scheduling, rendering and result display.

Clock access and text output are confined to this layer.
"""
from deflector.adapters.frame_schedulers import RealTimeScheduler, SteppingScheduler
from deflector.adapters.phase_trace import PhaseChange, PhaseTraceRenderer
from deflector.adapters.readout import Readout, format_readout, readout_lines

__all__ = [
    'PhaseChange',
    'PhaseTraceRenderer',
    'Readout',
    'RealTimeScheduler',
    'SteppingScheduler',
    'format_readout',
    'readout_lines',
]
