"""
Plane-sweep segment intersection.

Pipeline:
1. EventQueue - orders segment endpoints and fixes the probing line
2. SweepLine - keeps active segments ordered and finds neighbour crossings
3. BentleyOttmann / ShamosHoey - drive the queue into the sweep line
"""

from .ratsweep_event import (
    Event,
    EventKind,
    SweepContext,
    compare_events,
    probe_crossing,
)

from .ratsweep_event_queue import (
    EventQueue,
    PROBE_SLOPE_FACTOR,
    probe_slope,
)

from .ratsweep_sweep_line import (
    SweepLine,
)

from .ratsweep_segment_set import (
    unique_segments,
)

from .ratsweep_bentley_ottmann import (
    BentleyOttmann,
)

from .ratsweep_shamos_hoey import (
    ShamosHoey,
)

__all__ = [
    # Events
    'Event',
    'EventKind',
    'SweepContext',
    'compare_events',
    'probe_crossing',
    # Queue and status
    'EventQueue',
    'PROBE_SLOPE_FACTOR',
    'probe_slope',
    'SweepLine',
    'unique_segments',
    # Drivers
    'BentleyOttmann',
    'ShamosHoey',
]
