"""
Shamos-Hoey: decide whether any two segments in a set intersect.

Same sweep as Bentley-Ottmann, stopped after the first event point that
yields an intersection. The point returned is the one registered last while
handling that event point: a genuine intersection of the set, deterministic
for a given input, but not necessarily the leftmost one.
"""

from typing import Iterable, Optional

from ratsweep.mathutils.ratsweep_geometry import Point, Segment
from ratsweep.profiling import profile
from ratsweep.sweep.ratsweep_event_queue import EventQueue, PROBE_SLOPE_FACTOR
from ratsweep.sweep.ratsweep_segment_set import unique_segments
from ratsweep.sweep.ratsweep_sweep_line import SweepLine


class ShamosHoey:
    """Early-exit segment-intersection sweep."""

    @staticmethod
    @profile("shamos_hoey")
    def intersection(segments: Iterable[Segment], ignore_segment_endings: bool = False, *,
                     check_invariants: bool = False,
                     probe_factor=PROBE_SLOPE_FACTOR) -> Optional[Point]:
        """
        Find one intersection point, if there is any.

        Args:
            segments: Input segments. Duplicates collapse.
            ignore_segment_endings: Skip points where two segments only touch
                at endpoints of both. An endpoint in the interior of another
                segment still counts.
            check_invariants: Verify the status order after every event point.
            probe_factor: Multiplier on the probing-line steepness.

        Returns:
            The intersection registered last in the first event point that
            found any, or None.
        """
        segments = unique_segments(segments)
        if len(segments) < 2:
            return None

        sweep_line = SweepLine(ignore_segment_endings)
        queue = EventQueue(segments, sweep_line, probe_factor=probe_factor)

        while not queue.is_empty():
            sweep_line.handle(queue.poll())
            if check_invariants:
                sweep_line.check_order()
            if sweep_line.has_intersections():
                return sweep_line.last_intersection()

        return None

    @staticmethod
    def intersection_exists(segments: Iterable[Segment], ignore_segment_endings: bool = False,
                            **kwargs) -> bool:
        """True if at least two segments intersect."""
        return ShamosHoey.intersection(segments, ignore_segment_endings, **kwargs) is not None
