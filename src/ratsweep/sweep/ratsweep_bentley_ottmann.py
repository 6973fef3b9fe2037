"""
Bentley-Ottmann: report every intersection in a set of segments.

The sweep runs until the event queue is exhausted. Each intersection point
maps to every segment passing through it, so a point where three segments
meet is reported once with three segments.

Runs in O((n + k) log n) comparisons for n segments and k intersections,
against O(n^2) for the all-pairs reference in intersections_naive().
"""

from typing import Dict, Iterable, Set

from ratsweep.mathutils.ratsweep_geometry import Point, Segment
from ratsweep.profiling import perf_marker, profile
from ratsweep.sweep.ratsweep_event_queue import EventQueue, PROBE_SLOPE_FACTOR
from ratsweep.sweep.ratsweep_segment_set import unique_segments
from ratsweep.sweep.ratsweep_sweep_line import SweepLine


class BentleyOttmann:
    """Exhaustive segment-intersection sweep."""

    @staticmethod
    @profile("bentley_ottmann")
    def intersections_map(segments: Iterable[Segment], *,
                          check_invariants: bool = False,
                          probe_factor=PROBE_SLOPE_FACTOR) -> Dict[Point, Set[Segment]]:
        """
        Find every intersection point and the segments through it.

        Args:
            segments: Input segments. Duplicates collapse.
            check_invariants: Verify the status order after every event
                point (slow; for debugging).
            probe_factor: Multiplier on the probing-line steepness.

        Returns:
            Dict mapping each intersection point to the set of segments that
            contain it. Empty for fewer than two segments.

        Raises:
            RuntimeError: If the sweep reaches an inconsistent state.
        """
        segments = unique_segments(segments)
        if len(segments) < 2:
            return {}

        sweep_line = SweepLine()
        queue = EventQueue(segments, sweep_line, probe_factor=probe_factor)

        with perf_marker("sweep_loop"):
            while not queue.is_empty():
                sweep_line.handle(queue.poll())
                if check_invariants:
                    sweep_line.check_order()

        return sweep_line.get_intersections()

    @staticmethod
    def intersections(segments: Iterable[Segment], **kwargs) -> Set[Point]:
        """Every intersection point; see intersections_map() for arguments."""
        return set(BentleyOttmann.intersections_map(segments, **kwargs))

    @staticmethod
    @profile("intersections_naive")
    def intersections_naive(segments: Iterable[Segment]) -> Set[Point]:
        """Test every pair of segments. The reference the sweep must agree with."""
        segments = unique_segments(segments)
        found = set()
        for i, a in enumerate(segments):
            for b in segments[i + 1:]:
                p = a.intersection(b)
                if p is not None:
                    found.add(p)
        return found

    @staticmethod
    def intersections_map_naive(segments: Iterable[Segment]) -> Dict[Point, Set[Segment]]:
        """All-pairs version of intersections_map()."""
        segments = unique_segments(segments)
        found: Dict[Point, Set[Segment]] = {}
        for i, a in enumerate(segments):
            for b in segments[i + 1:]:
                p = a.intersection(b)
                if p is not None:
                    found.setdefault(p, set()).update((a, b))
        return found
