"""
Event queue for the plane sweep.

Events are grouped by the point they are anchored at and handed out one
point at a time, left to right and bottom to top. Within a point, END events
come first so that finished segments leave the status before new ones are
compared against them.

Building the queue also fixes the probing line used by the comparator. Its
slope is

    -(y_span / min_delta_x) * 1000

where y_span is the vertical extent of all segments and min_delta_x the
smallest gap between two distinct endpoint x-coordinates. No input segment
can be that steep, so the probe crosses every non-vertical segment left of
the next distinct x-coordinate.
"""

from typing import Iterable, List, Optional

import numpy as np
from sortedcontainers import SortedDict

from ratsweep.mathutils.ratsweep_geometry import Line, Point, Segment
from ratsweep.mathutils.ratsweep_rational import (
    ExtendedRational,
    ONE,
    POSITIVE_INFINITY,
    THOUSAND,
)
from ratsweep.profiling import perf_marker
from ratsweep.sweep.ratsweep_event import Event, EventKind

# Scales the probe slope well past the steepest possible input segment.
PROBE_SLOPE_FACTOR = THOUSAND

_ORIGIN = Point(0, 0)


def probe_slope(segments: List[Segment],
                factor: ExtendedRational = PROBE_SLOPE_FACTOR) -> ExtendedRational:
    """
    Compute the slope of the probing line for a set of segments.

    With a single distinct x-coordinate every segment is vertical; the gap
    is infinite and the probe ends up horizontal. When every endpoint shares
    one y-coordinate the span is taken as 1 so the probe does not run
    parallel to the (all horizontal) segments.

    Args:
        segments: The non-empty segment set.
        factor: Multiplier on the steepness ratio.

    Returns:
        A finite, non-positive slope.
    """
    xs = np.array([p.x for s in segments for p in (s.p1, s.p2)], dtype=object)
    ys = np.array([p.y for s in segments for p in (s.p1, s.p2)], dtype=object)

    distinct_xs = np.unique(xs)
    gaps = np.diff(distinct_xs)
    if gaps.size == 0:
        min_delta_x = POSITIVE_INFINITY
    else:
        min_delta_x = ExtendedRational(gaps.min())

    y_span = ExtendedRational(ys.max() - ys.min())
    if y_span.is_zero():
        y_span = ONE

    return -((y_span / min_delta_x) * factor)


class EventQueue:
    """
    Ordered map from event point to the events anchored there.

    Args:
        segments: Input segments; duplicates are expected to have been
            collapsed by the caller.
        sweep_line: Status structure to attach to. The queue installs the
            probing line on its context and registers itself as the target
            for newly found intersection events.
        probe_factor: Multiplier on the probing-line steepness.

    Raises:
        ValueError: If segments is empty.
    """

    def __init__(self, segments: Iterable[Segment], sweep_line=None,
                 probe_factor: ExtendedRational = PROBE_SLOPE_FACTOR):
        segments = list(segments)
        if not segments:
            raise ValueError("cannot build an event queue from an empty segment set")

        self._events: SortedDict = SortedDict()

        with perf_marker("event_queue_init"):
            for segment in segments:
                self.offer(segment.p1, Event.start(segment))
                self.offer(segment.p2, Event.end(segment))
            self.slope = probe_slope(segments, probe_factor)

        if sweep_line is not None:
            sweep_line.attach(self, Line.from_slope(self.slope, _ORIGIN))

    def __len__(self) -> int:
        """Number of distinct points still pending."""
        return len(self._events)

    def __repr__(self) -> str:
        lines = [f"  {point} -> {events}" for point, events in self._events.items()]
        return "EventQueue {\n" + "\n".join(lines) + "\n}"

    def is_empty(self) -> bool:
        return not self._events

    def offer(self, point: Point, event: Event) -> None:
        """Queue an event at point. END events go to the front of the list."""
        existing = self._events.get(point)
        if existing is None:
            self._events[point] = [event]
        elif event.kind is EventKind.END:
            existing.insert(0, event)
        else:
            existing.append(event)

    def peek_point(self) -> Optional[Point]:
        """The next point poll() would return events for, or None."""
        if not self._events:
            return None
        return self._events.peekitem(0)[0]

    def poll(self) -> List[Event]:
        """
        Remove and return the events at the smallest pending point.

        Equal events (two INTERSECTION events at the same point) are
        collapsed; the first occurrence keeps its position.

        Raises:
            IndexError: If the queue is empty.
        """
        if not self._events:
            raise IndexError("poll from an empty event queue")
        _, events = self._events.popitem(0)
        return list(dict.fromkeys(events))
