"""
Sweep-line status structure.

Holds the segments currently crossing the sweep, ordered bottom to top by
compare_events() under a shared SweepContext, and records every
intersection point found together with the events that produced it.

Neighbouring segments are the only ones tested against each other. Each
event type changes the neighbourhood in a known way:

    START         insert the segment, test it against both new neighbours
    END           remove the segment, test the two segments it separated
    INTERSECTION  remove every segment through the point (ordered as just
                  before it), then reinsert them (ordered as just after it),
                  which reverses their order, and test the new neighbours

Overlapping collinear segments all sit at one position, so a neighbour test
covers the whole collinear run on each side, and a segment entering the
middle of a run is tested against the segments just past the run.
"""

import functools
from typing import Dict, Iterable, List, Optional, Set

from sortedcontainers import SortedKeyList

from ratsweep.mathutils.ratsweep_geometry import Line, Point, Segment
from ratsweep.profiling import perf_marker
from ratsweep.sweep.ratsweep_event import Event, EventKind, SweepContext, compare_events


# Within one event point: finished segments leave, crossing segments swap,
# then new segments enter.
_HANDLING_ORDER = {EventKind.END: 0, EventKind.INTERSECTION: 1, EventKind.START: 2}


class SweepLine:
    """
    Ordered set of active events plus the intersections found so far.

    Args:
        ignore_segment_endings: When True, a point where two segments meet
            only at their endpoints is not reported.
    """

    def __init__(self, ignore_segment_endings: bool = False):
        self.context = SweepContext()
        self.ignore_segment_endings = ignore_segment_endings
        self.queue = None

        # The key wraps each event once; comparisons read self.context live.
        context = self.context
        self._events = SortedKeyList(
            key=functools.cmp_to_key(lambda a, b: compare_events(context, a, b))
        )
        # Point -> insertion-ordered set of contributing events.
        self._intersections: Dict[Point, Dict[Event, None]] = {}

    def attach(self, queue, probe: Line) -> None:
        """Register the queue that receives new intersection events and the initial probe."""
        self.queue = queue
        self.context.probe = probe

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        lines = [f"  line          = {self.context.probe}",
                 f"  intersections = {self.get_intersections()}"]
        lines.extend(f"  {e}" for e in reversed(self._events))
        return "SweepLine {\n" + "\n".join(lines) + "\n}"

    # =========================================================================
    # Status queries
    # =========================================================================

    def events(self) -> List[Event]:
        """Active events, bottom to top."""
        return list(self._events)

    def above(self, event: Event) -> Optional[Event]:
        """The nearest active event strictly above event, or None."""
        idx = self._events.bisect_right(event)
        if idx < len(self._events):
            return self._events[idx]
        return None

    def below(self, event: Event) -> Optional[Event]:
        """The nearest active event strictly below event, or None."""
        idx = self._events.bisect_left(event)
        if idx > 0:
            return self._events[idx - 1]
        return None

    def insert(self, event: Event) -> bool:
        """Add event; False if an equal event is already active."""
        if event in self._events:
            return False
        self._events.add(event)
        return True

    def remove(self, event: Event) -> bool:
        """Remove the active event equal to event; False if there is none."""
        if event not in self._events:
            return False
        self._events.remove(event)
        return True

    def check_order(self) -> None:
        """
        Verify that the active events are strictly ascending.

        Raises:
            RuntimeError: If two neighbours compare equal or out of order.
        """
        active = list(self._events)
        for lower, upper in zip(active, active[1:]):
            if compare_events(self.context, lower, upper) >= 0:
                raise RuntimeError(
                    f"sweep status out of order at {self.context.current}: {lower} !< {upper}"
                )

    # =========================================================================
    # Intersections
    # =========================================================================

    def has_intersections(self) -> bool:
        return bool(self._intersections)

    def last_intersection(self) -> Optional[Point]:
        """The most recently registered intersection point, or None."""
        return next(reversed(self._intersections), None)

    def get_intersections(self) -> Dict[Point, Set[Segment]]:
        """Map every intersection point to the segments passing through it."""
        return {
            point: {e.segment for e in events}
            for point, events in self._intersections.items()
        }

    def check_intersection(self, a: Optional[Event], b: Optional[Event]) -> None:
        """
        Test two neighbouring events for an intersection and record it.

        Intersections right of the probe, or on it above the current point,
        have not been swept yet and are queued as INTERSECTION events.
        """
        if a is None or b is None or a.is_intersection or b.is_intersection:
            return

        p = a.segment.intersection(b.segment)
        if p is None:
            return
        if self.ignore_segment_endings and a.segment.has_ending(p) and b.segment.has_ending(p):
            return

        registered = self._intersections.setdefault(p, {})
        registered[a] = None
        registered[b] = None

        probe = self.context.probe
        if p.is_right_of(probe) or (probe.contains(p) and p.y > self.context.current.y):
            self.queue.offer(p, Event.intersection(p))

    def _collinear_run(self, event: Event) -> List[Event]:
        """event and the active events next to it that lie on the same line."""
        run = [event]
        line = event.segment.line
        for step in (self.above, self.below):
            neighbour = step(event)
            while neighbour is not None and neighbour.segment.line == line:
                run.append(neighbour)
                neighbour = step(neighbour)
        return run

    def _past_run(self, event: Event, step) -> Optional[Event]:
        """The nearest active event beyond event's collinear run, stepping with above or below."""
        line = event.segment.line
        neighbour = step(event)
        while neighbour is not None and neighbour.segment.line == line:
            neighbour = step(neighbour)
        return neighbour

    def check_neighbours(self, a: Optional[Event], b: Optional[Event]) -> None:
        """
        Test two adjacent active events for an intersection.

        Overlapping collinear segments share one position in the status, so
        a segment next to one of them is next to all of them. Every segment
        of a's run is tested against every segment of b's run.
        """
        if a is None or b is None:
            return
        for x in self._collinear_run(a):
            for y in self._collinear_run(b):
                if x is not y:
                    self.check_intersection(x, y)

    # =========================================================================
    # Event handling
    # =========================================================================

    def sweep_to(self, event: Event) -> None:
        self.context.move_to(event.point)

    def handle(self, events: Iterable[Event]) -> None:
        """
        Process every event anchored at one point.

        Args:
            events: The batch returned by EventQueue.poll().
        """
        events = list(events)
        if not events:
            return

        with perf_marker("sweep_handle"):
            self.sweep_to(events[0])

            # Events sharing a point meet there.
            if not self.ignore_segment_endings and len(events) > 1:
                for i, a in enumerate(events):
                    for b in events[i + 1:]:
                        self.check_intersection(a, b)

            for event in sorted(events, key=lambda e: _HANDLING_ORDER[e.kind]):
                self._handle_event(event)

    def _handle_event(self, event: Event) -> None:
        context = self.context

        if event.kind is EventKind.START:
            context.before = False
            self.insert(event)
            self.check_neighbours(event, self._past_run(event, self.above))
            self.check_neighbours(event, self._past_run(event, self.below))

        elif event.kind is EventKind.END:
            context.before = True
            self.remove(event)
            self.check_neighbours(self.above(event), self.below(event))

        else:
            context.before = True
            removed = [e for e in self._intersections[event.point] if self.remove(e)]
            context.before = False
            # Reinsert in reverse removal order.
            for e in reversed(removed):
                self.insert(e)
                self.check_neighbours(e, self._past_run(e, self.above))
                self.check_neighbours(e, self._past_run(e, self.below))
