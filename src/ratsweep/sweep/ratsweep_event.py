"""
Sweep events and the ordering of active segments.

An event is a plain value: its kind, the point it is anchored at, and the
segment it belongs to (INTERSECTION events have no segment). The vertical
order of two events is not a property of the events alone; it depends on
where the sweep currently is. That state lives in a SweepContext, and
compare_events() reads it on every call:

    1. Both events are intersected with the probing line (a steep line
       through the current event point). The lower crossing sorts first.
    2. If both cross at the same point, the slopes decide. Just before the
       crossing (context.before) the steeper segment is the lower one; just
       after it the order flips.
    3. Collinear segments through the same point are ordered by their
       endpoints so that the order stays total.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from ratsweep.mathutils.ratsweep_geometry import Line, Point, Segment


# =============================================================================
# DATA STRUCTURES
# =============================================================================

class EventKind(Enum):
    """What happens at an event point."""
    START = auto()         # Left endpoint of a segment
    END = auto()           # Right endpoint of a segment
    INTERSECTION = auto()  # Two or more segments cross


@dataclass(frozen=True, eq=False)
class Event:
    """
    A point at which the sweep status changes.

    START and END events of the same segment compare equal, so the END event
    can be used to find and remove the START event held by the sweep line.
    INTERSECTION events are equal when their points are.
    """
    kind: EventKind
    point: Point
    segment: Optional[Segment] = None

    @classmethod
    def start(cls, segment: Segment) -> 'Event':
        return cls(EventKind.START, segment.p1, segment)

    @classmethod
    def end(cls, segment: Segment) -> 'Event':
        return cls(EventKind.END, segment.p2, segment)

    @classmethod
    def intersection(cls, point: Point) -> 'Event':
        return cls(EventKind.INTERSECTION, point)

    @property
    def is_intersection(self) -> bool:
        return self.kind is EventKind.INTERSECTION

    def __eq__(self, other) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        if self.is_intersection != other.is_intersection:
            return False
        if self.is_intersection:
            return self.point == other.point
        return self.segment == other.segment

    def __hash__(self) -> int:
        return hash(self.point) if self.is_intersection else hash(self.segment)

    def __repr__(self) -> str:
        return f"Event({self.kind.name}, {self.point}, {self.segment})"


@dataclass
class SweepContext:
    """
    Mutable sweep position shared by the status structure and its comparator.

    Attributes:
        probe: Probing line through the current event point. Its slope is
            fixed once per sweep by the event queue.
        current: The event point the sweep is at.
        before: True while events are ordered as they were just left of the
            current point (used when removing), False for just right of it
            (used when inserting).
    """
    probe: Optional[Line] = None
    current: Optional[Point] = None
    before: bool = True

    def move_to(self, point: Point) -> None:
        """Move the probing line so that it passes through point."""
        if self.probe is None:
            raise RuntimeError("sweep context has no probing line; build an EventQueue first")
        self.probe = Line.from_slope(self.probe.slope, point)
        self.current = point


# =============================================================================
# ORDERING
# =============================================================================

def probe_crossing(context: SweepContext, event: Event) -> Point:
    """
    Where an event sits on the probing line.

    For a segment event this is where the segment's supporting line crosses
    the probe; the probe is steeper than every input segment, so the crossing
    always exists.
    """
    if event.is_intersection:
        return event.point
    crossing = event.segment.line.intersection(context.probe)
    if crossing is None:
        raise RuntimeError(f"probing line {context.probe} is parallel to {event.segment}")
    return crossing


def compare_events(context: SweepContext, a: Event, b: Event) -> int:
    """
    Compare two events bottom to top at the current sweep position.

    Args:
        context: Current probe line and before/after flag.
        a: First event.
        b: Second event.

    Returns:
        -1 if a is below b, 1 if it is above, 0 only if a == b.

    Raises:
        RuntimeError: If the two events cannot be ordered.
    """
    if a == b:
        return 0

    ip_a = probe_crossing(context, a)
    ip_b = probe_crossing(context, b)
    if ip_a.y != ip_b.y:
        return -1 if ip_a.y < ip_b.y else 1

    if a.segment is None or b.segment is None:
        raise RuntimeError(f"cannot order {a} and {b}: they cross the probe at the same point")

    slope_a = a.segment.slope
    slope_b = b.segment.slope
    if slope_a != slope_b:
        if context.before:
            return -1 if slope_a > slope_b else 1
        return 1 if slope_a > slope_b else -1

    # Collinear through the same probe point: any stable distinction will do.
    # Only overlapping vertical segments get past the x-coordinates.
    sa, sb = a.segment, b.segment
    key_a = (sa.p1.x, sa.p2.x, sa.p1.y, sa.p2.y)
    key_b = (sb.p1.x, sb.p2.x, sb.p1.y, sb.p2.y)
    return -1 if key_a < key_b else 1
