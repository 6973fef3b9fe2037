"""ratsweep - exact plane-sweep segment intersection."""
from typing import Dict, Iterable, Optional, Set

__version__ = "0.1.0"

from ratsweep.mathutils import ExtendedRational, Point, Line, Segment
from ratsweep.ratsweep_engine import run, SweepConfig, SweepResult
from ratsweep.ratsweep_parsing_utils import RatsweepParsingUtils
from ratsweep.sweep import BentleyOttmann, ShamosHoey


# =============================================================================
# Shortcuts
# =============================================================================

def intersections(segments: Iterable[Segment]) -> Set[Point]:
    """Every point where two or more segments meet."""
    return BentleyOttmann.intersections(segments)


def intersections_map(segments: Iterable[Segment]) -> Dict[Point, Set[Segment]]:
    """Every intersection point with the segments passing through it."""
    return BentleyOttmann.intersections_map(segments)


def intersection(segments: Iterable[Segment], ignore_segment_endings: bool = False) -> Optional[Point]:
    """One intersection point, or None if no two segments meet."""
    return ShamosHoey.intersection(segments, ignore_segment_endings)


def intersection_exists(segments: Iterable[Segment], ignore_segment_endings: bool = False) -> bool:
    """True if at least two segments meet."""
    return ShamosHoey.intersection_exists(segments, ignore_segment_endings)


__all__ = [
    'run', 'SweepConfig', 'SweepResult',
    'intersections', 'intersections_map', 'intersection', 'intersection_exists',
    'BentleyOttmann', 'ShamosHoey',
    'ExtendedRational', 'Point', 'Line', 'Segment',
    'RatsweepParsingUtils',
]
