"""
ratsweep Engine - Main entry point for segment intersection queries.

Usage:
    from ratsweep import run, SweepConfig

    # Every intersection, with defaults
    result = run(segments)
    result.points            # set of Points
    result.intersections     # Point -> set of Segments

    # Only ask whether anything intersects
    result = run(segments, mode='first')
    result.point             # a Point or None

    # With configuration
    config = SweepConfig(mode='first', ignore_segment_endings=True)
    result = run(segments, config=config)

    # With profiling - shows timing for all instrumented code sections
    result = run(segments, profile=True)
    print(result.timings)
    # {'bentley_ottmann': {'count': 1, 'total_ms': 3.1, ...},
    #  'sweep_handle': {'count': 40, 'total_ms': 2.2, ...}, ...}
"""

import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Literal, Optional, Set

import numpy as np

from ratsweep.mathutils.ratsweep_geometry import Point, Segment
from ratsweep.profiling import (
    enable_profiling,
    reset_profile,
    get_profile_results,
    perf_marker,
)
from ratsweep.ratsweep_parsing_utils import RatsweepParsingUtils
from ratsweep.sweep import BentleyOttmann, ShamosHoey, unique_segments
from ratsweep.sweep.ratsweep_event_queue import PROBE_SLOPE_FACTOR


# =============================================================================
# Configuration
# =============================================================================

Mode = Literal['all', 'first']
Method = Literal['sweep', 'naive']

_MODES = ('all', 'first')
_METHODS = ('sweep', 'naive')


@dataclass
class SweepConfig:
    """
    Configuration options for an intersection query.

    Attributes:
        mode: What to compute.
            - 'all': Every intersection point and the segments through it
              (Bentley-Ottmann, default)
            - 'first': Stop at the first intersection found (Shamos-Hoey)

        method: How to compute it.
            - 'sweep': Plane sweep (default)
            - 'naive': Test every pair; quadratic, used as a reference

        ignore_segment_endings: In 'first' mode, skip points where two
            segments only touch at endpoints of both.

        profile: Enable timing profiling of the sweep.
            When True, result.timings holds data from all instrumented code
            sections.

        check_invariants: Verify the sweep status order after every event
            point. Slow; raises RuntimeError on the first violation.

        probe_slope_factor: Multiplier on the probing-line steepness.
    """
    mode: Mode = 'all'
    method: Method = 'sweep'
    ignore_segment_endings: bool = False
    profile: bool = False
    check_invariants: bool = False
    probe_slope_factor: Any = PROBE_SLOPE_FACTOR


@dataclass
class SweepResult:
    """
    Result from an intersection query.

    Attributes:
        intersections: Point -> segments through it. In 'first' mode this
            holds only the point found.
        point: In 'first' mode, the intersection found (or None). In 'all'
            mode, the smallest intersection point in (x, y) order.
        timings: Timing data from profiled code sections (if config.profile=True).
            Each key is a marker name, value contains count, total_ms, avg_ms, min_ms, max_ms.
        stats: Counts describing the input and output.
    """
    intersections: Dict[Point, Set[Segment]] = field(default_factory=dict)
    point: Optional[Point] = None
    timings: Optional[Dict[str, Any]] = None
    stats: Optional[Dict[str, int]] = None

    @property
    def points(self) -> Set[Point]:
        return set(self.intersections)

    @property
    def found(self) -> bool:
        return self.point is not None

    def to_array(self) -> np.ndarray:
        """Intersection points as a float64 (n, 2) array, sorted by (x, y)."""
        return RatsweepParsingUtils.points_to_array(self.intersections)


# =============================================================================
# Helpers
# =============================================================================

def _validate(config: SweepConfig) -> None:
    if config.mode not in _MODES:
        raise ValueError(f"Unknown mode: {config.mode}")
    if config.method not in _METHODS:
        raise ValueError(f"Unknown method: {config.method}")
    if config.mode == 'all' and config.ignore_segment_endings:
        warnings.warn(
            "ignore_segment_endings has no effect when mode='all'",
            UserWarning,
            stacklevel=3,
        )


def _first_naive(segments, ignore_segment_endings: bool) -> Optional[Point]:
    for i, a in enumerate(segments):
        for b in segments[i + 1:]:
            p = a.intersection(b)
            if p is None:
                continue
            if ignore_segment_endings and a.has_ending(p) and b.has_ending(p):
                continue
            return p
    return None


def _collect_stats(segments, intersections: Dict[Point, Set[Segment]]) -> Dict[str, int]:
    """Collect statistics about the query."""
    return {
        'segment_count': len(segments),
        'intersection_count': len(intersections),
        'max_multiplicity': max((len(s) for s in intersections.values()), default=0),
    }


# =============================================================================
# Main API
# =============================================================================

def run(
    segments: Iterable[Segment],
    config: Optional[SweepConfig] = None,
    *,
    # Convenience kwargs that override config
    mode: Optional[Mode] = None,
    method: Optional[Method] = None,
    ignore_segment_endings: Optional[bool] = None,
    profile: Optional[bool] = None,
) -> SweepResult:
    """
    Run an intersection query over a set of segments.

    Args:
        segments: Input segments. Duplicates collapse with a UserWarning.
        config: Configuration options (SweepConfig instance).
        mode: Override config.mode.
        method: Override config.method.
        ignore_segment_endings: Override config.ignore_segment_endings.
        profile: Override config.profile.

    Returns:
        SweepResult with the intersections found.

    Raises:
        ValueError: For an unknown mode or method.
        RuntimeError: If the sweep reaches an inconsistent state.

    Examples:
        result = run(RatsweepParsingUtils.parse_segments("0 0 4 4 0 4 4 0"))
        result.points  # {Point(2, 2)}

        result = run(segments, mode='first', ignore_segment_endings=True)
        if result.found:
            print(result.point)
    """
    # Build effective config
    if config is None:
        config = SweepConfig()

    # Apply overrides
    if mode is not None:
        config.mode = mode
    if method is not None:
        config.method = method
    if ignore_segment_endings is not None:
        config.ignore_segment_endings = ignore_segment_endings
    if profile is not None:
        config.profile = profile

    _validate(config)

    # Setup profiling
    if config.profile:
        reset_profile()
        enable_profiling(True)

    try:
        with perf_marker("prepare"):
            segments = unique_segments(segments)

        sweep_kwargs = dict(
            check_invariants=config.check_invariants,
            probe_factor=config.probe_slope_factor,
        )

        intersections: Dict[Point, Set[Segment]] = {}
        point = None

        if config.mode == 'all':
            if config.method == 'sweep':
                intersections = BentleyOttmann.intersections_map(segments, **sweep_kwargs)
            else:
                intersections = BentleyOttmann.intersections_map_naive(segments)
            point = min(intersections) if intersections else None

        else:
            if config.method == 'sweep':
                point = ShamosHoey.intersection(
                    segments, config.ignore_segment_endings, **sweep_kwargs
                )
            else:
                with perf_marker("first_naive"):
                    point = _first_naive(segments, config.ignore_segment_endings)
            if point is not None:
                intersections = {
                    point: {s for s in segments if s.contains(point)}
                }

        # Collect timings and stats
        timings = get_profile_results() if config.profile else None
        stats = _collect_stats(segments, intersections)

        return SweepResult(
            intersections=intersections,
            point=point,
            timings=timings,
            stats=stats,
        )

    finally:
        # Always disable profiling when done
        if config.profile:
            enable_profiling(False)
