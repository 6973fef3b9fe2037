"""Input normalization shared by the sweep drivers."""

import warnings
from typing import Iterable, List

from ratsweep.mathutils.ratsweep_geometry import Segment


def unique_segments(segments: Iterable[Segment]) -> List[Segment]:
    """
    Collapse duplicate segments, keeping first-seen order.

    Segment(a, b) and Segment(b, a) are the same segment. A UserWarning is
    issued when anything was dropped.

    Raises:
        TypeError: If an item is not a Segment.
    """
    seen = {}
    total = 0
    for segment in segments:
        if not isinstance(segment, Segment):
            raise TypeError(f"expected Segment, got {type(segment).__name__}")
        seen.setdefault(segment, None)
        total += 1

    if len(seen) < total:
        warnings.warn(
            f"{total - len(seen)} duplicate segment(s) collapsed before sweeping",
            UserWarning,
            stacklevel=3,
        )
    return list(seen)
