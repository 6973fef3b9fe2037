"""
Provides helper methods for building point and segment lists from text and
coordinate arrays, and for exporting results to numpy.

Text input is whitespace separated numbers, each parsed exactly with
fractions.Fraction, so "1/3", "-2", and "0.75" are all valid tokens:

    "0 0 4 4  0 4 4 0"   ->  [Segment((0, 0), (4, 4)), Segment((0, 4), (4, 0))]
"""

from fractions import Fraction
from typing import Iterable, List, Sequence

import numpy as np

from ratsweep.mathutils.ratsweep_geometry import Coordinate, Point, Segment


class RatsweepParsingUtils:
    """Provides helper methods for turning raw input into points and segments."""

    @staticmethod
    def _parse_numbers(text: str) -> List[Fraction]:
        numbers = []
        for token in text.split():
            try:
                numbers.append(Fraction(token))
            except (ValueError, ZeroDivisionError) as exc:
                raise ValueError(f"Invalid number token: {token!r}") from exc
        return numbers

    @staticmethod
    def parse_points(text: str) -> List[Point]:
        """
        Parse "x1 y1 x2 y2 ..." into points.

        Raises:
            ValueError: On a bad token or an odd number of values.
        """
        numbers = RatsweepParsingUtils._parse_numbers(text)
        if len(numbers) % 2 == 1:
            raise ValueError(f"Expected an even number of values, got {len(numbers)}")
        return [Point(numbers[i], numbers[i + 1]) for i in range(0, len(numbers), 2)]

    @staticmethod
    def parse_segments(text: str) -> List[Segment]:
        """
        Parse "x1 y1 x2 y2 ..." into segments, four values per segment.

        Blank text gives an empty list.

        Raises:
            ValueError: On a bad token, a value count that is not a multiple
                of 4, or a segment whose endpoints coincide.
        """
        points = RatsweepParsingUtils.parse_points(text)
        if len(points) % 2 == 1:
            raise ValueError("Segment data must contain a multiple of 4 values")
        return [Segment(points[i], points[i + 1]) for i in range(0, len(points), 2)]

    @staticmethod
    def segments_from_coords(xs1: Sequence[Coordinate], ys1: Sequence[Coordinate],
                             xs2: Sequence[Coordinate], ys2: Sequence[Coordinate]) -> List[Segment]:
        """
        Build segments (xs1[i], ys1[i]) - (xs2[i], ys2[i]) from four parallel arrays.

        Accepts lists or numpy integer arrays. Float entries are converted
        exactly.

        Raises:
            ValueError: If the arrays differ in length.
        """
        if not (len(xs1) == len(ys1) == len(xs2) == len(ys2)):
            raise ValueError("All four coordinate arrays must have the same length")

        segments = []
        for x1, y1, x2, y2 in zip(xs1, ys1, xs2, ys2):
            segments.append(Segment(Point(_exact(x1), _exact(y1)), Point(_exact(x2), _exact(y2))))
        return segments

    @staticmethod
    def points_to_array(points: Iterable[Point]) -> np.ndarray:
        """
        Export points as a float64 array of shape (n, 2), sorted by (x, y).

        Rounding happens here only; the sweep itself never sees floats.
        """
        ordered = sorted(points)
        if not ordered:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([[float(p.x), float(p.y)] for p in ordered], dtype=np.float64)

    @staticmethod
    def segments_to_array(segments: Iterable[Segment]) -> np.ndarray:
        """Export segments as a float64 array of shape (n, 4): x1, y1, x2, y2."""
        rows = [[float(s.p1.x), float(s.p1.y), float(s.p2.x), float(s.p2.y)] for s in segments]
        if not rows:
            return np.empty((0, 4), dtype=np.float64)
        return np.array(rows, dtype=np.float64)


def _exact(value: Coordinate) -> Coordinate:
    # numpy scalars are not Fraction-compatible; unwrap them first.
    if isinstance(value, np.generic):
        return value.item()
    return value
