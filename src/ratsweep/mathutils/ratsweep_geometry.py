"""
Exact 2D primitives: Point, Line and Segment.

All coordinates are fractions.Fraction. Points order lexicographically by
(x, y), which is the order the sweep visits them in. A Line is stored as
slope and constant: y = slope * x + constant, or x = constant for a vertical
line whose slope is POSITIVE_INFINITY. A Segment keeps its endpoints
normalized so that p1 is the smaller of the two.
"""

import math
from dataclasses import dataclass, field
from fractions import Fraction
from numbers import Rational
from typing import Optional, Tuple, Union

from ratsweep.mathutils.ratsweep_rational import (
    ExtendedRational,
    MINUS_ONE,
    POSITIVE_INFINITY,
    ZERO,
)

Coordinate = Union[int, float, str, Fraction, ExtendedRational]


def to_fraction(value: Coordinate) -> Fraction:
    """
    Convert a coordinate to an exact Fraction.

    Floats are converted exactly (0.1 becomes 3602879701896397/36028797018963968).
    Strings go through Fraction, so "1/3" and "0.25" are both accepted.

    Raises:
        ValueError: For NaN, infinite values and non-finite ExtendedRationals.
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, ExtendedRational):
        return value.to_fraction()
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"coordinate must be finite, got {value}")
    if isinstance(value, (int, float, str, Rational)):
        return Fraction(value)
    raise TypeError(f"unsupported coordinate type: {type(value).__name__}")


# =============================================================================
# Point
# =============================================================================

@dataclass(frozen=True, order=True)
class Point:
    """A point with exact coordinates, ordered by x then y."""
    x: Fraction
    y: Fraction

    def __post_init__(self):
        object.__setattr__(self, 'x', to_fraction(self.x))
        object.__setattr__(self, 'y', to_fraction(self.y))

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"

    def as_tuple(self) -> Tuple[Fraction, Fraction]:
        return (self.x, self.y)

    def translate(self, dx: Coordinate, dy: Coordinate) -> 'Point':
        return Point(self.x + to_fraction(dx), self.y + to_fraction(dy))

    def distance_squared(self, other: 'Point') -> Fraction:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def is_above(self, other: 'Point') -> bool:
        return self.y > other.y

    def is_below(self, other: 'Point') -> bool:
        return self.y < other.y

    def is_left_of(self, other: Union['Point', 'Line']) -> bool:
        if isinstance(other, Line):
            return not other.contains(self) and not self.is_right_of(other)
        return self.x < other.x

    def is_right_of(self, other: Union['Point', 'Line']) -> bool:
        """
        Check whether this point lies right of a point or a line.

        For a line, points on the line are neither left nor right. A point
        strictly below a horizontal line counts as right of it, which matches
        the side a steep negative-slope line leans towards.
        """
        if not isinstance(other, Line):
            return self.x > other.x
        if other.contains(self):
            return False
        if other.is_horizontal():
            return self.y < other.constant
        if other.is_vertical():
            return self.x > other.constant
        return self.x > (self.y - other.constant) / other.slope.to_fraction()


# =============================================================================
# Line
# =============================================================================

@dataclass(frozen=True)
class Line:
    """
    An infinite line.

    Attributes:
        slope: Finite slope, or POSITIVE_INFINITY for a vertical line.
        constant: The y-intercept, or the x-coordinate for a vertical line.
    """
    slope: ExtendedRational
    constant: Fraction

    def __post_init__(self):
        if self.slope.is_nan():
            raise ValueError("the slope of a line cannot be NaN")
        if self.slope.is_infinite():
            object.__setattr__(self, 'slope', POSITIVE_INFINITY)
        object.__setattr__(self, 'constant', to_fraction(self.constant))

    @classmethod
    def through(cls, p1: Point, p2: Point) -> 'Line':
        """Line through two distinct points."""
        if p1 == p2:
            raise ValueError(f"cannot create a line: both points are {p1}")
        if p1.x == p2.x:
            return cls(POSITIVE_INFINITY, p1.x)
        slope = (p2.y - p1.y) / (p2.x - p1.x)
        return cls(ExtendedRational(slope), p1.y - slope * p1.x)

    @classmethod
    def from_slope(cls, slope: Union[ExtendedRational, Fraction, int], point: Point) -> 'Line':
        """Line with the given slope through a point."""
        slope = ExtendedRational.coerce(slope)
        if slope.is_nan():
            raise ValueError("the slope of a line cannot be NaN")
        if slope.is_infinite():
            return cls(POSITIVE_INFINITY, point.x)
        return cls(slope, point.y - slope.to_fraction() * point.x)

    @classmethod
    def vertical(cls, x: Coordinate) -> 'Line':
        return cls(POSITIVE_INFINITY, to_fraction(x))

    @classmethod
    def horizontal(cls, y: Coordinate) -> 'Line':
        return cls(ZERO, to_fraction(y))

    def is_vertical(self) -> bool:
        return self.slope.is_infinite()

    def is_horizontal(self) -> bool:
        return self.slope == ZERO

    def is_parallel_to(self, other: 'Line') -> bool:
        return self.slope == other.slope

    def is_perpendicular_to(self, other: 'Line') -> bool:
        if self.is_vertical():
            return other.is_horizontal()
        if other.is_vertical():
            return self.is_horizontal()
        return self.slope * other.slope == MINUS_ONE

    def contains(self, p: Point) -> bool:
        if self.is_vertical():
            return p.x == self.constant
        return self.slope.to_fraction() * p.x + self.constant == p.y

    def y_at(self, x: Coordinate) -> Fraction:
        """y-coordinate of the line at x; ValueError for a vertical line."""
        if self.is_vertical():
            raise ValueError("a vertical line has no single y at a given x")
        return self.slope.to_fraction() * to_fraction(x) + self.constant

    def x_intercept(self) -> Optional[Fraction]:
        """Where the line crosses the x-axis, None for a horizontal line."""
        if self.is_horizontal():
            return None
        if self.is_vertical():
            return self.constant
        return -self.constant / self.slope.to_fraction()

    def y_intercept(self) -> Optional[Fraction]:
        if self.is_vertical():
            return None
        return self.constant

    def perpendicular_through(self, p: Point) -> 'Line':
        if self.is_horizontal():
            return Line.vertical(p.x)
        if self.is_vertical():
            return Line.horizontal(p.y)
        return Line.from_slope(MINUS_ONE / self.slope, p)

    def intersection(self, other: Union['Line', 'Segment']) -> Optional[Point]:
        """
        Intersection point with another line or a segment.

        Parallel lines (including identical ones) have no intersection.
        """
        if isinstance(other, Segment):
            return other.intersection(self)
        if self.slope == other.slope:
            return None
        if self.is_vertical():
            x = self.constant
            return Point(x, other.y_at(x))
        if other.is_vertical():
            x = other.constant
        else:
            x = (other.constant - self.constant) / (self.slope - other.slope).to_fraction()
        return Point(x, self.y_at(x))

    def __repr__(self) -> str:
        if self.is_vertical():
            return f"Line(x = {self.constant})"
        return f"Line(y = {self.slope}*x + {self.constant})"


# =============================================================================
# Segment
# =============================================================================

@dataclass(frozen=True)
class BoundingBox:
    min_x: Fraction
    max_x: Fraction
    min_y: Fraction
    max_y: Fraction

    def contains(self, p: Point) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y


@dataclass(frozen=True, init=False, eq=False)
class Segment:
    """
    A closed line segment between two distinct points.

    The endpoints are normalized so that p1 < p2 in (x, y) order, which
    means Segment(a, b) == Segment(b, a).
    """
    p1: Point
    p2: Point
    line: Line = field(repr=False)
    bounds: BoundingBox = field(repr=False)

    def __init__(self, a: Union[Point, Tuple[Coordinate, Coordinate]],
                 b: Union[Point, Tuple[Coordinate, Coordinate]]):
        a = a if isinstance(a, Point) else Point(*a)
        b = b if isinstance(b, Point) else Point(*b)
        if a == b:
            raise ValueError(f"cannot create a segment: both endpoints are {a}")
        p1, p2 = (a, b) if a < b else (b, a)
        object.__setattr__(self, 'p1', p1)
        object.__setattr__(self, 'p2', p2)
        object.__setattr__(self, 'line', Line.through(p1, p2))
        object.__setattr__(self, 'bounds', BoundingBox(
            min_x=p1.x, max_x=p2.x,
            min_y=min(p1.y, p2.y), max_y=max(p1.y, p2.y),
        ))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        return self.p1 == other.p1 and self.p2 == other.p2

    def __hash__(self) -> int:
        return hash((self.p1, self.p2))

    def __repr__(self) -> str:
        return f"Segment({self.p1.x}, {self.p1.y} ~ {self.p2.x}, {self.p2.y})"

    @property
    def slope(self) -> ExtendedRational:
        return self.line.slope

    def has_ending(self, p: Point) -> bool:
        return p == self.p1 or p == self.p2

    def contains(self, p: Point) -> bool:
        if self.has_ending(p):
            return True
        return self.line.contains(p) and self.bounds.contains(p)

    def length_squared(self) -> Fraction:
        return self.p1.distance_squared(self.p2)

    def center(self) -> Point:
        return Point((self.p1.x + self.p2.x) / 2, (self.p1.y + self.p2.y) / 2)

    def intersection(self, other: Union['Segment', Line]) -> Optional[Point]:
        """
        Single intersection point with another segment or a line.

        Segments meeting end to end return the shared endpoint, even when
        they are collinear. Segments sharing an endpoint and slope overlap,
        as do any other collinear segments, and return None.
        """
        if isinstance(other, Line):
            p = self.line.intersection(other)
            if p is None or not self.contains(p):
                return None
            return p

        if self.p1 == other.p2:
            return self.p1
        if self.p2 == other.p1:
            return self.p2
        if self.p1 == other.p1:
            return None if self.slope == other.slope else self.p1
        if self.p2 == other.p2:
            return None if self.slope == other.slope else self.p2

        p = self.line.intersection(other.line)
        if p is None or not self.contains(p) or not other.contains(p):
            return None
        return p

    def intersects(self, other: Union['Segment', Line]) -> bool:
        return self.intersection(other) is not None
