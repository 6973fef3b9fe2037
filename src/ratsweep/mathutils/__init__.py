"""Exact arithmetic and 2D primitives used by the sweep."""

from .ratsweep_rational import (
    ExtendedRational,
    RationalKind,
    ZERO,
    ONE,
    MINUS_ONE,
    THOUSAND,
    POSITIVE_INFINITY,
    NEGATIVE_INFINITY,
    NAN,
    rational_min,
    rational_max,
)

from .ratsweep_geometry import (
    Point,
    Line,
    Segment,
    BoundingBox,
    to_fraction,
)

__all__ = [
    'ExtendedRational',
    'RationalKind',
    'ZERO',
    'ONE',
    'MINUS_ONE',
    'THOUSAND',
    'POSITIVE_INFINITY',
    'NEGATIVE_INFINITY',
    'NAN',
    'rational_min',
    'rational_max',
    'Point',
    'Line',
    'Segment',
    'BoundingBox',
    'to_fraction',
]
