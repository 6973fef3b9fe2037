"""
Exact rational scalar extended with signed infinities and NaN.

Coordinates are plain fractions.Fraction values. Some derived quantities
can leave the finite range though (the slope of a vertical line, the gap
between x-coordinates when there is only one of them), so those are carried
as an ExtendedRational: a Fraction tagged with one of four kinds.

Arithmetic rules:
    - NaN absorbs every operation.
    - inf + (-inf) and inf - inf are NaN, any other sum with an infinite
      operand takes the sign of that operand.
    - A product with an infinite operand is +inf when both operands have the
      same sign (zero counts as positive) and -inf otherwise.
    - Dividing by an exact zero raises ZeroDivisionError. finite / inf is 0,
      inf / finite is inf with the sign of the quotient, inf / inf is NaN.

Ordering puts -inf below every finite value, +inf above, and NaN above
everything. NaN equals only itself so that it can be used as a dict key.
"""

from enum import Enum
from fractions import Fraction
from functools import total_ordering
from numbers import Rational
from typing import Union


class RationalKind(Enum):
    """Tag distinguishing finite values from the special values."""
    NEGATIVE_INFINITY = 0
    FINITE = 1
    POSITIVE_INFINITY = 2
    NAN = 3


Number = Union['ExtendedRational', Fraction, int]


@total_ordering
class ExtendedRational:
    """
    A Fraction, or one of +inf, -inf and NaN.

    Instances are immutable. Use the module-level constants for the special
    values; ExtendedRational(x) always builds a finite value.

    Args:
        value: An int, a Fraction, or a string accepted by Fraction
            (``"3"``, ``"-7/4"``, ``"0.25"``).
        denominator: Optional denominator when value is an integer.
    """
    __slots__ = ('_kind', '_value', '_hash')

    def __init__(self, value: Union[int, Fraction, str] = 0, denominator: int = 1):
        if isinstance(value, ExtendedRational):
            if not value.is_finite():
                raise ValueError(f"cannot build a finite value from {value}")
            value = value._value
        if isinstance(value, float):
            raise TypeError("floats are not exact; pass an int, Fraction or string")
        if denominator == 1:
            fraction = Fraction(value)
        else:
            fraction = Fraction(value, denominator)
        self._kind = RationalKind.FINITE
        self._value = fraction
        self._hash = hash(fraction)

    @classmethod
    def _special(cls, kind: RationalKind) -> 'ExtendedRational':
        obj = cls.__new__(cls)
        obj._kind = kind
        obj._value = Fraction(0)
        obj._hash = hash((kind.name,))
        return obj

    @classmethod
    def coerce(cls, value: Number) -> 'ExtendedRational':
        """Wrap ints and Fractions; return ExtendedRational values unchanged."""
        if isinstance(value, ExtendedRational):
            return value
        if isinstance(value, (int, Rational)):
            return cls(Fraction(value))
        raise TypeError(f"cannot use {type(value).__name__} as an exact scalar")

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def kind(self) -> RationalKind:
        return self._kind

    def is_finite(self) -> bool:
        return self._kind is RationalKind.FINITE

    def is_infinite(self) -> bool:
        return self._kind in (RationalKind.POSITIVE_INFINITY, RationalKind.NEGATIVE_INFINITY)

    def is_nan(self) -> bool:
        return self._kind is RationalKind.NAN

    def is_positive(self) -> bool:
        """True for +inf and for finite values >= 0."""
        if self._kind is RationalKind.FINITE:
            return self._value >= 0
        return self._kind is RationalKind.POSITIVE_INFINITY

    def is_negative(self) -> bool:
        return not self.is_nan() and not self.is_positive()

    def is_zero(self) -> bool:
        return self._kind is RationalKind.FINITE and self._value == 0

    def to_fraction(self) -> Fraction:
        """Return the finite value; raise ValueError for the special values."""
        if self._kind is not RationalKind.FINITE:
            raise ValueError(f"{self} has no finite value")
        return self._value

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Number) -> 'ExtendedRational':
        other = ExtendedRational.coerce(other)
        if self.is_nan() or other.is_nan():
            return NAN
        if self.is_infinite() or other.is_infinite():
            if self.is_infinite() and other.is_infinite() and self._kind is not other._kind:
                return NAN
            return self if self.is_infinite() else other
        return ExtendedRational(self._value + other._value)

    __radd__ = __add__

    def __neg__(self) -> 'ExtendedRational':
        if self._kind is RationalKind.POSITIVE_INFINITY:
            return NEGATIVE_INFINITY
        if self._kind is RationalKind.NEGATIVE_INFINITY:
            return POSITIVE_INFINITY
        if self._kind is RationalKind.NAN:
            return NAN
        return ExtendedRational(-self._value)

    def negate(self) -> 'ExtendedRational':
        return -self

    def __sub__(self, other: Number) -> 'ExtendedRational':
        return self + (-ExtendedRational.coerce(other))

    def __rsub__(self, other: Number) -> 'ExtendedRational':
        return ExtendedRational.coerce(other) + (-self)

    def __mul__(self, other: Number) -> 'ExtendedRational':
        other = ExtendedRational.coerce(other)
        if self.is_nan() or other.is_nan():
            return NAN
        if self.is_infinite() or other.is_infinite():
            if self.is_positive() == other.is_positive():
                return POSITIVE_INFINITY
            return NEGATIVE_INFINITY
        return ExtendedRational(self._value * other._value)

    __rmul__ = __mul__

    def __truediv__(self, other: Number) -> 'ExtendedRational':
        other = ExtendedRational.coerce(other)
        if other.is_zero():
            raise ZeroDivisionError("cannot divide by zero")
        if self.is_nan() or other.is_nan():
            return NAN
        if self.is_infinite() and other.is_infinite():
            return NAN
        if other.is_infinite():
            return ZERO
        if self.is_infinite():
            return self if other.is_positive() else -self
        return ExtendedRational(self._value / other._value)

    def __rtruediv__(self, other: Number) -> 'ExtendedRational':
        return ExtendedRational.coerce(other) / self

    def __abs__(self) -> 'ExtendedRational':
        if self.is_nan():
            return NAN
        if self.is_infinite():
            return POSITIVE_INFINITY
        return ExtendedRational(abs(self._value))

    # =========================================================================
    # Comparison
    # =========================================================================

    def _sort_key(self):
        return (self._kind.value, self._value)

    def __eq__(self, other) -> bool:
        if isinstance(other, (int, Rational)):
            other = ExtendedRational(Fraction(other))
        if not isinstance(other, ExtendedRational):
            return NotImplemented
        return self._kind is other._kind and self._value == other._value

    def __lt__(self, other: Number) -> bool:
        other = ExtendedRational.coerce(other)
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return self._hash

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __float__(self) -> float:
        if self._kind is RationalKind.NAN:
            return float('nan')
        if self._kind is RationalKind.POSITIVE_INFINITY:
            return float('inf')
        if self._kind is RationalKind.NEGATIVE_INFINITY:
            return float('-inf')
        return float(self._value)

    def __repr__(self) -> str:
        if self._kind is RationalKind.FINITE:
            return f"ExtendedRational({str(self._value)!r})"
        return f"ExtendedRational.{self._kind.name}"

    def __str__(self) -> str:
        if self._kind is RationalKind.NAN:
            return "NaN"
        if self._kind is RationalKind.POSITIVE_INFINITY:
            return "Infinity"
        if self._kind is RationalKind.NEGATIVE_INFINITY:
            return "-Infinity"
        return str(self._value)


# =============================================================================
# Constants
# =============================================================================

ZERO = ExtendedRational(0)
ONE = ExtendedRational(1)
MINUS_ONE = ExtendedRational(-1)
THOUSAND = ExtendedRational(1000)
POSITIVE_INFINITY = ExtendedRational._special(RationalKind.POSITIVE_INFINITY)
NEGATIVE_INFINITY = ExtendedRational._special(RationalKind.NEGATIVE_INFINITY)
NAN = ExtendedRational._special(RationalKind.NAN)


def rational_min(a: ExtendedRational, b: ExtendedRational) -> ExtendedRational:
    return a if a < b else b


def rational_max(a: ExtendedRational, b: ExtendedRational) -> ExtendedRational:
    return a if a > b else b
