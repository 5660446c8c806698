"""Q16.16 fixed-point conventions and the two blending operators.

Integer width requirements for ports to fixed-width integers:

* ``lerp`` multiplies a Q12 factor (13 bits) by a Q16.16 difference, so the
  product needs at least 45 signed bits before the shift. Use 64-bit.
* Corner hashes add a permutation value, a cell index and 1, which never
  exceeds 511.

Python integers are unbounded, so neither product can overflow here and
``>>`` on a negative integer is an arithmetic (flooring) shift.
"""
from __future__ import annotations

from .tables import FADE_BITS, FADE_MASK, ftable

FRACTION_BITS = 16
ONE = 1 << FRACTION_BITS
HALF = ONE >> 1
FRACTION_MASK = ONE - 1
CELL_MASK = 0xFF

BLEND_BITS = FADE_BITS
BLEND_ONE = 1 << BLEND_BITS

# Bits of the Q16.16 fraction used to pick a fade segment vs. interpolate within it.
SEGMENT_BITS = 8
SEGMENT_MASK = (1 << SEGMENT_BITS) - 1


def lerp(t: int, a: int, b: int) -> int:
    """Blend Q16.16 ``a`` toward ``b`` by the Q12 factor ``t``."""
    return a + ((t * (b - a)) >> BLEND_BITS)


def fade(t: int) -> int:
    """Smoothed Q12 blend factor for a Q16.16 fraction ``t`` in ``[0, 65536)``.

    The top eight fraction bits select one of 256 linear segments of the fade
    curve and the bottom eight interpolate inside it.
    """

    packed = ftable(t >> SEGMENT_BITS)
    lower = (packed >> FADE_BITS) & FADE_MASK
    upper = packed & FADE_MASK
    return lower + (((t & SEGMENT_MASK) * (upper - lower)) >> SEGMENT_BITS)


def to_fixed(value: float) -> int:
    """Nearest Q16.16 integer for a real value."""
    return int(round(value * ONE))


def from_fixed(value: int) -> float:
    return value / ONE
