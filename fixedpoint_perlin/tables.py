"""Constant tables: Ken Perlin's permutation and the sampled fade curve.

Both tables are immutable tuples built once at import. The decision-tree
encodings produced by :mod:`fixedpoint_perlin.codec` are rebuilt on demand
for conformance checks and source rendering; runtime lookups index the
tuples directly.
"""
from __future__ import annotations

import logging
import math
from fractions import Fraction
from typing import Sequence, Tuple

from .codec import Node, build_decision_tree, materialize

LOGGER = logging.getLogger(__name__)

TABLE_SIZE = 256
INDEX_MASK = TABLE_SIZE - 1

FADE_BITS = 12
FADE_ONE = 1 << FADE_BITS
FADE_MASK = FADE_ONE - 1

PERMUTATION: Tuple[int, ...] = (
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
)


# -- Fade curve samples ---------------------------------------------------

def fade_sample(index: int, resolution: int = TABLE_SIZE) -> int:
    """Q12 sample of ``6t^5 - 15t^4 + 10t^3`` at ``t = index / resolution``.

    Evaluated with exact rationals and rounded half up, so the table does not
    depend on the host's floating point. Samples that round to 4096 are held
    at 4095 to fit the 12-bit packed field.
    """

    t = Fraction(index, resolution)
    value = FADE_ONE * t * t * t * (t * (t * 6 - 15) + 10)
    return min(math.floor(value + Fraction(1, 2)), FADE_MASK)


def pack_fade_pair(lower: int, upper: int) -> int:
    return (lower & FADE_MASK) << FADE_BITS | (upper & FADE_MASK)


def unpack_fade_pair(packed: int) -> Tuple[int, int]:
    return (packed >> FADE_BITS) & FADE_MASK, packed & FADE_MASK


# One extra sample so the last segment ends at t = 1.
FADE_SAMPLES: Tuple[int, ...] = tuple(fade_sample(i) for i in range(TABLE_SIZE + 1))


def _packed_segment(samples: Sequence[int], index: int) -> int:
    return pack_fade_pair(samples[index], samples[index + 1])


FADE_TABLE: Tuple[int, ...] = tuple(_packed_segment(FADE_SAMPLES, i) for i in range(TABLE_SIZE))


# -- Lookups --------------------------------------------------------------

def ptable(i: int) -> int:
    """Permutation value for ``i``, reduced modulo 256 first."""
    return PERMUTATION[i & INDEX_MASK]


def ftable(i: int) -> int:
    """Packed ``(lower, upper)`` fade segment for ``i`` in ``[0, 255]``."""
    return FADE_TABLE[i]


# -- Decision-tree encodings ----------------------------------------------

def permutation_tree() -> Node:
    return build_decision_tree(PERMUTATION)


def fade_tree() -> Node:
    return build_decision_tree(FADE_SAMPLES, 0, TABLE_SIZE - 1, value_at=_packed_segment)


def verify_tables() -> None:
    """Check that both decision trees reproduce the flat tables exactly."""

    for name, tree, expected in (
        ("permutation", permutation_tree(), PERMUTATION),
        ("fade", fade_tree(), FADE_TABLE),
    ):
        actual = materialize(tree, 0, TABLE_SIZE - 1)
        mismatches = [index for index, (a, b) in enumerate(zip(actual, expected)) if a != b]
        if mismatches:
            raise ValueError(f"{name} decision tree disagrees with table at indices {mismatches[:8]}")
        LOGGER.debug("%s decision tree matches all %d entries", name, len(expected))
