"""Gradient selection for the improved Perlin lattice.

The hash picks a gradient direction and the functions return its dot product
with the corner offset. The bit tests reproduce Ken Perlin's reference
gradient table exactly; changing them changes every noise value.
"""
from __future__ import annotations


def grad2(h: int, x: int, y: int) -> int:
    """One of four diagonal gradients: bit 0 flips ``x``, bit 1 flips ``y``."""
    h &= 3
    u = -x if h & 1 else x
    v = -y if h & 2 else y
    return u + v


def grad3(h: int, x: int, y: int, z: int) -> int:
    """One of the twelve cube-edge gradients (16 hashes, four repeated)."""
    h &= 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (-u if h & 1 else u) + (-v if h & 2 else v)
