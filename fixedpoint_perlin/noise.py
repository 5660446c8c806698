"""Deterministic fixed-point Perlin noise in two and three dimensions.

Inputs and outputs are Q16.16 integers. The lattice repeats every 256 cells
along each axis. Results are not clamped.
"""
from __future__ import annotations

from .fixed import CELL_MASK, FRACTION_BITS, FRACTION_MASK, ONE, fade, lerp
from .gradient import grad2, grad3
from .tables import ptable


def noise2d(x: int, y: int) -> int:
    """Classic Perlin gradient noise at the Q16.16 point ``(x, y)``."""

    cx = (x >> FRACTION_BITS) & CELL_MASK
    cy = (y >> FRACTION_BITS) & CELL_MASK
    x &= FRACTION_MASK
    y &= FRACTION_MASK

    a = ptable(cx)
    b = ptable(cx + 1)
    aa = ptable(a + cy)
    ab = ptable(a + cy + 1)
    ba = ptable(b + cy)
    bb = ptable(b + cy + 1)

    u = fade(x)
    bottom = lerp(u, grad2(aa, x, y), grad2(ba, x - ONE, y))
    top = lerp(u, grad2(ab, x, y - ONE), grad2(bb, x - ONE, y - ONE))
    return lerp(fade(y), bottom, top)


def noise3d(x: int, y: int, z: int) -> int:
    """Classic Perlin gradient noise at the Q16.16 point ``(x, y, z)``."""

    cx = (x >> FRACTION_BITS) & CELL_MASK
    cy = (y >> FRACTION_BITS) & CELL_MASK
    cz = (z >> FRACTION_BITS) & CELL_MASK
    x &= FRACTION_MASK
    y &= FRACTION_MASK
    z &= FRACTION_MASK

    # -- Corner hashes ----------------------------------------------------
    a = ptable(cx) + cy
    b = ptable(cx + 1) + cy
    aa = ptable(a) + cz
    ab = ptable(a + 1) + cz
    ba = ptable(b) + cz
    bb = ptable(b + 1) + cz

    # -- Blend x, then y, then z -----------------------------------------
    u = fade(x)
    v = fade(y)
    near = lerp(
        v,
        lerp(u, grad3(ptable(aa), x, y, z), grad3(ptable(ba), x - ONE, y, z)),
        lerp(u, grad3(ptable(ab), x, y - ONE, z), grad3(ptable(bb), x - ONE, y - ONE, z)),
    )
    far = lerp(
        v,
        lerp(u, grad3(ptable(aa + 1), x, y, z - ONE), grad3(ptable(ba + 1), x - ONE, y, z - ONE)),
        lerp(
            u,
            grad3(ptable(ab + 1), x, y - ONE, z - ONE),
            grad3(ptable(bb + 1), x - ONE, y - ONE, z - ONE),
        ),
    )
    return lerp(fade(z), near, far)
