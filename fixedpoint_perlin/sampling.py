"""Grid sampling of the noise field for inspection and CSV dumps.

The array kernels mirror :func:`fixedpoint_perlin.noise.noise2d` and
:func:`fixedpoint_perlin.noise.noise3d` operation for operation on ``int64``
arrays, so a sampled grid is bit-identical to calling the scalar functions
point by point (for coordinates that fit in 48 bits).
"""
from __future__ import annotations

import csv
import logging
from typing import Optional, TextIO

import numpy as np

from .config import SamplingSettings
from .fixed import (
    BLEND_BITS,
    CELL_MASK,
    FRACTION_BITS,
    FRACTION_MASK,
    ONE,
    SEGMENT_BITS,
    SEGMENT_MASK,
)
from .tables import FADE_BITS, FADE_MASK, FADE_TABLE, INDEX_MASK, PERMUTATION

LOGGER = logging.getLogger(__name__)

_PERMUTATION = np.asarray(PERMUTATION, dtype=np.int64)
_FADE_TABLE = np.asarray(FADE_TABLE, dtype=np.int64)


# ----------------------------- Array kernels ----------------------------- #

def _ptable(i: np.ndarray) -> np.ndarray:
    return _PERMUTATION[i & INDEX_MASK]


def _fade(t: np.ndarray) -> np.ndarray:
    packed = _FADE_TABLE[t >> SEGMENT_BITS]
    lower = (packed >> FADE_BITS) & FADE_MASK
    upper = packed & FADE_MASK
    return lower + (((t & SEGMENT_MASK) * (upper - lower)) >> SEGMENT_BITS)


def _lerp(t: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a + ((t * (b - a)) >> BLEND_BITS)


def _grad2(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    h = h & 3
    return np.where(h & 1, -x, x) + np.where(h & 2, -y, y)


def _grad3(h: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    h = h & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where(h & 1, -u, u) + np.where(h & 2, -v, v)


def _split(values: np.ndarray):
    return (values >> FRACTION_BITS) & CELL_MASK, values & FRACTION_MASK


def noise2d_array(x, y) -> np.ndarray:
    """Vectorized :func:`noise2d` over broadcastable Q16.16 arrays."""

    x, y = np.broadcast_arrays(np.asarray(x, dtype=np.int64), np.asarray(y, dtype=np.int64))
    cx, xf = _split(x)
    cy, yf = _split(y)

    a = _ptable(cx)
    b = _ptable(cx + 1)
    aa = _ptable(a + cy)
    ab = _ptable(a + cy + 1)
    ba = _ptable(b + cy)
    bb = _ptable(b + cy + 1)

    u = _fade(xf)
    bottom = _lerp(u, _grad2(aa, xf, yf), _grad2(ba, xf - ONE, yf))
    top = _lerp(u, _grad2(ab, xf, yf - ONE), _grad2(bb, xf - ONE, yf - ONE))
    return _lerp(_fade(yf), bottom, top)


def noise3d_array(x, y, z) -> np.ndarray:
    """Vectorized :func:`noise3d` over broadcastable Q16.16 arrays."""

    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.int64),
        np.asarray(y, dtype=np.int64),
        np.asarray(z, dtype=np.int64),
    )
    cx, xf = _split(x)
    cy, yf = _split(y)
    cz, zf = _split(z)

    a = _ptable(cx) + cy
    b = _ptable(cx + 1) + cy
    aa = _ptable(a) + cz
    ab = _ptable(a + 1) + cz
    ba = _ptable(b) + cz
    bb = _ptable(b + 1) + cz

    u = _fade(xf)
    v = _fade(yf)
    x1, y1, z1 = xf - ONE, yf - ONE, zf - ONE
    near = _lerp(
        v,
        _lerp(u, _grad3(_ptable(aa), xf, yf, zf), _grad3(_ptable(ba), x1, yf, zf)),
        _lerp(u, _grad3(_ptable(ab), xf, y1, zf), _grad3(_ptable(bb), x1, y1, zf)),
    )
    far = _lerp(
        v,
        _lerp(u, _grad3(_ptable(aa + 1), xf, yf, z1), _grad3(_ptable(ba + 1), x1, yf, z1)),
        _lerp(u, _grad3(_ptable(ab + 1), xf, y1, z1), _grad3(_ptable(bb + 1), x1, y1, z1)),
    )
    return _lerp(_fade(zf), near, far)


# ----------------------------- Plane sampling ---------------------------- #

def sample_coordinates(settings: SamplingSettings):
    """Q16.16 coordinate grids of shape ``(height, width)``."""
    xs = settings.origin_x + settings.step * np.arange(settings.width, dtype=np.int64)
    ys = settings.origin_y + settings.step * np.arange(settings.height, dtype=np.int64)
    return np.meshgrid(xs, ys)


def sample_plane(settings: Optional[SamplingSettings] = None) -> np.ndarray:
    """Sample the field over the configured grid as Q16.16 ``int64`` values."""

    settings = settings or SamplingSettings()
    grid_x, grid_y = sample_coordinates(settings)
    if settings.dimensions == 3:
        samples = noise3d_array(grid_x, grid_y, settings.origin_z)
    else:
        samples = noise2d_array(grid_x, grid_y)
    LOGGER.debug(
        "Sampled %dx%d %dD plane, range [%d, %d]",
        settings.width,
        settings.height,
        settings.dimensions,
        int(samples.min()),
        int(samples.max()),
    )
    return samples


# ----------------------------- CSV export -------------------------------- #

def write_samples_csv(
    samples: np.ndarray,
    handle: TextIO,
    *,
    settings: SamplingSettings,
    real: bool = False,
) -> int:
    """Write ``x, y, value`` rows and return how many samples were written."""

    grid_x, grid_y = sample_coordinates(settings)
    if samples.shape != grid_x.shape:
        raise ValueError(f"Samples shape {samples.shape} does not match grid {grid_x.shape}")
    writer = csv.writer(handle)
    writer.writerow(["x", "y", "value"])
    scale = float(ONE)
    for x, y, value in zip(grid_x.ravel(), grid_y.ravel(), samples.ravel()):
        if real:
            writer.writerow([int(x) / scale, int(y) / scale, int(value) / scale])
        else:
            writer.writerow([int(x), int(y), int(value)])
    return int(samples.size)


def export_samples_csv(
    samples: np.ndarray,
    filepath: str,
    *,
    settings: SamplingSettings,
    real: bool = False,
) -> None:
    with open(filepath, "w", newline="", encoding="utf-8") as handle:
        count = write_samples_csv(samples, handle, settings=settings, real=real)
    LOGGER.info("Wrote %d samples to %s", count, filepath)
