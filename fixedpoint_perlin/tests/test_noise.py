"""Tests for the fixed-point noise field."""
from __future__ import annotations

import math

import pytest

from fixedpoint_perlin import noise2d, noise3d
from fixedpoint_perlin.fixed import HALF, ONE
from fixedpoint_perlin.tables import PERMUTATION

PERIOD = 256 << 16

SAMPLE_POINTS = [
    (ONE // 4, HALF, 3 * ONE // 4),
    (123456, 654321, 99),
    (-70000, 1_000_000, -5),
    (17 * ONE + 333, -2 * ONE - 4000, 40 * ONE + 12345),
    (255 * ONE + ONE - 1, 7, 129 * ONE),
]


# -- Floating-point reference ---------------------------------------------

def _p(i: int) -> int:
    return PERMUTATION[i & 255]


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _grad2(h: int, x: float, y: float) -> float:
    return (-x if h & 1 else x) + (-y if h & 2 else y)


def _grad3(h: int, x: float, y: float, z: float) -> float:
    h &= 15
    u = x if h < 8 else y
    v = y if h < 4 else (x if h in (12, 14) else z)
    return (-u if h & 1 else u) + (-v if h & 2 else v)


def _reference2d(x: float, y: float) -> float:
    cx, cy = math.floor(x), math.floor(y)
    x, y = x - cx, y - cy
    a, b = _p(cx), _p(cx + 1)
    u, v = _fade(x), _fade(y)
    bottom = _lerp(u, _grad2(_p(a + cy), x, y), _grad2(_p(b + cy), x - 1, y))
    top = _lerp(u, _grad2(_p(a + cy + 1), x, y - 1), _grad2(_p(b + cy + 1), x - 1, y - 1))
    return _lerp(v, bottom, top)


def _reference3d(x: float, y: float, z: float) -> float:
    cx, cy, cz = math.floor(x), math.floor(y), math.floor(z)
    x, y, z = x - cx, y - cy, z - cz
    a = _p(cx) + cy
    b = _p(cx + 1) + cy
    aa, ab, ba, bb = _p(a) + cz, _p(a + 1) + cz, _p(b) + cz, _p(b + 1) + cz
    u, v, w = _fade(x), _fade(y), _fade(z)
    near = _lerp(
        v,
        _lerp(u, _grad3(_p(aa), x, y, z), _grad3(_p(ba), x - 1, y, z)),
        _lerp(u, _grad3(_p(ab), x, y - 1, z), _grad3(_p(bb), x - 1, y - 1, z)),
    )
    far = _lerp(
        v,
        _lerp(u, _grad3(_p(aa + 1), x, y, z - 1), _grad3(_p(ba + 1), x - 1, y, z - 1)),
        _lerp(u, _grad3(_p(ab + 1), x, y - 1, z - 1), _grad3(_p(bb + 1), x - 1, y - 1, z - 1)),
    )
    return _lerp(w, near, far)


# -- Tests ----------------------------------------------------------------

# //1.- Lattice corners have a zero offset to themselves so the field vanishes there.
def test_noise_vanishes_on_lattice_corners():
    assert noise2d(0, 0) == 0
    assert noise3d(0, 0, 0) == 0
    for cx in (-3, -1, 0, 1, 2, 255, 256, 1000):
        for cy in (-2, 0, 5, 300):
            assert noise2d(cx * ONE, cy * ONE) == 0
            assert noise3d(cx * ONE, cy * ONE, (cx + cy) * ONE) == 0


# //2.- A hand-evaluated point pins the exact integer output.
def test_noise2d_known_value():
    # Corners hash to 17, 182, 119, 248; fade(1/4) = 424 and fade(1/2) = 2048.
    assert noise2d(ONE // 4, HALF) == 25984


# //3.- The lattice repeats every 256 cells along each axis.
@pytest.mark.parametrize("x,y,z", SAMPLE_POINTS)
def test_noise_is_periodic(x, y, z):
    assert noise2d(x, y) == noise2d(x + PERIOD, y)
    assert noise2d(x, y) == noise2d(x, y - PERIOD)
    assert noise3d(x, y, z) == noise3d(x + PERIOD, y, z)
    assert noise3d(x, y, z) == noise3d(x, y + PERIOD, z - 3 * PERIOD)


# //4.- Repeated evaluation yields identical integers.
def test_noise_is_deterministic():
    first = [(noise2d(x, y), noise3d(x, y, z)) for x, y, z in SAMPLE_POINTS]
    second = [(noise2d(x, y), noise3d(x, y, z)) for x, y, z in SAMPLE_POINTS]
    assert first == second
    assert all(isinstance(value, int) for pair in first for value in pair)


# //5.- Fixed-point results track the floating-point algorithm closely.
def test_noise2d_tracks_float_reference():
    for i in range(-40, 40):
        for j in range(-7, 7):
            x = i * 9011 + 5
            y = j * 23117 + 11
            expected = _reference2d(x / ONE, y / ONE)
            assert abs(noise2d(x, y) / ONE - expected) < 0.01


def test_noise3d_tracks_float_reference():
    for i in range(-10, 10):
        for j in range(-4, 4):
            for k in range(-3, 3):
                x, y, z = i * 19997 + 1, j * 31337 + 7, k * 45001 + 3
                expected = _reference3d(x / ONE, y / ONE, z / ONE)
                assert abs(noise3d(x, y, z) / ONE - expected) < 0.02


# //6.- The field is continuous across cell boundaries.
def test_noise_is_continuous_across_cells():
    for cell in range(-3, 4):
        edge = cell * ONE
        for y in (1234, HALF, 50000):
            assert abs(noise2d(edge - 1, y) - noise2d(edge, y)) <= ONE // 512
            assert abs(noise3d(y, edge - 1, 777) - noise3d(y, edge, 777)) <= ONE // 512


def test_noise_is_not_clamped_or_constant():
    values = {noise2d(x * 4099, x * 7919) for x in range(200)}
    assert len(values) > 50
    assert max(abs(value) for value in values) < 2 * ONE
