"""Tests for Q16.16 blending and the reconstructed fade curve."""
from __future__ import annotations

import pytest

from fixedpoint_perlin.fixed import BLEND_ONE, HALF, ONE, fade, from_fixed, lerp, to_fixed
from fixedpoint_perlin.tables import FADE_MASK

ENDPOINTS = [
    (0, 0),
    (0, ONE),
    (ONE, 0),
    (-3 * ONE, 5 * ONE + 17),
    (123456, -98765),
    (-(1 << 30), 1 << 30),
]


# //1.- The blend factor's endpoints return the endpoints exactly.
@pytest.mark.parametrize("a,b", ENDPOINTS)
def test_lerp_boundaries_are_exact(a, b):
    assert lerp(0, a, b) == a
    assert lerp(BLEND_ONE, a, b) == b


# //2.- Negative differences use an arithmetic (flooring) shift.
def test_lerp_midpoints():
    assert lerp(BLEND_ONE // 2, 0, ONE) == HALF
    assert lerp(BLEND_ONE // 2, ONE, 0) == HALF
    assert lerp(1, 0, -1) == -1
    assert lerp(1, 0, 1) == 0


# //3.- The fade curve starts at zero, is symmetric around one half and stays in Q12.
def test_fade_key_points():
    assert fade(0) == 0
    assert fade(HALF) == 2048
    assert fade(ONE - 1) <= FADE_MASK
    assert fade(ONE // 4) == 424
    assert fade(3 * ONE // 4) == 3672


# //4.- The reconstructed curve never decreases across the whole fraction domain.
def test_fade_is_monotonic():
    previous = fade(0)
    for t in range(1, ONE):
        current = fade(t)
        assert current >= previous, t
        previous = current


def test_fade_tracks_polynomial():
    for t in range(0, ONE, 97):
        real = t / ONE
        expected = 4096 * (6 * real ** 5 - 15 * real ** 4 + 10 * real ** 3)
        assert abs(fade(t) - expected) <= 2


def test_fixed_conversions():
    assert to_fixed(1.0) == ONE
    assert to_fixed(-0.5) == -HALF
    assert from_fixed(3 * HALF) == 1.5
