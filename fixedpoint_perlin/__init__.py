"""Fixed-point Perlin noise.

Classic 2D and 3D Perlin noise computed with integer arithmetic only, so
every platform produces bit-identical Q16.16 results.
"""

from .fixed import ONE, fade, from_fixed, lerp, to_fixed
from .gradient import grad2, grad3
from .noise import noise2d, noise3d
from .tables import PERMUTATION, ftable, ptable, verify_tables
from .config import SamplingSettings, load_sampling_settings
from .sampling import noise2d_array, noise3d_array, sample_plane

__all__ = [
    "ONE",
    "fade",
    "from_fixed",
    "lerp",
    "to_fixed",
    "grad2",
    "grad3",
    "noise2d",
    "noise3d",
    "PERMUTATION",
    "ftable",
    "ptable",
    "verify_tables",
    "SamplingSettings",
    "load_sampling_settings",
    "noise2d_array",
    "noise3d_array",
    "sample_plane",
]
