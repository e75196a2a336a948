# This file makes the 'terrain_generator' directory a Python package.
# We can also use it to define the public API of the package.

from .generator import Octave, TerrainGenerator
from .layers import generate_noise_map, merge_layers
from .noise import cubic_interpolate, fade, lattice_noise, stretched_noise
from .tables import build_gradient_table, build_permutation_table
from .vector import Vector2

__all__ = [
    "Octave",
    "TerrainGenerator",
    "Vector2",
    "build_gradient_table",
    "build_permutation_table",
    "cubic_interpolate",
    "fade",
    "generate_noise_map",
    "lattice_noise",
    "merge_layers",
    "stretched_noise",
]
