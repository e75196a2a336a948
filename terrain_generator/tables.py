# terrain_generator/tables.py

"""
================================================================================
NOISE LOOKUP TABLES
================================================================================
This module builds the two read-only lookup tables consumed by the noise
kernels: the duplicated permutation table used to hash lattice coordinates,
and the table of unit gradient vectors assigned to each permutation slot.

Data Contract:
---------------
- Inputs:
    - rng: A numpy.random.Generator. The caller owns seeding.
- Outputs:
    - perms: int64 array of length 2 * PERMUTATION_SIZE.
    - grads: float64 array of shape (PERMUTATION_SIZE, 2), unit rows.
- Side Effects: Advances the state of the supplied generator.
- Invariants: Every value in [0, PERMUTATION_SIZE) appears exactly twice in
  perms and perms[i] == perms[i + PERMUTATION_SIZE].
================================================================================
"""

import numpy as np

from . import config as DEFAULTS
from .vector import Vector2


def build_permutation_table(rng: np.random.Generator, size: int = DEFAULTS.PERMUTATION_SIZE) -> np.ndarray:
    """Shuffles [0, size) once and stores it twice end-to-end."""
    p = np.arange(size, dtype=np.int64)
    rng.shuffle(p)
    return np.stack([p, p]).flatten()


def _random_unit_gradient(rng: np.random.Generator) -> Vector2:
    # Rejection sampling inside the unit disk keeps the directions uniform.
    # Sampling the square directly would bias them toward the diagonals.
    while True:
        u, v = rng.uniform(-1.0, 1.0, 2)
        candidate = Vector2(float(u), float(v))
        if 0.0 < candidate.length_squared() < 1.0:
            return candidate.normalize()


def build_gradient_table(rng: np.random.Generator, size: int = DEFAULTS.PERMUTATION_SIZE) -> np.ndarray:
    """Generates one unit-length 2D gradient per permutation slot."""
    grads = np.empty((size, 2), dtype=np.float64)
    for i in range(size):
        grads[i] = _random_unit_gradient(rng).as_tuple()
    return grads


def build_tables(seed=None):
    """
    Builds a fresh (perms, grads) pair from a single generator.

    Args:
        seed: None for OS entropy, an int for reproducible tables, or an
            existing numpy.random.Generator to draw from.
    """
    rng = np.random.default_rng(seed)
    perms = build_permutation_table(rng)
    grads = build_gradient_table(rng)
    return perms, grads


def validate_tables(perms, grads):
    """Coerces the tables to the dtypes the kernels expect and checks their shapes."""
    perms = np.ascontiguousarray(perms, dtype=np.int64)
    grads = np.ascontiguousarray(grads, dtype=np.float64)

    if perms.ndim != 1 or perms.size == 0:
        raise ValueError(f"Permutation table must be a non-empty 1D sequence, got shape {perms.shape}.")
    if grads.ndim != 2 or grads.shape[1] != 2 or grads.shape[0] == 0:
        raise ValueError(f"Gradient table must have shape (N, 2), got {grads.shape}.")
    if perms.min() < 0:
        raise ValueError("Permutation table entries must be non-negative.")
    return perms, grads
