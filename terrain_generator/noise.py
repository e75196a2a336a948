# terrain_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides the gradient (Perlin-style) lattice noise and the bicubic
"stretched noise" resampler built on top of it. It is designed to be a pure,
stateless utility.

Data Contract:
---------------
- Inputs:
    - perms: A duplicated permutation table (int array, see tables.py).
    - grads: A (N, 2) table of unit gradient vectors.
    - point: A Vector2 or an (x, y) pair.
    - stretch: Zoom factor applied before bicubic resampling (> 0).
- Outputs:
    - Lattice noise values clamped to [-1, 1].
    - Stretched noise values (unclamped; the cubic filter may overshoot).
- Side Effects: None.
- Invariants: Given the same tables, every function is deterministic and
  independent of evaluation order.
================================================================================
"""

import math

import numpy as np
from numba import njit, prange

from .tables import validate_tables
from .vector import Vector2


@njit
def fade(t):
    "|t|^3 * (6|t|^2 - 15|t| + 10)"
    t = abs(t)
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _floor_mod(a, n):
    r = a % n
    if r < 0:
        r += n
    return r


@njit
def _fade_weight(ux, uy):
    return fade(ux) * fade(uy)


@njit
def _lattice_noise(x, y, perms, grads):
    """Sums the gradient contributions of the four corners enclosing (x, y)."""
    cell_x = int(np.floor(x))
    cell_y = int(np.floor(y))
    n_perms = perms.shape[0]
    n_grads = grads.shape[0]

    total = 0.0
    for offset_x in range(2):
        for offset_y in range(2):
            corner_x = cell_x + offset_x
            corner_y = cell_y + offset_y
            ux = x - corner_x
            uy = y - corner_y

            # Hash x first, then fold y into the result of the first lookup.
            index = perms[_floor_mod(corner_x, n_perms)]
            index = perms[_floor_mod(index + corner_y, n_perms)]
            g = _floor_mod(index, n_grads)

            total += _fade_weight(ux, uy) * (grads[g, 0] * ux + grads[g, 1] * uy)

    return max(min(total, 1.0), -1.0)


@njit
def _cubic(v0, v1, v2, v3, x):
    p = (v3 - v2) - (v0 - v1)
    q = (v0 - v1) - p
    r = v2 - v0
    s = v1
    return p * x * x * x + q * x * x + r * x + s


@njit
def _interpolated_row(x0, y, fx, perms, grads):
    return _cubic(
        _lattice_noise(float(x0), y, perms, grads),
        _lattice_noise(float(x0 + 1), y, perms, grads),
        _lattice_noise(float(x0 + 2), y, perms, grads),
        _lattice_noise(float(x0 + 3), y, perms, grads),
        fx
    )


@njit
def _stretched_noise(x, y, perms, grads, stretch):
    """Bicubic resampling of the lattice noise over a 4x4 neighbourhood."""
    xf = x / stretch
    yf = y / stretch
    x0 = int(np.floor(xf))
    y0 = int(np.floor(yf))
    fx = xf - x0
    fy = yf - y0

    return _cubic(
        _interpolated_row(x0, float(y0), fx, perms, grads),
        _interpolated_row(x0, float(y0 + 1), fx, perms, grads),
        _interpolated_row(x0, float(y0 + 2), fx, perms, grads),
        _interpolated_row(x0, float(y0 + 3), fx, perms, grads),
        fy
    )


@njit(parallel=True)
def stretched_noise_grid(perms, grads, width, height, frequency, stretch):
    """
    Evaluates the stretched noise at (x * frequency, y * frequency) for every
    pixel of a (height, width) grid. Rows are processed in parallel; the
    tables are only ever read.
    """
    output = np.empty((height, width), dtype=np.float64)
    for y in prange(height):
        for x in range(width):
            output[y, x] = _stretched_noise(x * frequency, y * frequency, perms, grads, stretch)
    return output


# --- Python-facing wrappers ---

def _as_coordinates(point):
    if isinstance(point, Vector2):
        return float(point.x), float(point.y)
    x, y = point
    return float(x), float(y)


def _check_stretch(stretch):
    if not math.isfinite(stretch) or stretch <= 0:
        raise ValueError(f"Stretch must be a finite positive number, got {stretch}.")


def fade_weight(uv) -> float:
    """Product of the fade curve applied to both components of a local offset."""
    ux, uy = _as_coordinates(uv)
    return _fade_weight(ux, uy)


def lattice_noise(point, perms, grads) -> float:
    """Evaluates the raw gradient noise at a single point. Result is in [-1, 1]."""
    perms, grads = validate_tables(perms, grads)
    x, y = _as_coordinates(point)
    return _lattice_noise(x, y, perms, grads)


def cubic_interpolate(values, x: float) -> float:
    """
    Cubic through values[1] at x=0 and values[2] at x=1, with slopes taken
    from the outer neighbours values[0] and values[3].
    """
    if len(values) != 4:
        raise ValueError(f"Cubic interpolation needs exactly 4 samples, got {len(values)}.")
    v0, v1, v2, v3 = (float(v) for v in values)
    return _cubic(v0, v1, v2, v3, float(x))


def stretched_noise(point, perms, grads, stretch: float) -> float:
    """Samples the lattice noise zoomed by `stretch` and smoothed bicubically."""
    _check_stretch(stretch)
    perms, grads = validate_tables(perms, grads)
    x, y = _as_coordinates(point)
    return _stretched_noise(x, y, perms, grads, float(stretch))
