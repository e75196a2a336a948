# terrain_generator/layers.py

"""
================================================================================
OCTAVE LAYER GENERATION AND MERGING
================================================================================
This module turns stretched noise into per-octave height fields and combines
several of them into the final heightmap.

Data Contract:
---------------
- Inputs:
    - Image dimensions, per-octave frequency/stretch/amplitude.
    - seed: None, an int, or a numpy.random.Generator used to build the
      lookup tables of a single layer.
- Outputs:
    - Height fields: float64 arrays of shape (height, width).
      A single layer lies in [0, 0.5]; a merged map lies in [water_level, 1].
- Side Effects: None.
- Invariants: Given the same seed, the output is bit-for-bit deterministic.
================================================================================
"""

import math
import numbers

import numpy as np

from . import noise
from .tables import build_tables


def _as_real(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}.")
    return float(value)


def check_positive(name, value):
    value = _as_real(name, value)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a finite positive number, got {value}.")
    return value


def check_finite(name, value):
    value = _as_real(name, value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}.")
    return value


def check_dimension(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real) \
            or not math.isfinite(value) or int(value) != value or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}.")
    return int(value)


def check_merge_settings(amplitude_weights, redistribution_exponent, water_level):
    """Validates the merge parameters. Returns (weight_sum, exponent, water_level)."""
    try:
        weights = np.asarray(amplitude_weights, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Amplitude weights must be a sequence of numbers, got {amplitude_weights!r}.") from e
    weight_sum = float(weights.sum())
    # A zero sum would divide by zero, a negative one would feed negative
    # bases into the fractional power.
    if weights.ndim != 1 or weights.size == 0 or not math.isfinite(weight_sum) or weight_sum <= 0.0:
        raise ValueError(f"Amplitude weights must have a finite, positive sum, got {weights.tolist()}.")
    redistribution_exponent = check_finite("Redistribution exponent", redistribution_exponent)
    water_level = _as_real("Water level", water_level)
    if not 0.0 <= water_level <= 1.0:
        raise ValueError(f"Water level must lie in [0, 1], got {water_level}.")
    return weight_sum, redistribution_exponent, water_level


def generate_noise_map(width: int, height: int, octave_frequency: float, stretch: float,
                       amplitude: float, seed=None) -> np.ndarray:
    """
    Generates a single octave layer.

    Every pixel (x, y) samples the stretched noise at (x * octave_frequency,
    y * octave_frequency), scales it by the amplitude, clamps it to [0, 1] and
    halves it. Fresh lookup tables are built for every call.

    Args:
        width, height (int): Size of the layer in pixels.
        octave_frequency (float): Sampling-coordinate multiplier (> 0).
        stretch (float): Zoom applied before bicubic resampling (> 0).
        amplitude (float): Scale applied to the raw noise.
        seed: None for OS entropy, an int, or a numpy.random.Generator.

    Returns:
        np.ndarray: A (height, width) float64 array with values in [0, 0.5].
    """
    width = check_dimension("Width", width)
    height = check_dimension("Height", height)
    octave_frequency = check_positive("Octave frequency", octave_frequency)
    stretch = check_positive("Stretch", stretch)
    amplitude = check_finite("Amplitude", amplitude)

    perms, grads = build_tables(seed)
    raw = noise.stretched_noise_grid(perms, grads, width, height, octave_frequency, stretch)
    # Halving keeps a single octave in a predictable sub-range before merging.
    return np.clip(raw * amplitude, 0.0, 1.0) * 0.5


def merge_layers(amplitude_weights, redistribution_exponent: float, water_level: float, *layers) -> np.ndarray:
    """
    Merges octave layers into a final heightmap.

    The layers are summed per pixel and divided by the sum of the amplitude
    weights, then raised to the redistribution exponent. Anything below the
    water level is raised to exactly the water level and the result is
    clamped to [0, 1].

    The layers may be passed either as separate arguments or as a single
    list/tuple of arrays. Layer values must be finite and non-negative, as
    produced by generate_noise_map.
    """
    if len(layers) == 1 and isinstance(layers[0], (list, tuple)):
        layers = tuple(layers[0])
    if not layers:
        raise ValueError("merge_layers requires at least one layer.")

    arrays = [np.asarray(layer, dtype=np.float64) for layer in layers]
    shape = arrays[0].shape
    for i, layer in enumerate(arrays):
        if layer.shape != shape:
            raise ValueError(f"Layer {i} has shape {layer.shape}, expected {shape} to match layer 0.")
        # Negative bases under a fractional exponent would turn into NaN.
        if not np.all(np.isfinite(layer)) or (layer.size and layer.min() < 0.0):
            raise ValueError(f"Layer {i} must contain only finite, non-negative heights.")

    weight_sum, redistribution_exponent, water_level = check_merge_settings(
        amplitude_weights, redistribution_exponent, water_level
    )

    normalized = np.sum(arrays, axis=0) / weight_sum
    redistributed = np.power(normalized, redistribution_exponent)
    floored = np.maximum(redistributed, water_level)
    return np.clip(floored, 0.0, 1.0)
