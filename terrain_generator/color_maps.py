# terrain_generator/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the color mapping constants and functions for converting
a height field into RGB color arrays.

Colors are produced as float arrays of shape (height, width, 3) in [0, 1].
The conversion to 8-bit channels is a separate, explicit step (to_8bit) so
image writers receive pre-clamped data.
================================================================================
"""
import numpy as np
from . import config as DEFAULTS

# --- Default Color Mappings (8-bit RGB) ---
COLOR_MAP_TERRAIN = {
    "water": (26, 102, 255),
    "sand": (240, 230, 140),
    "grass": (34, 139, 34),
    "dirt": (139, 69, 19),
    "mountain": (112, 128, 144)
}

def _normalized(rgb: tuple) -> np.ndarray:
    return np.array(rgb, dtype=np.float64) / DEFAULTS.MAX_CHANNEL_VALUE

def get_grayscale_color_array(height_values: np.ndarray) -> np.ndarray:
    """Uses the same height value for all three channels."""
    height_values = np.asarray(height_values, dtype=np.float64)
    return np.stack([height_values] * 3, axis=-1)

def get_terrain_color_array(height_values: np.ndarray, water_level: float = DEFAULTS.WATER_LEVEL,
                            levels: dict = None) -> np.ndarray:
    """
    Classifies each height into a terrain band and returns its palette color.
    Heights at or below the water level are water; the land bands use the
    upper bounds in `levels` (defaults to TERRAIN_LEVELS).
    """
    levels = levels or DEFAULTS.TERRAIN_LEVELS
    height_values = np.asarray(height_values, dtype=np.float64)

    conditions = [
        height_values <= water_level,
        height_values < levels["sand"],
        height_values < levels["grass"],
        height_values < levels["dirt"]
    ]
    choices = [
        _normalized(COLOR_MAP_TERRAIN["water"]),
        _normalized(COLOR_MAP_TERRAIN["sand"]),
        _normalized(COLOR_MAP_TERRAIN["grass"]),
        _normalized(COLOR_MAP_TERRAIN["dirt"])
    ]
    # Broadcast the (H, W) masks against the (3,) colors.
    return np.select(
        [c[..., np.newaxis] for c in conditions],
        choices,
        default=_normalized(COLOR_MAP_TERRAIN["mountain"])
    )

def get_color_array(height_values: np.ndarray, color_mode: str, water_level: float = DEFAULTS.WATER_LEVEL,
                    levels: dict = None) -> np.ndarray:
    if color_mode == "grayscale":
        return get_grayscale_color_array(height_values)
    if color_mode == "terrain":
        return get_terrain_color_array(height_values, water_level, levels)
    raise ValueError(f"Unknown color mode '{color_mode}'. Expected one of {DEFAULTS.COLOR_MODES}.")

def to_8bit(colors: np.ndarray) -> np.ndarray:
    """
    Maps [0, 1] float channels linearly onto [0, 255], rounding halves up.
    Values outside [0, 1] are rejected rather than silently clipped.
    """
    colors = np.asarray(colors, dtype=np.float64)
    if colors.size and (np.isnan(colors).any() or colors.min() < 0.0 or colors.max() > 1.0):
        raise ValueError("Color values must lie in [0, 1] before 8-bit conversion.")
    return np.floor(colors * DEFAULTS.MAX_CHANNEL_VALUE + 0.5).astype(np.uint8)
