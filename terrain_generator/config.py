# terrain_generator/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the terrain
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC RENDER.
Instead, pass a configuration dictionary to the TerrainGenerator instance.
================================================================================
"""

# --- Noise Generation ---
# None draws fresh OS entropy for every noise map. Pass an integer seed for
# reproducible output.
DEFAULT_SEED = None
# Prime offset applied per octave so every layer gets its own tables while
# staying deterministic from the master seed.
OCTAVE_SEED_OFFSET = 7919

# Number of distinct entries in the permutation and gradient tables.
# The permutation table is stored twice end-to-end (2 * PERMUTATION_SIZE).
PERMUTATION_SIZE = 256

# --- Image Dimensions (pixels) ---
DEFAULT_IMAGE_WIDTH = 600
DEFAULT_IMAGE_HEIGHT = 600

# --- Octave Layers ---
# Each layer samples the stretched noise at (x * frequency, y * frequency).
# 'stretch' is the zoom applied before bicubic resampling and 'weight' is the
# layer's amplitude, which also feeds the merge normalization.
DEFAULT_OCTAVES = [
    {"frequency": 1.0, "stretch": 100.0, "weight": 1.0},
    {"frequency": 2.0, "stretch": 100.0, "weight": 0.5},
    {"frequency": 4.0, "stretch": 100.0, "weight": 0.25},
]

# --- Merge & Redistribution ---
# Power curve applied after averaging the octaves. Values > 1.0 flatten the
# lowlands and sharpen peaks, values < 1.0 lift the mid-range.
REDISTRIBUTION_EXPONENT = 0.72

# Sea level. Merged heights below it are raised to exactly this value.
WATER_LEVEL = 0.1

# --- Rendering ---
# 'grayscale': r = g = b = height (canonical output).
# 'terrain': banded palette using TERRAIN_LEVELS.
DEFAULT_COLOR_MODE = "grayscale"
COLOR_MODES = ("grayscale", "terrain")

# Upper bounds (normalized 0.0 to 1.0) of each land band above the water level.
TERRAIN_LEVELS = {
    "sand": 0.14,
    "grass": 0.3,
    "dirt": 0.42,
    "mountain": 1.0 # The rest is mountain
}

# Maximum channel value written to 8-bit images.
MAX_CHANNEL_VALUE = 255

DEFAULT_OUTPUT_FILE = "output.ppm"
