# terrain_generator/generator.py

"""
================================================================================
CORE TERRAIN GENERATOR
================================================================================
This module contains the main TerrainGenerator class, responsible for
rendering every configured octave layer and merging them into the final
heightmap.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of generation parameters which can override
      the internal defaults. Expected keys include 'seed', 'octaves', etc.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - NumPy arrays containing height data, (height, width), in [0, 1].
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same integer seed and configuration, the output is
  deterministic.
================================================================================
"""

import logging
import time
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

from . import config as DEFAULTS
from . import layers


@dataclass(frozen=True)
class Octave:
    """One noise layer: sampling frequency, stretch and amplitude weight."""

    frequency: float
    stretch: float
    weight: float

    @classmethod
    def from_dict(cls, data: dict) -> "Octave":
        try:
            return cls(
                frequency=float(data["frequency"]),
                stretch=float(data["stretch"]),
                weight=float(data["weight"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid octave definition {data!r}: {e}") from e

    def to_dict(self) -> dict:
        return {"frequency": self.frequency, "stretch": self.stretch, "weight": self.weight}


class TerrainGenerator:
    """
    Generates a layered gradient-noise heightmap.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config: dict, logger: logging.Logger):
        """
        Initializes the terrain generator.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.
        """
        self.logger = logger
        self.user_config = config
        self.logger.info("TerrainGenerator initializing...")

        # --- Consolidate Configuration ---
        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
            'octave_seed_offset': self.user_config.get('octave_seed_offset', DEFAULTS.OCTAVE_SEED_OFFSET),
            'width': self.user_config.get('width', DEFAULTS.DEFAULT_IMAGE_WIDTH),
            'height': self.user_config.get('height', DEFAULTS.DEFAULT_IMAGE_HEIGHT),
            'octaves': self.user_config.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
            'redistribution_exponent': self.user_config.get('redistribution_exponent', DEFAULTS.REDISTRIBUTION_EXPONENT),
            'water_level': self.user_config.get('water_level', DEFAULTS.WATER_LEVEL),
            'terrain_levels': self.user_config.get('terrain_levels', DEFAULTS.TERRAIN_LEVELS),
            'color_mode': self.user_config.get('color_mode', DEFAULTS.DEFAULT_COLOR_MODE),
        }

        # --- Validate Configuration ---
        # Everything is checked here so a bad value fails before any octave is rendered.
        octaves = self.settings['octaves']
        if not isinstance(octaves, (list, tuple)) or not octaves:
            raise ValueError(f"Octaves must be a non-empty list of octave definitions, got {octaves!r}.")
        self.octaves = [Octave.from_dict(octave) for octave in octaves]
        for index, octave in enumerate(self.octaves):
            layers.check_positive(f"Octave {index} frequency", octave.frequency)
            layers.check_positive(f"Octave {index} stretch", octave.stretch)
            layers.check_finite(f"Octave {index} weight", octave.weight)
        self.amplitude_weights = [octave.weight for octave in self.octaves]

        self.settings['width'] = layers.check_dimension("Width", self.settings['width'])
        self.settings['height'] = layers.check_dimension("Height", self.settings['height'])
        _, exponent, water_level = layers.check_merge_settings(
            self.amplitude_weights,
            self.settings['redistribution_exponent'],
            self.settings['water_level']
        )
        self.settings['redistribution_exponent'] = exponent
        self.settings['water_level'] = water_level

        if self.settings['color_mode'] not in DEFAULTS.COLOR_MODES:
            raise ValueError(
                f"Unknown color mode '{self.settings['color_mode']}'. "
                f"Expected one of {DEFAULTS.COLOR_MODES}."
            )
        self.settings['terrain_levels'] = self._check_terrain_levels(self.settings['terrain_levels'])

        seed = self.settings['seed']
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, np.integer))):
            raise ValueError(f"Seed must be an integer or None, got {seed!r}.")
        offset = self.settings['octave_seed_offset']
        if isinstance(offset, bool) or not isinstance(offset, (int, np.integer)):
            raise ValueError(f"Octave seed offset must be an integer, got {offset!r}.")

        # --- Public Properties for easy access ---
        self.seed = seed
        self.width = self.settings['width']
        self.height = self.settings['height']

        seed_label = self.seed if self.seed is not None else "unseeded (OS entropy)"
        self.logger.info(f"TerrainGenerator initialized with seed: {seed_label}")
        self.logger.info(
            f"Heightmap dimensions: {self.width}x{self.height} pixels, "
            f"{len(self.octaves)} octave(s), redistribution {self.settings['redistribution_exponent']}, "
            f"water level {self.settings['water_level']}"
        )

    @staticmethod
    def _check_terrain_levels(levels) -> dict:
        """Ensures every land band used by the terrain palette has a numeric bound."""
        if not isinstance(levels, dict):
            raise ValueError(f"Terrain levels must be a mapping of band names to heights, got {levels!r}.")
        checked = dict(levels)
        for band in DEFAULTS.TERRAIN_LEVELS:
            if band not in levels:
                raise ValueError(f"Terrain levels are missing the '{band}' band.")
            checked[band] = layers.check_finite(f"Terrain level '{band}'", levels[band])
        return checked

    def octave_seed(self, index: int):
        """Returns the deterministic seed for an octave, or None when unseeded."""
        if self.seed is None:
            return None
        return int(self.seed) + index * self.settings['octave_seed_offset']

    def generate_layers(self, progress: bool = False) -> list:
        """Renders every configured octave into its own layer."""
        generated = []
        for index, octave in enumerate(tqdm(self.octaves, desc="Generating octaves", disable=not progress)):
            start_time = time.perf_counter()
            layer = layers.generate_noise_map(
                self.width,
                self.height,
                octave.frequency,
                octave.stretch,
                octave.weight,
                seed=self.octave_seed(index)
            )
            self.logger.debug(
                f"Octave {index + 1}/{len(self.octaves)} (frequency {octave.frequency}, "
                f"stretch {octave.stretch}, weight {octave.weight}) "
                f"generated in {time.perf_counter() - start_time:.3f} seconds."
            )
            generated.append(layer)
        return generated

    def merge(self, generated_layers: list) -> np.ndarray:
        """Merges layers using the configured weights, redistribution and water level."""
        return layers.merge_layers(
            self.amplitude_weights,
            self.settings['redistribution_exponent'],
            self.settings['water_level'],
            *generated_layers
        )

    def generate_heightmap(self, progress: bool = False) -> np.ndarray:
        """Generates all octave layers and merges them into the final heightmap."""
        heightmap = self.merge(self.generate_layers(progress=progress))
        self.logger.info(
            f"Heightmap generated: min {heightmap.min():.3f}, max {heightmap.max():.3f}, "
            f"mean {heightmap.mean():.3f}"
        )
        return heightmap

    def export_settings(self) -> dict:
        """Returns the consolidated settings in a JSON-serializable form."""
        settings = dict(self.settings)
        settings['seed'] = None if self.seed is None else int(self.seed)
        settings['octaves'] = [octave.to_dict() for octave in self.octaves]
        return settings
