# render_terrain.py

"""
================================================================================
TERRAIN HEIGHTMAP RENDER SCRIPT
================================================================================
This script is a command-line tool for generating a layered gradient-noise
heightmap and writing it to an image file (plain-text PPM by default, or any
format Pillow understands).

Usage:
    python render_terrain.py --config path/to/terrain_config.json --output output.ppm
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time

from terrain_generator.generator import TerrainGenerator
from terrain_generator import color_maps
from terrain_generator import image_writer
from terrain_generator import config as DEFAULTS

def load_config(config_path: str, logger: logging.Logger) -> dict:
    """Reads the 'terrain_generation_parameters' section of a JSON config file."""
    logger.info(f"Loading configuration from: {config_path}")
    with open(config_path, 'r') as f:
        config = json.load(f)
    if not isinstance(config, dict):
        raise ValueError(f"Expected a JSON object at the top of {config_path}.")
    params = config.get('terrain_generation_parameters', {})
    if not isinstance(params, dict):
        raise ValueError("'terrain_generation_parameters' must be a JSON object.")
    return params

def render_terrain(terrain_params: dict, output_path: str, logger: logging.Logger,
                   save_config: bool = False, progress: bool = False) -> str:
    """
    Generates the heightmap described by terrain_params, colors it and saves
    it to output_path. Returns the path of the written image.
    """
    start_time = time.perf_counter()

    generator = TerrainGenerator(config=terrain_params, logger=logger)
    heightmap = generator.generate_heightmap(progress=progress)

    colors = color_maps.get_color_array(
        heightmap,
        generator.settings['color_mode'],
        water_level=generator.settings['water_level'],
        levels=generator.settings['terrain_levels']
    )
    image_writer.save_image(output_path, colors)
    logger.info(f"Heightmap saved to: {output_path}")

    # Save the "birth certificate" so the render can be reproduced.
    if save_config:
        gen_config_path = os.path.splitext(output_path)[0] + ".generation_config.json"
        with open(gen_config_path, 'w') as f:
            json.dump(generator.export_settings(), f, indent=4)
        logger.info(f"Generation config saved to: {gen_config_path}")

    end_time = time.perf_counter()
    logger.info(f"Elapsed time: {end_time - start_time:.2f} seconds.")
    return output_path

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Layered gradient-noise terrain heightmap renderer.")
    parser.add_argument("--config", type=str, help="Path to a JSON configuration file.")
    parser.add_argument("--output", type=str, default=DEFAULTS.DEFAULT_OUTPUT_FILE,
                        help="Output image path. '.ppm' writes plain-text PPM, other extensions use Pillow.")
    parser.add_argument("--seed", type=int, help="Seed for reproducible output. Omit for a fresh map every run.")
    parser.add_argument("--width", type=int, help="Image width in pixels.")
    parser.add_argument("--height", type=int, help="Image height in pixels.")
    parser.add_argument("--color-mode", choices=DEFAULTS.COLOR_MODES, help="How heights are mapped to colors.")
    parser.add_argument("--save-config", action="store_true",
                        help="Write the consolidated settings next to the output image.")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("TerrainRenderer")

    # 2. --- Load Configuration ---
    terrain_params = {}
    if args.config:
        try:
            terrain_params = load_config(args.config, logger)
        except (OSError, ValueError) as e:
            logger.critical(f"Failed to load or parse config file: {e}")
            return 1

    # 3. --- Command-line overrides win over the file ---
    overrides = {
        'seed': args.seed,
        'width': args.width,
        'height': args.height,
        'color_mode': args.color_mode,
    }
    terrain_params.update({key: value for key, value in overrides.items() if value is not None})

    # 4. --- Render ---
    try:
        render_terrain(
            terrain_params,
            args.output,
            logger,
            save_config=args.save_config,
            progress=not args.no_progress
        )
    except ValueError as e:
        logger.critical(f"Invalid terrain configuration: {e}")
        return 1
    except OSError as e:
        logger.critical(f"Failed to write output: {e}")
        return 1
    return 0

# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
