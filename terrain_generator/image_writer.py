# terrain_generator/image_writer.py

"""
Image serialization for color arrays of shape (height, width, 3) in [0, 1].

Plain-text PPM (P3) is written directly; every other format is delegated to
Pillow based on the file extension.
"""
import os

import numpy as np
from PIL import Image

from . import config as DEFAULTS
from .color_maps import to_8bit

def _check_color_array(colors: np.ndarray) -> np.ndarray:
    colors = np.asarray(colors)
    if colors.ndim != 3 or colors.shape[2] != 3:
        raise ValueError(f"Expected a (height, width, 3) color array, got shape {colors.shape}.")
    return colors

def write_ppm(output_path: str, colors: np.ndarray) -> None:
    """
    Writes a plain-text PPM: the P3 magic, width and height, the maximum
    channel value, then one "r g b" line per pixel in row-major order.
    """
    rgb = to_8bit(_check_color_array(colors))
    height, width, _ = rgb.shape
    with open(output_path, 'w') as f:
        f.write(f"P3\n{width} {height}\n{DEFAULTS.MAX_CHANNEL_VALUE}\n")
        np.savetxt(f, rgb.reshape(-1, 3), fmt='%d', delimiter=' ')

def save_image(output_path: str, colors: np.ndarray) -> str:
    """
    Saves a color array, choosing the writer from the extension.
    Returns the path that was written.
    """
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    if os.path.splitext(output_path)[1].lower() == ".ppm":
        write_ppm(output_path, colors)
    else:
        rgb = to_8bit(_check_color_array(colors))
        Image.fromarray(rgb, 'RGB').save(output_path)
    return output_path
