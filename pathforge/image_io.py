"""
Image output.

Converts the renderer's linear float image to 8-bit values (gamma 2,
clamped) and writes it either as plain-text PPM (P3) or through Pillow.
"""

from __future__ import annotations
from pathlib import Path
from typing import TextIO, Union
import numpy as np
from PIL import Image as PILImage

from .log import get_logger
from .vec3 import Color

logger = get_logger(__name__)

MAX_VALUE = 255


def quantize(image: np.ndarray, samples: int = 1) -> np.ndarray:
    """Convert a linear image to 8-bit with gamma 2 encoding.

    Args:
        image: Float array of shape (..., 3); summed samples if samples > 1
        samples: Number of samples the values were summed over

    Returns:
        uint8 array of the same shape
    """
    scaled = np.nan_to_num(np.asarray(image, dtype=np.float64) / samples, nan=0.0)
    corrected = np.sqrt(np.clip(scaled, 0.0, None))
    return (256.0 * np.clip(corrected, 0.0, 0.999)).astype(np.uint8)


def format_color(color: Color, samples: int = 1) -> str:
    """Format a summed pixel color as an "R G B" line."""
    r, g, b = quantize(color.to_array(), samples)
    return f"{r} {g} {b}"


def write_ppm(image: np.ndarray, stream: TextIO) -> None:
    """Write a linear image as plain-text PPM (P3), top row first."""
    height, width = image.shape[:2]
    ldr = quantize(image)

    stream.write(f"P3\n{width} {height}\n{MAX_VALUE}\n")
    for row in ldr:
        for r, g, b in row:
            stream.write(f"{r} {g} {b}\n")


def save_image(image: np.ndarray, filename: Union[str, Path]) -> None:
    """Save image to file.

    Args:
        image: Linear float image of shape (height, width, 3)
        filename: Output filename; ``.ppm`` is written as text, any
            other extension is handed to Pillow
    """
    path = Path(filename)
    if path.suffix.lower() == '.ppm':
        with open(path, 'w') as f:
            write_ppm(image, f)
    else:
        PILImage.fromarray(quantize(image)).save(path)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
