import io
import logging
from typing import Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from app.core.exceptions import InvalidImageError, PixelOutOfBoundsError
from app.schemas.foundation import PixelSample
from app.utils.color_math import normalize_rgb, rgb_to_hex

logger = logging.getLogger(__name__)


def decode_image(data: bytes, filename: Optional[str] = None) -> Image.Image:
    """
    Decodes uploaded bytes into an RGB Pillow image.
    Alpha, palette and greyscale modes are all flattened to plain RGB.
    """
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        logger.warning(f"Image decode failed for {filename or 'upload'}: {e}")
        raise InvalidImageError(filename) from e

    return image.convert("RGB")


def sample_pixel(
    data: bytes,
    x: int,
    y: int,
    radius: int = 0,
    filename: Optional[str] = None,
) -> PixelSample:
    """
    Reads the colour at (x, y) of an uploaded image.

    Args:
        data: Raw image bytes (PNG, JPEG, ...).
        x: Column, 0 = left edge.
        y: Row, 0 = top edge.
        radius: 0 samples a single pixel. Larger values average the
            (2r+1) x (2r+1) window around (x, y), clipped to the image.
        filename: Only used for error messages.

    Returns:
        PixelSample with the sampled RGB and its hex form.
    """
    image = decode_image(data, filename)
    width, height = image.size

    if not (0 <= x < width and 0 <= y < height):
        raise PixelOutOfBoundsError(x, y, width, height)

    pixels = np.asarray(image)  # (height, width, 3)

    if radius <= 0:
        rgb = tuple(int(channel) for channel in pixels[y, x])
    else:
        window = pixels[
            max(0, y - radius) : y + radius + 1,
            max(0, x - radius) : x + radius + 1,
        ].reshape(-1, 3)
        rgb = normalize_rgb(window.mean(axis=0))

    logger.debug(f"Sampled {rgb} at ({x}, {y}) radius={radius} from {width}x{height} image")
    return PixelSample(x=x, y=y, rgb=rgb, hex=rgb_to_hex(rgb))
