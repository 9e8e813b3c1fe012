import math
from typing import Sequence, Tuple

import numpy as np

from app.schemas.foundation import Undertone

RGB = Tuple[int, int, int]

# Per-channel weights for the shade distance. Fixed design constants that
# favour green sensitivity; this is an approximation, not CIE Delta E.
CHANNEL_WEIGHTS = np.array([2, 4, 3], dtype=np.float64)


def hex_to_rgb(hex_str: str) -> RGB:
    """
    Converts a hex string to an RGB tuple.
    Handles strings with or without '#' and is case-insensitive.
    """
    hex_str = hex_str.strip().lstrip("#").upper()
    if len(hex_str) == 8:
        # Strip alpha channel if present
        hex_str = hex_str[:6]
    if len(hex_str) != 6:
        raise ValueError(f"Invalid hex color: {hex_str}")
    return tuple(int(hex_str[i : i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb: Sequence[int]) -> str:
    """Formats an RGB triple as '#RRGGBB'."""
    r, g, b = rgb
    return f"#{r:02X}{g:02X}{b:02X}"


def round_half_up(value: float) -> int:
    """Rounds .5 towards positive infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def clamp_channel(value: float) -> int:
    return max(0, min(255, round_half_up(value)))


def normalize_rgb(values: Sequence[float]) -> RGB:
    """Rounds each channel to the nearest integer and clamps it to [0, 255]."""
    r, g, b = values
    return (clamp_channel(r), clamp_channel(g), clamp_channel(b))


def weighted_rgb_distance(rgb1: Sequence[float], rgb2: Sequence[float]) -> float:
    """
    Weighted Euclidean distance between two RGB triples:
    sqrt(2*dR^2 + 4*dG^2 + 3*dB^2)
    """
    r1, g1, b1 = rgb1
    r2, g2, b2 = rgb2

    delta_r = r1 - r2
    delta_g = g1 - g2
    delta_b = b1 - b2

    return math.sqrt(2 * delta_r * delta_r + 4 * delta_g * delta_g + 3 * delta_b * delta_b)


def weighted_distances(query: Sequence[float], matrix: np.ndarray) -> np.ndarray:
    """
    Vectorised form of weighted_rgb_distance.

    Args:
        query: RGB triple.
        matrix: (N, 3) array of reference colours.

    Returns:
        np.ndarray: (N,) distances, one per row of the matrix.
    """
    delta = matrix.astype(np.float64) - np.asarray(query, dtype=np.float64)
    return np.sqrt((delta ** 2) @ CHANNEL_WEIGHTS)


def classify_undertone(rgb: Sequence[int]) -> Undertone:
    """
    Heuristic undertone label for a colour. Every triple maps to exactly one label.
    Red strictly greatest -> warm (green > blue) or neutral-warm,
    blue strictly greatest -> cool, anything else -> neutral-cool.
    """
    r, g, b = rgb

    if r > g and r > b:
        return Undertone.WARM if g > b else Undertone.NEUTRAL_WARM
    if b > r and b > g:
        return Undertone.COOL
    return Undertone.NEUTRAL_COOL
