"""Gamma and inversion applied to normalized depth before rendering."""

from __future__ import annotations

import math

import numpy as np

from ..core.constants import ERROR_MESSAGES
from ..core.exceptions import InvalidConfiguration


def process_depth(depth_map: np.ndarray, depth_gamma: float = 1.0, invert_depth: bool = False) -> np.ndarray:
    """
    Convert an 8-bit depth map to [0, 1] and apply the user's depth shaping.

    Args:
        depth_map: uint8 depth map, 255 = nearest
        depth_gamma: Exponent applied to each value; must be positive
        invert_depth: Replace d with 1 - d after the gamma step

    Returns:
        float32 depth map in [0, 1]

    Raises:
        InvalidConfiguration: If depth_gamma is not a positive finite number
    """
    if not math.isfinite(depth_gamma) or depth_gamma <= 0:
        raise InvalidConfiguration(ERROR_MESSAGES["invalid_gamma"].format(value=depth_gamma))

    # Shaped in double precision and rounded to float32 once
    depth = np.asarray(depth_map).astype(np.float64) / 255.0

    if depth_gamma != 1.0:
        depth = np.power(depth, float(depth_gamma))

    if invert_depth:
        depth = 1.0 - depth

    return depth.astype(np.float32)
