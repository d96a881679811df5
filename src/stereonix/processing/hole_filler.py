"""
Repair of pixels left unwritten by the parallax shift.

Each hole copies the nearest written pixel to its right on the same row.
The search never looks left or across rows, so holes at the right edge of a
row with nothing written after them stay transparent.
"""

from __future__ import annotations

import numpy as np


def fill_holes(view: np.ndarray) -> np.ndarray:
    """
    Fill fully transparent pixels from the first opaque pixel to their right.

    Args:
        view: Rendered eye view (H x W x 4, RGBA, uint8); alpha 0 marks a hole

    Returns:
        New array with holes filled where a source pixel exists
    """
    filled = view.copy()
    height, width = view.shape[:2]
    if height == 0 or width == 0:
        return filled

    written = view[..., 3] > 0
    columns = np.where(written, np.arange(width), width)
    # Smallest written column at or after each position
    next_written = np.minimum.accumulate(columns[:, ::-1], axis=1)[:, ::-1]

    holes = ~written & (next_written < width)
    rows, cols = np.nonzero(holes)
    filled[rows, cols] = view[rows, next_written[rows, cols]]
    return filled
