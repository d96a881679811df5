"""
Side-by-side stereogram rendering.

Each output pixel samples the source image through the zoom/pan mapping
(nearest pixel, no interpolation) and is then displaced horizontally by an
amount proportional to its depth: to the right in the left-eye view and to
the left in the right-eye view. When several samples land on the same
destination column the one iterated last (row-major source order) wins;
there is no z-buffer, so near pixels do not occlude far ones by rule.
"""

from __future__ import annotations

import numpy as np

from ..core.constants import (
    ERROR_MESSAGES,
    MAX_SHIFT_PIXELS,
    PAN_PIXELS_PER_UNIT,
    SIDE_HEIGHT,
    SIDE_WIDTH,
)
from ..core.exceptions import EmptyImage, InvalidConfiguration
from ..core.settings import RenderSettings
from .depth_transform import process_depth
from .hole_filler import fill_holes


def _check_side_size(side_width: int, side_height: int) -> None:
    if side_width <= 0 or side_height <= 0:
        raise InvalidConfiguration(
            ERROR_MESSAGES["invalid_side_size"].format(width=side_width, height=side_height)
        )


def compute_source_indices(
    length: int, image_length: int, pan: float, zoom_factor: float
) -> np.ndarray:
    """
    Map output coordinates along one axis to clamped source pixel indices.

    Args:
        length: Output size along the axis (side width or height)
        image_length: Source image size along the same axis
        pan: Pan value in pan units
        zoom_factor: Zoom as a fraction (1.0 = 100%)

    Returns:
        int array of length ``length`` with indices in [0, image_length - 1]
    """
    viewport = np.arange(length, dtype=np.float64) - length / 2
    source = image_length / 2 + (viewport - pan * PAN_PIXELS_PER_UNIT) / zoom_factor
    return np.clip(np.floor(source), 0, image_length - 1).astype(np.intp)


def _scatter_rows(samples: np.ndarray, dest_x: np.ndarray, width: int) -> np.ndarray:
    """Write samples to their destination columns, last writer wins."""
    height = samples.shape[0]
    view = np.zeros((height, width, samples.shape[2]), dtype=samples.dtype)

    in_bounds = (dest_x >= 0) & (dest_x < width)
    rows = np.broadcast_to(np.arange(height)[:, np.newaxis], dest_x.shape)
    # Boolean indexing keeps row-major order, i.e. the source iteration order
    flat_dest = rows[in_bounds] * width + dest_x[in_bounds]
    flat_src = samples[in_bounds]
    if flat_dest.size == 0:
        return view

    destinations, first_in_reversed = np.unique(flat_dest[::-1], return_index=True)
    last_writer = flat_dest.size - 1 - first_in_reversed
    view.reshape(-1, view.shape[2])[destinations] = flat_src[last_writer]
    return view


def render_stereo_views(
    image: np.ndarray,
    depth: np.ndarray,
    settings: RenderSettings,
    side_width: int = SIDE_WIDTH,
    side_height: int = SIDE_HEIGHT,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Render unfilled left and right eye views.

    Args:
        image: Source image (H x W x 4, RGBA, uint8)
        depth: Processed depth in [0, 1], aligned 1:1 with ``image``
        settings: Zoom, pan and depth intensity (gamma/invert are already in ``depth``)
        side_width: Width of each eye view
        side_height: Height of each eye view

    Returns:
        Tuple of (left_view, right_view), RGBA uint8; unwritten pixels have alpha 0
    """
    settings.validate()
    _check_side_size(side_width, side_height)

    img_height, img_width = image.shape[:2]
    if img_width == 0 or img_height == 0:
        raise EmptyImage(ERROR_MESSAGES["empty_image"].format(width=img_width, height=img_height))
    if depth.shape[:2] != (img_height, img_width):
        raise InvalidConfiguration(
            ERROR_MESSAGES["depth_mismatch"].format(
                depth_shape=depth.shape[:2], image_shape=(img_height, img_width)
            )
        )

    zoom_factor = settings.zoom_factor
    cols = compute_source_indices(side_width, img_width, settings.pan_x, zoom_factor)
    rows = compute_source_indices(side_height, img_height, settings.pan_y, zoom_factor)

    samples = image[rows[:, np.newaxis], cols[np.newaxis, :]]
    sampled_depth = depth[rows[:, np.newaxis], cols[np.newaxis, :]].astype(np.float64)

    max_shift = (settings.depth_intensity / 100.0) * MAX_SHIFT_PIXELS
    shift = np.nan_to_num(sampled_depth * max_shift)
    x = np.arange(side_width, dtype=np.float64)[np.newaxis, :]

    left_x = np.floor(x + shift).astype(np.intp)
    right_x = np.floor(x - shift).astype(np.intp)

    left_view = _scatter_rows(samples, left_x, side_width)
    right_view = _scatter_rows(samples, right_x, side_width)
    return left_view, right_view


def compose_side_by_side(left_view: np.ndarray, right_view: np.ndarray) -> np.ndarray:
    """
    Place both eye views on one opaque black canvas, left view first.

    Args:
        left_view: Left-eye RGBA view
        right_view: Right-eye RGBA view of the same size

    Returns:
        RGBA uint8 canvas of shape (side_height, 2 * side_width, 4)
    """
    side_height, side_width = left_view.shape[:2]
    canvas = np.zeros((side_height, side_width * 2, 4), dtype=np.uint8)
    canvas[..., 3] = 255

    for index, view in enumerate((left_view, right_view)):
        alpha = view[..., 3:4].astype(np.float32) / 255.0
        rgb = np.round(view[..., :3].astype(np.float32) * alpha).astype(np.uint8)
        canvas[:, index * side_width:(index + 1) * side_width, :3] = rgb

    return canvas


def generate_stereogram(
    image: np.ndarray,
    depth_map: np.ndarray,
    settings: RenderSettings,
    side_width: int = SIDE_WIDTH,
    side_height: int = SIDE_HEIGHT,
) -> np.ndarray:
    """
    Render a cross-eye side-by-side stereogram.

    Args:
        image: Source image (H x W x 4, RGBA, uint8)
        depth_map: uint8 depth map aligned with ``image``, 255 = nearest
        settings: Render settings
        side_width: Width of each eye view
        side_height: Height of each eye view

    Returns:
        RGBA uint8 stereogram of shape (side_height, 2 * side_width, 4)
    """
    settings.validate()
    depth = process_depth(depth_map, settings.depth_gamma, settings.invert_depth)

    left_view, right_view = render_stereo_views(image, depth, settings, side_width, side_height)
    return compose_side_by_side(fill_holes(left_view), fill_holes(right_view))
