"""
Mapping of the model's square depth output back onto the source image.
"""

from __future__ import annotations

import cv2
import numpy as np

from ..core.constants import ERROR_MESSAGES
from ..core.exceptions import EmptyImage, IncompatibleModelOutput
from .letterbox import LetterboxResult


def _spatial_view(output: np.ndarray) -> np.ndarray:
    """Drop leading singleton batch/channel axes, leaving (H', W')."""
    depth = np.asarray(output)
    while depth.ndim > 2 and depth.shape[0] == 1:
        depth = depth[0]
    if depth.ndim != 2:
        raise IncompatibleModelOutput(
            ERROR_MESSAGES["model_output_shape"].format(shape=tuple(np.shape(output)))
        )
    return depth


def crop_model_output(output: np.ndarray, letterbox: LetterboxResult) -> np.ndarray:
    """
    Extract the depth values that belong to real image content.

    Args:
        output: Raw model output shaped (H', W'), (1, H', W') or (1, 1, H', W')
        letterbox: Geometry produced when the model input was built

    Returns:
        float32 depth grid of shape (content_height, content_width)

    Raises:
        IncompatibleModelOutput: If the output cannot cover the content rectangle
    """
    depth = _spatial_view(output)
    out_height, out_width = depth.shape

    needed_width = letterbox.offset_x + letterbox.content_width
    needed_height = letterbox.offset_y + letterbox.content_height
    if out_width < needed_width or out_height < needed_height:
        raise IncompatibleModelOutput(
            ERROR_MESSAGES["model_output_too_small"].format(
                width=out_width,
                height=out_height,
                needed_width=needed_width,
                needed_height=needed_height,
            )
        )

    cropped = depth[letterbox.offset_y:needed_height, letterbox.offset_x:needed_width]
    return cropped.astype(np.float32, copy=True)


def resize_depth_to_image(depth: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Stretch a normalized depth map to the source image size.

    Args:
        depth: uint8 depth map at letterbox content resolution
        width: Target width (source image width)
        height: Target height (source image height)

    Returns:
        uint8 depth map of shape (height, width)
    """
    if width <= 0 or height <= 0:
        raise EmptyImage(ERROR_MESSAGES["empty_image"].format(width=width, height=height))
    if depth.shape[:2] == (height, width):
        return depth.copy()
    return cv2.resize(depth, (width, height), interpolation=cv2.INTER_LINEAR)
