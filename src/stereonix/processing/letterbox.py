"""
Letterboxing of arbitrary-aspect images into the depth model's square input.

The returned geometry is everything the depth decoder needs to crop the
model output back onto the real image content.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import cv2
import numpy as np

from ..core.constants import ERROR_MESSAGES, MODEL_INPUT_SIZE
from ..core.exceptions import EmptyImage, InvalidConfiguration


@dataclass(frozen=True)
class LetterboxResult:
    """Square model input plus the placement of the content inside it."""

    square_image: np.ndarray
    content_width: int
    content_height: int
    offset_x: int
    offset_y: int

    @property
    def target_size(self) -> int:
        return self.square_image.shape[0]


def compute_letterbox_geometry(width: int, height: int, target_size: int) -> tuple[int, int, int, int]:
    """
    Compute where an aspect-preserved image sits inside a square canvas.

    Args:
        width: Source image width
        height: Source image height
        target_size: Side length of the square canvas

    Returns:
        Tuple of (content_width, content_height, offset_x, offset_y)

    Raises:
        EmptyImage: If width or height is not positive
        InvalidConfiguration: If target_size is not positive

    Examples:
        >>> compute_letterbox_geometry(1000, 500, 518)
        (518, 259, 0, 129)
    """
    if target_size <= 0:
        raise InvalidConfiguration(ERROR_MESSAGES["invalid_target_size"].format(value=target_size))
    if width <= 0 or height <= 0:
        raise EmptyImage(ERROR_MESSAGES["empty_image"].format(width=width, height=height))

    scale = min(target_size / width, target_size / height)
    # Round half up; a 1-pixel axis can otherwise collapse to zero
    content_width = max(1, min(target_size, int(math.floor(width * scale + 0.5))))
    content_height = max(1, min(target_size, int(math.floor(height * scale + 0.5))))

    offset_x = (target_size - content_width) // 2
    offset_y = (target_size - content_height) // 2
    return content_width, content_height, offset_x, offset_y


def letterbox_image(image: np.ndarray, target_size: int = MODEL_INPUT_SIZE) -> LetterboxResult:
    """
    Resize an RGBA image into a black square canvas, preserving aspect ratio.

    Content is composited over opaque black, so transparent source pixels
    come out black in the square image.

    Args:
        image: Source image (H x W x 4, RGBA, uint8)
        target_size: Side length of the model input

    Returns:
        LetterboxResult with the square RGBA canvas and content geometry
    """
    height, width = image.shape[:2]
    content_width, content_height, offset_x, offset_y = compute_letterbox_geometry(
        width, height, target_size
    )

    shrinking = content_width < width or content_height < height
    interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR
    resized = cv2.resize(image, (content_width, content_height), interpolation=interpolation)

    alpha = resized[..., 3:4].astype(np.float32) / 255.0
    rgb = np.round(resized[..., :3].astype(np.float32) * alpha).astype(np.uint8)

    square = np.zeros((target_size, target_size, 4), dtype=np.uint8)
    square[..., 3] = 255
    square[offset_y:offset_y + content_height, offset_x:offset_x + content_width, :3] = rgb

    return LetterboxResult(
        square_image=square,
        content_width=content_width,
        content_height=content_height,
        offset_x=offset_x,
        offset_y=offset_y,
    )
