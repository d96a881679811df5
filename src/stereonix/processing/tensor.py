"""Conversion between letterboxed pixels and the model's planar float tensor."""

from __future__ import annotations

import numpy as np

from ..core.constants import IMAGENET_MEAN, IMAGENET_STD

_MEAN = np.asarray(IMAGENET_MEAN, dtype=np.float64)
_STD = np.asarray(IMAGENET_STD, dtype=np.float64)

# Folded in double precision; values are rounded to float32 once per pixel
_SCALE = 1.0 / (255.0 * _STD)
_MEAN_NORM = _MEAN / _STD


def encode_input_tensor(square_image: np.ndarray) -> np.ndarray:
    """
    Build a planar (3, N, N) tensor with ImageNet normalization.

    Args:
        square_image: Letterboxed image (N x N x 4 RGBA or N x N x 3 RGB, uint8)

    Returns:
        float32 array in channel, row, column order (R, G, B); alpha dropped
    """
    rgb = square_image[..., :3].astype(np.float64)
    normalized = (rgb * _SCALE - _MEAN_NORM).astype(np.float32)
    return np.ascontiguousarray(normalized.transpose(2, 0, 1))


def make_model_input(square_image: np.ndarray) -> np.ndarray:
    """Encode and add the batch axis, giving shape (1, 3, N, N)."""
    return encode_input_tensor(square_image)[np.newaxis, ...]


def decode_input_tensor(tensor: np.ndarray) -> np.ndarray:
    """
    Undo the ImageNet normalization.

    Args:
        tensor: (3, N, N) or (1, 3, N, N) float array

    Returns:
        float32 array (N x N x 3) with values equal to pixel / 255
    """
    if tensor.ndim == 4:
        tensor = tensor[0]
    planar = tensor.astype(np.float64)
    rgb = planar.transpose(1, 2, 0)
    return ((rgb + _MEAN_NORM) / _SCALE / 255.0).astype(np.float32)
