"""
File operations for images and depth maps.

OpenCV reads and writes BGR(A); everything crossing this module's boundary
is RGBA (images) or single-channel uint8 (depth maps).
"""

import os
from pathlib import Path
from typing import Union

import cv2
import numpy as np

from ..core.constants import ERROR_MESSAGES, SUPPORTED_IMAGE_FORMATS


def validate_image_file(image_path: Union[str, Path]) -> bool:
    """
    Validate if file is a supported image format.

    Args:
        image_path: Path to image file

    Returns:
        True if valid image file
    """
    if not os.path.exists(image_path):
        return False

    file_ext = Path(image_path).suffix.lower()
    return file_ext in SUPPORTED_IMAGE_FORMATS


def to_rgba(image: np.ndarray) -> np.ndarray:
    """
    Convert an OpenCV image (gray, BGR or BGRA) to RGBA uint8.

    Args:
        image: Image as returned by cv2.imread

    Returns:
        H x W x 4 RGBA array
    """
    if image.dtype != np.uint8:
        # 16-bit PNG/TIFF
        image = (image / 257).astype(np.uint8) if image.dtype == np.uint16 else image.astype(np.uint8)

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)


def load_image_rgba(image_path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file as RGBA.

    Args:
        image_path: Path to image file

    Returns:
        H x W x 4 RGBA uint8 array

    Raises:
        FileNotFoundError: If the file cannot be read as an image
    """
    image = cv2.imread(str(image_path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise FileNotFoundError(ERROR_MESSAGES["image_not_found"].format(path=image_path))
    return to_rgba(image)


def save_image_rgba(image: np.ndarray, output_path: Union[str, Path]) -> Path:
    """
    Save an RGBA image, creating parent directories as needed.

    Args:
        image: H x W x 4 RGBA uint8 array
        output_path: Destination file path

    Returns:
        Path the image was written to

    Raises:
        OSError: If OpenCV fails to encode or write the file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if not cv2.imwrite(str(output_path), cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)):
        raise OSError(f"Failed to write image: {output_path}")
    return output_path


def load_depth_map(depth_path: Union[str, Path]) -> np.ndarray:
    """
    Load a grayscale depth map (255 = nearest).

    Args:
        depth_path: Path to depth image

    Returns:
        H x W uint8 array
    """
    depth = cv2.imread(str(depth_path), cv2.IMREAD_GRAYSCALE)
    if depth is None:
        raise FileNotFoundError(ERROR_MESSAGES["image_not_found"].format(path=depth_path))
    return depth


def save_depth_map(depth_map: np.ndarray, output_path: Union[str, Path]) -> Path:
    """
    Save a uint8 depth map as a grayscale image.

    Args:
        depth_map: H x W uint8 depth map
        output_path: Destination file path

    Returns:
        Path the depth map was written to
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if not cv2.imwrite(str(output_path), depth_map):
        raise OSError(f"Failed to write depth map: {output_path}")
    return output_path
